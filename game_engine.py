import logging
import threading
import uuid

from connect_four import FIRST, SECOND, ConnectFour
from errors import GameAlreadyFull, GameNotFound, GameNotStarted, InvalidMove, OpponentMoving

logger = logging.getLogger(__name__)

# Seconds an untouched game survives in the store
TIMEOUT = 60

LOCK_STRIPES = 64


class GameEngine:
    """Runs the create/join/inspect/move lifecycle against a session store.

    Each call loads the snapshot, validates, mutates and writes it back.
    Joins and moves on the same game are serialized within this process.
    """

    def __init__(self, store):
        self.store = store
        self._locks = [threading.Lock() for _ in range(LOCK_STRIPES)]

    def _lock_for(self, game_id):
        return self._locks[hash(game_id) % LOCK_STRIPES]

    def _load(self, game_id):
        data = self.store.get(game_id)
        if not data:
            raise GameNotFound()
        return data

    def start(self):
        game_id = uuid.uuid4().hex
        state = ConnectFour.create()
        self.store.put(game_id, state.to_snapshot(), TIMEOUT)
        logger.info(f"Created game {game_id}")
        return {'game': game_id, 'player': FIRST}

    def join(self, game_id):
        with self._lock_for(game_id):
            state = ConnectFour.create(self._load(game_id))
            if state.started:
                logger.info(f"Rejected join for full game {game_id}")
                raise GameAlreadyFull()
            state.start()
            self.store.put(game_id, state.to_snapshot(), TIMEOUT)
        logger.info(f"Second player joined game {game_id}")
        return {'game': game_id, 'player': SECOND}

    def get(self, game_id):
        return self._load(game_id)

    def move(self, game_id, player, col):
        with self._lock_for(game_id):
            state = ConnectFour.create(self._load(game_id))
            if not state.started:
                raise GameNotStarted()
            if state.current != player:
                logger.debug(f"Player {player} moved out of turn in game {game_id}")
                raise OpponentMoving()
            if col < 0 or col >= ConnectFour.COLS:
                raise InvalidMove('Invalid column index provided.')
            if not state.make_move(col):
                raise InvalidMove('The given column is already full.')
            snapshot = state.to_snapshot()
            self.store.put(game_id, snapshot, TIMEOUT)
        logger.info(f"Player {player} dropped into column {col} in game {game_id}")
        if snapshot['winner'] is not None:
            logger.info(f"Player {snapshot['winner']} has connected four in game {game_id}")
