# Connect Four game logic

FIRST = 0
SECOND = 1
EMPTY = None


class ConnectFour:
    ROWS = 6
    COLS = 7
    CHAIN = 4
    # E, SE, S, SW; scanning every cell as an origin covers the opposite senses
    DIRECTIONS = [(0, 1), (1, 1), (1, 0), (1, -1)]

    def __init__(self, board, started, current):
        self.board = board
        self.started = started
        self.current = current

    @classmethod
    def create(cls, snapshot=None):
        """Build a fresh game, or rebuild one from a stored snapshot.

        The snapshot's ``winner`` is ignored; it is recomputed from the board.
        """
        if snapshot is None:
            board = [[EMPTY for _ in range(cls.COLS)] for _ in range(cls.ROWS)]
            return cls(board, False, FIRST)
        board = [list(row) for row in snapshot['board']]
        return cls(board, bool(snapshot['started']), snapshot['current'])

    def start(self):
        self.started = True

    def make_move(self, col):
        """Drop a piece for the current player into ``col``.

        Returns False, leaving the state untouched, when the column is full.
        The turn passes to the other player even if the move wins.
        """
        for row in reversed(range(self.ROWS)):
            if self.board[row][col] is EMPTY:
                self.board[row][col] = self.current
                self.current = SECOND if self.current == FIRST else FIRST
                return True
        return False

    def get_winner(self):
        for row in range(self.ROWS):
            for col in range(self.COLS):
                for player in (FIRST, SECOND):
                    if self.is_connected(row, col, player):
                        return player
        return None

    def is_connected(self, row, col, player):
        if self.board[row][col] != player:
            return False
        return any(self.check_direction(row, col, dr, dc) for dr, dc in self.DIRECTIONS)

    def check_direction(self, row, col, dr, dc):
        owner = self.board[row][col]
        for step in range(1, self.CHAIN):
            r, c = row + dr * step, col + dc * step
            if not (0 <= r < self.ROWS and 0 <= c < self.COLS):
                return False
            if self.board[r][c] != owner:
                return False
        return True

    def to_snapshot(self):
        return {
            'board': [list(row) for row in self.board],
            'started': self.started,
            'current': self.current,
            'winner': self.get_winner(),
        }
