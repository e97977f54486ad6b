import http.server
import json
import logging
import socketserver
import urllib.parse
from dataclasses import replace

import redis

from config import load_settings
from errors import GameAlreadyFull, GameError, GameNotFound, OpponentMoving
from game_engine import GameEngine
from session_store import MemorySessionStore, RedisSessionStore

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    GameNotFound: 404,
    GameAlreadyFull: 403,
    OpponentMoving: 403,
}


class GameServerHandler(http.server.BaseHTTPRequestHandler):
    def log_message(self, format, *args):
        logger.info(f"{self.address_string()} - {format % args}")

    @property
    def engine(self):
        return self.server.engine

    def _send_json(self, payload, status=200):
        body = json.dumps(payload).encode()
        self.send_response(status)
        self.send_header('Content-type', 'application/json')
        self.send_header('Content-Length', str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def _send_error(self, status, message, kind='HttpError'):
        self._send_json({'error': {'type': kind, 'message': message}}, status)

    def _read_json(self):
        try:
            length = int(self.headers.get('Content-Length', 0))
        except ValueError:
            return {}
        if length <= 0:
            return {}
        try:
            data = json.loads(self.rfile.read(length))
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}

    def _route(self):
        parsed = urllib.parse.urlparse(self.path)
        parts = [p for p in parsed.path.split('/') if p]
        query = {k: v[0] for k, v in urllib.parse.parse_qs(parsed.query).items()}
        return parts, query

    def _dispatch(self, handler, *args):
        try:
            handler(*args)
        except GameError as e:
            self._send_json({'error': e.to_dict()}, ERROR_STATUS.get(type(e), 400))
        except redis.exceptions.RedisError as e:
            logger.error(f"Session store unavailable: {e}")
            self._send_error(503, 'The game store is currently unavailable.')

    def do_GET(self):
        parts, _ = self._route()
        if not parts:
            self._send_json({'success': {'message': 'You have arrived!'}})
        elif parts == ['health']:
            healthy = self.engine.store.ping()
            self._send_json({'status': 'ok' if healthy else 'degraded', 'store': healthy}, 200 if healthy else 503)
        elif len(parts) == 2 and parts[0] == 'game':
            self._dispatch(self.handle_get, parts[1])
        else:
            self._send_error(404, 'Not found')

    def do_POST(self):
        parts, query = self._route()
        if parts == ['game']:
            self._dispatch(self.handle_start)
        elif len(parts) == 3 and parts[0] == 'game' and parts[2] == 'join':
            self._dispatch(self.handle_join, parts[1])
        elif len(parts) == 3 and parts[0] == 'game' and parts[2] == 'move':
            params = self._read_json()
            params.update(query)
            self._dispatch(self.handle_move, parts[1], params)
        else:
            self._send_error(404, 'Not found')

    def handle_start(self):
        data = self.engine.start()
        self._send_json({
            'success': {'message': 'Your game will begin once the other player joins!'},
            'data': data,
        })

    def handle_get(self, game_id):
        self._send_json({'data': self.engine.get(game_id)})

    def handle_join(self, game_id):
        data = self.engine.join(game_id)
        self._send_json({
            'success': {'message': 'Your game will begin shortly!'},
            'data': data,
        })

    def handle_move(self, game_id, params):
        if params.get('player') is None or params.get('col') is None:
            self._send_error(400, 'Not all the required parameters were provided.')
            return
        try:
            player = int(params['player'])
            col = int(params['col'])
        except (TypeError, ValueError, OverflowError):
            self._send_error(400, 'The player and col parameters must be integers.')
            return
        self.engine.move(game_id, player, col)
        self._send_json({'success': {'message': 'Your move has been accepted!'}})


class GameServer(socketserver.ThreadingTCPServer):
    allow_reuse_address = True
    daemon_threads = True

    def __init__(self, address, engine):
        self.engine = engine
        super().__init__(address, GameServerHandler)


def build_store(settings):
    if settings.store == 'memory':
        return MemorySessionStore()
    return RedisSessionStore.from_url(settings.redis_url)


def main(argv=None):
    import argparse
    settings = load_settings()
    parser = argparse.ArgumentParser(description='Connect Four game server')
    parser.add_argument('--port', type=int, default=settings.port)
    parser.add_argument('--host', default=settings.host)
    parser.add_argument('--store', choices=['redis', 'memory'], default=settings.store)
    args = parser.parse_args(argv)
    settings = replace(settings, port=args.port, host=args.host, store=args.store)

    logging.basicConfig(level=settings.log_level, format='[%(asctime)s] %(levelname)s: %(message)s')
    engine = GameEngine(build_store(settings))
    with GameServer((settings.host, settings.port), engine) as httpd:
        logger.info(f"Serving on port {settings.port} with {settings.store} store")
        try:
            httpd.serve_forever()
        except KeyboardInterrupt:
            logger.info("Shutting down game server")


if __name__ == '__main__':
    main()
