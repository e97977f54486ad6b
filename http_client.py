import requests

SERVER_URL = 'http://localhost:5001'


class ClientError(Exception):
    def __init__(self, status, error):
        self.status = status
        self.error = error
        super().__init__(error.get('message', f'Request failed with status {status}'))


class HTTPClient:
    def __init__(self, base_url=SERVER_URL, timeout=3):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.game_id = None
        self.player = None

    def _check(self, resp):
        try:
            data = resp.json()
        except ValueError:
            data = {}
        if not resp.ok:
            raise ClientError(resp.status_code, data.get('error', {}))
        return data

    def create_game(self):
        resp = requests.post(f'{self.base_url}/game', timeout=self.timeout)
        data = self._check(resp)['data']
        self.game_id = data['game']
        self.player = data['player']
        return data

    def join_game(self, game_id):
        resp = requests.post(f'{self.base_url}/game/{game_id}/join', timeout=self.timeout)
        data = self._check(resp)['data']
        self.game_id = data['game']
        self.player = data['player']
        return data

    def game_state(self, game_id=None):
        resp = requests.get(f'{self.base_url}/game/{game_id or self.game_id}', timeout=self.timeout)
        return self._check(resp)['data']

    def make_move(self, col):
        resp = requests.post(
            f'{self.base_url}/game/{self.game_id}/move',
            params={'player': self.player, 'col': col},
            timeout=self.timeout,
        )
        return self._check(resp)
