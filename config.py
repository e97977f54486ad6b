import os
from dataclasses import dataclass

STORE_BACKENDS = ('redis', 'memory')


@dataclass(frozen=True)
class Settings:
    host: str = ''
    port: int = 5001
    redis_url: str = 'redis://localhost:6379/0'
    store: str = 'redis'
    log_level: str = 'INFO'


def load_settings(environ=None):
    """Read server settings from environment variables."""
    env = os.environ if environ is None else environ
    store = env.get('SESSION_STORE', Settings.store).strip().lower()
    if store not in STORE_BACKENDS:
        raise ValueError(f"SESSION_STORE must be one of {STORE_BACKENDS}, got {store!r}")
    return Settings(
        host=env.get('HOST', Settings.host),
        port=int(env.get('PORT', Settings.port)),
        redis_url=env.get('REDIS_URL', Settings.redis_url),
        store=store,
        log_level=env.get('LOG_LEVEL', Settings.log_level).upper(),
    )
