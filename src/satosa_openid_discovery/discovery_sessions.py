import logging

import redis
from satosa.context import Context

from .definitions import SESSION_KEY_PREFIX, DEFAULT_SESSION_KEY_SUFFIX
from .discovery_manager import DiscoveryCoordinator
from .session_store import SatosaStateStore, RedisSessionStore

logger = logging.getLogger(__name__)

BACKENDS = ('state', 'redis')


class DiscoverySessions(object):
    """
    Builds request-scoped DiscoveryCoordinators from plugin configuration.

    Config keys (all optional):
    * session_key_prefix: namespace of the session keys holding candidate lists
    * session_backend: 'state' (SATOSA_STATE cookie, default) or 'redis'
    * redis_host, redis_port, redis_ttl: used by the redis backend only
    """
    def __init__(self, config: dict):
        self.session_key_prefix = config.get('session_key_prefix', SESSION_KEY_PREFIX)
        self.backend = config.get('session_backend', 'state')
        if self.backend not in BACKENDS:
            raise ValueError(f"Unknown session_backend {self.backend!r}, expected one of {BACKENDS}")
        self.redis = None
        self.redis_ttl = None
        if self.backend == 'redis':
            self.redis = redis.Redis(host=config.get('redis_host', 'localhost'), port=config.get('redis_port', 6379))
            self.redis_ttl = config.get('redis_ttl', 600)
        logger.info(f"Discovery sessions active, backend: {self.backend}")

    def store_for(self, context: Context):
        if self.backend == 'redis':
            return RedisSessionStore(context.state, self.redis, ttl=self.redis_ttl)
        return SatosaStateStore(context.state)

    def coordinator(self, context: Context, identifier: str, session_key_suffix=DEFAULT_SESSION_KEY_SUFFIX,
                    descriptor_type=None):
        return DiscoveryCoordinator(self.store_for(context), identifier,
                                    session_key_suffix=session_key_suffix,
                                    session_key_prefix=self.session_key_prefix,
                                    descriptor_type=descriptor_type)
