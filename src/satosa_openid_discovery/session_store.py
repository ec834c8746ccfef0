import json
import logging
import uuid

import redis
from satosa.state import State

from .errors import CorruptSessionState

logger = logging.getLogger(__name__)


class SessionStore(object):
    """ Key-value access to per-user session data; values are plain serializable data """
    def get(self, key):
        raise NotImplementedError

    def set(self, key, value):
        raise NotImplementedError

    def delete(self, key):
        raise NotImplementedError


class SatosaStateStore(SessionStore):
    """ Keeps values in SATOSA_STATE, i.e. in the state cookie of the current request """
    def __init__(self, state: State):
        self.state = state

    def get(self, key):
        return self.state.get(key)

    def set(self, key, value):
        self.state[key] = value

    def delete(self, key):
        if key in self.state:
            del self.state[key]


class RedisSessionStore(SessionStore):
    """
    Keeps values in redis and only a reference to them in SATOSA_STATE.

    Storing a long candidate list in SATOSA_STATE is limited by the cookie size.
    Instead the JSON-encoded value goes to redis under a random reference key, which is stored in the state.
    """
    def __init__(self, state: State, redis_client: redis.Redis, ttl=None):
        self.state = state
        self.redis = redis_client
        self.ttl = ttl

    def get(self, key):
        ref = self.state.get(key)
        if ref is None:
            return None
        stored_json = self.redis.get(ref)
        if stored_json is None:
            logger.info(f"Redis entry {ref} for {key} not found, probably expired")
            return None
        try:
            return json.loads(stored_json)
        except ValueError as e:
            raise CorruptSessionState(f"Redis entry {ref} is not valid JSON: {e}", session_key=key) from e

    def set(self, key, value):
        ref = self.state.get(key) or uuid.uuid4().hex
        self.redis.set(ref, json.dumps(value), ex=self.ttl)
        self.state[key] = ref
        logger.debug(f"stored {key} in redis entry {ref}")

    def delete(self, key):
        ref = self.state.get(key)
        if ref is None:
            return
        self.redis.delete(ref)
        del self.state[key]
        logger.debug(f"deleted redis entry {ref} for {key}")
