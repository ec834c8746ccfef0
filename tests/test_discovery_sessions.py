from typing import get_type_hints

import pytest
from satosa.context import Context
from satosa.state import State

from satosa_openid_discovery import DiscoverySessions, RedisSessionStore, SatosaStateStore
from satosa_openid_discovery.definitions import SESSION_KEY_PREFIX


def test_defaults(context):
    sessions = DiscoverySessions({})
    assert sessions.backend == 'state'
    assert sessions.redis is None
    assert isinstance(sessions.store_for(context), SatosaStateStore)
    assert sessions.coordinator(context, 'alice.example').session_key == SESSION_KEY_PREFIX + 'auth'


def test_prefix_and_suffix(context):
    sessions = DiscoverySessions({'session_key_prefix': 'openid:'})
    coordinator = sessions.coordinator(context, 'alice.example', session_key_suffix='form2')
    assert coordinator.session_key == 'openid:form2'
    assert coordinator.identifier == 'alice.example'


def test_redis_backend(context):
    sessions = DiscoverySessions({'session_backend': 'redis', 'redis_host': 'redis.example', 'redis_ttl': 60})
    store = sessions.store_for(context)
    assert isinstance(store, RedisSessionStore)
    assert store.ttl == 60
    assert store.state is context.state
    assert sessions.redis.connection_pool.connection_kwargs['host'] == 'redis.example'


def test_unknown_backend():
    with pytest.raises(ValueError):
        DiscoverySessions({'session_backend': 'memcached'})


def test_adapters_are_typed_against_satosa():
    assert get_type_hints(DiscoverySessions.store_for)['context'] is Context
    assert get_type_hints(DiscoverySessions.coordinator)['context'] is Context
    assert get_type_hints(SatosaStateStore.__init__)['state'] is State
    assert get_type_hints(RedisSessionStore.__init__)['state'] is State
