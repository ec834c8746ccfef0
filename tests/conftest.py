import pytest
from satosa.context import Context
from satosa.state import State


class Endpoint(object):
    def __init__(self, server_url, local_id=None):
        self.server_url = server_url
        self.local_id = local_id

    def serialize(self):
        return {'server_url': self.server_url, 'local_id': self.local_id}

    @classmethod
    def deserialize(cls, value):
        return cls(value['server_url'], value.get('local_id'))

    def __eq__(self, other):
        return isinstance(other, Endpoint) and self.serialize() == other.serialize()

    def __repr__(self):
        return f"Endpoint({self.server_url!r})"


class DictStore(object):
    def __init__(self):
        self.data = {}
        self.set_calls = 0

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.set_calls += 1
        self.data[key] = value

    def delete(self, key):
        self.data.pop(key, None)


class RecordingDiscoverer(object):
    def __init__(self, resolved_url, candidates):
        self.resolved_url = resolved_url
        self.candidates = candidates
        self.calls = []

    def __call__(self, identifier):
        self.calls.append(identifier)
        return self.resolved_url, list(self.candidates)


@pytest.fixture
def e1():
    return Endpoint('https://op.example/server1')


@pytest.fixture
def e2():
    return Endpoint('https://op.example/server2', local_id='https://alice.op.example/')


@pytest.fixture
def store():
    return DictStore()


@pytest.fixture
def context():
    context = Context()
    context.state = State()
    return context
