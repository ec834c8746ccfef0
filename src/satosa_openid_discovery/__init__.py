"""
Sequencing of discovered OpenID endpoints across the requests of one login attempt.

One user identifier can resolve to several candidate endpoints (e.g. after a Yadis redirect).
Each request only tries one of them, so the endpoints still to be tried and the one currently tried
are persisted in the session between requests:
* CandidateList: ordered endpoints for one identifier, with a cursor on the endpoint in flight
* DiscoveryCoordinator: creates, advances and removes the single CandidateList stored under a session key

Persist state: by default the serialized list is kept in SATOSA_STATE. Long lists may exceed the cookie size;
with the redis backend the list is stored in redis, and only its key is stored in SATOSA_STATE.

A list left in the session by an unfinished flow for another identifier is not discarded.
Starting discovery for a second identifier under the same session key raises AlreadyInProgress
until the first flow is exhausted or cleaned up. Use distinct session key suffixes for independent flows.
"""

from .candidate_list import CandidateList
from .discovery_manager import DiscoveryCoordinator
from .discovery_sessions import DiscoverySessions
from .errors import AlreadyInProgress, CorruptSessionState, DiscoveryStateError
from .session_store import SessionStore, SatosaStateStore, RedisSessionStore
