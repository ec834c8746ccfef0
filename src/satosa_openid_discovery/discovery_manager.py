import logging

from .candidate_list import CandidateList
from .definitions import SESSION_KEY_PREFIX, DEFAULT_SESSION_KEY_SUFFIX
from .errors import AlreadyInProgress, CorruptSessionState

logger = logging.getLogger(__name__)


class DiscoveryCoordinator(object):
    """
    Calls discovery and keeps track of which discovered endpoints were already attempted.

    One instance serves one request: construct it, call get_next_candidate() or cleanup(), drop it.
    At most one CandidateList lives under the session key. A stored list is only reused while the
    current identifier matches its originating identifier or resolved URL.

    A list left behind by another identifier is never deleted here. Until it is exhausted or cleaned up,
    starting discovery for a different identifier under the same key raises AlreadyInProgress.
    """
    def __init__(self, store, identifier: str, session_key_suffix: str = DEFAULT_SESSION_KEY_SUFFIX,
                 session_key_prefix: str = SESSION_KEY_PREFIX, descriptor_type=None):
        self.store = store
        self.identifier = identifier
        self.session_key_suffix = DEFAULT_SESSION_KEY_SUFFIX if session_key_suffix is None else session_key_suffix
        self.session_key_prefix = session_key_prefix
        self.descriptor_type = descriptor_type

    @property
    def session_key(self):
        return self.session_key_prefix + self.session_key_suffix

    def get_next_candidate(self, discover):
        """
        Return the next endpoint to try for the identifier, or None when there is nothing left.

        ``discover(identifier)`` must return ``(resolved_url, candidates)``. It is only called when
        no usable list is stored; its exceptions propagate unchanged.
        """
        candidate_list = self._get_candidate_list()
        if candidate_list is not None and candidate_list.is_exhausted():
            self._destroy_candidate_list()
            candidate_list = None

        if candidate_list is None:
            resolved_url, candidates = discover(self.identifier)
            candidate_list = self._create_candidate_list(resolved_url, candidates)

        if candidate_list is None:
            logger.info(f"No candidates discovered for {self.identifier}")
            return None

        candidate = candidate_list.next()
        self._store(candidate_list)
        logger.info(f"Next candidate for {self.identifier} from {self.session_key}: "
                    f"{len(candidate_list.remaining)} remaining")
        logger.debug(f"Issued candidate {candidate!r}")
        return candidate

    def cleanup(self, force: bool = False):
        """
        Forget the stored list and return the candidate that was being tried, if any.

        With ``force`` the list is removed even if it was built for another identifier.
        """
        candidate_list = self._get_candidate_list(force)
        if candidate_list is None:
            return None
        candidate = candidate_list.current
        self.store.delete(self.session_key)
        logger.info(f"Removed candidate list for {candidate_list.resolved_url} from {self.session_key}")
        return candidate

    def _get_candidate_list(self, force=False):
        candidate_list = self._load()
        if force or candidate_list is None or candidate_list.is_for_context(self.identifier):
            return candidate_list
        logger.debug(f"Ignoring candidate list for {candidate_list.resolved_url} in {self.session_key}: "
                     f"not for {self.identifier}")
        return None

    def _create_candidate_list(self, resolved_url, candidates):
        existing = self._load()
        if existing is not None and (existing.is_for_context(self.identifier) or not existing.is_exhausted()):
            raise AlreadyInProgress(resolved_url, existing.resolved_url, self.session_key)
        if not candidates:
            return None
        if existing is not None:
            logger.info(f"Replacing exhausted candidate list for {existing.resolved_url} in {self.session_key}; "
                        f"its current candidate is dropped")
        candidate_list = CandidateList(self.identifier, resolved_url, candidates)
        self._store(candidate_list)
        logger.info(f"Stored {len(candidate_list.remaining)} candidates for {resolved_url} in {self.session_key}")
        return candidate_list

    def _destroy_candidate_list(self):
        if self._get_candidate_list() is not None:
            self.store.delete(self.session_key)
            logger.info(f"Destroyed exhausted candidate list in {self.session_key}")

    def _store(self, candidate_list):
        self.store.set(self.session_key, candidate_list.serialize())

    def _load(self):
        value = self.store.get(self.session_key)
        if value is None:
            return None
        try:
            return CandidateList.deserialize(value, self.descriptor_type)
        except CorruptSessionState as e:
            e.session_key = self.session_key
            raise
