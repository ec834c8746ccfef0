class DiscoveryStateError(Exception):
    """ Base class for errors raised while sequencing discovered candidates """


class AlreadyInProgress(DiscoveryStateError):
    """
    A candidate list is already stored under the session key.
    Signals overlapping discovery attempts in one session, which is a usage bug, not a runtime condition.
    """
    def __init__(self, resolved_url, existing_resolved_url, session_key):
        super().__init__(
            f"There is already a candidate list for {existing_resolved_url} in {session_key}; "
            f"refusing to store the one for {resolved_url}")
        self.resolved_url = resolved_url
        self.existing_resolved_url = existing_resolved_url
        self.session_key = session_key


class CorruptSessionState(DiscoveryStateError):
    """ Session contents could not be turned back into a candidate list """
    def __init__(self, message, session_key=None):
        super().__init__(message)
        self.session_key = session_key
