from collections.abc import Mapping

from .definitions import SERIALIZED_TYPE_TAG
from .errors import CorruptSessionState


def _serialize_descriptor(descriptor):
    serialize = getattr(descriptor, 'serialize', None)
    if callable(serialize):
        return serialize()
    return descriptor


def _deserialize_descriptor(raw, descriptor_type):
    if descriptor_type is None:
        return raw
    return descriptor_type.deserialize(raw)


class CandidateList(object):
    """
    Ordered set of discovered endpoints for one identifier, tracking which one was tried last.

    ``remaining`` holds the candidates not yet issued, in retry order.
    ``current`` is the candidate returned by the latest ``next()`` and is never part of ``remaining``.
    """
    def __init__(self, originating_identifier: str, resolved_url: str, candidates):
        self._set_fields(originating_identifier, resolved_url, candidates, None)

    @classmethod
    def restore(cls, originating_identifier: str, resolved_url: str, remaining, current):
        """ Rebuild a list from previously persisted state, including the candidate in flight """
        candidate_list = cls.__new__(cls)
        candidate_list._set_fields(originating_identifier, resolved_url, remaining, current)
        return candidate_list

    def _set_fields(self, originating_identifier, resolved_url, remaining, current):
        self._originating_identifier = originating_identifier
        self._resolved_url = resolved_url
        self._remaining = list(remaining)
        self._current = current

    @property
    def originating_identifier(self):
        return self._originating_identifier

    @property
    def resolved_url(self):
        return self._resolved_url

    @property
    def current(self):
        return self._current

    @property
    def remaining(self):
        return tuple(self._remaining)

    def next(self):
        self._current = self._remaining.pop(0) if self._remaining else None
        return self._current

    def is_for_context(self, url) -> bool:
        return url in (self._originating_identifier, self._resolved_url)

    def has_started(self) -> bool:
        return self._current is not None

    def is_exhausted(self) -> bool:
        return not self._remaining

    def serialize(self) -> dict:
        return {
            'type': SERIALIZED_TYPE_TAG,
            'originating_identifier': self._originating_identifier,
            'resolved_url': self._resolved_url,
            'remaining': [_serialize_descriptor(c) for c in self._remaining],
            'current': _serialize_descriptor(self._current),
        }

    @classmethod
    def deserialize(cls, value, descriptor_type=None):
        """
        Inverse of ``serialize``.

        Descriptors are rebuilt with ``descriptor_type.deserialize`` when a type is given,
        otherwise they are taken as the plain data that was stored.
        Raises CorruptSessionState if ``value`` is not a serialized candidate list.
        """
        if not isinstance(value, Mapping):
            raise CorruptSessionState(f"Expected a serialized candidate list, got {type(value).__name__}")
        if value.get('type') != SERIALIZED_TYPE_TAG:
            raise CorruptSessionState(f"Unexpected session value type: {value.get('type')!r}")
        try:
            remaining_raw = value['remaining']
            if not isinstance(remaining_raw, list):
                raise TypeError(f"'remaining' must be a list, got {type(remaining_raw).__name__}")
            remaining = [_deserialize_descriptor(raw, descriptor_type) for raw in remaining_raw]
            current_raw = value['current']
            current = None if current_raw is None else _deserialize_descriptor(current_raw, descriptor_type)
            return cls.restore(value['originating_identifier'], value['resolved_url'], remaining, current)
        except (KeyError, TypeError, ValueError) as e:
            raise CorruptSessionState(f"Cannot restore candidate list: {e}") from e

    def __eq__(self, other):
        if not isinstance(other, CandidateList):
            return NotImplemented
        return self.serialize() == other.serialize()

    __hash__ = None

    def __repr__(self):
        return (f"{type(self).__name__}({self._originating_identifier!r}, {self._resolved_url!r}, "
                f"remaining={len(self._remaining)}, current={self._current!r})")
