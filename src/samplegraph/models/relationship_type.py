"""Kinds of musical relationship between two songs."""

from __future__ import annotations
from enum import Enum


class RelationshipType(str, Enum):
    """
    Relationship from one song to another, as labelled by Genius.

    Unrecognized labels map to ``UNKNOWN`` instead of raising, so
    ``RelationshipType("foobar") is RelationshipType.UNKNOWN``.
    """

    SAMPLES = "samples"
    SAMPLED_IN = "sampled_in"
    INTERPOLATES = "interpolates"
    INTERPOLATED_BY = "interpolated_by"
    COVER_OF = "cover_of"
    COVERED_BY = "covered_by"
    REMIX_OF = "remix_of"
    REMIXED_BY = "remixed_by"
    LIVE_VERSION_OF = "live_version_of"
    PERFORMED_LIVE_AS = "performed_live_as"
    TRANSLATION_OF = "translation_of"
    TRANSLATIONS = "translations"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value):
        return cls.UNKNOWN

    @classmethod
    def parse(cls, value) -> "RelationshipType":
        """Parse an external label; never fails."""
        return cls(value)

    def is_relevant(self) -> bool:
        """Whether this kind is surfaced by the API (samples and interpolations, both ways)."""
        return self in _RELEVANT

    def invert(self) -> "RelationshipType":
        """The same relationship seen from the other song."""
        return _INVERSES[self]

    def __str__(self):
        return self.value


_RELEVANT = frozenset({
    RelationshipType.SAMPLES,
    RelationshipType.SAMPLED_IN,
    RelationshipType.INTERPOLATES,
    RelationshipType.INTERPOLATED_BY,
})

_PAIRS = [
    (RelationshipType.SAMPLES, RelationshipType.SAMPLED_IN),
    (RelationshipType.INTERPOLATES, RelationshipType.INTERPOLATED_BY),
    (RelationshipType.COVER_OF, RelationshipType.COVERED_BY),
    (RelationshipType.REMIX_OF, RelationshipType.REMIXED_BY),
    (RelationshipType.LIVE_VERSION_OF, RelationshipType.PERFORMED_LIVE_AS),
    (RelationshipType.TRANSLATION_OF, RelationshipType.TRANSLATIONS),
]

_INVERSES = {RelationshipType.UNKNOWN: RelationshipType.UNKNOWN}
_INVERSES.update({a: b for a, b in _PAIRS})
_INVERSES.update({b: a for a, b in _PAIRS})
