"""
Progression pattern libraries, grouped by difficulty tier.

Each pattern is an ordered tuple of ChordDescriptor entries. Scale degrees are
0-based (0 = I/i ... 6 = vii°/VII); non-diatonic steps name a symbol of the
non-diatonic table for the key's mode.
"""

from types import MappingProxyType
from typing import Mapping

from chorddrill.errors import ConfigurationError
from chorddrill.models import ChordDescriptor

Pattern = tuple[ChordDescriptor, ...]


def _d(degree: int, inversion: int = 0, seventh: bool = False) -> ChordDescriptor:
    return ChordDescriptor(degree=degree, inversion=inversion, seventh=seventh)


def _nd(symbol: str, inversion: int = 0) -> ChordDescriptor:
    return ChordDescriptor(symbol=symbol, inversion=inversion)


def _degrees(*degrees: int) -> Pattern:
    return tuple(_d(degree) for degree in degrees)


BASIC_DIATONIC: tuple[Pattern, ...] = (
    _degrees(0, 4, 5, 3),   # I-V-vi-IV (pop)
    _degrees(0, 5, 3, 4),   # I-vi-IV-V (50s)
    _degrees(5, 3, 0, 4),   # vi-IV-I-V
    _degrees(0, 3, 5, 4),   # I-IV-vi-V
    _degrees(5, 4, 3, 0),   # vi-V-IV-I
    _degrees(0, 3, 4, 0),   # I-IV-V-I
    _degrees(5, 1, 4, 0),   # vi-ii-V-I
    _degrees(0, 5, 1, 4),   # I-vi-ii-V
    _degrees(3, 4, 5, 4),   # IV-V-vi-V
    _degrees(0, 2, 5, 3),   # I-iii-vi-IV
    _degrees(0, 4, 3, 4),   # I-V-IV-V
    _degrees(0, 1, 3, 4),   # I-ii-IV-V
    _degrees(0, 4, 5, 0),   # I-V-vi-I
    _degrees(0, 1, 4, 0),   # I-ii-V-I
    _degrees(0, 6, 3, 4),   # I-vii°-IV-V
    _degrees(2, 5, 3, 4),   # iii-vi-IV-V
    _degrees(1, 4, 0, 3),   # ii-V-I-IV
    _degrees(0, 1, 2, 4),   # I-ii-iii-V
)

DIATONIC_SEVENTHS: tuple[Pattern, ...] = (
    (_d(1, seventh=True), _d(4, seventh=True), _d(0, seventh=True), _d(5, seventh=True)),
    (_d(5), _d(1, seventh=True), _d(4, seventh=True), _d(0)),
    (_d(0), _d(5, seventh=True), _d(1, seventh=True), _d(4, seventh=True)),
    (_d(0, seventh=True), _d(3, seventh=True), _d(4, seventh=True), _d(0)),
    (_d(0), _d(1, seventh=True), _d(2, seventh=True), _d(5)),
    (_d(2, seventh=True), _d(5, seventh=True), _d(1, seventh=True), _d(4, seventh=True)),
    (_d(3, seventh=True), _d(6, seventh=True), _d(2, seventh=True), _d(5, seventh=True)),
)

DIATONIC_INVERSIONS: tuple[Pattern, ...] = (
    (_d(0, 1), _d(4, 1), _d(5), _d(3)),        # I6-V6-vi-IV
    (_d(0), _d(3, 1), _d(4, 2), _d(0)),        # I-IV6-V64-I
    (_d(5, 1), _d(3), _d(0, 2), _d(4)),        # vi6-IV-I64-V
    (_d(0), _d(1, 1), _d(4, 1), _d(0)),        # I-ii6-V6-I
    (_d(0, 1), _d(4), _d(5, 1), _d(3)),        # I6-V-vi6-IV
    (_d(3, 1), _d(0, 2), _d(4), _d(0)),        # IV6-I64-V-I
    (_d(1, 1), _d(4, 2), _d(0), _d(5)),        # ii6-V64-I-vi
    (_d(0), _d(5, 1), _d(1, 1), _d(4)),        # I-vi6-ii6-V
)

NON_DIATONIC: tuple[Pattern, ...] = (
    (_d(0), _nd("bVII"), _d(3), _d(0)),                 # I-bVII-IV-I
    (_d(0), _nd("V/vi"), _d(5), _d(3)),                 # I-V/vi-vi-IV
    (_d(5), _nd("bVI"), _d(3), _d(0)),                  # vi-bVI-IV-I
    (_d(0), _nd("bIII"), _nd("bVI"), _nd("bVII")),      # I-bIII-bVI-bVII
    (_nd("bVI"), _nd("bVII"), _d(0), _d(4)),            # bVI-bVII-I-V
    (_d(0), _nd("bII"), _d(4), _d(0)),                  # I-bII-V-I
    (_d(5), _nd("V/V"), _d(4), _d(0)),                  # vi-V/V-V-I
    (_d(0), _nd("bVI"), _nd("bVII"), _d(0)),            # I-bVI-bVII-I
    (_d(0), _nd("#iv°"), _d(4), _d(0)),                 # I-#iv°-V-I
    (_d(0), _nd("I+"), _d(5), _d(3)),                   # I-I+-vi-IV
    (_d(0), _nd("V/ii"), _d(1), _d(4)),                 # I-V/ii-ii-V
    (_nd("iiø7"), _d(4), _d(0), _d(5)),                 # iiø7-V-I-vi
)

NON_DIATONIC_INVERSIONS: tuple[Pattern, ...] = (
    (_d(0), _nd("bVI", 1), _d(3, 1), _d(4)),            # I-bVI6-IV6-V
    (_d(0, 1), _nd("bVII", 1), _d(3, 1), _d(0)),        # I6-bVII6-IV6-I
    (_nd("bII", 1), _d(4, 2), _d(0), _d(5, 1)),         # bII6-V64-I-vi6
    (_d(0, 1), _nd("I+", 1), _d(5), _d(4)),             # I6-I+6-vi-V
    (_d(5, 1), _nd("bIII", 1), _d(4, 2), _d(0)),        # vi6-bIII6-V64-I
    (_d(0, 2), _nd("V+", 1), _d(0), _d(5, 1)),          # I64-V+6-I-vi6
    (_d(1, 1), _nd("bVI", 1), _d(4, 2), _d(0)),         # ii6-bVI6-V64-I
    (_d(3, 1), _nd("bII", 1), _d(4, 2), _d(0, 1)),      # IV6-bII6-V64-I6
    (_d(0), _nd("bVI", 2), _d(1, 1), _d(4)),            # I-bVI64-ii6-V
    (_d(5, 1), _d(3, 2), _nd("bVII", 1), _d(0)),        # vi6-IV64-bVII6-I
    (_d(0), _nd("V/V", 1), _d(4), _d(0)),               # I-V6/V-V-I
)

# Minor-key patterns only use symbols present in the minor non-diatonic table.
MINOR_NON_DIATONIC: tuple[Pattern, ...] = (
    (_d(0), _d(3), _nd("V"), _d(0)),                    # i-iv-V-i
    (_d(0), _nd("bII"), _nd("V"), _d(0)),               # i-bII-V-i
    (_d(0), _d(5), _nd("vii°"), _d(0)),                 # i-VI-vii°-i
    (_d(0), _nd("V/V"), _nd("V"), _d(0)),               # i-V/V-V-i
    (_d(0), _nd("i+"), _d(2), _d(3)),                   # i-i+-III-iv
    (_d(0), _nd("#iv°"), _nd("V"), _d(0)),              # i-#iv°-V-i
)

PATTERN_LIBRARIES: Mapping[str, tuple[Pattern, ...]] = MappingProxyType({
    "basic-diatonic": BASIC_DIATONIC,
    "diatonic-sevenths": DIATONIC_SEVENTHS,
    "diatonic-inversions": DIATONIC_INVERSIONS,
    "non-diatonic": NON_DIATONIC,
    "non-diatonic-inversions": NON_DIATONIC_INVERSIONS,
    "minor-non-diatonic": MINOR_NON_DIATONIC,
})


def get_pattern_library(name: str) -> tuple[Pattern, ...]:
    """Look up a pattern library (difficulty tier) by name."""
    try:
        return PATTERN_LIBRARIES[name]
    except KeyError:
        raise ConfigurationError(f"Unknown pattern library '{name}'.") from None
