"""
Level configuration: one explicit record per level, built by a single merge function.

Built-in levels are stored in ``chorddrill/data/levels.yaml``. A user file with
the same shape can be loaded instead::

    defaults:            # optional, merged over DEFAULT_LEVEL
      octave_bounds: [60, 72]
    levels:
      my-level:
        kind: chord
        allowed_qualities: [major, minor]
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from importlib.resources import files
from pathlib import Path
from typing import Any, Final, Iterable, Literal, Mapping

import yaml

from chorddrill.catalogs import (
    DEGREE_QUALITIES,
    DEGREE_SEVENTH_QUALITIES,
    NON_DIATONIC_CHORDS,
    get_key,
    get_quality,
)
from chorddrill.chord_builder import ChordBuilder
from chorddrill.errors import ConfigurationError
from chorddrill.patterns import get_pattern_library
from chorddrill.pitch_space import NOTE_NAMES, note_to_pitch_class

LevelKind = Literal["chord", "progression"]

SUPPORTED_KINDS: Final[set[str]] = {"chord", "progression"}
NATURAL_ROOTS: Final[tuple[str, ...]] = ("C", "D", "E", "F", "G", "A", "B")
_TUPLE_FIELDS: Final[set[str]] = {
    "available_keys",
    "available_roots",
    "allowed_qualities",
    "featured_qualities",
}


@dataclass(frozen=True)
class LevelConfig:
    """
    Fully-specified settings for one exercise level.

    Attributes:
        id:                            Level identifier, e.g. "triads-inversions".
        title:                         Human-readable title.
        kind:                          "chord" (single chords) or "progression".
        available_keys:                Keys a progression may be drawn in.
        available_roots:               Roots a single chord may be built on.
        allowed_qualities:             Quality ids a single chord may use.
        featured_qualities:            Qualities introduced by this level; drawn
                                       with double weight.
        max_inversion:                 Highest inversion ordinal for single chords.
        octave:                        Octave of the root before voicing (C4 = 60).
        octave_bounds:                 (lower, upper) MIDI bounds for the register shift.
        pattern_library:               Progression tier name (see ``patterns.py``).
        inversion_labeling_required:   Whether answers must name the inversion.
        duplicate_avoidance_retry_cap: Resampling attempts before a repeat is accepted.
    """

    id: str = "custom"
    title: str = ""
    kind: LevelKind = "chord"
    available_keys: tuple[str, ...] = ("C",)
    available_roots: tuple[str, ...] = NATURAL_ROOTS
    allowed_qualities: tuple[str, ...] = ("major", "minor")
    featured_qualities: tuple[str, ...] = ()
    max_inversion: int = 0
    octave: int = 4
    octave_bounds: tuple[int, int] = (60, 72)
    pattern_library: str = "basic-diatonic"
    inversion_labeling_required: bool = False
    duplicate_avoidance_retry_cap: int = 50


DEFAULT_LEVEL: Final[LevelConfig] = LevelConfig()

_FIELD_NAMES: Final[frozenset[str]] = frozenset(f.name for f in fields(LevelConfig))


# ------------------------------------------------------------------
# Merge and validation
# ------------------------------------------------------------------

def _coerce(name: str, value: Any) -> Any:
    if name in _TUPLE_FIELDS:
        if isinstance(value, str):
            return (value,)
        return tuple(str(item) for item in value)
    if name == "octave_bounds":
        bounds = tuple(int(item) for item in value)
        if len(bounds) != 2:
            raise ConfigurationError(f"octave_bounds needs two values, got {value!r}.")
        return bounds
    return value


def resolve_level_config(
    overrides: Mapping[str, Any] | None = None,
    base: LevelConfig = DEFAULT_LEVEL,
) -> LevelConfig:
    """
    Merge *overrides* over *base* and return a validated LevelConfig.

    This is the only place level options are combined; it never mutates its
    inputs.

    Raises:
        ConfigurationError: For unknown option names or an invalid merged level.
    """
    overrides = dict(overrides or {})
    unknown = sorted(set(overrides) - _FIELD_NAMES)
    if unknown:
        raise ConfigurationError(f"Unknown level option(s): {', '.join(unknown)}.")

    merged = asdict(base)
    merged.update({name: _coerce(name, value) for name, value in overrides.items()})
    level = LevelConfig(**merged)
    validate_level_config(level)
    return level


def validate_level_config(level: LevelConfig) -> None:
    """
    Raise ConfigurationError if *level* refers to unknown data, has an empty pool
    or can produce a chord that one register shift cannot bring inside its bounds.
    """
    if level.kind not in SUPPORTED_KINDS:
        supported = ", ".join(sorted(SUPPORTED_KINDS))
        raise ConfigurationError(f"Unsupported level kind '{level.kind}'. Use one of: {supported}.")

    lower, upper = level.octave_bounds
    if lower > upper:
        raise ConfigurationError(f"Octave bounds {level.octave_bounds} are not ordered.")
    if level.duplicate_avoidance_retry_cap < 1:
        raise ConfigurationError("duplicate_avoidance_retry_cap must be at least 1.")
    if level.max_inversion < 0:
        raise ConfigurationError("max_inversion must not be negative.")

    if level.kind == "chord":
        if not level.available_roots:
            raise ConfigurationError(f"Level '{level.id}' has no available roots.")
        if not level.allowed_qualities:
            raise ConfigurationError(f"Level '{level.id}' has no allowed qualities.")
        for root in level.available_roots:
            note_to_pitch_class(root)
        for quality_id in level.allowed_qualities:
            get_quality(quality_id)
        stray = sorted(set(level.featured_qualities) - set(level.allowed_qualities))
        if stray:
            raise ConfigurationError(
                f"Featured qualities {', '.join(stray)} are not allowed in level '{level.id}'."
            )
        voicings = {
            (quality_id, inversion)
            for quality_id in level.allowed_qualities
            for inversion in range(min(level.max_inversion, get_quality(quality_id).cardinality - 1) + 1)
        }
        _check_register(level, level.available_roots, voicings)
        return

    if not level.available_keys:
        raise ConfigurationError(f"Level '{level.id}' has no available keys.")
    modes = {get_key(name).mode for name in level.available_keys}
    library = get_pattern_library(level.pattern_library)
    if not library:
        raise ConfigurationError(f"Pattern library '{level.pattern_library}' is empty.")

    voicings = set()
    for pattern in library:
        for step in pattern:
            for mode in modes:
                if step.symbol is None:
                    table = DEGREE_SEVENTH_QUALITIES if step.seventh else DEGREE_QUALITIES
                    voicings.add((table[mode][step.degree], step.inversion))
                elif step.symbol in NON_DIATONIC_CHORDS[mode]:
                    voicings.add((NON_DIATONIC_CHORDS[mode][step.symbol].quality_id, step.inversion))
                else:
                    raise ConfigurationError(
                        f"Pattern library '{level.pattern_library}' uses '{step.symbol}', "
                        f"which is not defined for {mode} keys."
                    )
    # Progression roots may fall on any pitch class of the chromatic scale.
    _check_register(level, NOTE_NAMES, voicings)


def _check_register(
    level: LevelConfig,
    roots: Iterable[str],
    voicings: Iterable[tuple[str, int]],
) -> None:
    """Raise unless every (root, quality, inversion) lands inside the bounds after one shift."""
    builder = ChordBuilder(octave_bounds=level.octave_bounds, octave=level.octave)
    lower, upper = level.octave_bounds
    voicings = sorted(voicings)
    for root in roots:
        for quality_id, inversion in voicings:
            notes = builder.voice(root, quality_id, inversion)
            if min(notes) > upper or max(notes) < lower:
                raise ConfigurationError(
                    f"Level '{level.id}': {root} {quality_id} (inversion {inversion}) does not "
                    f"fit octave bounds {level.octave_bounds} from octave {level.octave}."
                )


# ------------------------------------------------------------------
# YAML level files
# ------------------------------------------------------------------

def parse_yaml(path: str | Path) -> dict:
    with open(path, "r", encoding="utf8") as fh:
        data = yaml.safe_load(fh)
    if not isinstance(data, dict):
        raise ConfigurationError(f"Level file '{path}' must contain a mapping.")
    return data


def load_levels(path: str | Path | None = None) -> dict[str, LevelConfig]:
    """
    Load level definitions from *path*, or the built-in ``levels.yaml``.

    Returns:
        Mapping of level id to LevelConfig, in file order.

    Raises:
        ConfigurationError: If the file is malformed or a level is invalid.
        OSError: If *path* cannot be read.
    """
    if path is None:
        text = files("chorddrill").joinpath("data/levels.yaml").read_text(encoding="utf8")
        data = yaml.safe_load(text)
    else:
        data = parse_yaml(path)

    levels = data.get("levels")
    if not isinstance(levels, dict) or not levels:
        raise ConfigurationError("Level file must define a non-empty 'levels' mapping.")

    defaults = resolve_level_config(data.get("defaults") or {})
    return {
        str(level_id): resolve_level_config({"id": str(level_id), **(options or {})}, base=defaults)
        for level_id, options in levels.items()
    }


def get_level(level_id: str, levels: Mapping[str, LevelConfig] | None = None) -> LevelConfig:
    """Look up a level by id in *levels* (the built-in levels by default)."""
    levels = load_levels() if levels is None else levels
    try:
        return levels[level_id]
    except KeyError:
        raise ConfigurationError(f"Unknown level '{level_id}'.") from None
