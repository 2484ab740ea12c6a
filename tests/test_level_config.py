"""Unit tests for level configuration merging, validation and YAML loading."""

from pathlib import Path

import pytest

from chorddrill.errors import ConfigurationError
from chorddrill.level_config import (
    DEFAULT_LEVEL,
    get_level,
    load_levels,
    resolve_level_config,
)

LEVEL_FILE = """\
defaults:
  octave_bounds: [48, 72]
levels:
  warmup:
    title: Warm-up
    kind: chord
    available_roots: [C, G]
    allowed_qualities: [major]
  cadences:
    kind: progression
    available_keys: [F, Dm]
    pattern_library: basic-diatonic
"""


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "levels.yaml"
    path.write_text(text, encoding="utf8")
    return path


# ── Built-in levels ────────────────────────────────────────────────────────────

def test_builtin_levels_load() -> None:
    levels = load_levels()
    assert "basic-triads" in levels
    assert "progressions-non-diatonic-inversions" in levels
    assert {level.kind for level in levels.values()} == {"chord", "progression"}
    for level_id, level in levels.items():
        assert level.id == level_id
        assert level.title


def test_builtin_defaults_are_applied() -> None:
    level = get_level("basic-triads")
    assert level.octave_bounds == (60, 72)
    assert level.duplicate_avoidance_retry_cap == 50
    assert level.available_roots == ("C", "D", "E", "F", "G", "A", "B")


def test_get_level_unknown_raises() -> None:
    with pytest.raises(ConfigurationError):
        get_level("no-such-level")


# ── resolve_level_config ───────────────────────────────────────────────────────

def test_resolve_without_overrides_returns_defaults() -> None:
    assert resolve_level_config() == DEFAULT_LEVEL


def test_resolve_coerces_sequences_to_tuples() -> None:
    level = resolve_level_config({"available_roots": ["D", "E"], "octave_bounds": [48, 60]})
    assert level.available_roots == ("D", "E")
    assert level.octave_bounds == (48, 60)
    assert resolve_level_config({"available_roots": "F#"}).available_roots == ("F#",)


def test_resolve_does_not_mutate_inputs() -> None:
    overrides = {"max_inversion": 2}
    level = resolve_level_config(overrides)
    assert overrides == {"max_inversion": 2}
    assert level.max_inversion == 2
    assert DEFAULT_LEVEL.max_inversion == 0


def test_resolve_merges_over_base() -> None:
    base = resolve_level_config({"octave": 3, "max_inversion": 1})
    level = resolve_level_config({"max_inversion": 2}, base=base)
    assert level.octave == 3
    assert level.max_inversion == 2


@pytest.mark.parametrize(
    "overrides",
    [
        {"colour": "blue"},
        {"kind": "melody"},
        {"allowed_qualities": ["major", "mystery"]},
        {"allowed_qualities": []},
        {"available_roots": []},
        {"available_roots": ["H"]},
        {"featured_qualities": ["minor7"]},
        {"octave_bounds": [72, 60]},
        {"octave_bounds": [60, 66, 72]},
        {"duplicate_avoidance_retry_cap": 0},
        {"max_inversion": -1},
        {"kind": "progression", "available_keys": []},
        {"kind": "progression", "available_keys": ["C", "Q"]},
        {"kind": "progression", "pattern_library": "nope"},
        {"kind": "progression", "available_keys": ["Am"], "pattern_library": "non-diatonic"},
        {"octave": 7},
        {"octave": 2},
        {"octave_bounds": [36, 48]},
        {"kind": "progression", "octave": 7},
    ],
)
def test_invalid_levels_raise(overrides: dict) -> None:
    with pytest.raises(ConfigurationError):
        resolve_level_config(overrides)


@pytest.mark.parametrize("octave", [3, 4, 5])
def test_root_octave_one_shift_from_bounds_is_accepted(octave: int) -> None:
    assert resolve_level_config({"octave": octave}).octave == octave
    assert resolve_level_config({"kind": "progression", "octave": octave}).octave == octave


def test_unreachable_register_names_the_chord() -> None:
    with pytest.raises(ConfigurationError, match="does not fit octave bounds"):
        resolve_level_config({"id": "high", "octave": 7})


def test_register_check_covers_inversions() -> None:
    assert resolve_level_config({"octave": 3, "max_inversion": 2}).max_inversion == 2
    # B5 in second inversion still sits above C5 after dropping an octave.
    with pytest.raises(ConfigurationError):
        resolve_level_config({"octave": 5, "max_inversion": 2})


# ── User level files ───────────────────────────────────────────────────────────

def test_load_levels_from_file(tmp_path: Path) -> None:
    levels = load_levels(_write(tmp_path, LEVEL_FILE))
    assert list(levels) == ["warmup", "cadences"]
    assert levels["warmup"].available_roots == ("C", "G")
    assert levels["warmup"].octave_bounds == (48, 72)
    assert levels["cadences"].available_keys == ("F", "Dm")


def test_load_levels_requires_levels_mapping(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        load_levels(_write(tmp_path, "defaults:\n  octave: 4\n"))


def test_load_levels_requires_a_mapping(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        load_levels(_write(tmp_path, "- just\n- a list\n"))


def test_load_levels_rejects_invalid_level(tmp_path: Path) -> None:
    text = "levels:\n  broken:\n    allowed_qualities: [major, mystery]\n"
    with pytest.raises(ConfigurationError):
        load_levels(_write(tmp_path, text))
