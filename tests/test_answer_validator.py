"""Unit tests for answer normalization and notation-tolerant validation."""

import pytest

from chorddrill.answer_validator import (
    AnswerValidator,
    normalize,
    strip_inversions,
    validate,
    validate_notes,
)
from chorddrill.chord_builder import ChordBuilder


# ── normalize ──────────────────────────────────────────────────────────────────

def test_normalize_lowercases_and_drops_whitespace() -> None:
    assert normalize("  C#m 7 ") == "c#m7"


def test_normalize_unifies_glyphs() -> None:
    assert normalize("C♯m7♭5") == "c#m7b5"
    assert normalize("vii°") == "viio"
    assert normalize("viidim") == "viio"
    assert normalize("viiº") == "viio"


def test_normalize_strips_every_dash_variant() -> None:
    assert normalize("I – V — vi ‑ IV − I") == "ivviivi"


def test_normalize_keeps_hyphens_when_configured() -> None:
    validator = AnswerValidator(strip_hyphens=False)
    assert validator.normalize("I – V—vi") == "i-v-vi"


@pytest.mark.parametrize(
    "text",
    ["", "  ", "I - V - vi - IV", "Cm7♭5/1", "DIM", "d i m", "di-m", "°°", "vii°7 — V♯", "ÉTUDE Ø"],
)
def test_normalize_is_idempotent(text: str) -> None:
    once = normalize(text)
    assert normalize(once) == once
    strict = AnswerValidator(strip_hyphens=False)
    assert strict.normalize(strict.normalize(text)) == strict.normalize(text)


# ── strip_inversions ───────────────────────────────────────────────────────────

def test_strip_inversions() -> None:
    assert strip_inversions("I6 - V64 - ii7/1 - V6/V") == "I - V - ii7 - V/V"
    assert strip_inversions("C#m/2") == "C#m"
    assert strip_inversions("bVI") == "bVI"


# ── validate: core properties ──────────────────────────────────────────────────

def test_case_whitespace_and_dash_insensitive() -> None:
    assert validate("I - V - vi - IV", "i-v-vi-iv", True)


def test_optional_inversion_accepts_bare_numeral() -> None:
    assert validate("V", "V6", False)
    assert validate("V6", "V6", False)


def test_optional_inversion_still_rejects_wrong_chord() -> None:
    assert not validate("IV", "V6", False)
    assert not validate("V64", "V6", False)


def test_required_inversion_rejects_missing_label() -> None:
    assert not validate("V", "V6", True)
    assert not validate("C#m", "C#m/1", True)
    assert validate("C#m", "C#m/1", False)


def test_inversion_on_root_position_chord_is_wrong() -> None:
    assert not validate("V6", "V", True)
    assert not validate("V6", "V", False)


def test_default_labeling_is_optional() -> None:
    assert validate("I - V - vi", "I6 - V64 - vi")


@pytest.mark.parametrize("bad_input", [None, 42, ["V"], b"V"])
def test_non_string_input_never_raises(bad_input: object) -> None:
    assert validate(bad_input, "V") is False  # type: ignore[arg-type]
    assert validate("V", bad_input) is False  # type: ignore[arg-type]


@pytest.mark.parametrize("garbage", ["", "////", "---", "ø/ø/ø", "c/z", "#", "V/9/9"])
def test_malformed_input_simply_fails(garbage: str) -> None:
    assert validate(garbage, "C#m/1", True) is False
    assert validate(garbage, "I - V6/V - V", True) is False


# ── validate: chord symbols ────────────────────────────────────────────────────

@pytest.mark.parametrize(
    "answer, expected",
    [
        ("Dbm/1", "C#m/1"),
        ("Gb7", "F#7"),
        ("Cmin7", "Cm7"),
        ("C-7", "Cm7"),
        ("CΔ7", "Cmaj7"),
        ("Cø7", "Cm7b5"),
        ("Cm7♭5/1", "Cm7b5/1"),
        ("C°", "Cdim"),
        ("C+", "Caug"),
        ("Csus", "Csus4"),
        ("Cmaj", "C"),
        ("C/E", "C/1"),
        ("Am/C", "Am/1"),
        ("G7/F", "G7/3"),
    ],
)
def test_equivalent_chord_spellings(answer: str, expected: str) -> None:
    assert validate(answer, expected, True)


@pytest.mark.parametrize(
    "answer, expected",
    [
        ("Cm7", "Cmaj7"),
        ("C#m/1", "Dm/1"),
        ("C/G", "C/1"),
        ("Cm", "C"),
        ("Cdim7", "Cm7b5"),
        ("C7", "C9"),
    ],
)
def test_different_chords_are_rejected(answer: str, expected: str) -> None:
    assert not validate(answer, expected, True)


def test_minor_dash_spelling_is_not_a_dominant_or_major_chord() -> None:
    assert not validate("C-7", "C7", True)
    assert not validate("C-7", "C7", False)
    assert not validate("C-", "C", True)
    assert validate("C-7", "Cm7", True)
    assert validate("C-", "Cm", True)


# ── validate: roman numerals ───────────────────────────────────────────────────

@pytest.mark.parametrize(
    "answer, expected",
    [
        ("V/1", "V6"),
        ("V6/4", "V64"),
        ("V/2", "V64"),
        ("V65", "V7/1"),
        ("V43", "V7/2"),
        ("V42", "V7/3"),
        ("N6", "bII6"),
        ("N", "bII"),
        ("Iaug", "I+"),
        ("Vaug6", "V+6"),
        ("viid", "vii°"),
        ("#ivdim", "#iv°"),
        ("iim7b5", "iiø7"),
        ("V/V/1", "V6/V"),
        ("I - N6 - V - I", "I - bII6 - V - I"),
        ("i-v-VI-i", "i - v - VI - i"),
    ],
)
def test_equivalent_roman_spellings(answer: str, expected: str) -> None:
    assert validate(answer, expected, True)


@pytest.mark.parametrize(
    "answer, expected",
    [
        ("V/ii", "V/V"),
        ("bVI", "bVII"),
        ("I - V - vi", "I - V - vi - IV"),
        ("ii65", "ii7"),
        ("V64", "V6"),
    ],
)
def test_different_roman_numerals_are_rejected(answer: str, expected: str) -> None:
    assert not validate(answer, expected, True)


def test_separated_progression_is_compared_chord_by_chord() -> None:
    assert not validate("IV - V - I - IV", "I - V - vi - IV", True)
    assert not validate("IV-V-I-IV", "I - V - vi - IV", False)
    assert validate("I-V-vi-IV", "I - V - vi - IV", True)


def test_unseparated_progression_falls_back_to_hyphen_free_text() -> None:
    assert validate("IVviIV", "I - V - vi - IV", True)
    assert not AnswerValidator(strip_hyphens=False).validate("IVviIV", "I - V - vi - IV", True)


# ── validate_notes ─────────────────────────────────────────────────────────────

def _first_inversion_c_major():
    return ChordBuilder().build("C", "major", 1)


def test_constructed_chord_in_any_register() -> None:
    chord = _first_inversion_c_major()
    assert chord.notes == (64, 67, 72)
    assert validate_notes([64, 67, 72], chord, True)
    assert validate_notes([52, 55, 60], chord, True)
    assert validate_notes([72, 64, 67], chord, True)
    assert validate_notes([60, 64, 67], chord, False)


def test_constructed_chord_needs_the_bass_when_labeling_required() -> None:
    chord = _first_inversion_c_major()
    assert not validate_notes([60, 64, 67], chord, True)
    assert not validate_notes([55, 64, 72], chord, True)


def test_constructed_chord_rejects_wrong_tones() -> None:
    chord = _first_inversion_c_major()
    assert not validate_notes([64, 67], chord, False)
    assert not validate_notes([60, 64, 67, 72], chord, False)
    assert not validate_notes([63, 67, 72], chord, False)
    assert not validate_notes([64, 64, 67], chord, False)


def test_constructed_seventh_chord() -> None:
    chord = ChordBuilder().build("G", "dominant7", 3)
    assert validate_notes([53, 55, 59, 62], chord, True)
    assert not validate_notes([55, 59, 62, 65], chord, True)
    assert validate_notes([55, 59, 62, 65], chord, False)


@pytest.mark.parametrize("bad_notes", [[], None, ["x"], [60, None, 67]])
def test_malformed_notes_simply_fail(bad_notes: object) -> None:
    assert validate_notes(bad_notes, _first_inversion_c_major(), False) is False  # type: ignore[arg-type]
