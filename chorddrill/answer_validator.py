"""
Answer normalization and validation.

Two layers decide whether a typed answer matches the expected one:

1. **Normalized comparison** – both strings are lowercased, stripped of
   whitespace, dash variants are unified (and, with ``STRIP_HYPHENS``, removed),
   "♭"/"♯" become "b"/"#", and "°" or the word "dim" become "o". An answer
   typed with separators is compared token by token, so hyphen removal never
   merges "C-7" into "C7".

2. **Notation equivalence** – the normalized answer is read token by token:
   chord symbols are compared by root pitch class, quality (any accepted
   spelling) and inversion ("/1" or a slash bass such as "C/E"); roman
   numerals by numeral and inversion, where "/1", "6", "65" ... and the
   alternative spellings of non-diatonic chords ("N6", "Iaug") are equivalent.

When inversion labeling is not required, inversion figures are stripped from
the *expected* answer only, so both "V" and "V6" are accepted for "V6" while
"IV" is still rejected.

``validate_notes`` checks a chord built from placed MIDI notes instead of a
typed name.
"""

from __future__ import annotations

import re
from typing import Final, Iterable

from chorddrill.catalogs import ALL_QUALITIES, NON_DIATONIC_CHORDS
from chorddrill.models import GeneratedChord
from chorddrill.pitch_space import SEMITONES_PER_OCTAVE, note_to_pitch_class

#: Global default: require answers to name the inversion.
REQUIRE_INVERSION_LABELING: Final[bool] = False

#: Global default: ignore hyphens entirely when comparing normalized answers.
STRIP_HYPHENS: Final[bool] = True

_WHITESPACE = re.compile(r"\s+")
_DASHES = re.compile("[‐‑‒–—―−﹘﹣－]")
_SLASH_INVERSION = re.compile(r"/[1-6]")

_LETTER_CHORD = re.compile(r"([a-g])([#b]?)(.*)")
_NUMBERED_INVERSION = re.compile(r"(.*)/([1-6])")
_SLASH_BASS = re.compile(r"(.*)/([a-g][#b]?)")
_APPLIED_CHORD = re.compile(r"(.+)/([#b]?[iv]+)")
_D_SUFFIX = re.compile(r"([#b]?[iv]+)d")

# Longest figures first; "6/4" must be tested before the numbered "/4".
_FIGURES: Final[tuple[tuple[str, int, bool], ...]] = (
    ("6/4", 2, False),
    ("6/5", 1, True),
    ("4/3", 2, True),
    ("4/2", 3, True),
    *((f"/{n}", n, False) for n in range(1, 7)),
    ("64", 2, False),
    ("65", 1, True),
    ("43", 2, True),
    ("42", 3, True),
    ("6", 1, False),
)


def strip_inversions(answer: str) -> str:
    """
    Remove inversion figures from an expected answer.

    Numbered inversions ("/1" .. "/6") are removed first, then every "64" and
    "6" substring. This is a plain substring removal: chord symbols must not
    contain the digit 6 for any other reason.
    """
    answer = _SLASH_INVERSION.sub("", answer)
    return answer.replace("64", "").replace("6", "")


class AnswerValidator:
    """
    Compare free-text chord and progression answers.

    Validation is a pure predicate: malformed input simply fails to match,
    nothing is raised.
    """

    def __init__(self, strip_hyphens: bool = STRIP_HYPHENS) -> None:
        """
        Args:
            strip_hyphens: Drop hyphens before comparing normalized strings, so
                           "I-V-vi" equals "IVvi".
        """
        self.strip_hyphens = strip_hyphens
        self._quality_aliases = self._build_quality_aliases()
        self._roman_aliases = self._build_roman_aliases()

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _build_quality_aliases(self) -> dict[str, str]:
        """
        Map every normalized quality spelling to its quality id.

        Canonical symbols take precedence. Alternate spellings that collapse
        onto a canonical symbol once lowercased ("M7" vs "m7") or onto each
        other are dropped.
        """
        aliases = {self._token_form(q.symbol): q.id for q in ALL_QUALITIES.values()}
        alternates: dict[str, set[str]] = {}
        for quality in ALL_QUALITIES.values():
            for spelling in quality.spellings:
                form = self._token_form(spelling)
                if form not in aliases:
                    alternates.setdefault(form, set()).add(quality.id)
        for form, quality_ids in alternates.items():
            if len(quality_ids) == 1:
                aliases[form] = next(iter(quality_ids))
        return aliases

    def _build_roman_aliases(self) -> dict[str, str]:
        aliases: dict[str, str] = {}
        for table in NON_DIATONIC_CHORDS.values():
            for chord in table.values():
                for alternative in chord.alternatives:
                    aliases[self._token_form(alternative)] = self._token_form(chord.symbol)
        return aliases

    def _token_form(self, text: str) -> str:
        return self.normalize(text, strip_hyphens=False)

    def _letter_chord(self, token: str) -> str | None:
        """Canonical "pc:quality/inversion" form of a chord symbol, or None."""
        match = _LETTER_CHORD.fullmatch(token)
        if match is None:
            return None
        letter, accidental, rest = match.groups()
        readings = [(letter + accidental, rest)]
        if accidental:
            readings.append((letter, accidental + rest))

        for root, remainder in readings:
            canonical = self._letter_reading(note_to_pitch_class(root), remainder)
            if canonical is not None:
                return canonical
        return None

    def _letter_reading(self, root_pc: int, remainder: str) -> str | None:
        inversion = 0
        bass_pc = None
        numbered = _NUMBERED_INVERSION.fullmatch(remainder)
        slash_bass = _SLASH_BASS.fullmatch(remainder)
        if numbered is not None:
            remainder, inversion = numbered.group(1), int(numbered.group(2))
        elif slash_bass is not None:
            remainder, bass_pc = slash_bass.group(1), note_to_pitch_class(slash_bass.group(2))

        quality_id = self._quality_aliases.get(remainder)
        if quality_id is None:
            return None

        tones = [(root_pc + iv) % SEMITONES_PER_OCTAVE for iv in ALL_QUALITIES[quality_id].intervals]
        if bass_pc is not None:
            if bass_pc not in tones:
                return None
            inversion = tones.index(bass_pc)
        if inversion >= len(tones):
            return None
        return f"{root_pc}:{quality_id}/{inversion}"

    def _split_figure(self, token: str) -> tuple[str, int]:
        for figure, inversion, seventh in _FIGURES:
            if token.endswith(figure) and len(token) > len(figure):
                base = token[: -len(figure)]
                if seventh and not base.endswith("7"):
                    base += "7"
                return base, inversion
        return token, 0

    def _roman_base(self, base: str) -> str:
        base = self._roman_aliases.get(base, base).replace("aug", "+")
        return _D_SUFFIX.sub(r"\1o", base) if _D_SUFFIX.fullmatch(base) else base

    def _roman_token(self, token: str) -> str:
        """Canonical "numeral|inversion" form of a roman-numeral token."""
        applied = _APPLIED_CHORD.fullmatch(token)
        if applied is not None and not _NUMBERED_INVERSION.fullmatch(token):
            head, inversion = self._split_figure(applied.group(1))
            return f"{self._roman_base(head)}/{applied.group(2)}|{inversion}"
        base, inversion = self._split_figure(token)
        return f"{self._roman_base(base)}|{inversion}"

    def _canonical(self, answer: str) -> tuple[str, ...] | None:
        text = self._token_form(answer)
        whole = self._letter_chord(text)
        if whole is not None:
            return (whole,)

        tokens = text.split("-")
        if not all(tokens):
            return None
        return tuple(self._letter_chord(token) or self._roman_token(token) for token in tokens)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def normalize(self, text: str, strip_hyphens: bool | None = None) -> str:
        """
        Return the comparison form of *text*.

        The result is idempotent: ``normalize(normalize(s)) == normalize(s)``.
        """
        if strip_hyphens is None:
            strip_hyphens = self.strip_hyphens
        text = _WHITESPACE.sub("", text.lower())
        text = _DASHES.sub("-", text)
        if strip_hyphens:
            text = text.replace("-", "")
        text = text.replace("♭", "b").replace("♯", "#")
        return text.replace("°", "o").replace("º", "o").replace("dim", "o")

    def _same_text(self, user_answer: str, expected_answer: str) -> bool:
        """
        Normalized comparison.

        An answer typed with separators is compared token by token, so "C-7"
        is not read as "C7" and "IV - V - I - IV" is not "I - V - vi - IV".
        Hyphen stripping only applies to answers typed without separators.
        """
        user_tokens = self._token_form(user_answer).split("-")
        if len(user_tokens) > 1:
            return user_tokens == self._token_form(expected_answer).split("-")
        return self.normalize(user_answer) == self.normalize(expected_answer)

    def equivalent(self, user_answer: str, expected_answer: str) -> bool:
        """True when both answers normalize equally or denote the same chords."""
        if self._same_text(user_answer, expected_answer):
            return True
        user = self._canonical(user_answer)
        return user is not None and user == self._canonical(expected_answer)

    def validate(
        self,
        user_answer: str,
        expected_answer: str,
        inversion_labeling_required: bool = REQUIRE_INVERSION_LABELING,
    ) -> bool:
        """
        Decide whether *user_answer* is a correct answer for *expected_answer*.

        With ``inversion_labeling_required`` False the answer may either omit
        the inversion figures or give them correctly.
        """
        if not isinstance(user_answer, str) or not isinstance(expected_answer, str):
            return False
        candidates = [expected_answer]
        if not inversion_labeling_required:
            candidates.insert(0, strip_inversions(expected_answer))
        return any(self.equivalent(user_answer, candidate) for candidate in candidates)

    def validate_notes(
        self,
        notes: Iterable[int],
        chord: GeneratedChord,
        inversion_labeling_required: bool = REQUIRE_INVERSION_LABELING,
    ) -> bool:
        """
        Decide whether the placed MIDI *notes* construct *chord*.

        The number of notes and the multiset of pitch classes must match the
        chord in any register. With ``inversion_labeling_required`` the lowest
        placed note must also have the pitch class of the chord's bass.
        """
        try:
            placed = sorted(int(note) for note in notes)
        except (TypeError, ValueError):
            return False
        if not placed or len(placed) != len(chord.notes):
            return False

        expected = sorted(chord.notes)
        placed_classes = sorted(note % SEMITONES_PER_OCTAVE for note in placed)
        expected_classes = sorted(note % SEMITONES_PER_OCTAVE for note in expected)
        if placed_classes != expected_classes:
            return False
        if inversion_labeling_required:
            return placed[0] % SEMITONES_PER_OCTAVE == expected[0] % SEMITONES_PER_OCTAVE
        return True


_default_validator = AnswerValidator()


def normalize(text: str) -> str:
    """Normalize *text* with the global settings."""
    return _default_validator.normalize(text)


def validate(
    user_answer: str,
    expected_answer: str,
    inversion_labeling_required: bool = REQUIRE_INVERSION_LABELING,
) -> bool:
    """Validate *user_answer* against *expected_answer* with the global settings."""
    return _default_validator.validate(user_answer, expected_answer, inversion_labeling_required)


def validate_notes(
    notes: Iterable[int],
    chord: GeneratedChord,
    inversion_labeling_required: bool = REQUIRE_INVERSION_LABELING,
) -> bool:
    """Check a constructed chord with the global settings."""
    return _default_validator.validate_notes(notes, chord, inversion_labeling_required)
