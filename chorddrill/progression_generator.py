"""ProgressionGenerator: picks a key and a pattern and realises it as chords."""

from __future__ import annotations

import logging
from dataclasses import replace

import numpy as np

from chorddrill.catalogs import (
    DEGREE_QUALITIES,
    DEGREE_SEVENTH_QUALITIES,
    ROMAN_NUMERALS,
    get_key,
    get_non_diatonic,
    get_quality,
    seventh_numeral,
)
from chorddrill.chord_builder import ChordBuilder, inversion_label
from chorddrill.errors import ConfigurationError
from chorddrill.exercise_generator import choose, generate_distinct
from chorddrill.level_config import LevelConfig
from chorddrill.models import ChordDescriptor, GeneratedChord, GeneratedProgression, KeySignature
from chorddrill.patterns import Pattern, get_pattern_library
from chorddrill.pitch_space import NOTE_NAMES, SEMITONES_PER_OCTAVE, note_to_pitch_class

logger = logging.getLogger(__name__)

#: Separator between roman-numeral tokens in a progression answer.
TOKEN_SEPARATOR = " - "


def roman_token(numeral: str, quality_id: str, inversion: int) -> str:
    """
    Attach the inversion figure to a roman numeral.

    Triads take figured bass ("V6", "IV64"), larger chords the numbered form
    ("ii7/1"). For applied chords the figure goes before the slash ("V6/V").
    """
    figure = inversion_label(get_quality(quality_id), inversion, "figured")
    if not figure:
        return numeral
    if "/" in numeral:
        head, _, target = numeral.partition("/")
        return f"{head}{figure}/{target}"
    return numeral + figure


def progression_identity(progression: GeneratedProgression) -> tuple[str, tuple[ChordDescriptor, ...]]:
    """Structural identity of a progression exercise: (key, pattern)."""
    return progression.key, progression.pattern


def describe_non_diatonic(progression: GeneratedProgression) -> list[str]:
    """Theory labels of the non-diatonic steps, e.g. "bVI: Borrowed from parallel minor"."""
    mode = get_key(progression.key).mode
    return [
        f"{chord.roman_numeral}: {get_non_diatonic(mode, step.symbol).description}"
        for step, chord in zip(progression.pattern, progression.chords)
        if step.symbol is not None
    ]


class ProgressionGenerator:
    """
    Generate roman-numeral progression exercises.

    For every step of the chosen pattern the chord root and quality come either
    from the key's scale and the mode's degree-quality table (diatonic steps) or
    from the mode's non-diatonic table (borrowed, altered and applied chords,
    rooted a fixed number of semitones above the tonic). Each resolved chord is
    voiced by the ChordBuilder; the answer joins the roman-numeral tokens with
    " - ".
    """

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _resolve_step(self, key: KeySignature, step: ChordDescriptor) -> tuple[str, str, str]:
        """Return (root name, quality id, roman numeral) for one pattern step."""
        if step.symbol is not None:
            chord = get_non_diatonic(key.mode, step.symbol)
            root_pc = (note_to_pitch_class(key.tonic) + chord.offset) % SEMITONES_PER_OCTAVE
            return NOTE_NAMES[root_pc], chord.quality_id, chord.symbol

        if step.degree is None or not 0 <= step.degree < len(key.scale_notes):
            raise ConfigurationError(f"Scale degree {step.degree!r} is out of range.")

        numeral = ROMAN_NUMERALS[key.mode][step.degree]
        if step.seventh:
            quality_id = DEGREE_SEVENTH_QUALITIES[key.mode][step.degree]
            numeral = seventh_numeral(numeral, quality_id)
        else:
            quality_id = DEGREE_QUALITIES[key.mode][step.degree]
        return key.scale_notes[step.degree], quality_id, numeral

    def _build_step(
        self,
        builder: ChordBuilder,
        key: KeySignature,
        step: ChordDescriptor,
        label_inversion: bool,
    ) -> GeneratedChord:
        root, quality_id, numeral = self._resolve_step(key, step)
        chord = builder.build(root, quality_id, step.inversion, label_inversion=label_inversion)
        return replace(chord, roman_numeral=roman_token(numeral, quality_id, step.inversion))

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def realize(self, key_name: str, pattern: Pattern, level: LevelConfig) -> GeneratedProgression:
        """
        Realise *pattern* in the key *key_name* with the voicing settings of *level*.

        Raises:
            ConfigurationError: For an unknown key, quality or non-diatonic symbol.
        """
        key = get_key(key_name)
        builder = ChordBuilder(octave_bounds=level.octave_bounds, octave=level.octave)
        chords = tuple(
            self._build_step(builder, key, step, level.inversion_labeling_required)
            for step in pattern
        )
        answer = TOKEN_SEPARATOR.join(chord.roman_numeral or "" for chord in chords)
        return GeneratedProgression(key=key.name, chords=chords, expected_answer=answer, pattern=pattern)

    def generate(
        self,
        level: LevelConfig,
        rng: np.random.Generator,
        previous: GeneratedProgression | None = None,
    ) -> GeneratedProgression:
        """
        Generate the next progression exercise of *level*.

        The key and the pattern are each chosen uniformly at random. When
        *previous* is given, a result with the same key and pattern is redrawn
        (up to the level's retry cap).

        Raises:
            ConfigurationError: If *level* is not a progression level or a pool is empty.
        """
        if level.kind != "progression":
            raise ConfigurationError(f"Level '{level.id}' is not a progression level.")
        library = get_pattern_library(level.pattern_library)

        def generate_once() -> GeneratedProgression:
            key_name = choose(level.available_keys, rng)
            pattern = choose(library, rng)
            logger.debug("Generating %s progression in %s", level.pattern_library, key_name)
            return self.realize(key_name, pattern, level)

        return generate_distinct(
            generate_once,
            previous,
            progression_identity,
            level.duplicate_avoidance_retry_cap,
        )
