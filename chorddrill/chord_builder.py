"""ChordBuilder: turns (root, quality, inversion, register) into a concrete chord."""

from typing import Literal

from chorddrill.catalogs import INVERSION_NAMES, TRIAD_FIGURED_BASS, get_quality
from chorddrill.errors import ConfigurationError
from chorddrill.models import ChordQuality, GeneratedChord
from chorddrill.pitch_space import (
    SEMITONES_PER_OCTAVE,
    note_to_pitch_class,
    pitch_class_to_midi,
    primary_spelling,
)

InversionStyle = Literal["slash", "figured"]


def inversion_label(quality: ChordQuality, inversion: int, style: InversionStyle = "slash") -> str:
    """
    Return the inversion suffix for a chord symbol or roman numeral.

    "slash" style numbers the inversion ("/1", "/2", ...). "figured" style uses
    figured bass for triads ("6", "64") and falls back to the numbered form for
    larger chords. Root position is always the empty string.
    """
    if inversion == 0:
        return ""
    if style == "figured" and quality.cardinality == 3:
        return TRIAD_FIGURED_BASS[inversion]
    return f"/{inversion}"


class ChordBuilder:
    """
    Build ascending MIDI voicings plus the canonical name and answer of a chord.

    Algorithm overview
    ------------------
    1. **Root** – the root name is resolved to a pitch class (compound
       spellings such as "F# / Gb" use the first alternative) and placed in
       the requested octave (C4 = 60).

    2. **Template** – every interval of the quality's template is added to the
       root MIDI note, giving the root-position voicing.

    3. **Inversion** – for inversion *n* the first *n* root-position tones are
       raised one octave and the result is re-sorted, so the chord's *n*-th tone
       ends up in the bass.

    4. **Register** – if the lowest note lies above the upper bound the whole
       chord drops an octave; otherwise, if the highest note lies below the
       lower bound, it rises an octave. At most one shift is applied.
    """

    DEFAULT_OCTAVE = 4             # Middle C octave, C4 = MIDI 60
    DEFAULT_BOUNDS = (60, 72)      # C4 .. C5

    def __init__(
        self,
        octave_bounds: tuple[int, int] = DEFAULT_BOUNDS,
        octave: int = DEFAULT_OCTAVE,
    ) -> None:
        """
        Args:
            octave_bounds: (lower, upper) MIDI bounds used by the register shift.
            octave:        Default octave for the root when build() gets none.
        """
        lower, upper = octave_bounds
        if lower > upper:
            raise ConfigurationError(f"Octave bounds {octave_bounds} are not ordered.")
        self.octave_bounds = (lower, upper)
        self.octave = octave

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _invert(self, notes: list[int], inversion: int) -> list[int]:
        """Raise the first *inversion* root-position tones an octave and re-sort."""
        raised = [
            note + SEMITONES_PER_OCTAVE if position < inversion else note
            for position, note in enumerate(notes)
        ]
        return sorted(raised)

    def _fit_register(self, notes: list[int]) -> list[int]:
        """Shift the chord by one octave when it lies entirely outside the bounds."""
        lower, upper = self.octave_bounds
        if min(notes) > upper:
            return [note - SEMITONES_PER_OCTAVE for note in notes]
        if max(notes) < lower:
            return [note + SEMITONES_PER_OCTAVE for note in notes]
        return notes

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def voice(self, root: str, quality_id: str, inversion: int = 0, octave: int | None = None) -> tuple[int, ...]:
        """
        Return the ascending MIDI notes of a chord.

        Raises:
            ConfigurationError: For an unknown quality, an unreadable root or an
                                inversion outside ``0 <= inversion < cardinality``.
        """
        quality = get_quality(quality_id)
        if not 0 <= inversion < quality.cardinality:
            raise ConfigurationError(
                f"Inversion {inversion} is out of range for {quality.display_name} "
                f"({quality.cardinality} tones)."
            )

        root_midi = pitch_class_to_midi(
            note_to_pitch_class(root), self.octave if octave is None else octave
        )
        notes = [root_midi + interval for interval in quality.intervals]
        notes = self._fit_register(self._invert(notes, inversion))
        return tuple(int(round(note)) for note in notes)

    def build(
        self,
        root: str,
        quality_id: str,
        inversion: int = 0,
        octave: int | None = None,
        label_inversion: bool = False,
    ) -> GeneratedChord:
        """
        Build a chord exercise.

        Args:
            root:            Root note name, e.g. "C#", "Bb" or "F# / Gb".
            quality_id:      Catalog quality id, e.g. "minor7".
            inversion:       0 = root position, 1 = first inversion, ...
            octave:          Octave of the root before inversion (defaults to the builder's).
            label_inversion: Append the inversion suffix ("/1") to the answer and
                             the inversion name to the display name.

        Returns:
            GeneratedChord whose answer is e.g. "C#m" or "C#m/1".
        """
        notes = self.voice(root, quality_id, inversion, octave)
        quality = get_quality(quality_id)
        root_name = primary_spelling(root)

        display_name = f"{root_name} {quality.display_name}"
        expected_answer = f"{root_name}{quality.symbol}"
        if label_inversion and inversion:
            display_name += f" ({INVERSION_NAMES[inversion]})"
            expected_answer += inversion_label(quality, inversion, "slash")

        return GeneratedChord(
            notes=notes,
            display_name=display_name,
            expected_answer=expected_answer,
            root=root_name,
            quality_id=quality.id,
            inversion=inversion,
        )
