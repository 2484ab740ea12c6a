"""Data models shared by the catalogs, builders and generators."""

from dataclasses import dataclass
from typing import Literal

Mode = Literal["major", "minor"]


@dataclass(frozen=True)
class ChordQuality:
    """
    One chord-quality record of the catalog.

    Attributes:
        id:           Stable identifier, e.g. "dominant7".
        display_name: Human-readable name, e.g. "Dominant 7th".
        symbol:       Canonical chord symbol appended to a root, e.g. "7".
        intervals:    Semitone offsets from the root, ascending (3-7 tones).
        spellings:    Alternate symbols accepted by the answer validator only.
    """

    id: str
    display_name: str
    symbol: str
    intervals: tuple[int, ...]
    spellings: tuple[str, ...] = ()

    @property
    def cardinality(self) -> int:
        return len(self.intervals)


@dataclass(frozen=True)
class KeySignature:
    """A key: its name ("F#m"), tonic spelling, mode and seven scale notes."""

    name: str
    tonic: str
    mode: Mode
    scale_notes: tuple[str, ...]


@dataclass(frozen=True)
class NonDiatonicChord:
    """
    A borrowed, altered or secondary chord defined relative to the tonic.

    Attributes:
        symbol:       Roman-numeral symbol, e.g. "bVI" or "V/V".
        offset:       Semitones from the tonic to the chord root.
        quality_id:   Chord quality, independent of the scale-degree tables.
        description:  Short theory label ("Neapolitan", "Borrowed from parallel minor").
        alternatives: Other spellings accepted by the validator (e.g. "N" for "bII").
    """

    symbol: str
    offset: int
    quality_id: str
    description: str = ""
    alternatives: tuple[str, ...] = ()


@dataclass(frozen=True)
class ChordDescriptor:
    """
    One step of a progression pattern.

    Either ``degree`` (0-based scale degree) or ``symbol`` (a non-diatonic
    table entry) is set. ``seventh`` selects the degree's seventh-chord quality.
    """

    degree: int | None = None
    symbol: str | None = None
    inversion: int = 0
    seventh: bool = False

    @property
    def is_diatonic(self) -> bool:
        return self.symbol is None


@dataclass(frozen=True)
class GeneratedChord:
    """
    A concrete chord exercise.

    Attributes:
        notes:           Ascending MIDI pitches; one per interval of the quality.
        display_name:    e.g. "C# Minor (1st Inversion)".
        expected_answer: Canonical chord-letter answer, e.g. "C#m/1".
        root:            Root spelling used for the answer, e.g. "C#".
        quality_id:      Catalog quality id.
        inversion:       Inversion ordinal (0 = root position).
        roman_numeral:   Roman-numeral token when built inside a progression.
    """

    notes: tuple[int, ...]
    display_name: str
    expected_answer: str
    root: str
    quality_id: str
    inversion: int = 0
    roman_numeral: str | None = None


@dataclass(frozen=True)
class GeneratedProgression:
    """A progression exercise: its key, chords and " - "-joined roman-numeral answer."""

    key: str
    chords: tuple[GeneratedChord, ...]
    expected_answer: str
    pattern: tuple[ChordDescriptor, ...] = ()

    @property
    def roman_numerals(self) -> list[str]:
        return [chord.roman_numeral or "" for chord in self.chords]
