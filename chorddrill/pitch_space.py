"""Pitch space: note-name / pitch-class / MIDI conversions."""

import re

from chorddrill.errors import ConfigurationError

# ── MIDI constants ──────────────────────────────────────────────────────────
SEMITONES_PER_OCTAVE = 12
MIDDLE_C_MIDI = 60  # C4 in Scientific Pitch Notation

#: Chromatic pitch class names (index 0 = C), sharp-preferred.
NOTE_NAMES: list[str] = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

#: Separator used by compound enharmonic spellings such as "F# / Gb".
ENHARMONIC_SEPARATOR = " / "

_NATURAL_INDEX: dict[str, int] = {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11}
_FLAT_MARKERS = ("b", "♭")
_SHARP_MARKERS = ("#", "♯")
_NOTE_WITH_OCTAVE = re.compile(r"([A-Ga-g][#b♯♭]?)(-?\d)")


def primary_spelling(name: str) -> str:
    """
    Return the first alternative of a compound enharmonic spelling.

    "F# / Gb" -> "F#". Names without the separator are returned stripped.
    The sharp-first convention of the key tables makes this deterministic.
    """
    if ENHARMONIC_SEPARATOR in name:
        name = name.split(ENHARMONIC_SEPARATOR, maxsplit=1)[0]
    return name.strip()


def note_to_pitch_class(name: str) -> int:
    """
    Convert a note name to its pitch class (0=C, 1=C#, ..., 11=B).

    Accepts a single accidental in ASCII ("b", "#") or glyph ("♭", "♯") form,
    and compound spellings such as "E# / F" (only the first alternative is read).

    Raises:
        ConfigurationError: If the name does not start with a note letter A-G.
    """
    spelling = primary_spelling(name)
    if not spelling or spelling[0].upper() not in _NATURAL_INDEX:
        raise ConfigurationError(f"Unknown note name '{name}'.")

    natural = _NATURAL_INDEX[spelling[0].upper()]
    accidental = spelling[1:]
    if not accidental:
        return natural
    if accidental in _FLAT_MARKERS:
        return (natural - 1 + SEMITONES_PER_OCTAVE) % SEMITONES_PER_OCTAVE
    if accidental in _SHARP_MARKERS:
        return (natural + 1) % SEMITONES_PER_OCTAVE
    raise ConfigurationError(f"Unknown note name '{name}'.")


def pitch_class_to_midi(pitch_class: float, octave: int) -> int:
    """
    Convert a pitch class (0-11) and an octave number to an absolute MIDI note.

    MIDI octave numbering: C-1 = 0, C0 = 12, C1 = 24, ... C4 (Middle C) = 60.

    Args:
        pitch_class: 0=C, 1=C#, 2=D, ..., 11=B.
        octave:      Scientific octave number (e.g. 4 for Middle C octave).

    Returns:
        MIDI note number, rounded to the nearest integer.
    """
    return int(round(MIDDLE_C_MIDI + pitch_class + (octave - 4) * SEMITONES_PER_OCTAVE))


def note_to_midi(name: str, octave: int = 4) -> int:
    """MIDI note number of *name* in *octave* (C4 = 60)."""
    return pitch_class_to_midi(note_to_pitch_class(name), octave)


def parse_note(text: str) -> int:
    """
    Read one placed note: a name with octave ("E4", "Bb3", "F♯5") or a MIDI number.

    Raises:
        ConfigurationError: If *text* is neither form or lies outside MIDI 0-127.
    """
    text = text.strip()
    if text.isdigit():
        midi = int(text)
    else:
        match = _NOTE_WITH_OCTAVE.fullmatch(text)
        if match is None:
            raise ConfigurationError(f"Cannot read note '{text}'; use a name with octave such as 'E4'.")
        midi = note_to_midi(match.group(1), int(match.group(2)))
    if not 0 <= midi <= 127:
        raise ConfigurationError(f"Note '{text}' is outside the MIDI range.")
    return midi


def midi_to_note_name(midi: int) -> str:
    """Sharp-spelled note name with octave, e.g. 61 -> 'C#4'."""
    octave = midi // SEMITONES_PER_OCTAVE - 1
    return f"{NOTE_NAMES[midi % SEMITONES_PER_OCTAVE]}{octave}"
