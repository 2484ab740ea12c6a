"""
Static music-theory catalogs.

Every table here is built once at import time and never mutated afterwards;
mappings are exposed as read-only ``MappingProxyType`` views and records are
frozen dataclasses. Lookups that miss raise ``ConfigurationError``.
"""

from types import MappingProxyType
from typing import Mapping

from chorddrill.errors import ConfigurationError
from chorddrill.models import ChordQuality, KeySignature, Mode, NonDiatonicChord


def _catalog(*qualities: ChordQuality) -> Mapping[str, ChordQuality]:
    return MappingProxyType({quality.id: quality for quality in qualities})


# ── Chord qualities ──────────────────────────────────────────────────────────

TRIAD_QUALITIES = _catalog(
    ChordQuality("major", "Major", "", (0, 4, 7), ("maj", "M")),
    ChordQuality("minor", "Minor", "m", (0, 3, 7), ("min", "-")),
    ChordQuality("diminished", "Diminished", "dim", (0, 3, 6), ("°", "o")),
    ChordQuality("augmented", "Augmented", "aug", (0, 4, 8), ("+", "#5")),
)

SEVENTH_QUALITIES = _catalog(
    ChordQuality("major7", "Major 7th", "maj7", (0, 4, 7, 11), ("M7", "Δ7", "Δ")),
    ChordQuality("minor7", "Minor 7th", "m7", (0, 3, 7, 10), ("min7", "-7")),
    ChordQuality("dominant7", "Dominant 7th", "7", (0, 4, 7, 10), ("dom7",)),
    ChordQuality("diminished7", "Diminished 7th", "dim7", (0, 3, 6, 9), ("°7", "o7")),
    ChordQuality(
        "half_diminished7", "Half Diminished 7th", "m7b5", (0, 3, 6, 10),
        ("ø7", "ø", "min7b5", "-7b5"),
    ),
)

EXTENDED_QUALITIES = _catalog(
    # 9th chords
    ChordQuality("major9", "Major 9th", "maj9", (0, 4, 7, 11, 14), ("M9", "Δ9")),
    ChordQuality("minor9", "Minor 9th", "m9", (0, 3, 7, 10, 14), ("min9", "-9")),
    ChordQuality("dominant9", "Dominant 9th", "9", (0, 4, 7, 10, 14), ("dom9",)),
    # 11th chords
    ChordQuality("major11", "Major 11th", "maj11", (0, 4, 7, 11, 14, 17), ("M11", "Δ11")),
    ChordQuality("minor11", "Minor 11th", "m11", (0, 3, 7, 10, 14, 17), ("min11", "-11")),
    ChordQuality("dominant11", "Dominant 11th", "11", (0, 4, 7, 10, 14, 17), ("dom11",)),
    # 13th chords (the 11th is omitted, as commonly voiced)
    ChordQuality("major13", "Major 13th", "maj13", (0, 4, 7, 11, 14, 21), ("M13", "Δ13")),
    ChordQuality("minor13", "Minor 13th", "m13", (0, 3, 7, 10, 14, 21), ("min13", "-13")),
    ChordQuality("dominant13", "Dominant 13th", "13", (0, 4, 7, 10, 14, 21), ("dom13",)),
    # Suspended, added-tone and quartal
    ChordQuality("sus2", "Suspended 2nd", "sus2", (0, 2, 7), ("sus(add2)",)),
    ChordQuality("sus4", "Suspended 4th", "sus4", (0, 5, 7), ("sus",)),
    ChordQuality("add9", "Added 9th", "add9", (0, 4, 7, 14), ("add2",)),
    ChordQuality("quartal", "Quartal", "quartal", (0, 5, 10), ("4ths",)),
)

ALL_QUALITIES: Mapping[str, ChordQuality] = MappingProxyType(
    {**TRIAD_QUALITIES, **SEVENTH_QUALITIES, **EXTENDED_QUALITIES}
)


def get_quality(quality_id: str) -> ChordQuality:
    """Look up a chord quality by id; unknown ids are a configuration error."""
    try:
        return ALL_QUALITIES[quality_id]
    except KeyError:
        raise ConfigurationError(f"Unknown chord quality '{quality_id}'.") from None


# ── Inversion labels ─────────────────────────────────────────────────────────

INVERSION_NAMES: tuple[str, ...] = (
    "Root Position",
    "1st Inversion",
    "2nd Inversion",
    "3rd Inversion",
    "4th Inversion",
    "5th Inversion",
    "6th Inversion",
)

#: Figured-bass suffixes for triads: root position, 6, 6/4.
TRIAD_FIGURED_BASS: tuple[str, ...] = ("", "6", "64")


# ── Key signatures ───────────────────────────────────────────────────────────

def _key(name: str, mode: Mode, notes: str) -> KeySignature:
    scale = tuple(note.strip() for note in notes.split(","))
    tonic = name[:-1] if mode == "minor" else name
    return KeySignature(name=name, tonic=tonic, mode=mode, scale_notes=scale)


KEY_SIGNATURES: Mapping[str, KeySignature] = MappingProxyType({
    key.name: key
    for key in (
        # Major keys
        _key("C", "major", "C, D, E, F, G, A, B"),
        _key("G", "major", "G, A, B, C, D, E, F# / Gb"),
        _key("D", "major", "D, E, F# / Gb, G, A, B, C# / Db"),
        _key("A", "major", "A, B, C# / Db, D, E, F# / Gb, G# / Ab"),
        _key("E", "major", "E, F# / Gb, G# / Ab, A, B, C# / Db, D# / Eb"),
        _key("B", "major", "B, C# / Db, D# / Eb, E, F# / Gb, G# / Ab, A# / Bb"),
        _key("F#", "major", "F# / Gb, G# / Ab, A# / Bb, B, C# / Db, D# / Eb, E# / F"),
        _key("C#", "major", "C# / Db, D# / Eb, E# / F, F# / Gb, G# / Ab, A# / Bb, B# / C"),
        _key("F", "major", "F, G, A, Bb, C, D, E"),
        _key("Bb", "major", "A# / Bb, C, D, D# / Eb, F, G, A"),
        _key("Eb", "major", "D# / Eb, F, G, G# / Ab, A# / Bb, C, D"),
        _key("Ab", "major", "G# / Ab, A# / Bb, C, C# / Db, D# / Eb, F, G"),
        _key("Db", "major", "C# / Db, D# / Eb, F, F# / Gb, G# / Ab, A# / Bb, C"),
        _key("Gb", "major", "F# / Gb, G# / Ab, A# / Bb, B / Cb, C# / Db, D# / Eb, F"),
        _key("Cb", "major", "B / Cb, C# / Db, D# / Eb, E / Fb, F# / Gb, G# / Ab, A# / Bb"),
        # Minor keys (natural minor)
        _key("Am", "minor", "A, B, C, D, E, F, G"),
        _key("Em", "minor", "E, F# / Gb, G, A, B, C, D"),
        _key("Bm", "minor", "B, C# / Db, D, E, F# / Gb, G, A"),
        _key("F#m", "minor", "F# / Gb, G# / Ab, A, B, C# / Db, D, E"),
        _key("C#m", "minor", "C# / Db, D# / Eb, E, F# / Gb, G# / Ab, A, B"),
        _key("G#m", "minor", "G# / Ab, A# / Bb, B, C# / Db, D# / Eb, E, F# / Gb"),
        _key("D#m", "minor", "D# / Eb, E# / F, F# / Gb, G# / Ab, A# / Bb, B, C# / Db"),
        _key("A#m", "minor", "A# / Bb, B# / C, C# / Db, D# / Eb, E# / F, F# / Gb, G# / Ab"),
        _key("Dm", "minor", "D, E, F, G, A, A# / Bb, C"),
        _key("Gm", "minor", "G, A, A# / Bb, C, D, D# / Eb, F"),
        _key("Cm", "minor", "C, D, D# / Eb, F, G, G# / Ab, A# / Bb"),
        _key("Fm", "minor", "F, G, G# / Ab, A# / Bb, C, C# / Db, D# / Eb"),
        _key("Bbm", "minor", "A# / Bb, C, C# / Db, D# / Eb, F, F# / Gb, G# / Ab"),
        _key("Ebm", "minor", "D# / Eb, F, F# / Gb, G# / Ab, A# / Bb, B / Cb, C# / Db"),
        _key("Abm", "minor", "G# / Ab, A# / Bb, B / Cb, C# / Db, D# / Eb, E / Fb, F# / Gb"),
    )
})


def get_key(name: str) -> KeySignature:
    """Look up a key signature by name ("C", "F#m", ...)."""
    try:
        return KEY_SIGNATURES[name]
    except KeyError:
        raise ConfigurationError(f"Unknown key '{name}'.") from None


# ── Scale-degree tables ──────────────────────────────────────────────────────
# Minor keys follow the natural minor scale (v is minor, VII is major).

DEGREE_QUALITIES: Mapping[Mode, tuple[str, ...]] = MappingProxyType({
    "major": ("major", "minor", "minor", "major", "major", "minor", "diminished"),
    "minor": ("minor", "diminished", "major", "minor", "minor", "major", "major"),
})

DEGREE_SEVENTH_QUALITIES: Mapping[Mode, tuple[str, ...]] = MappingProxyType({
    "major": ("major7", "minor7", "minor7", "major7", "dominant7", "minor7", "half_diminished7"),
    "minor": ("minor7", "half_diminished7", "major7", "minor7", "minor7", "major7", "dominant7"),
})

ROMAN_NUMERALS: Mapping[Mode, tuple[str, ...]] = MappingProxyType({
    "major": ("I", "ii", "iii", "IV", "V", "vi", "vii°"),
    "minor": ("i", "ii°", "III", "iv", "v", "VI", "VII"),
})


def seventh_numeral(numeral: str, quality_id: str) -> str:
    """Roman numeral of a diatonic seventh chord, e.g. ("vii°", half-diminished) -> "viiø7"."""
    if quality_id == "half_diminished7":
        return numeral.replace("°", "") + "ø7"
    return numeral + "7"


# ── Non-diatonic tables ──────────────────────────────────────────────────────

def _table(*chords: NonDiatonicChord) -> Mapping[str, NonDiatonicChord]:
    return MappingProxyType({chord.symbol: chord for chord in chords})


NON_DIATONIC_CHORDS: Mapping[Mode, Mapping[str, NonDiatonicChord]] = MappingProxyType({
    "major": _table(
        NonDiatonicChord("bII", 1, "major", "Neapolitan", ("N",)),
        NonDiatonicChord("bIII", 3, "major", "Borrowed from parallel minor"),
        NonDiatonicChord("bVI", 8, "major", "Borrowed from parallel minor"),
        NonDiatonicChord("bVII", 10, "major", "Borrowed from parallel minor"),
        NonDiatonicChord("I+", 0, "augmented", "Augmented tonic", ("Iaug",)),
        NonDiatonicChord("V+", 7, "augmented", "Augmented dominant", ("Vaug",)),
        NonDiatonicChord("#iv°", 6, "diminished", "Raised subdominant diminished", ("#ivdim",)),
        NonDiatonicChord(
            "iiø7", 2, "half_diminished7", "Half-diminished supertonic", ("ii/b5", "iiø", "iim7b5"),
        ),
        NonDiatonicChord("V/ii", 9, "major", "Secondary dominant"),
        NonDiatonicChord("V/iii", 11, "major", "Secondary dominant"),
        NonDiatonicChord("V/V", 2, "major", "Secondary dominant"),
        NonDiatonicChord("V/vi", 4, "major", "Secondary dominant"),
    ),
    "minor": _table(
        NonDiatonicChord("bII", 1, "major", "Neapolitan", ("N",)),
        NonDiatonicChord("V", 7, "major", "Harmonic minor dominant"),
        NonDiatonicChord("V+", 7, "augmented", "Augmented dominant", ("Vaug",)),
        NonDiatonicChord("vii°", 11, "diminished", "Leading-tone diminished", ("viidim",)),
        NonDiatonicChord("i+", 0, "augmented", "Augmented tonic", ("iaug",)),
        NonDiatonicChord("#iv°", 6, "diminished", "Raised subdominant diminished", ("#ivdim",)),
        NonDiatonicChord("V/V", 2, "major", "Secondary dominant"),
    ),
})


def get_non_diatonic(mode: Mode, symbol: str) -> NonDiatonicChord:
    """Look up a non-diatonic chord for *mode* by its roman-numeral symbol."""
    try:
        return NON_DIATONIC_CHORDS[mode][symbol]
    except KeyError:
        raise ConfigurationError(
            f"Non-diatonic chord '{symbol}' is not defined for {mode} keys."
        ) from None
