"""Tests for the click command-line interface."""

from pathlib import Path

from click.testing import CliRunner

from chorddrill import __version__
from chorddrill.cli import main


def _invoke(*args: str):
    return CliRunner().invoke(main, list(args))


def test_version() -> None:
    result = _invoke("--version")
    assert result.exit_code == 0
    assert __version__ in result.output


def test_help_short_flag() -> None:
    result = _invoke("-h")
    assert result.exit_code == 0
    assert "progression" in result.output


def test_levels_lists_builtin_levels() -> None:
    result = _invoke("levels")
    assert result.exit_code == 0
    assert "basic-triads" in result.output
    assert "progressions-basic" in result.output


def test_chord_command_with_answers() -> None:
    result = _invoke("chord", "basic-triads", "--count", "3", "--seed", "1", "--show-answer")
    assert result.exit_code == 0
    assert "[1]" in result.output
    assert "[3]" in result.output
    assert result.output.count("Answer") == 3


def test_chord_command_is_repeatable_with_seed() -> None:
    first = _invoke("chord", "seventh-chords", "-n", "5", "--seed", "9", "--show-answer")
    second = _invoke("chord", "seventh-chords", "-n", "5", "--seed", "9", "--show-answer")
    assert first.output == second.output


def test_progression_command() -> None:
    result = _invoke("progression", "progressions-basic", "--seed", "2", "--show-answer")
    assert result.exit_code == 0
    assert "Key:" in result.output
    assert " - " in result.output


def test_unknown_level_exits_with_error() -> None:
    result = _invoke("chord", "no-such-level")
    assert result.exit_code == 1
    assert "ERROR" in result.output


def test_wrong_level_kind_exits_with_error() -> None:
    result = _invoke("chord", "progressions-basic")
    assert result.exit_code == 1
    assert "ERROR" in result.output


def test_config_option(tmp_path: Path) -> None:
    config = tmp_path / "levels.yaml"
    config.write_text(
        "levels:\n  only-c:\n    title: Only C\n    allowed_qualities: [major]\n"
        "    available_roots: [C]\n",
        encoding="utf8",
    )
    result = _invoke("chord", "only-c", "--config", str(config), "-n", "2", "--show-answer")
    assert result.exit_code == 0
    assert "C4 E4 G4" in result.output
    assert _invoke("levels", "--config", str(config)).output.startswith("only-c")


def test_check_correct_answer() -> None:
    result = _invoke("check", "I - V - vi - IV", "i-v-vi-iv")
    assert result.exit_code == 0
    assert result.output.strip() == "correct"


def test_check_incorrect_answer() -> None:
    result = _invoke("check", "IV", "V6")
    assert result.exit_code == 1
    assert result.output.strip() == "incorrect"


def test_check_require_inversions() -> None:
    assert _invoke("check", "V", "V6").exit_code == 0
    assert _invoke("check", "V", "V6", "--require-inversions").exit_code == 1


def test_progression_answer_lists_non_diatonic_labels(tmp_path: Path) -> None:
    config = tmp_path / "levels.yaml"
    config.write_text(
        "levels:\n  borrowed:\n    kind: progression\n    available_keys: [C]\n"
        "    pattern_library: non-diatonic\n",
        encoding="utf8",
    )
    result = _invoke("progression", "borrowed", "--config", str(config), "-n", "3", "--show-answer")
    assert result.exit_code == 0
    assert result.output.count("Answer") == 3
    assert any(
        label in result.output
        for label in ("Neapolitan", "Borrowed from parallel minor", "Augmented", "Secondary dominant",
                      "Raised subdominant", "Half-diminished")
    )


def test_construct_correct_chord() -> None:
    result = _invoke("construct", "C", "major", "C4", "E4", "G4")
    assert result.exit_code == 0
    assert result.output.strip() == "correct"


def test_construct_accepts_midi_numbers_in_another_register() -> None:
    assert _invoke("construct", "A", "minor", "57", "60", "64").exit_code == 0


def test_construct_checks_the_bass_only_when_required() -> None:
    args = ("construct", "C", "major", "C4", "E4", "G4", "--inversion", "1")
    assert _invoke(*args).exit_code == 0
    result = _invoke(*args, "--require-inversions")
    assert result.exit_code == 1
    assert result.output.startswith("incorrect")
    assert "1st Inversion" in result.output
    assert _invoke("construct", "C", "major", "E3", "G3", "C4", "-i", "1", "--require-inversions").exit_code == 0


def test_construct_wrong_notes() -> None:
    result = _invoke("construct", "C", "major", "C4", "Eb4", "G4")
    assert result.exit_code == 1
    assert "C4 E4 G4" in result.output


def test_construct_unreadable_note_exits_with_error() -> None:
    result = _invoke("construct", "C", "major", "C4", "X9")
    assert result.exit_code == 1
    assert "ERROR" in result.output
