"""chorddrill CLI entry point."""

import logging
import sys
from typing import Callable

import click
import numpy as np

from chorddrill import __version__
from chorddrill.answer_validator import REQUIRE_INVERSION_LABELING, validate, validate_notes
from chorddrill.chord_builder import ChordBuilder
from chorddrill.errors import ConfigurationError
from chorddrill.exercise_generator import ChordExerciseGenerator
from chorddrill.level_config import LevelConfig, get_level, load_levels
from chorddrill.models import GeneratedChord
from chorddrill.pitch_space import midi_to_note_name, parse_note
from chorddrill.progression_generator import ProgressionGenerator, describe_non_diatonic

logger = logging.getLogger(__name__)


def _load_level(level_id: str, config: str | None) -> LevelConfig:
    """Resolve LEVEL from the built-in levels or a user level file."""
    try:
        levels = load_levels(config)
        return get_level(level_id, levels)
    except (ConfigurationError, OSError) as exc:
        click.echo(f"  ERROR: {exc}", err=True)
        sys.exit(1)


def _format_notes(chord: GeneratedChord) -> str:
    names = " ".join(midi_to_note_name(note) for note in chord.notes)
    numbers = " ".join(str(note) for note in chord.notes)
    return f"{names}  ({numbers})"


def _run(kind: str, generate: Callable[[object], object], count: int) -> list:
    """Generate *count* exercises, each avoiding a repeat of the one before."""
    exercises: list = []
    previous = None
    try:
        for _ in range(count):
            previous = generate(previous)
            exercises.append(previous)
    except ConfigurationError as exc:
        click.echo(f"  ERROR: Could not generate {kind} — {exc}", err=True)
        sys.exit(1)
    return exercises


# ── CLI group ──────────────────────────────────────────────────────────────────

@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="chorddrill")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging from the generators.")
def main(verbose: bool) -> None:
    """chorddrill — chord and progression ear-training exercises."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )


config_option = click.option(
    "--config",
    default=None,
    metavar="PATH",
    type=click.Path(exists=True, dir_okay=False, readable=True),
    help="YAML level file to use instead of the built-in levels.",
)
count_option = click.option(
    "--count",
    "-n",
    type=click.IntRange(1, 500),
    default=1,
    show_default=True,
    help="Number of exercises to generate.",
)
seed_option = click.option(
    "--seed",
    type=int,
    default=None,
    help="Seed for the random generator (repeatable output).",
)
answer_option = click.option(
    "--show-answer",
    is_flag=True,
    help="Print the expected answer under each exercise.",
)


# ── levels subcommand ──────────────────────────────────────────────────────────

@main.command("levels")
@config_option
def list_levels(config: str | None) -> None:
    """List the available levels."""
    try:
        levels = load_levels(config)
    except (ConfigurationError, OSError) as exc:
        click.echo(f"  ERROR: {exc}", err=True)
        sys.exit(1)

    width = max(len(level_id) for level_id in levels)
    for level_id, level in levels.items():
        click.echo(f"{level_id:<{width}}  {level.kind:<11}  {level.title}")


# ── chord subcommand ───────────────────────────────────────────────────────────

@main.command()
@click.argument("level_id", metavar="LEVEL")
@count_option
@seed_option
@answer_option
@config_option
def chord(level_id: str, count: int, seed: int | None, show_answer: bool, config: str | None) -> None:
    """
    Generate single-chord exercises for LEVEL.

    \b
    Examples:
      chorddrill chord basic-triads
      chorddrill chord seventh-chords-inversions -n 5 --seed 3 --show-answer
    """
    level = _load_level(level_id, config)
    rng = np.random.default_rng(seed)
    generator = ChordExerciseGenerator()
    logger.debug("Level %s: %d chord exercise(s), seed=%s", level.id, count, seed)

    chords = _run("chord", lambda previous: generator.generate(level, rng, previous), count)
    for index, exercise in enumerate(chords, start=1):
        click.echo(f"[{index}] {_format_notes(exercise)}")
        if show_answer:
            click.echo(f"      Answer : {exercise.expected_answer}  ({exercise.display_name})")


# ── progression subcommand ─────────────────────────────────────────────────────

@main.command()
@click.argument("level_id", metavar="LEVEL")
@count_option
@seed_option
@answer_option
@config_option
def progression(level_id: str, count: int, seed: int | None, show_answer: bool, config: str | None) -> None:
    """
    Generate chord-progression exercises for LEVEL.

    \b
    Examples:
      chorddrill progression progressions-basic
      chorddrill progression progressions-non-diatonic -n 3 --show-answer
    """
    level = _load_level(level_id, config)
    rng = np.random.default_rng(seed)
    generator = ProgressionGenerator()

    progressions = _run("progression", lambda previous: generator.generate(level, rng, previous), count)
    for index, exercise in enumerate(progressions, start=1):
        click.echo(f"[{index}] Key: {exercise.key}")
        for step in exercise.chords:
            click.echo(f"      {_format_notes(step)}")
        if show_answer:
            click.echo(f"      Answer : {exercise.expected_answer}")
            for label in describe_non_diatonic(exercise):
                click.echo(f"               {label}")


# ── check subcommand ───────────────────────────────────────────────────────────

@main.command()
@click.argument("answer")
@click.argument("expected")
@click.option(
    "--require-inversions/--optional-inversions",
    default=REQUIRE_INVERSION_LABELING,
    show_default=True,
    help="Whether ANSWER must name the inversion given in EXPECTED.",
)
def check(answer: str, expected: str, require_inversions: bool) -> None:
    """
    Check ANSWER against EXPECTED; exit status 0 when correct, 1 otherwise.

    \b
    Examples:
      chorddrill check "I - V - vi - IV" "i-v-vi-iv"
      chorddrill check "Dbm/1" "C#m/1" --require-inversions
    """
    if validate(answer, expected, require_inversions):
        click.echo("correct")
        return
    click.echo("incorrect")
    sys.exit(1)


# ── construct subcommand ───────────────────────────────────────────────────────

@main.command()
@click.argument("root")
@click.argument("quality")
@click.argument("notes", nargs=-1, required=True)
@click.option(
    "--inversion",
    "-i",
    type=click.IntRange(0, 6),
    default=0,
    show_default=True,
    help="Inversion of the chord to construct.",
)
@click.option(
    "--require-inversions/--optional-inversions",
    default=REQUIRE_INVERSION_LABELING,
    show_default=True,
    help="Whether the lowest placed note must be the bass of the inversion.",
)
def construct(root: str, quality: str, notes: tuple[str, ...], inversion: int, require_inversions: bool) -> None:
    """
    Check placed NOTES against the ROOT QUALITY chord; exit status 0 when correct.

    NOTES are names with an octave ("E4", "Bb3") or MIDI numbers, in any register.

    \b
    Examples:
      chorddrill construct C major C4 E4 G4
      chorddrill construct C major E3 G3 C4 --inversion 1 --require-inversions
    """
    try:
        target = ChordBuilder().build(root, quality, inversion, label_inversion=True)
        placed = [parse_note(note) for note in notes]
    except ConfigurationError as exc:
        click.echo(f"  ERROR: {exc}", err=True)
        sys.exit(1)

    if validate_notes(placed, target, require_inversions):
        click.echo("correct")
        return
    click.echo(f"incorrect; expected {target.display_name}: {_format_notes(target)}")
    sys.exit(1)
