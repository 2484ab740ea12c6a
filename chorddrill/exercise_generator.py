"""
Random exercise selection: seeded choice helpers, duplicate avoidance and
single-chord exercises.

All randomness comes from a caller-supplied ``numpy.random.Generator`` so that
independent sessions never share state and tests can fix the seed::

    rng = np.random.default_rng(7)
    chord = ChordExerciseGenerator().generate(level, rng)
"""

from __future__ import annotations

import logging
from typing import Callable, Hashable, Sequence, TypeVar

import numpy as np

from chorddrill.catalogs import get_quality
from chorddrill.chord_builder import ChordBuilder
from chorddrill.errors import ConfigurationError
from chorddrill.level_config import LevelConfig
from chorddrill.models import GeneratedChord

logger = logging.getLogger(__name__)

T = TypeVar("T")

#: Selection weight of a level's newly introduced (featured) qualities.
FEATURED_WEIGHT = 2.0


def choose(items: Sequence[T], rng: np.random.Generator) -> T:
    """Pick one element of *items* uniformly at random."""
    if not items:
        raise ConfigurationError("Cannot choose from an empty pool.")
    return items[int(rng.integers(len(items)))]


def weighted_choice(items: Sequence[T], weights: Sequence[float], rng: np.random.Generator) -> T:
    """Pick one element of *items* with probability proportional to *weights*."""
    if not items:
        raise ConfigurationError("Cannot choose from an empty pool.")
    p = np.asarray(weights, dtype=float)
    return items[int(rng.choice(len(items), p=p / p.sum()))]


def generate_distinct(
    generate: Callable[[], T],
    previous: T | None,
    key: Callable[[T], Hashable],
    retry_cap: int,
) -> T:
    """
    Call *generate* until its result differs structurally from *previous*.

    Two results are structurally identical when *key* maps them to equal
    values. After *retry_cap* attempts the last result is returned even if it
    repeats, so a pool with a single outcome still terminates.
    """
    candidate = generate()
    if previous is None:
        return candidate

    previous_key = key(previous)
    attempts = 1
    while key(candidate) == previous_key and attempts < retry_cap:
        candidate = generate()
        attempts += 1

    if key(candidate) == previous_key:
        logger.debug("Accepting a repeated exercise after %d attempts", attempts)
    return candidate


def chord_identity(chord: GeneratedChord) -> tuple[str, str, int]:
    """Structural identity of a chord exercise: (root, quality, inversion)."""
    return chord.root, chord.quality_id, chord.inversion


class ChordExerciseGenerator:
    """
    Draw single-chord exercises for a ``kind: chord`` level.

    Roots are drawn uniformly, qualities with double weight for the level's
    featured qualities, and the inversion uniformly from
    ``0..min(max_inversion, cardinality - 1)``.
    """

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _builder(self, level: LevelConfig) -> ChordBuilder:
        return ChordBuilder(octave_bounds=level.octave_bounds, octave=level.octave)

    def _pick_quality(self, level: LevelConfig, rng: np.random.Generator) -> str:
        featured = set(level.featured_qualities)
        weights = [
            FEATURED_WEIGHT if quality_id in featured else 1.0
            for quality_id in level.allowed_qualities
        ]
        return weighted_choice(level.allowed_qualities, weights, rng)

    def _generate_once(self, level: LevelConfig, rng: np.random.Generator) -> GeneratedChord:
        root = choose(level.available_roots, rng)
        quality_id = self._pick_quality(level, rng)
        highest = min(level.max_inversion, get_quality(quality_id).cardinality - 1)
        inversion = int(rng.integers(highest + 1))
        return self._builder(level).build(
            root,
            quality_id,
            inversion,
            label_inversion=level.inversion_labeling_required,
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def generate(
        self,
        level: LevelConfig,
        rng: np.random.Generator,
        previous: GeneratedChord | None = None,
    ) -> GeneratedChord:
        """
        Generate the next chord exercise of *level*.

        Args:
            level:    A chord level.
            rng:      Random source for this call.
            previous: The exercise shown just before, to avoid an immediate repeat.

        Raises:
            ConfigurationError: If *level* is not a chord level or a pool is empty.
        """
        if level.kind != "chord":
            raise ConfigurationError(f"Level '{level.id}' is not a single-chord level.")
        return generate_distinct(
            lambda: self._generate_once(level, rng),
            previous,
            chord_identity,
            level.duplicate_avoidance_retry_cap,
        )
