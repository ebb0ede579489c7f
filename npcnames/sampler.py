#!/usr/bin/env python3
"""
Novel-Combination Sampler
=========================
Draws random firstname/lastname pairs and keeps the ones that do not
exist yet and are not a near-miss of an existing name.

Rejection sampling with a fixed budget of ``count * attempts_per_name``
draws. The budget is the only termination guarantee, so a nearly
saturated pool simply yields fewer names than asked for.

Usage:
    sampler = NovelNameSampler(dataset)
    pairs = sampler.generate(10, "expanded")
"""

import logging
import secrets
from dataclasses import dataclass, field
from typing import List

from .errors import EmptyPoolError
from .models import GeneratedPair, NameRole, SourceFilter
from .pool import NameDataset
from .settings import get_setting

logger = logging.getLogger(__name__)

ATTEMPTS_PER_NAME = get_setting("sampler.attempts_per_name")
if ATTEMPTS_PER_NAME is None:
    raise ValueError("sampler.attempts_per_name must be set in app.yaml")


@dataclass
class SamplingRun:
    """Outcome of one generation call"""
    requested: int
    max_attempts: int = 0
    pairs: List[GeneratedPair] = field(default_factory=list)
    attempts: int = 0
    repeats: int = 0      # draws already tried earlier in this run
    rejected: int = 0     # existing or too similar

    @property
    def complete(self) -> bool:
        return len(self.pairs) >= self.requested


class NovelNameSampler:
    """
    Generates names that are new relative to a dataset's existing names.

    Args:
        dataset: Loaded dataset supplying pools and the existing-name index
        rng: Random source with a ``choice`` method. Defaults to
            ``secrets.SystemRandom()``; pass ``random.Random(seed)`` for
            reproducible output.
        attempts_per_name: Attempt budget per requested name
    """

    def __init__(self, dataset: NameDataset, rng=None, attempts_per_name: int = None):
        self.dataset = dataset
        self.rng = rng if rng is not None else secrets.SystemRandom()
        self.attempts_per_name = attempts_per_name or ATTEMPTS_PER_NAME

    def _pools(self, source_filter: str):
        firstnames = self.dataset.pool(NameRole.FIRSTNAME, source_filter)
        if not firstnames:
            raise EmptyPoolError(NameRole.FIRSTNAME.value, source_filter)
        lastnames = self.dataset.pool(NameRole.LASTNAME, source_filter)
        if not lastnames:
            raise EmptyPoolError(NameRole.LASTNAME.value, source_filter)
        return firstnames, lastnames

    def sample(self, count: int, source_filter: str = None) -> SamplingRun:
        """
        Run the rejection sampler and report what happened.

        Raises:
            ValueError: If count is negative
            EmptyPoolError: If either pool is empty for ``source_filter``
        """
        if count < 0:
            raise ValueError(f"count must be >= 0, got {count}")
        source_filter = source_filter or SourceFilter.ALL
        firstnames, lastnames = self._pools(source_filter)

        run = SamplingRun(requested=count, max_attempts=count * self.attempts_per_name)
        index = self.dataset.index
        attempted = set()

        while len(run.pairs) < count and run.attempts < run.max_attempts:
            run.attempts += 1

            firstname = self.rng.choice(firstnames)
            lastname = self.rng.choice(lastnames)
            pair = GeneratedPair(firstname=firstname, lastname=lastname)

            if pair.key in attempted:
                run.repeats += 1
                continue
            attempted.add(pair.key)

            if index.exists_exact(firstname, lastname) or index.exists_similar(firstname, lastname):
                run.rejected += 1
                continue

            run.pairs.append(pair)

        if not run.complete:
            logger.info(
                f"Generated {len(run.pairs)}/{count} names from '{source_filter}' "
                f"after {run.attempts} attempts ({run.rejected} rejected, {run.repeats} repeats)"
            )
        return run

    def generate(self, count: int, source_filter: str = None) -> List[GeneratedPair]:
        """Generate up to ``count`` novel pairs; fewer if the budget runs out."""
        return self.sample(count, source_filter).pairs
