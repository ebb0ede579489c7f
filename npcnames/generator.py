#!/usr/bin/env python3
"""
NPC Name Generator Session
==========================
Owns one loaded dataset and generates names from it.

The source filter only decides which names are drawn as candidates. Novelty
is always checked against every existing name loaded, so generating from
the base list alone still avoids names used by expansions.

Usage:
    gen = NPCNameGenerator()
    gen.load("dunmer", "male")
    for pair in gen.generate(10, "expanded"):
        print(pair.full_name)
"""

import logging
from typing import List, Optional

from .errors import NotLoadedError
from .loader import DirectoryLoader
from .models import GeneratedPair, SourceFilter
from .pool import DatasetStats, NameDataset
from .sampler import NovelNameSampler, SamplingRun
from .settings import get_setting

logger = logging.getLogger(__name__)

DEFAULT_COUNT = get_setting("sampler.default_count", 10)


class NPCNameGenerator:
    """
    A name generation session.

    Loading replaces the previous dataset wholesale. A failed load leaves
    the session unloaded. Callers must not load and generate concurrently
    on the same session.

    Args:
        loader: Loader used by ``load``; defaults to the configured data root
        rng: Random source passed to the sampler
    """

    def __init__(self, loader: DirectoryLoader = None, rng=None):
        self._loader = loader
        self.rng = rng
        self._dataset: Optional[NameDataset] = None
        self._sampler: Optional[NovelNameSampler] = None

    @property
    def loader(self) -> DirectoryLoader:
        if self._loader is None:
            self._loader = DirectoryLoader()
        return self._loader

    @property
    def loaded(self) -> bool:
        return self._dataset is not None

    @property
    def dataset(self) -> NameDataset:
        if self._dataset is None:
            raise NotLoadedError()
        return self._dataset

    def load(self, race: str, sex: str) -> NameDataset:
        """Load a race/sex selection through the loader."""
        self.unload()
        return self.load_dataset(self.loader.load(race, sex))

    def load_dataset(self, dataset: NameDataset) -> NameDataset:
        """Install an already built dataset."""
        self._dataset = dataset
        self._sampler = NovelNameSampler(dataset, rng=self.rng)
        return dataset

    def unload(self):
        self._dataset = None
        self._sampler = None

    def sample(self, count: int = None, source_filter: str = None) -> SamplingRun:
        if self._sampler is None:
            raise NotLoadedError()
        if count is None:
            count = DEFAULT_COUNT
        return self._sampler.sample(count, source_filter or SourceFilter.ALL)

    def generate(self, count: int = None, source_filter: str = None) -> List[GeneratedPair]:
        """
        Generate novel names.

        Args:
            count: Number of names wanted (default from ``sampler.default_count``)
            source_filter: ``"all"``, ``"expanded"`` or a single provenance tag

        Returns:
            Up to ``count`` pairs; fewer when the attempt budget runs out

        Raises:
            NotLoadedError: No dataset loaded
            EmptyPoolError: A pool is empty for ``source_filter``
        """
        return self.sample(count, source_filter).pairs

    def get_firstnames(self, source_filter: str = None) -> List[str]:
        return self.dataset.get_firstnames(source_filter)

    def get_lastnames(self, source_filter: str = None) -> List[str]:
        return self.dataset.get_lastnames(source_filter)

    def get_stats(self, source_filter: str = None) -> DatasetStats:
        return self.dataset.get_stats(source_filter)

    def is_too_similar_to_existing(self, firstname: str, lastname: str) -> bool:
        """Check a combination against every existing name."""
        return self.dataset.index.is_taken(firstname, lastname)
