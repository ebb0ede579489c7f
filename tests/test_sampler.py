"""
Tests for Novel-Combination Sampler
===================================
Tests rejection sampling, attempt budget and random source injection
in npcnames/sampler.py.
"""

import random
import pytest
import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from conftest import ExplodingRandom, ScriptedRandom
from npcnames.errors import EmptyPoolError
from npcnames.models import GeneratedPair, SourceFilter
from npcnames.pool import NameDataset
from npcnames.sampler import ATTEMPTS_PER_NAME, NovelNameSampler


def make_dataset(firstnames, lastnames, existing=(), provenance="vanilla", **kwargs):
    return NameDataset.from_lines(
        firstname_lines=[(n, provenance) for n in firstnames],
        lastname_lines=[(n, provenance) for n in lastnames],
        fullname_lines=existing,
        **kwargs,
    )


@pytest.fixture
def savel_dataset():
    return make_dataset(["Aryon", "Dilborn", "Aryan"], ["Savel"], ["Aryon Savel"])


class TestRejection:
    """Tests for novelty rejection."""

    def test_rejects_existing_and_similar(self, savel_dataset):
        """Test only the one novel pair is produced."""
        sampler = NovelNameSampler(savel_dataset, rng=random.Random(7))
        pairs = sampler.generate(5, SourceFilter.ALL)
        assert pairs == [GeneratedPair("Dilborn", "Savel")]

    def test_never_emits_existing(self, savel_dataset):
        for seed in range(20):
            sampler = NovelNameSampler(savel_dataset, rng=random.Random(seed))
            keys = {p.key for p in sampler.generate(5)}
            assert "aryon savel" not in keys
            assert "aryan savel" not in keys

    def test_scripted_sequence(self):
        """Test attempts, repeats and rejections are counted."""
        ds = make_dataset(["Aryon", "Dilborn"], ["Savel", "Bero"], ["Aryon Savel"])
        rng = ScriptedRandom([
            "Aryon", "Savel",     # exists
            "Dilborn", "Savel",   # accepted
            "Dilborn", "Savel",   # repeat
            "Aryon", "Bero",      # accepted
        ])
        run = NovelNameSampler(ds, rng=rng).sample(2)
        assert run.pairs == [GeneratedPair("Dilborn", "Savel"), GeneratedPair("Aryon", "Bero")]
        assert run.attempts == 4
        assert run.repeats == 1
        assert run.rejected == 1
        assert run.complete
        assert rng.calls == 8

    def test_repeat_draw_skipped(self):
        ds = make_dataset(["Dilborn", "Aryon"], ["Savel"])
        rng = ScriptedRandom(["Dilborn", "Savel", "Dilborn", "Savel", "Aryon", "Savel"])
        run = NovelNameSampler(ds, rng=rng).sample(2)
        assert [p.full_name for p in run.pairs] == ["Dilborn Savel", "Aryon Savel"]
        assert run.repeats == 1

    def test_results_unique(self):
        ds = make_dataset(["Aryon", "Dilborn", "Neloth", "Teril"], ["Savel", "Bero", "Omani"])
        pairs = NovelNameSampler(ds, rng=random.Random(3)).generate(12)
        assert len(pairs) == 12
        assert len({p.key for p in pairs}) == 12

    def test_filter_does_not_limit_novelty_check(self):
        """Test names existing only in an expansion still block base-only generation."""
        ds = NameDataset.from_lines(
            firstname_lines=[("Alvur", "vanilla"), ("Neloth", "vanilla")],
            lastname_lines=[("Dralas", "vanilla")],
            fullname_lines=[("Alvur Dralas", "tr")],
        )
        pairs = NovelNameSampler(ds, rng=random.Random(0)).generate(5, "vanilla")
        assert pairs == [GeneratedPair("Neloth", "Dralas")]

    def test_blacklisted_existing_name_blocks_similar(self):
        ds = make_dataset(
            ["Aryon", "Aryan", "Dilborn"], ["Savel"], ["Aryon Savel"],
            firstname_blacklist_lines=["aryon"],
        )
        pairs = NovelNameSampler(ds, rng=random.Random(1)).generate(5)
        assert pairs == [GeneratedPair("Dilborn", "Savel")]


class TestBudget:
    """Tests for the attempt budget."""

    def test_default_budget(self):
        assert ATTEMPTS_PER_NAME == 200

    def test_zero_count_draws_nothing(self, savel_dataset):
        sampler = NovelNameSampler(savel_dataset, rng=ExplodingRandom())
        run = sampler.sample(0)
        assert run.pairs == []
        assert run.attempts == 0

    def test_saturated_pool_returns_short(self):
        """Test a fully used-up pool exhausts the budget without raising."""
        ds = make_dataset(["Aryon", "Dilborn"], ["Savel"], ["Aryon Savel", "Dilborn Savel"])
        sampler = NovelNameSampler(ds, rng=random.Random(0), attempts_per_name=5)
        run = sampler.sample(3)
        assert run.pairs == []
        assert run.max_attempts == 15
        assert run.attempts == 15
        assert not run.complete

    def test_partial_result(self, savel_dataset):
        sampler = NovelNameSampler(savel_dataset, rng=random.Random(0), attempts_per_name=50)
        run = sampler.sample(4)
        assert len(run.pairs) == 1
        assert run.attempts == 200

    def test_negative_count(self, savel_dataset):
        with pytest.raises(ValueError):
            NovelNameSampler(savel_dataset).generate(-1)


class TestEmptyPool:
    """Tests for filters that empty a pool."""

    @pytest.fixture
    def mixed(self):
        return NameDataset.from_lines(
            firstname_lines=[("Aryon", "vanilla"), ("Teril", "sky")],
            lastname_lines=[("Savel", "vanilla")],
        )

    def test_empty_lastnames(self, mixed):
        with pytest.raises(EmptyPoolError) as exc_info:
            NovelNameSampler(mixed).generate(3, "sky")
        assert exc_info.value.role == "lastname"
        assert exc_info.value.source_filter == "sky"

    def test_empty_firstnames_reported_first(self, mixed):
        with pytest.raises(EmptyPoolError) as exc_info:
            NovelNameSampler(mixed).generate(3, "unknown")
        assert exc_info.value.role == "firstname"

    def test_dataset_still_usable(self, mixed):
        sampler = NovelNameSampler(mixed, rng=random.Random(0))
        with pytest.raises(EmptyPoolError):
            sampler.generate(1, SourceFilter.EXPANDED)
        assert len(sampler.generate(1, "vanilla")) == 1


class TestRandomSource:
    """Tests for random source injection."""

    def test_seeded_runs_match(self):
        ds = make_dataset(["Aryon", "Dilborn", "Neloth", "Teril"], ["Savel", "Bero", "Omani"])
        first = NovelNameSampler(ds, rng=random.Random(42)).generate(6)
        second = NovelNameSampler(ds, rng=random.Random(42)).generate(6)
        assert first == second

    def test_default_source(self, savel_dataset):
        sampler = NovelNameSampler(savel_dataset)
        assert sampler.generate(1) == [GeneratedPair("Dilborn", "Savel")]
