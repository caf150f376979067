"""Tests for the per-step transition (grow_step)."""

from __future__ import annotations

import math
from random import Random

import pytest

from agesim.config.types import Settings
from agesim.domain.genome import MalformedGenomeError, genomic_difference
from agesim.domain.grid import Location, neighbors
from agesim.domain.organism import CellBuffer, Organism, init_organism
from agesim.simulation.step import grow_step, signal_probability, split_probability


def _organism(settings: Settings, cells: list[tuple[Location, float, str]]) -> Organism:
    buffer = CellBuffer(settings=settings)
    for loc, age, genome in cells:
        buffer.append_cell(loc, age, genome)
    return buffer.freeze(samplesize=0)


def _assert_parallel(org: Organism) -> None:
    assert len(org.coordinates) == org.size
    assert len(org.ages) == org.size
    assert len(org.senescent) == org.size
    assert len(org.genomes) == org.size


class TestProbabilities:
    def test_split_probability_at_age_zero(self) -> None:
        assert split_probability(0.0) == pytest.approx(0.02)

    def test_split_probability_decays_with_age(self) -> None:
        assert split_probability(3.0) == pytest.approx(0.02 * math.exp(-3.0))
        assert split_probability(3.0) < split_probability(1.0)

    def test_signal_probability_is_one_at_zero_distance(self) -> None:
        loc = Location(4, 4)
        assert signal_probability(loc, loc) == 1.0

    def test_signal_probability_decays_with_distance(self) -> None:
        origin = Location(0, 0)
        assert signal_probability(Location(1, 0), origin) == pytest.approx(math.exp(-0.2))
        assert signal_probability(Location(5, 0), origin) < signal_probability(
            Location(1, 0), origin
        )


class TestGrowStepScenarios:
    def test_single_cell_with_near_zero_split_and_mutation(self, constant_rng) -> None:
        settings = Settings(length=20, genome="GATTACA", mutation_rate=0.00016, growth_rate=0.01)
        org = init_organism(settings)
        out = grow_step(org, constant_rng(0.999))
        assert out.size == 1
        assert out.ages == (0.0,)
        assert out.genomes == ("GATTACA",)
        # Only self is sampled
        assert out.samplesize == 1

    def test_adjacent_identical_cells_always_sample_each_other(self, constant_rng) -> None:
        settings = Settings(length=20, mutation_rate=0.0, growth_rate=0.0)
        org = _organism(
            settings,
            [(Location(5, 5), 0.0, "GATTACA"), (Location(5, 6), 0.0, "GATTACA")],
        )
        out = grow_step(org, constant_rng(0.5))
        assert out.size == 2
        assert out.ages == (0.0, 0.0)
        assert out.samplesize == 2

    def test_age_is_recomputed_not_accumulated(self, constant_rng) -> None:
        settings = Settings(length=20, mutation_rate=0.0, growth_rate=0.0)
        org = _organism(
            settings,
            [(Location(5, 5), 40.0, "GATTACA"), (Location(5, 6), 40.0, "GATTACC")],
        )
        out = grow_step(org, constant_rng(0.5))
        assert out.ages == (1.0, 1.0)

    def test_forced_split_adds_exactly_one_cell(self, constant_rng) -> None:
        settings = Settings(length=20, mutation_rate=0.0, growth_rate=0.0)
        org = init_organism(settings)
        out = grow_step(org, constant_rng(0.0))
        assert out.size == org.size + 1
        assert out.coordinates[0] == org.coordinates[0]
        assert out.coordinates[1] in neighbors(org.coordinates[0])
        # Daughter inherits the parent's pre-step age
        assert out.ages[1] == 0.0
        assert out.genomes == ("GATTACA", "GATTACA")
        assert out.senescent == (False, False)
        _assert_parallel(out)

    def test_forced_split_targets_first_free_neighbor(self, constant_rng) -> None:
        settings = Settings(length=20, mutation_rate=0.0, growth_rate=0.0)
        org = init_organism(settings)
        out = grow_step(org, constant_rng(0.0))
        assert out.coordinates[1] == Location(10, 11)

    def test_split_skipped_when_fully_surrounded(self, constant_rng) -> None:
        settings = Settings(length=3, mutation_rate=0.0, growth_rate=0.0)
        cells = [(Location(x, y), 0.0, "GATTACA") for x in range(3) for y in range(3)]
        org = _organism(settings, cells)
        out = grow_step(org, constant_rng(0.0))
        assert out.size == 9
        assert set(out.coordinates) == set(org.coordinates)

    def test_split_skipped_at_grid_corner_when_neighbors_occupied(self, constant_rng) -> None:
        settings = Settings(length=2, mutation_rate=0.0, growth_rate=0.0)
        cells = [
            (Location(0, 0), 0.0, "GATTACA"),
            (Location(0, 1), 0.0, "GATTACA"),
            (Location(1, 0), 0.0, "GATTACA"),
        ]
        out = grow_step(_organism(settings, cells), constant_rng(0.0))
        assert out.size == 4
        assert Location(1, 1) in out.coordinates
        assert len(set(out.coordinates)) == 4

    def test_daughters_of_earlier_cells_are_seen_later_in_the_scan(
        self, constant_rng
    ) -> None:
        settings = Settings(length=20, mutation_rate=0.0, growth_rate=0.0)
        org = _organism(
            settings,
            [(Location(5, 5), 0.0, "GATTACA"), (Location(15, 15), 0.0, "GATTACA")],
        )
        out = grow_step(org, constant_rng(0.0))
        assert out.size == 4
        # Cell 0 samples 2 cells, cell 1 samples 3 (including cell 0's daughter)
        assert out.samplesize == (2 + 3) // 2
        # Daughters are not processed in the step that creates them
        assert out.ages[2:] == (0.0, 0.0)

    def test_mutations_of_earlier_cells_are_seen_later_in_the_scan(
        self, constant_rng
    ) -> None:
        settings = Settings(length=20, mutation_rate=1.0, growth_rate=0.0)
        org = _organism(
            settings,
            [(Location(5, 5), 0.0, "GATTACA"), (Location(5, 6), 0.0, "GATTACA")],
        )
        out = grow_step(org, constant_rng(0.5))
        assert out.size == 2
        # Cell 0 compared two untouched genomes
        assert out.ages[0] == 0.0
        # Cell 1 compared its pre-mutation genome with cell 0's mutated genome
        assert out.ages[1] == genomic_difference("GATTACA", out.genomes[0])

    def test_daughter_copies_parent_pre_step_age(self, constant_rng) -> None:
        settings = Settings(length=20, mutation_rate=0.0, growth_rate=0.0)
        org = _organism(settings, [(Location(10, 10), 5.0, "GATTACA")])
        # 0.02 * exp(-5) still beats a zero draw, so the old cell splits
        out = grow_step(org, constant_rng(0.0))
        assert out.size == 2
        # Parent age is recomputed from its own signal; the daughter keeps 5.0
        assert out.ages == (0.0, 5.0)

    def test_split_mutates_parent_and_daughter(self, constant_rng) -> None:
        settings = Settings(length=20, mutation_rate=0.0, growth_rate=1.0)
        org = init_organism(settings)
        out = grow_step(org, constant_rng(0.0))
        assert out.size == 2
        base = constant_rng(0.0).choice("GCAT")
        assert out.genomes == (base * 7, base * 7)


class TestGrowStepProperties:
    def test_input_snapshot_is_untouched(self) -> None:
        settings = Settings(length=10, mutation_rate=0.5, growth_rate=0.5)
        org = init_organism(settings)
        before = (org.coordinates, org.ages, org.genomes, org.size)
        grow_step(org, Random(1))
        assert (org.coordinates, org.ages, org.genomes, org.size) == before

    def test_size_never_decreases_and_sequences_stay_parallel(self) -> None:
        settings = Settings(length=12, mutation_rate=0.01, growth_rate=0.1)
        org = init_organism(settings)
        rng = Random(2024)
        for _ in range(60):
            nxt = grow_step(org, rng)
            assert nxt.size >= org.size
            _assert_parallel(nxt)
            assert len(set(nxt.coordinates)) == nxt.size
            for loc in nxt.coordinates:
                assert 0 <= loc.x < 12 and 0 <= loc.y < 12
            for genome in nxt.genomes:
                assert len(genome) == len(settings.genome)
                assert set(genome) <= set("GCAT")
            org = nxt

    def test_seeded_steps_are_reproducible(self) -> None:
        settings = Settings(length=10, mutation_rate=0.2, growth_rate=0.2)
        org = init_organism(settings)
        a, b = org, org
        rng_a, rng_b = Random(99), Random(99)
        for _ in range(15):
            a = grow_step(a, rng_a)
            b = grow_step(b, rng_b)
        assert a == b

    def test_default_rng_is_used_when_omitted(self) -> None:
        out = grow_step(init_organism(Settings()))
        assert out.size in (1, 2)

    def test_malformed_genome_aborts_step(self, constant_rng) -> None:
        settings = Settings(length=10)
        org = _organism(
            settings,
            [(Location(5, 5), 0.0, "GATTACA"), (Location(5, 6), 0.0, "GATT")],
        )
        with pytest.raises(MalformedGenomeError):
            grow_step(org, constant_rng(0.5))

    def test_illegal_base_aborts_step(self, constant_rng) -> None:
        settings = Settings(length=10)
        org = _organism(
            settings,
            [(Location(5, 5), 0.0, "GATTACA"), (Location(5, 6), 0.0, "GATXACA")],
        )
        with pytest.raises(MalformedGenomeError, match="base pair not found"):
            grow_step(org, constant_rng(0.999))

    def test_short_genome_of_lone_cell_aborts_step(self, constant_rng) -> None:
        settings = Settings(length=10, genome="GATTACA")
        org = _organism(settings, [(Location(5, 5), 0.0, "GAT")])
        with pytest.raises(MalformedGenomeError, match="genome length"):
            grow_step(org, constant_rng(0.999))
