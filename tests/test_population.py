import numpy as np
import pytest

from rocketevo.exceptions import ConfigurationError, EvolutionError
from rocketevo.population import Population, assign_fitness
from rocketevo.simulation import CollisionOutcome

from conftest import DT, ScriptedOracle
from helpers import SequenceRng, constant_genome

FAR_TARGET = (0.0, 56.0, 0.0)


def _fresh(params, rng, n=6, life_time=20):
    return Population(num_rockets=n, life_time=life_time, dt=DT, params=params, rng=rng)


class TestInit:
    def test_rockets_and_genomes(self, population):
        assert population.size == 6
        assert [r.rocket_id for r in population.rockets] == list(range(6))
        assert all(r.genome.length == 20 for r in population.rockets)
        assert all(r.genome.fitness == 1.0 for r in population.rockets)
        assert population.generation == 0

    @pytest.mark.parametrize("n", [0, 3, 7, -2])
    def test_rejects_bad_sizes(self, params, rng, n):
        with pytest.raises(ConfigurationError):
            _fresh(params, rng, n=n)

    def test_rejects_empty_budget(self, params, rng):
        with pytest.raises(ConfigurationError):
            _fresh(params, rng, life_time=0)


class TestStep:
    def test_outcomes_freeze_rockets(self, population):
        oracle = ScriptedOracle(
            {
                0: CollisionOutcome(hit_obstacle=True),
                1: CollisionOutcome(hit_target=True),
                2: CollisionOutcome(hit_obstacle=True, hit_target=True),
            }
        )
        assert population.step(oracle) == 6
        r0, r1, r2, r3 = population.rockets[:4]
        assert r0.frozen and not r0.reached_target
        assert r1.frozen and r1.reached_target
        # obstacle wins over target
        assert r2.frozen and not r2.reached_target
        assert not r3.frozen

    def test_frozen_rockets_are_skipped(self, population):
        oracle = ScriptedOracle({0: CollisionOutcome(hit_obstacle=True)})
        population.step(oracle)
        oracle.calls.clear()

        assert population.step(oracle) == 5
        assert 0 not in oracle.calls
        assert population.rockets[0].frame_index == 1
        assert population.rockets[1].frame_index == 2

    def test_all_frozen(self, population):
        oracle = ScriptedOracle({i: CollisionOutcome(hit_obstacle=True) for i in range(6)})
        assert not population.all_frozen
        population.step(oracle)
        assert population.all_frozen
        assert population.step(oracle) == 0


class TestFitness:
    def test_distance_scoring(self, make_rocket):
        rocket = make_rocket()
        assert assign_fitness(rocket, FAR_TARGET) == pytest.approx(0.5)
        assert rocket.genome.fitness == pytest.approx(0.5)

    def test_distance_is_capped(self, make_rocket):
        rocket = make_rocket()
        assert assign_fitness(rocket, (0.0, 500.0, 0.0)) == 1.0

    def test_frozen_outcomes(self, make_rocket):
        reached, crashed = make_rocket(rocket_id=0), make_rocket(rocket_id=1)
        reached.freeze(True)
        crashed.freeze(False)
        assert assign_fitness(reached, FAR_TARGET) == 0.0
        assert assign_fitness(crashed, FAR_TARGET) == 1.0

    def test_evaluate_assigns_every_rocket(self, population):
        population.rockets[0].freeze(True)
        fitnesses = population.evaluate(FAR_TARGET)
        assert fitnesses[0] == 0.0
        assert fitnesses[1:] == pytest.approx([0.5] * 5)
        assert population.fitnesses == fitnesses


class TestRank:
    def test_ascending_with_stable_ties(self, population):
        for rocket, fitness in zip(population.rockets, [0.5, 0.1, 0.5, 0.0, 0.1, 1.0]):
            rocket.genome.fitness = fitness
        population.rank()
        assert [r.rocket_id for r in population.rockets] == [3, 1, 4, 0, 2, 5]
        assert population.fitnesses == sorted(population.fitnesses)


class TestRecombine:
    def test_pairs_fittest_with_weakest(self, population):
        for rocket in population.rockets:
            rocket.genome.fitness = rocket.rocket_id / 10
        before = {r.rocket_id: r.genome.thrusts.copy() for r in population.rockets}

        population.rng = SequenceRng(0.99)
        population.recombine()

        by_id = {r.rocket_id: r for r in population.rockets}
        for fitter, weaker in [(0, 5), (1, 4), (2, 3)]:
            np.testing.assert_array_equal(by_id[fitter].genome.thrusts, before[fitter])
            np.testing.assert_array_equal(by_id[weaker].genome.thrusts, before[fitter])
        assert all(r.genome.fitness == 1.0 for r in population.rockets)

    def test_lengths_preserved(self, population):
        population.recombine()
        assert all(r.genome.length == population.life_time for r in population.rockets)

    def test_mismatched_genome_is_fatal(self, population):
        population.rockets[-1].genome = constant_genome(5)
        with pytest.raises(EvolutionError):
            population.recombine()


class TestEndGeneration:
    def test_report_and_reset(self, population):
        oracle = ScriptedOracle(
            {
                0: CollisionOutcome(hit_target=True),
                1: CollisionOutcome(hit_obstacle=True),
                2: CollisionOutcome(hit_obstacle=True),
            }
        )
        population.step(oracle)
        report = population.end_generation(FAR_TARGET)

        assert report.generation == 0
        assert population.generation == 1
        assert report.population_size == 6
        assert report.frame_budget == 20
        assert report.reached_target == 1
        assert report.crashed == 2
        assert report.best_fitness == 0.0
        assert report.worst_fitness == 1.0
        assert report.fitnesses == sorted(report.fitnesses)
        assert report.average_fitness == pytest.approx(np.mean(report.fitnesses))

        for rocket in population.rockets:
            assert rocket.frame_index == 0
            assert not rocket.frozen and not rocket.reached_target
            np.testing.assert_array_equal(rocket.position, [0.0, -44.0, 0.0])
            assert rocket.genome.length == 20

    def test_full_rollouts_keep_invariants(self, population, oracle):
        for generation in range(3):
            for _ in range(population.life_time):
                population.step(oracle)
            report = population.end_generation(FAR_TARGET)
            assert report.generation == generation
            assert all(0.0 <= f <= 1.0 for f in report.fitnesses)
            assert all(r.genome.length == 20 for r in population.rockets)
        assert population.generation == 3
