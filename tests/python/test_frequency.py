from __future__ import annotations

from pytest import approx

from quorum.sim.core.frequency import MEMORY_SIZE, FrequencyEstimator


def test_even_spacing_gives_reciprocal_of_mean_gap():
    estimator = FrequencyEstimator(memory=range(0, 21, 2))

    assert estimator.memory == (0, 2, 4, 6, 8, 10, 12, 14, 16, 18, 20)
    assert estimator.update()
    assert estimator.frequency == approx(0.5)


def test_memory_is_capped_and_evicts_oldest_first():
    estimator = FrequencyEstimator()
    for cycle in range(1, 30):
        estimator.record(cycle)
        assert 0 <= len(estimator) <= MEMORY_SIZE

    assert estimator.memory == tuple(range(19, 30))


def test_frequency_only_changes_once_memory_is_full():
    estimator = FrequencyEstimator()
    for cycle in range(0, 30, 3)[:10]:
        estimator.record(cycle)
        assert not estimator.update()
        assert estimator.frequency == 0.0

    estimator.record(30)
    assert estimator.update()
    assert estimator.frequency == approx(1 / 3)


def test_spontaneous_sample_drops_same_cycle_duplicate():
    estimator = FrequencyEstimator(memory=[3, 5])
    estimator.sample(5)
    assert estimator.memory == (3, 5)

    estimator.sample(6)
    assert estimator.memory == (3, 5, 6)


def test_spontaneous_sample_on_full_memory_keeps_oldest_when_deduplicated():
    estimator = FrequencyEstimator(memory=range(11))
    estimator.sample(10)

    assert estimator.memory == tuple(range(11))


def test_degenerate_spacing_keeps_previous_frequency():
    estimator = FrequencyEstimator(memory=[7] * MEMORY_SIZE, frequency=0.25)

    assert not estimator.update()
    assert estimator.frequency == 0.25
