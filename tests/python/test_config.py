from __future__ import annotations

import pytest

from quorum.sim.core.config import PROFILES, SimulationConfig, load_config, profile_config
from quorum.sim.core.errors import ConfigurationError
from quorum.sim.core.world import World


def test_profiles_expose_both_variants():
    reproducing = profile_config("reproducing")
    clustered = profile_config("clustered")

    assert set(PROFILES) == {"reproducing", "clustered"}
    assert reproducing.health_policy == "reproduce"
    assert reproducing.culling.enabled
    assert not reproducing.food.clustering
    assert clustered.health_policy == "cap"
    assert not clustered.culling.enabled
    assert clustered.food.clustering
    reproducing.validate()
    clustered.validate()


def test_profile_overrides_and_unknown_profile():
    config = profile_config("clustered", seed=99, ncell=12)
    assert config.seed == 99
    assert config.ncell == 12

    with pytest.raises(ConfigurationError):
        profile_config("glowing")


def test_load_config_merges_sections_over_profile():
    config = load_config(
        {
            "profile": "clustered",
            "alpha": 2.5,
            "cell": {"lightning_threshold": 0.08},
            "food": {"food_cluster": 9},
        }
    )

    assert config.profile == "clustered"
    assert config.alpha == 2.5
    assert config.cell.lightning_threshold == 0.08
    assert config.cell.ray_of_perception == SimulationConfig().cell.ray_of_perception
    assert config.food.food_cluster == 9
    assert config.food.clustering


def test_load_config_rejects_unknown_options():
    with pytest.raises(ConfigurationError):
        load_config({"cell": {"glow_colour": "blue"}})
    with pytest.raises(ConfigurationError):
        load_config({"ncells": 10})


def test_from_yaml(tmp_path):
    path = tmp_path / "run.yaml"
    path.write_text(
        "profile: reproducing\n"
        "seed: 5\n"
        "world_dimension: 60\n"
        "culling:\n"
        "  period: 500\n"
    )

    config = SimulationConfig.from_yaml(path)

    assert config.seed == 5
    assert config.world_dimension == 60
    assert config.culling.period == 500
    assert config.culling.enabled


@pytest.mark.parametrize(
    "overrides",
    [
        {"world_dimension": -10},
        {"ncell": -1},
        {"alpha": -0.5},
        {"ncell": 2.5},
        {"ncell": "ten"},
        {"ncell": True},
        {"world_dimension": None},
        {"world_dimension": 80.5},
        {"alpha": float("nan")},
    ],
)
def test_validate_rejects_out_of_range(overrides):
    with pytest.raises(ConfigurationError):
        profile_config("reproducing", **overrides).validate()


@pytest.mark.parametrize(
    "raw",
    [
        {"ncell": 2.5},
        {"ncell": "ten"},
        {"world_dimension": None},
        {"food": {"food_rnd": 1.5}},
        {"food": {"clustering": "yes"}},
        {"hormone": {"lifetime": 40.0}},
        {"culling": {"period": "often"}},
        {"cell": {"dimension": "wide"}},
        {"cell": {"initial_health": None}},
    ],
)
def test_wrongly_typed_options_never_reach_the_world(raw):
    with pytest.raises(ConfigurationError):
        World(load_config(raw))


def test_load_config_requires_a_mapping():
    with pytest.raises(ConfigurationError):
        load_config(["ncell", 10])


def test_validate_rejects_bad_probabilities():
    config = profile_config("reproducing")
    config.culling.probability = 1.5
    with pytest.raises(ConfigurationError):
        config.validate()
