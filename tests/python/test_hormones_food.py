from __future__ import annotations

from pygame.math import Vector2
from pytest import approx

from quorum.sim.core.agent import Species
from quorum.sim.core.config import CullingConfig, FoodConfig, HormoneConfig
from quorum.sim.core.scheduler import Scheduler
from quorum.sim.core.world import World
from quorum.sim.systems import food, hormones


def test_hormone_glides_and_slows_under_friction(quiet_config):
    world = World(quiet_config(hormone=HormoneConfig(friction=0.05)))
    hormone = world.spawn_hormone(Vector2(50, 50), heading=0.0, speed=3.0)

    hormones.diffuse(world, hormone)

    assert hormone.position.x == approx(53.0)
    assert hormone.position.y == approx(50.0)
    assert hormone.speed == approx(2.95)


def test_slow_hormone_resets_speed_and_random_walks(quiet_config):
    world = World(quiet_config(hormone=HormoneConfig(baseline_speed=0.95)))
    hormone = world.spawn_hormone(Vector2(50, 50), heading=0.0, speed=1.0)

    hormones.diffuse(world, hormone)

    assert hormone.speed == approx(0.95)
    assert hormone.position.distance_to(Vector2(50, 50)) == approx(0.95)


def test_hormone_ages_out(quiet_config):
    world = World(quiet_config(hormone=HormoneConfig(lifetime=3)))
    hormone = world.spawn_hormone(Vector2(50, 50), heading=0.0, speed=0.5)
    scheduler = Scheduler(world)

    scheduler.run(2)
    assert hormone.alive
    assert hormone.age == 1

    metrics = scheduler.tick()
    assert not hormone.alive
    assert metrics.hormones == 0


def test_hormone_leaving_the_domain_is_removed(quiet_config):
    world = World(quiet_config())
    hormone = world.spawn_hormone(Vector2(2.0, 50), heading=180.0, speed=3.0)

    Scheduler(world).tick()

    assert not hormone.alive
    assert world.of_species(Species.HORMONE) == []


def test_food_on_the_boundary_is_removed(quiet_config):
    world = World(quiet_config())
    edge = world.spawn_food(Vector2(1.0, 50))
    middle = world.spawn_food(Vector2(50, 50))

    Scheduler(world).tick()

    assert not edge.alive
    assert middle.alive


def test_uniform_generation_scatters_inside_inner_domain(quiet_config):
    world = World(quiet_config(food=FoodConfig(food_rnd=25, clustering=False)))

    created = food.generate_food(world)

    assert created == 25
    assert world.cluster_region is None
    assert all(world.inner_domain.contains(item.position) for item in world.of_species(Species.FOOD))


def test_clustered_generation_adds_batch_around_fresh_point(quiet_config):
    world = World(quiet_config(food=FoodConfig(food_rnd=3, clustering=True, cluster_dim=4.0, food_cluster=10)))

    created = food.generate_food(world)
    first_cluster = world.cluster_region
    clustered = world.of_species(Species.FOOD)[3:]

    assert created == 13
    assert first_cluster is not None
    assert all(first_cluster.contains(item.position) for item in clustered)

    food.generate_food(world)
    assert world.cluster_region != first_cluster


def test_cluster_near_the_edge_stays_inside_inner_domain(quiet_config):
    world = World(quiet_config(food=FoodConfig(food_rnd=0, clustering=True, cluster_dim=30.0, food_cluster=40)))

    for _ in range(10):
        food.generate_food(world)

    generated = world.of_species(Species.FOOD)
    assert len(generated) == 400
    assert all(world.inner_domain.contains(item.position) for item in generated)


def test_periodic_culling_removes_most_food_and_hormones(quiet_config):
    world = World(quiet_config(culling=CullingConfig(enabled=True, period=2, probability=0.95)))
    for row in range(10):
        for column in range(10):
            world.spawn_food(Vector2(20 + 5 * column, 20 + 5 * row))
            world.spawn_hormone(Vector2(22 + 5 * column, 22 + 5 * row), heading=0.0, speed=0.5)
    scheduler = Scheduler(world)

    metrics = scheduler.tick()
    assert metrics.food == 100
    assert metrics.hormones == 100

    metrics = scheduler.tick()
    assert metrics.food < 30
    assert metrics.hormones < 30
