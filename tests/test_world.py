"""Physics, collision and transformation behaviour of the world."""

import dataclasses
import random

import pytest

from dinobus.game.effects import Cue
from dinobus.game.entities import Collectible, Obstacle, ObstacleKind
from dinobus.game.tuning import DEFAULT_TUNING
from dinobus.game.world import World

from conftest import HEIGHT, WIDTH, QuietSpawner


def place_obstacle(world, kind=ObstacleKind.CONE):
    """Put an obstacle where the player will hit it on the next tick."""
    t = world.tuning
    if kind is ObstacleKind.PEDESTRIAN:
        obstacle = Obstacle(
            x=world.player.x + 10,
            y=world.ground_line - t.pedestrian_height,
            width=t.pedestrian_width,
            height=t.pedestrian_height,
            kind=kind,
        )
    else:
        obstacle = Obstacle(
            x=world.player.x + 10,
            y=world.ground_line - t.obstacle_size,
            width=t.obstacle_size,
            height=t.obstacle_size,
            kind=kind,
        )
    world.obstacles.append(obstacle)
    return obstacle


def place_gem(world):
    t = world.tuning
    gem = Collectible(
        x=world.player.x + 10,
        y=world.ground_line - t.gem_low_offset,
        width=t.gem_size,
        height=t.gem_size,
    )
    world.collectibles.append(gem)
    return gem


def transform(world):
    place_gem(world)
    result = world.step()
    assert world.player.transformed
    return result


def test_new_world_starts_grounded_bus(world):
    p = world.player
    assert p.grounded
    assert not p.transformed
    assert (p.width, p.height) == (60, 40)
    assert p.y == world.ground_line - 40
    assert world.ground_line == HEIGHT - 100
    assert world.speed == 5


def test_jump_sets_velocity_and_rises_next_tick(world):
    y_before = world.player.y

    assert world.jump()
    assert world.player.vy == -12
    assert not world.player.grounded

    world.step()
    assert world.player.y < y_before


def test_jump_request_emits_jump_cue(world):
    result = world.step(jump_requested=True)
    assert Cue.JUMP in result.cues
    assert not world.player.grounded


def test_airborne_jump_is_ignored(world):
    world.jump()
    world.step()
    vy = world.player.vy

    assert not world.jump()
    assert world.player.vy == vy

    result = world.step(jump_requested=True)
    assert Cue.JUMP not in result.cues


def test_player_lands_after_jump(world):
    world.jump()
    for _ in range(100):
        world.step()
    assert world.player.grounded
    assert world.player.vy == 0
    assert world.player.y == world.ground_line - world.player.height


def test_bus_hits_cone_without_ending_anything(world):
    cone = place_obstacle(world, ObstacleKind.CONE)

    result = world.step()

    assert cone.marked_for_deletion
    assert cone not in world.obstacles
    assert result.score_delta == 0
    assert Cue.CRASH in result.cues
    assert len(world.particles) == 8
    assert all(p.color == (255, 165, 0) for p in world.particles)

    # The world keeps ticking normally afterwards
    world.step()
    assert world.tick == 2


def test_bus_honks_at_pedestrian(world):
    place_obstacle(world, ObstacleKind.PEDESTRIAN)

    result = world.step()

    assert world.obstacles == []
    assert result.score_delta == 0
    assert result.cues == (Cue.HONK,)
    assert len(world.particles) == 5
    assert all(p.color == (255, 255, 255) for p in world.particles)


def test_dino_eats_pedestrian(world):
    transform(world)
    place_obstacle(world, ObstacleKind.PEDESTRIAN)

    result = world.step()

    assert world.obstacles == []
    assert result.score_delta == 50
    assert Cue.EAT in result.cues
    assert Cue.CRASH not in result.cues


def test_dino_smashes_rock(world):
    transform(world)
    world.particles.clear()
    place_obstacle(world, ObstacleKind.ROCK)

    result = world.step()

    assert result.score_delta == 5
    assert Cue.CRASH in result.cues
    assert len(world.particles) == 10
    assert all(p.color == (136, 136, 136) for p in world.particles)


def test_gem_transforms_bus_into_dino(world):
    y_before = world.player.y
    gem = place_gem(world)

    result = world.step()

    p = world.player
    assert gem.marked_for_deletion
    assert world.collectibles == []
    assert p.transformed
    assert (p.width, p.height) == (60, 60)
    assert p.transform_timer == 600
    assert p.y == pytest.approx(y_before - 20)
    assert result.score_delta == 10
    assert result.transform_started
    assert Cue.ROAR in result.cues
    assert len(world.particles) == 15


def test_second_gem_only_refreshes_timer(world):
    transform(world)
    world.step()
    p = world.player
    y, size = p.y, (p.width, p.height)
    assert p.transform_timer == 599

    place_gem(world)
    result = world.step()

    assert p.transform_timer == 600
    assert (p.width, p.height) == size
    assert p.y == y
    assert Cue.COLLECT in result.cues
    assert Cue.ROAR not in result.cues
    assert not result.transform_started
    assert result.score_delta == 10


def test_transformation_expires(world):
    transform(world)
    world.player.transform_timer = 1

    result = world.step()

    p = world.player
    assert not p.transformed
    assert (p.width, p.height) == (60, 40)
    assert p.y == world.ground_line - 40
    assert result.transform_ended
    assert result.score_delta == 0


def test_transformed_player_moves_faster(world):
    transform(world)
    assert world.effective_speed == pytest.approx(world.speed + 3)

    rock = Obstacle(x=700, y=0, width=40, height=40)
    world.obstacles.append(rock)
    world.step()
    assert rock.x == pytest.approx(700 - world.effective_speed)


def test_obstacle_with_right_edge_at_zero_survives_one_tick(rng):
    tuning = dataclasses.replace(DEFAULT_TUNING, speed_increment=0.0)
    world = World(WIDTH, HEIGHT, tuning=tuning, spawner=QuietSpawner(tuning, rng), rng=rng)
    rock = Obstacle(x=-35, y=0, width=40, height=40)
    world.obstacles.append(rock)

    world.step()
    assert rock.x + rock.width == 0
    assert not rock.marked_for_deletion
    assert rock in world.obstacles

    world.step()
    assert rock.marked_for_deletion
    assert rock not in world.obstacles


def test_distance_score_every_ten_ticks(world):
    total = sum(world.step().score_delta for _ in range(30))
    assert total == 3


def test_particles_fade_and_disappear(world):
    place_obstacle(world, ObstacleKind.CONE)
    world.step()
    assert world.particles

    for _ in range(25):
        world.step()
    assert world.particles == []


def test_long_run_invariants():
    rng = random.Random(7)
    world = World(WIDTH, HEIGHT, rng=rng)
    last_speed = world.speed

    for i in range(3000):
        world.step(jump_requested=(i % 45 == 0))
        assert world.speed >= last_speed
        last_speed = world.speed
        for entity in (*world.obstacles, *world.collectibles, *world.particles):
            assert not entity.marked_for_deletion
        assert world.player.y <= world.ground_line - world.player.height


def test_snapshot_is_a_detached_copy(world):
    place_obstacle(world, ObstacleKind.ROCK)
    snapshot = world.snapshot()

    snapshot.player.x = 999
    snapshot.obstacles[0].x = 999

    assert world.player.x == 50
    assert world.obstacles[0].x != 999
    with pytest.raises(dataclasses.FrozenInstanceError):
        snapshot.tick = 5


def test_reset_clears_field(world):
    transform(world)
    place_obstacle(world)
    world.reset()

    assert world.tick == 0
    assert world.speed == 5
    assert world.obstacles == []
    assert world.collectibles == []
    assert world.particles == []
    assert not world.player.transformed


def test_resize_keeps_player_above_ground(world):
    world.resize(WIDTH, 300)
    assert world.ground_line == 200
    assert world.player.y == 200 - world.player.height
