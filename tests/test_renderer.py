"""Headless rendering into numpy buffers."""

import dataclasses

import numpy as np
import pytest

from dinobus.core.state import State
from dinobus.game.entities import Collectible, Obstacle, ObstacleKind, Particle
from dinobus.graphics import primitives
from dinobus.graphics.renderer import GRASS, SKY, SOIL, Renderer
from dinobus.graphics.sprites import BUS, DINO, GEM, OBSTACLE_SPRITES, compile_sprite
from dinobus.session.controller import SessionView

from conftest import HEIGHT, WIDTH


def make_view(state=State.PLAYING, **overrides):
    values = dict(
        state=state,
        score=12,
        high_score=40,
        transformed=False,
        fact="",
        fact_loading=False,
        new_high_score=False,
    )
    values.update(overrides)
    return SessionView(**values)


@pytest.fixture
def buffer():
    return Renderer.new_buffer(WIDTH, HEIGHT)


def populate(world):
    world.obstacles += [
        Obstacle(x=300, y=world.ground_line - 40, width=40, height=40, kind=ObstacleKind.ROCK),
        Obstacle(x=400, y=world.ground_line - 40, width=40, height=40, kind=ObstacleKind.CONE),
        Obstacle(x=500, y=world.ground_line - 50, width=30, height=50, kind=ObstacleKind.PEDESTRIAN),
    ]
    world.collectibles.append(Collectible(x=600, y=world.ground_line - 120, width=40, height=40))
    world.particles.append(Particle(x=200, y=200, width=4, height=4, color=(255, 0, 0), life=0.5))


def test_background_layers(world, buffer):
    Renderer().render(buffer, world.snapshot(), make_view())

    ground = int(world.ground_line)
    assert tuple(buffer[5, 5]) == SKY
    assert tuple(buffer[ground + 5, 5]) == GRASS
    assert tuple(buffer[HEIGHT - 1, 5]) == SOIL


def test_player_is_drawn(world, buffer):
    Renderer().render(buffer, world.snapshot(), make_view())

    p = world.player
    region = buffer[int(p.y):int(p.y + p.height), int(p.x):int(p.x + p.width)]
    assert (region != np.array(SKY, dtype=np.uint8)).any(axis=-1).any()


@pytest.mark.parametrize("state,extra", [
    (State.START, {}),
    (State.PLAYING, {"transformed": True}),
    (State.GAME_OVER, {"fact_loading": True}),
    (State.GAME_OVER, {"fact": "Some dinosaurs were as small as chickens!", "new_high_score": True}),
])
def test_every_screen_renders(world, buffer, state, extra):
    populate(world)
    if extra.get("transformed"):
        world.player.transformed = True
        world.player.transform_timer = 60
        world.player.height = 60
    snapshot = world.snapshot()
    before = (snapshot.player, snapshot.obstacles, snapshot.particles)
    copies = tuple(dataclasses.replace(e) for e in (snapshot.player, *snapshot.obstacles))

    Renderer().render(buffer, snapshot, make_view(state, **extra))

    assert (snapshot.player, snapshot.obstacles, snapshot.particles) == before
    assert tuple(dataclasses.replace(e) for e in (snapshot.player, *snapshot.obstacles)) == copies


def test_entities_partly_off_screen(world, buffer):
    world.obstacles.append(Obstacle(x=-30, y=10, width=40, height=40))
    world.obstacles.append(Obstacle(x=WIDTH - 10, y=HEIGHT - 20, width=40, height=40))
    Renderer().render(buffer, world.snapshot(), make_view())


def test_tiny_window(world):
    world.resize(200, 150)
    buffer = Renderer.new_buffer(200, 150)
    Renderer().render(buffer, world.snapshot(), make_view(State.GAME_OVER, fact="Roar!"))
    assert buffer.shape == (150, 200, 3)


# ----------------------------------------------------------------------
# Primitives
# ----------------------------------------------------------------------


def test_rect_is_clipped():
    buf = np.zeros((10, 10, 3), dtype=np.uint8)
    primitives.draw_rect(buf, -5, -5, 8, 8, (255, 0, 0))
    assert tuple(buf[0, 0]) == (255, 0, 0)
    assert tuple(buf[2, 2]) == (255, 0, 0)
    assert tuple(buf[3, 3]) == (0, 0, 0)


def test_rect_alpha_blends():
    buf = np.zeros((4, 4, 3), dtype=np.uint8)
    primitives.draw_rect(buf, 0, 0, 4, 4, (200, 100, 0), alpha=0.5)
    assert tuple(buf[1, 1]) == (100, 50, 0)


def test_rect_outline():
    buf = np.zeros((6, 6, 3), dtype=np.uint8)
    primitives.draw_rect(buf, 0, 0, 6, 6, (9, 9, 9), filled=False)
    assert tuple(buf[0, 3]) == (9, 9, 9)
    assert tuple(buf[3, 3]) == (0, 0, 0)


def test_circle_outline_leaves_centre_empty():
    buf = np.zeros((21, 21, 3), dtype=np.uint8)
    primitives.draw_circle(buf, 10, 10, 8, (1, 2, 3), filled=False, thickness=2)
    assert tuple(buf[10, 10]) == (0, 0, 0)
    assert tuple(buf[10, 2]) == (1, 2, 3)


def test_circle_off_screen_is_ignored():
    buf = np.zeros((10, 10, 3), dtype=np.uint8)
    primitives.draw_circle(buf, -50, -50, 5, (255, 255, 255))
    assert not buf.any()


def test_text_width_matches_draw():
    buf = np.zeros((20, 200, 3), dtype=np.uint8)
    width, height = primitives.draw_text(buf, "HI 5!", 0, 0, (255, 255, 255), scale=2)
    assert width == primitives.text_width("HI 5!", scale=2)
    assert height == 10


def test_wrap_text_respects_width():
    lines = primitives.wrap_text("dinosaurs lived a very long time ago", 60)
    assert len(lines) > 1
    assert all(primitives.text_width(line) <= 60 or " " not in line for line in lines)
    assert " ".join(lines) == "dinosaurs lived a very long time ago"


def test_sprite_mirror():
    sprite = compile_sprite(["K."], {"K": (1, 1, 1)})
    buf = np.zeros((1, 2, 3), dtype=np.uint8)

    primitives.draw_sprite(buf, sprite.pixels, sprite.mask, 0, 0, 2, 1)
    assert tuple(buf[0, 0]) == (1, 1, 1)

    buf[:] = 0
    primitives.draw_sprite(buf, sprite.pixels, sprite.mask, 0, 0, 2, 1, mirror=True)
    assert tuple(buf[0, 1]) == (1, 1, 1)
    assert tuple(buf[0, 0]) == (0, 0, 0)


def test_sprites_compile():
    for sprite in (BUS, DINO, GEM, *OBSTACLE_SPRITES.values()):
        assert sprite.mask.any()
        assert sprite.pixels.shape == (sprite.height, sprite.width, 3)
    assert set(OBSTACLE_SPRITES) == set(ObstacleKind)


def test_bad_sprite_rows():
    with pytest.raises(ValueError):
        compile_sprite(["K.", "K"], {"K": (0, 0, 0)})
    with pytest.raises(ValueError):
        compile_sprite(["Z"], {"K": (0, 0, 0)})
