"""Pixel-art sprites drawn as palette strings.

Each row is a string of palette keys; ``.`` is transparent. Sprites are
compiled once at import into an RGB array plus an opacity mask.
"""

from dataclasses import dataclass
from typing import Dict, Sequence

import numpy as np
from numpy.typing import NDArray

from dinobus.game.entities import ObstacleKind
from dinobus.graphics.primitives import Color

PALETTE: Dict[str, Color] = {
    "Y": (255, 200, 40),    # bus yellow
    "W": (200, 235, 255),   # window / highlight
    "L": (255, 250, 200),   # headlight
    "K": (40, 40, 40),      # tyres, outlines
    "H": (150, 150, 150),   # hubcap
    "G": (76, 175, 80),     # dino green
    "D": (46, 110, 50),     # dino dark green
    "E": (255, 255, 255),   # eye / teeth
    "S": (128, 128, 128),   # stone
    "s": (170, 170, 170),   # stone highlight
    "d": (90, 90, 90),      # stone shadow
    "O": (255, 120, 20),    # cone orange
    "w": (250, 250, 250),   # cone stripe
    "F": (240, 190, 150),   # skin
    "B": (60, 110, 220),    # shirt
    "P": (60, 60, 90),      # trousers
    "C": (0, 220, 255),     # gem cyan
    "c": (180, 250, 255),   # gem shine
}


@dataclass(frozen=True)
class Sprite:
    pixels: NDArray[np.uint8]
    mask: NDArray[np.bool_]

    @property
    def width(self) -> int:
        return self.mask.shape[1]

    @property
    def height(self) -> int:
        return self.mask.shape[0]


def compile_sprite(rows: Sequence[str], palette: Dict[str, Color] = PALETTE) -> Sprite:
    """Turn palette rows into a Sprite.

    Raises:
        ValueError: Rows of unequal width or an unknown palette key.
    """
    width = len(rows[0])
    pixels = np.zeros((len(rows), width, 3), dtype=np.uint8)
    mask = np.zeros((len(rows), width), dtype=bool)

    for y, row in enumerate(rows):
        if len(row) != width:
            raise ValueError(f"Sprite row {y} is {len(row)} wide, expected {width}")
        for x, key in enumerate(row):
            if key == ".":
                continue
            if key not in palette:
                raise ValueError(f"Unknown palette key {key!r}")
            pixels[y, x] = palette[key]
            mask[y, x] = True

    return Sprite(pixels, mask)


BUS = compile_sprite([
    "..YYYYYYYYYYYY..",
    ".YYYYYYYYYYYYYY.",
    "YYWWWYWWWYWWWYWW",
    "YYWWWYWWWYWWWYWW",
    "YYYYYYYYYYYYYYYY",
    "YYYYYYYYYYYYYYYL",
    "KKKKKKKKKKKKKKKK",
    "YYKKKYYYYYYKKKYY",
    "..KHK......KHK..",
])

# Faces left; the renderer mirrors it so it runs to the right
DINO = compile_sprite([
    ".GGGGG......",
    "GGKGGGG.....",
    "GGGGGGG.....",
    "EGEGGGG.....",
    "....GGGG...G",
    "...GGGGGG.GG",
    "..GGGGGGGGGG",
    ".G.GGDGGGGG.",
    "...GGDGGGG..",
    "....GG.GG...",
    "....G..G....",
    "...DD.DD....",
])

ROCK = compile_sprite([
    "..SSSS..",
    ".SSsSSS.",
    "SSssSSSS",
    "SSSSSSdS",
    "SSSSSddS",
    ".dddddd.",
])

CONE = compile_sprite([
    "...OO...",
    "...OO...",
    "..wwww..",
    "..OOOO..",
    ".OOOOOO.",
    ".wwwwww.",
    "OOOOOOOO",
    "KKKKKKKK",
])

PEDESTRIAN = compile_sprite([
    "..FF..",
    "..FF..",
    ".BBBB.",
    "BBBBBB",
    "F.BB.F",
    "..BB..",
    "..PP..",
    ".P..P.",
    ".P..P.",
    "KK..KK",
])

GEM = compile_sprite([
    "..CCCC..",
    ".CcCCcC.",
    "CCCCCCCC",
    ".CCCCCC.",
    "..CCCC..",
    "...CC...",
])

OBSTACLE_SPRITES: Dict[ObstacleKind, Sprite] = {
    ObstacleKind.ROCK: ROCK,
    ObstacleKind.CONE: CONE,
    ObstacleKind.PEDESTRIAN: PEDESTRIAN,
}
