"""Basic drawing primitives for the DinoBus frame buffer."""

from typing import List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, int, int]
Point = Tuple[int, int]
Buffer = NDArray[np.uint8]

GLYPH_WIDTH = 3
GLYPH_HEIGHT = 5


def fill(buffer: Buffer, color: Color) -> None:
    """Fill entire buffer with color."""
    buffer[:, :] = color


def _clip(buffer: Buffer, x: int, y: int, width: int, height: int) -> Tuple[int, int, int, int]:
    h, w = buffer.shape[:2]
    return (
        max(0, min(x, w)),
        max(0, min(y, h)),
        max(0, min(x + width, w)),
        max(0, min(y + height, h)),
    )


def _blend(region: Buffer, color, alpha: float) -> Buffer:
    blended = np.asarray(color, dtype=np.float32) * alpha + region.astype(np.float32) * (1 - alpha)
    return blended.astype(np.uint8)


def draw_rect(
    buffer: Buffer,
    x: int,
    y: int,
    width: int,
    height: int,
    color: Color,
    filled: bool = True,
    thickness: int = 1,
    alpha: float = 1.0,
) -> None:
    """Draw a rectangle on the buffer.

    Args:
        buffer: Target numpy array (height, width, 3)
        x: Left edge x coordinate
        y: Top edge y coordinate
        width: Rectangle width
        height: Rectangle height
        color: RGB color tuple
        filled: If True, fill rectangle; if False, draw outline only
        thickness: Line thickness for outline (when filled=False)
        alpha: Opacity for filled rectangles (0.0 to 1.0)
    """
    x, y, width, height = int(x), int(y), int(width), int(height)
    x1, y1, x2, y2 = _clip(buffer, x, y, width, height)
    if x2 <= x1 or y2 <= y1:
        return

    if filled:
        if alpha >= 1.0:
            buffer[y1:y2, x1:x2] = color
        elif alpha > 0.0:
            buffer[y1:y2, x1:x2] = _blend(buffer[y1:y2, x1:x2], color, alpha)
        return

    for t in range(thickness):
        if y1 + t < y2:
            buffer[y1 + t, x1:x2] = color
        if y2 - 1 - t >= y1:
            buffer[y2 - 1 - t, x1:x2] = color
        if x1 + t < x2:
            buffer[y1:y2, x1 + t] = color
        if x2 - 1 - t >= x1:
            buffer[y1:y2, x2 - 1 - t] = color


def draw_circle(
    buffer: Buffer,
    cx: int,
    cy: int,
    radius: int,
    color: Color,
    filled: bool = True,
    thickness: int = 1,
    alpha: float = 1.0,
) -> None:
    """Draw a circle on the buffer.

    Only the circle's bounding box is examined, so small circles stay cheap
    on a large frame.

    Args:
        buffer: Target numpy array (height, width, 3)
        cx: Center x coordinate
        cy: Center y coordinate
        radius: Circle radius in pixels
        color: RGB color tuple
        filled: If True, fill circle; if False, draw a ring ``thickness`` wide
        thickness: Ring width (when filled=False)
        alpha: Opacity (0.0 to 1.0)
    """
    cx, cy, radius = int(cx), int(cy), int(radius)
    if radius <= 0 or alpha <= 0.0:
        return

    x1, y1, x2, y2 = _clip(buffer, cx - radius, cy - radius, 2 * radius + 1, 2 * radius + 1)
    if x2 <= x1 or y2 <= y1:
        return

    ys, xs = np.ogrid[y1:y2, x1:x2]
    dist_sq = (xs - cx) ** 2 + (ys - cy) ** 2
    mask = dist_sq <= radius ** 2
    if not filled:
        inner = max(0, radius - thickness)
        mask &= dist_sq > inner ** 2

    region = buffer[y1:y2, x1:x2]
    if alpha >= 1.0:
        region[mask] = color
    else:
        region[mask] = _blend(region[mask], color, alpha)


def draw_line(
    buffer: Buffer,
    x1: int,
    y1: int,
    x2: int,
    y2: int,
    color: Color,
    thickness: int = 1,
) -> None:
    """Draw a line using Bresenham's algorithm.

    Args:
        buffer: Target numpy array (height, width, 3)
        x1, y1: Start point
        x2, y2: End point
        color: RGB color tuple
        thickness: Line thickness in pixels
    """
    h, w = buffer.shape[:2]
    x1, y1, x2, y2 = int(x1), int(y1), int(x2), int(y2)

    dx = abs(x2 - x1)
    dy = abs(y2 - y1)
    sx = 1 if x1 < x2 else -1
    sy = 1 if y1 < y2 else -1
    err = dx - dy

    x, y = x1, y1

    while True:
        for tx in range(-thickness // 2, (thickness + 1) // 2):
            for ty in range(-thickness // 2, (thickness + 1) // 2):
                px, py = x + tx, y + ty
                if 0 <= px < w and 0 <= py < h:
                    buffer[py, px] = color

        if x == x2 and y == y2:
            break

        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x += sx
        if e2 < dx:
            err += dx
            y += sy


def text_width(text: str, scale: int = 1, font: Optional[dict] = None) -> int:
    """Width in pixels that draw_text would use for ``text``."""
    if font is None:
        font = _get_default_font()

    width = 0
    for char in text:
        char_data = font.get(char.upper(), font.get('?'))
        if char == ' ' or not char_data:
            width += 4 * scale
        else:
            width += (len(char_data[0]) + 1) * scale
    return width


def draw_text(
    buffer: Buffer,
    text: str,
    x: int,
    y: int,
    color: Color,
    font: Optional[dict] = None,
    scale: int = 1,
) -> Tuple[int, int]:
    """Draw text using a bitmap font.

    Args:
        buffer: Target numpy array (height, width, 3)
        text: Text string to draw
        x: Starting x coordinate
        y: Starting y coordinate
        color: RGB color tuple
        font: Bitmap font dictionary (char -> 2D array). Uses built-in if None.
        scale: Scale factor for font size

    Returns:
        Tuple of (width, height) of rendered text in pixels
    """
    if font is None:
        font = _get_default_font()

    h, w = buffer.shape[:2]
    x, y = int(x), int(y)
    cursor_x = x

    for char in text:
        if char == ' ':
            cursor_x += 4 * scale
            continue

        char_data = font.get(char.upper(), font.get('?', []))
        if not char_data:
            cursor_x += 4 * scale
            continue

        for row_idx, row in enumerate(char_data):
            for col_idx, pixel in enumerate(row):
                if not pixel:
                    continue
                px = cursor_x + col_idx * scale
                py = y + row_idx * scale
                bx1, by1 = max(0, px), max(0, py)
                bx2, by2 = min(w, px + scale), min(h, py + scale)
                if bx2 > bx1 and by2 > by1:
                    buffer[by1:by2, bx1:bx2] = color

        cursor_x += (len(char_data[0]) + 1) * scale

    return cursor_x - x, GLYPH_HEIGHT * scale


def draw_centered_text(
    buffer: Buffer,
    text: str,
    cy: int,
    color: Color,
    scale: int = 1,
    cx: Optional[int] = None,
    shadow: Optional[Color] = None,
) -> None:
    """Draw one line of text centred horizontally on ``cx`` (default: mid-frame)."""
    if cx is None:
        cx = buffer.shape[1] // 2
    x = int(cx - text_width(text, scale) / 2)
    y = int(cy - GLYPH_HEIGHT * scale / 2)
    if shadow is not None:
        draw_text(buffer, text, x + scale, y + scale, shadow, scale=scale)
    draw_text(buffer, text, x, y, color, scale=scale)


def wrap_text(text: str, max_width: int, scale: int = 1) -> List[str]:
    """Greedy word wrap so every line fits in ``max_width`` pixels.

    A single word wider than the limit gets a line of its own.
    """
    lines: List[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}" if current else word
        if current and text_width(candidate, scale) > max_width:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines


def draw_sprite(
    buffer: Buffer,
    pixels: Buffer,
    mask: NDArray[np.bool_],
    x: int,
    y: int,
    width: int,
    height: int,
    mirror: bool = False,
    alpha: float = 1.0,
) -> None:
    """Draw a pixel-art sprite scaled (nearest neighbour) into a box.

    The sprite keeps its aspect ratio and is centred in the box.

    Args:
        buffer: Target numpy array (height, width, 3)
        pixels: Sprite colors (sh, sw, 3)
        mask: Opaque pixels (sh, sw)
        x, y: Top-left of the target box
        width, height: Size of the target box
        mirror: Flip horizontally
        alpha: Global opacity (0.0 to 1.0)
    """
    if width <= 0 or height <= 0 or alpha <= 0.0:
        return

    sh, sw = mask.shape
    scale = min(width / sw, height / sh)
    dw, dh = max(1, int(sw * scale)), max(1, int(sh * scale))
    dx = int(x + (width - dw) / 2)
    dy = int(y + (height - dh) / 2)

    x1, y1, x2, y2 = _clip(buffer, dx, dy, dw, dh)
    if x2 <= x1 or y2 <= y1:
        return

    cols = ((np.arange(x1, x2) - dx) * sw // dw).clip(0, sw - 1)
    rows = ((np.arange(y1, y2) - dy) * sh // dh).clip(0, sh - 1)
    if mirror:
        cols = sw - 1 - cols

    src = pixels[rows[:, None], cols[None, :]]
    src_mask = mask[rows[:, None], cols[None, :]]
    region = buffer[y1:y2, x1:x2]

    if alpha >= 1.0:
        region[src_mask] = src[src_mask]
    else:
        blended = src[src_mask].astype(np.float32) * alpha + region[src_mask].astype(np.float32) * (1 - alpha)
        region[src_mask] = blended.astype(np.uint8)


def _get_default_font() -> dict:
    """Return a simple 3x5 bitmap font for basic characters."""
    return _FONT


# Each character is a list of rows, each row is a list of 0/1 pixels
_FONT = {
    'A': [[0,1,0], [1,0,1], [1,1,1], [1,0,1], [1,0,1]],
    'B': [[1,1,0], [1,0,1], [1,1,0], [1,0,1], [1,1,0]],
    'C': [[0,1,1], [1,0,0], [1,0,0], [1,0,0], [0,1,1]],
    'D': [[1,1,0], [1,0,1], [1,0,1], [1,0,1], [1,1,0]],
    'E': [[1,1,1], [1,0,0], [1,1,0], [1,0,0], [1,1,1]],
    'F': [[1,1,1], [1,0,0], [1,1,0], [1,0,0], [1,0,0]],
    'G': [[0,1,1], [1,0,0], [1,0,1], [1,0,1], [0,1,1]],
    'H': [[1,0,1], [1,0,1], [1,1,1], [1,0,1], [1,0,1]],
    'I': [[1,1,1], [0,1,0], [0,1,0], [0,1,0], [1,1,1]],
    'J': [[0,0,1], [0,0,1], [0,0,1], [1,0,1], [0,1,0]],
    'K': [[1,0,1], [1,0,1], [1,1,0], [1,0,1], [1,0,1]],
    'L': [[1,0,0], [1,0,0], [1,0,0], [1,0,0], [1,1,1]],
    'M': [[1,0,1], [1,1,1], [1,0,1], [1,0,1], [1,0,1]],
    'N': [[1,0,1], [1,1,1], [1,1,1], [1,0,1], [1,0,1]],
    'O': [[0,1,0], [1,0,1], [1,0,1], [1,0,1], [0,1,0]],
    'P': [[1,1,0], [1,0,1], [1,1,0], [1,0,0], [1,0,0]],
    'Q': [[0,1,0], [1,0,1], [1,0,1], [1,1,1], [0,1,1]],
    'R': [[1,1,0], [1,0,1], [1,1,0], [1,0,1], [1,0,1]],
    'S': [[0,1,1], [1,0,0], [0,1,0], [0,0,1], [1,1,0]],
    'T': [[1,1,1], [0,1,0], [0,1,0], [0,1,0], [0,1,0]],
    'U': [[1,0,1], [1,0,1], [1,0,1], [1,0,1], [0,1,0]],
    'V': [[1,0,1], [1,0,1], [1,0,1], [0,1,0], [0,1,0]],
    'W': [[1,0,1], [1,0,1], [1,0,1], [1,1,1], [1,0,1]],
    'X': [[1,0,1], [1,0,1], [0,1,0], [1,0,1], [1,0,1]],
    'Y': [[1,0,1], [1,0,1], [0,1,0], [0,1,0], [0,1,0]],
    'Z': [[1,1,1], [0,0,1], [0,1,0], [1,0,0], [1,1,1]],
    '0': [[0,1,0], [1,0,1], [1,0,1], [1,0,1], [0,1,0]],
    '1': [[0,1,0], [1,1,0], [0,1,0], [0,1,0], [1,1,1]],
    '2': [[0,1,0], [1,0,1], [0,0,1], [0,1,0], [1,1,1]],
    '3': [[1,1,0], [0,0,1], [0,1,0], [0,0,1], [1,1,0]],
    '4': [[1,0,1], [1,0,1], [1,1,1], [0,0,1], [0,0,1]],
    '5': [[1,1,1], [1,0,0], [1,1,0], [0,0,1], [1,1,0]],
    '6': [[0,1,1], [1,0,0], [1,1,0], [1,0,1], [0,1,0]],
    '7': [[1,1,1], [0,0,1], [0,1,0], [0,1,0], [0,1,0]],
    '8': [[0,1,0], [1,0,1], [0,1,0], [1,0,1], [0,1,0]],
    '9': [[0,1,0], [1,0,1], [0,1,1], [0,0,1], [1,1,0]],
    '?': [[0,1,0], [1,0,1], [0,0,1], [0,0,0], [0,1,0]],
    '!': [[0,1,0], [0,1,0], [0,1,0], [0,0,0], [0,1,0]],
    '.': [[0,0,0], [0,0,0], [0,0,0], [0,0,0], [0,1,0]],
    ',': [[0,0,0], [0,0,0], [0,0,0], [0,1,0], [1,0,0]],
    ':': [[0,0,0], [0,1,0], [0,0,0], [0,1,0], [0,0,0]],
    '-': [[0,0,0], [0,0,0], [1,1,1], [0,0,0], [0,0,0]],
    '+': [[0,0,0], [0,1,0], [1,1,1], [0,1,0], [0,0,0]],
    '*': [[0,0,0], [1,0,1], [0,1,0], [1,0,1], [0,0,0]],
    '#': [[1,0,1], [1,1,1], [1,0,1], [1,1,1], [1,0,1]],
    "'": [[0,1,0], [0,1,0], [0,0,0], [0,0,0], [0,0,0]],
    '(': [[0,0,1], [0,1,0], [0,1,0], [0,1,0], [0,0,1]],
    ')': [[1,0,0], [0,1,0], [0,1,0], [0,1,0], [1,0,0]],
    '/': [[0,0,1], [0,0,1], [0,1,0], [1,0,0], [1,0,0]],
}
