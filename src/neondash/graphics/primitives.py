"""Basic drawing primitives for the NEON DASH frame buffer.

All functions draw into a numpy array shaped (height, width, 3) of uint8 and
clip silently at the buffer edges. Coordinates may be floats; they are
rounded to the nearest pixel.
"""

from typing import Tuple, Optional, Sequence
import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, int, int]
Point = Tuple[float, float]
Buffer = NDArray[np.uint8]


def clear(buffer: Buffer, color: Color = (0, 0, 0)) -> None:
    """Clear buffer to a solid color."""
    buffer[:, :] = color


def wash(buffer: Buffer, color: Color, alpha: float) -> None:
    """Blend a translucent solid color over the whole buffer.

    Repeated every frame this leaves fading trails of whatever was drawn
    before.
    """
    if alpha >= 1.0:
        buffer[:, :] = color
        return
    tint = np.asarray(color, dtype=np.float32) * alpha
    blended = buffer.astype(np.float32) * (1.0 - alpha) + tint
    buffer[:, :] = blended.astype(np.uint8)


def _clip_box(
    buffer: Buffer, x: float, y: float, width: float, height: float
) -> Tuple[int, int, int, int]:
    h, w = buffer.shape[:2]
    x1 = max(0, min(int(round(x)), w))
    y1 = max(0, min(int(round(y)), h))
    x2 = max(0, min(int(round(x + width)), w))
    y2 = max(0, min(int(round(y + height)), h))
    return x1, y1, x2, y2


def _blend_region(region: NDArray, color: Color, alpha: float | NDArray) -> NDArray:
    src = np.asarray(color, dtype=np.float32)
    return (src * alpha + region.astype(np.float32) * (1.0 - alpha)).astype(np.uint8)


def draw_rect(
    buffer: Buffer,
    x: float,
    y: float,
    width: float,
    height: float,
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
        alpha: Opacity (0.0 to 1.0)
    """
    if alpha <= 0.0:
        return

    if not filled:
        t = thickness
        draw_rect(buffer, x, y, width, t, color, alpha=alpha)
        draw_rect(buffer, x, y + height - t, width, t, color, alpha=alpha)
        draw_rect(buffer, x, y + t, t, height - 2 * t, color, alpha=alpha)
        draw_rect(buffer, x + width - t, y + t, t, height - 2 * t, color, alpha=alpha)
        return

    x1, y1, x2, y2 = _clip_box(buffer, x, y, width, height)
    if x2 <= x1 or y2 <= y1:
        return

    if alpha >= 1.0:
        buffer[y1:y2, x1:x2] = color
    else:
        buffer[y1:y2, x1:x2] = _blend_region(buffer[y1:y2, x1:x2], color, alpha)


def draw_glow(
    buffer: Buffer,
    x: float,
    y: float,
    width: float,
    height: float,
    color: Color,
    radius: int = 20,
    strength: float = 0.35,
) -> None:
    """Additive soft halo around a rectangle.

    Falloff is linear in the distance from the rectangle edge, so the halo
    fades to nothing at ``radius`` pixels out.
    """
    if radius <= 0 or strength <= 0:
        return

    x1, y1, x2, y2 = _clip_box(buffer, x - radius, y - radius,
                               width + 2 * radius, height + 2 * radius)
    if x2 <= x1 or y2 <= y1:
        return

    ys = np.arange(y1, y2, dtype=np.float32)[:, None]
    xs = np.arange(x1, x2, dtype=np.float32)[None, :]
    dx = np.maximum(np.maximum(x - xs, xs - (x + width)), 0.0)
    dy = np.maximum(np.maximum(y - ys, ys - (y + height)), 0.0)
    dist = np.sqrt(dx * dx + dy * dy)
    falloff = np.clip(1.0 - dist / radius, 0.0, 1.0) * strength

    region = buffer[y1:y2, x1:x2].astype(np.float32)
    region += falloff[:, :, None] * np.asarray(color, dtype=np.float32)
    buffer[y1:y2, x1:x2] = np.clip(region, 0, 255).astype(np.uint8)


def draw_circle(
    buffer: Buffer,
    cx: float,
    cy: float,
    radius: float,
    color: Color,
    filled: bool = True,
    thickness: int = 1,
) -> None:
    """Draw a circle on the buffer.

    Args:
        buffer: Target numpy array (height, width, 3)
        cx: Center x coordinate
        cy: Center y coordinate
        radius: Circle radius in pixels
        color: RGB color tuple
        filled: If True, fill circle; if False, draw a ring of ``thickness``
        thickness: Ring width when not filled
    """
    x1, y1, x2, y2 = _clip_box(buffer, cx - radius - 1, cy - radius - 1,
                               2 * radius + 2, 2 * radius + 2)
    if x2 <= x1 or y2 <= y1:
        return

    y_indices, x_indices = np.ogrid[y1:y2, x1:x2]
    dist_sq = (x_indices + 0.5 - cx) ** 2 + (y_indices + 0.5 - cy) ** 2

    if filled:
        mask = dist_sq <= radius ** 2
    else:
        inner = max(0.0, radius - thickness)
        mask = (dist_sq <= radius ** 2) & (dist_sq >= inner ** 2)

    buffer[y1:y2, x1:x2][mask] = color


def draw_triangle(
    buffer: Buffer,
    points: Sequence[Point],
    color: Color,
) -> None:
    """Fill a triangle given three (x, y) vertices."""
    (ax, ay), (bx, by), (cx, cy) = points
    min_x, max_x = min(ax, bx, cx), max(ax, bx, cx)
    min_y, max_y = min(ay, by, cy), max(ay, by, cy)
    x1, y1, x2, y2 = _clip_box(buffer, min_x, min_y, max_x - min_x, max_y - min_y)
    if x2 <= x1 or y2 <= y1:
        return

    area = (bx - ax) * (cy - ay) - (by - ay) * (cx - ax)
    if area == 0:
        return

    ys, xs = np.mgrid[y1:y2, x1:x2]
    px = xs + 0.5
    py = ys + 0.5
    w0 = (bx - ax) * (py - ay) - (by - ay) * (px - ax)
    w1 = (cx - bx) * (py - by) - (cy - by) * (px - bx)
    w2 = (ax - cx) * (py - cy) - (ay - cy) * (px - cx)
    if area > 0:
        mask = (w0 >= 0) & (w1 >= 0) & (w2 >= 0)
    else:
        mask = (w0 <= 0) & (w1 <= 0) & (w2 <= 0)

    buffer[y1:y2, x1:x2][mask] = color


def draw_line(
    buffer: Buffer,
    x1: float,
    y1: float,
    x2: float,
    y2: float,
    color: Color,
    thickness: int = 1,
    alpha: float = 1.0,
) -> None:
    """Draw a straight line by sampling one point per pixel step.

    Args:
        buffer: Target numpy array (height, width, 3)
        x1, y1: Start point
        x2, y2: End point
        color: RGB color tuple
        thickness: Line thickness in pixels
        alpha: Opacity (0.0 to 1.0)
    """
    h, w = buffer.shape[:2]

    steps = int(max(abs(x2 - x1), abs(y2 - y1))) + 1
    xs = np.rint(np.linspace(x1, x2, steps)).astype(np.int64)
    ys = np.rint(np.linspace(y1, y2, steps)).astype(np.int64)

    if thickness > 1:
        offsets = np.arange(-(thickness // 2), (thickness + 1) // 2)
        ox, oy = np.meshgrid(offsets, offsets)
        xs = (xs[:, None] + ox.ravel()[None, :]).ravel()
        ys = (ys[:, None] + oy.ravel()[None, :]).ravel()

    inside = (xs >= 0) & (xs < w) & (ys >= 0) & (ys < h)
    xs, ys = xs[inside], ys[inside]
    if xs.size == 0:
        return

    if alpha >= 1.0:
        buffer[ys, xs] = color
    else:
        buffer[ys, xs] = _blend_region(buffer[ys, xs], color, alpha)


def text_size(text: str, scale: int = 1, font: Optional[dict] = None) -> Tuple[int, int]:
    """Measure text drawn with :func:`draw_text`."""
    if font is None:
        font = _get_default_font()

    width = 0
    for char in text:
        if char == ' ':
            width += 4 * scale
            continue
        char_data = font.get(char.upper(), font.get('?', []))
        char_width = len(char_data[0]) if char_data else 3
        width += (char_width + 1) * scale

    return max(0, width - scale), 5 * scale


def draw_text(
    buffer: Buffer,
    text: str,
    x: float,
    y: float,
    color: Color,
    font: Optional[dict] = None,
    scale: int = 1,
    alpha: float = 1.0,
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
        alpha: Opacity (0.0 to 1.0)

    Returns:
        Tuple of (width, height) of rendered text in pixels
    """
    if font is None:
        font = _get_default_font()

    cursor_x = int(round(x))
    top = int(round(y))

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
                if pixel:
                    draw_rect(
                        buffer,
                        cursor_x + col_idx * scale,
                        top + row_idx * scale,
                        scale,
                        scale,
                        color,
                        alpha=alpha,
                    )

        cursor_x += (len(char_data[0]) + 1) * scale

    return text_size(text, scale, font)


def draw_text_centered(
    buffer: Buffer,
    text: str,
    cx: float,
    cy: float,
    color: Color,
    scale: int = 1,
    alpha: float = 1.0,
) -> None:
    """Draw text centered on (cx, cy)."""
    width, height = text_size(text, scale)
    draw_text(buffer, text, cx - width / 2, cy - height / 2, color, scale=scale, alpha=alpha)


def _get_default_font() -> dict:
    """Return a simple 3x5 bitmap font for basic characters."""
    return _DEFAULT_FONT


# Each character is a list of rows, each row is a list of 0/1 pixels
_DEFAULT_FONT = {
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
    ':': [[0,0,0], [0,1,0], [0,0,0], [0,1,0], [0,0,0]],
    '-': [[0,0,0], [0,0,0], [1,1,1], [0,0,0], [0,0,0]],
    '<': [[0,0,1], [0,1,0], [1,0,0], [0,1,0], [0,0,1]],
    '>': [[1,0,0], [0,1,0], [0,0,1], [0,1,0], [1,0,0]],
    '/': [[0,0,1], [0,0,1], [0,1,0], [1,0,0], [1,0,0]],
}
