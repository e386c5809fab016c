"""Animated GIF export using the tile palette.

Frames are raw ``as_u8`` index buffers; delays are in hundredths of a second
as GIF stores them.
"""

from __future__ import annotations

import io
import os
from typing import List, Sequence, Tuple

from PIL import Image

from ..logging_utils import get_logger
from .tiles import COLOR_MAP, WALL

log = get_logger("dungeon.gif")

# (as_u8 pixel buffer, delay in 1/100 s)
Frame = Tuple[bytes, int]


def _image(width: int, height: int, pixels: bytes) -> Image.Image:
    img = Image.frombytes("P", (width, height), bytes(pixels))
    img.putpalette(COLOR_MAP)
    return img


def encode_gif(width: int, height: int, frames: Sequence[Frame], loop: bool = True) -> bytes:
    """Encode ``frames`` into GIF bytes; ``loop=False`` plays the animation once."""
    if not frames:
        raise ValueError("at least one frame is required")
    images: List[Image.Image] = [_image(width, height, pixels) for pixels, _ in frames]
    options = {
        "format": "GIF",
        "save_all": True,
        "append_images": images[1:],
        "duration": [delay * 10 for _, delay in frames],
        "optimize": False,
    }
    if loop:
        options["loop"] = 0
    buf = io.BytesIO()
    images[0].save(buf, **options)
    return buf.getvalue()


def pad_frame(width: int, height: int, pixels: bytes, canvas_width: int, canvas_height: int) -> bytes:
    """Place a floor buffer in the top-left corner of a larger wall-filled canvas."""
    if (width, height) == (canvas_width, canvas_height):
        return bytes(pixels)
    fill = WALL.as_u8()
    rows = []
    for row in range(canvas_height):
        if row < height:
            rows.append(bytes(pixels[row * width : (row + 1) * width]) + bytes([fill]) * (canvas_width - width))
        else:
            rows.append(bytes([fill]) * canvas_width)
    return b"".join(rows)


def write_floor_gif(path: str, width: int, height: int, frames: Sequence[Frame]) -> bool:
    """Write a single-play build animation; I/O failures are logged, not raised."""
    try:
        data = encode_gif(width, height, frames, loop=False)
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(path, "wb") as fh:
            fh.write(data)
    except OSError as exc:
        log.error(event="gif_write_failed", path=path, error=str(exc))
        return False
    log.debug(event="gif_written", path=path, frames=len(frames))
    return True


__all__ = ["Frame", "encode_gif", "pad_frame", "write_floor_gif"]
