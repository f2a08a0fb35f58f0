"""BGRA <-> RGBA channel reordering.

Swapping red and blue is its own inverse, so both directions share one
implementation; the two names exist to make call sites read correctly.
"""

from typing import Union

import numpy as np

BytesLike = Union[bytes, bytearray, memoryview]


def _swap_red_blue(buf: Union[BytesLike, np.ndarray]) -> Union[bytes, np.ndarray]:
    if isinstance(buf, np.ndarray):
        if buf.shape[-1] != 4:
            raise ValueError(f"Pixel array must have 4 channels, got shape {buf.shape}")
        return buf[..., [2, 1, 0, 3]]

    if len(buf) % 4 != 0:
        raise ValueError(f"Pixel buffer length {len(buf)} is not a multiple of 4")
    pixels = np.frombuffer(buf, dtype=np.uint8).reshape(-1, 4)
    return pixels[:, [2, 1, 0, 3]].tobytes()


def bgra_to_rgba(buf):
    """
    Convert stored (BGRA) pixels to presentation (RGBA) order.

    Accepts a bytes-like buffer (returns bytes) or a uint8 array whose last
    axis holds the 4 channels (returns a new array).
    """
    return _swap_red_blue(buf)


def rgba_to_bgra(buf):
    """Convert presentation (RGBA) pixels to stored (BGRA) order."""
    return _swap_red_blue(buf)
