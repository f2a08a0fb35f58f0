"""Frame geometry of the packed strip.

All frames sit side by side in one horizontal strip. A scanline is
``total_width * 4`` bytes long for every frame, so a frame is a vertical
slice of the strip rather than a contiguous block:

    offset(f, x, y) = 40 + y * 4 * total_width + x * 4 + f * frame_width * 4
"""

from typing import Union

import numpy as np

from .header import SpriteHeader

BytesLike = Union[bytes, bytearray, memoryview]


def frame_columns(header: SpriteHeader) -> int:
    """Number of columns read for one frame."""
    return header.frame_width if header.frames > 1 else header.total_width


def check_frame_index(header: SpriteHeader, frame_index: int) -> None:
    if frame_index < 0 or frame_index >= header.frames:
        raise IndexError(
            f"Frame index {frame_index} out of range (sprite has {header.frames} frames)"
        )


def pixel_offset(header: SpriteHeader, frame_index: int, x: int, y: int) -> int:
    """Byte offset of pixel (x, y) of a frame inside the container."""
    return (
        header.pixel_data_offset
        + y * header.stride
        + x * 4
        + frame_index * header.frame_width * 4
    )


def frame_offsets(header: SpriteHeader, frame_index: int) -> np.ndarray:
    """
    Byte offsets of every pixel of a frame.

    Returns:
        int64 array of shape (frame_height, columns), row-major
    """
    rows = np.arange(header.frame_height, dtype=np.int64)[:, None]
    cols = np.arange(frame_columns(header), dtype=np.int64)[None, :]
    base = header.pixel_data_offset + frame_index * header.frame_width * 4
    return base + rows * header.stride + cols * 4


def available_pixels(header: SpriteHeader, size: int) -> int:
    """Number of whole 4-byte pixels present after the header in a buffer of ``size`` bytes."""
    return max(0, (size - header.pixel_data_offset) // 4)


def missing_pixels(header: SpriteHeader, frame_index: int, size: int) -> int:
    """How many pixels of a frame fall (partly) beyond the end of the buffer."""
    offsets = frame_offsets(header, frame_index)
    return int(np.count_nonzero(offsets + 3 >= size))


def strip_bytes(data: BytesLike, header: SpriteHeader) -> np.ndarray:
    """
    View the pixel payload as the full strip, in stored channel order.

    Pixels beyond the end of ``data`` are zero (transparent black). A pixel
    that is only partly present counts as missing.

    Returns:
        uint8 array of shape (frame_height, total_width, 4)
    """
    total = header.total_width * header.frame_height
    count = min(available_pixels(header, len(data)), total)

    strip = np.zeros(total * 4, dtype=np.uint8)
    if count:
        strip[:count * 4] = np.frombuffer(
            data, dtype=np.uint8, count=count * 4, offset=header.pixel_data_offset
        )
    return strip.reshape(header.frame_height, header.total_width, 4)


def frame_slice(strip: np.ndarray, header: SpriteHeader, frame_index: int) -> np.ndarray:
    """The columns of ``strip`` that belong to one frame."""
    start = frame_index * header.frame_width
    return strip[:, start:start + frame_columns(header)]
