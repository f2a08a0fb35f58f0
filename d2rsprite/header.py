from enum import Enum
from struct import Struct
from typing import Union

from .config import Config
from .errors import BadMagic, InvalidDimensions, TooSmall

BytesLike = Union[bytes, bytearray, memoryview]


class HeaderLayout(Enum):
    """Which of the two known header variants a sprite was read with."""
    STRIP = "strip"  # i32 width/height at 8/12, frame count at 20
    LEGACY = "legacy"  # u16 width/height at 6/8, single frame only


class SpriteHeader(object):
    header_format = (
        '<4s'  # Magic ('SpA1' or 'SPa1')
        + 'H'  # Version
        + '2x'  # Unknown, preserved on re-encode
        + 'i'  # Total width of the frame strip
        + 'i'  # Frame height
        + '4x'  # Unknown, preserved on re-encode
        + 'I'  # Frame count (0 and 1 both mean a single frame)
    )
    legacy_header_format = (
        '<4s'  # Magic
        + 'H'  # Version
        + 'H'  # Width
        + 'H'  # Height
    )
    header_size = Config.HEADER_SIZE

    @property
    def magic(self) -> str:
        return self._magic

    @property
    def version(self) -> int:
        return self._version

    @property
    def total_width(self) -> int:
        """Width of the whole strip, i.e. the sum of all frame widths."""
        return self._total_width

    @property
    def frame_height(self) -> int:
        return self._frame_height

    @property
    def frame_count(self) -> int:
        """Frame count exactly as stored in the header."""
        return self._frame_count

    @property
    def frames(self) -> int:
        """Effective number of frames (a stored 0 or 1 means one frame)."""
        return self._frame_count if self._frame_count > 1 else 1

    @property
    def frame_width(self) -> int:
        """Width of one frame. Remainder columns of an uneven split are dropped."""
        if self.frames > 1:
            return self._total_width // self.frames
        return self._total_width

    @property
    def stride(self) -> int:
        """Bytes per scanline of the shared strip."""
        return self._total_width * 4

    @property
    def payload_size(self) -> int:
        return self._total_width * self._frame_height * 4

    @property
    def frame_size(self) -> int:
        return self.frame_width * self._frame_height * 4

    @property
    def pixel_data_offset(self) -> int:
        return self.header_size

    @property
    def layout(self) -> HeaderLayout:
        return self._layout

    def __init__(
        self,
        magic: Union[str, bytes],
        version: int,
        total_width: int,
        frame_height: int,
        frame_count: int = 1,
        layout: HeaderLayout = HeaderLayout.STRIP,
    ):
        """
        Initialize SpriteHeader.

        Args:
            magic: Four character signature, as str or ASCII bytes
            version: Format version (informational, written back verbatim)
            total_width: Width of the whole strip in pixels
            frame_height: Height shared by every frame
            frame_count: Frame count as stored in the file
            layout: Header variant the values were read from
        """
        if isinstance(magic, (bytes, bytearray)):
            magic = bytes(magic).decode('ascii')
        self._magic = magic
        self._version = version
        self._total_width = total_width
        self._frame_height = frame_height
        self._frame_count = frame_count
        self._layout = layout

    def _key(self):
        return (
            self._magic,
            self._version,
            self._total_width,
            self._frame_height,
            self._frame_count,
            self._layout,
        )

    def __eq__(self, other):
        if not isinstance(other, SpriteHeader):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        return (
            f"SpriteHeader(magic={self._magic!r}, version={self._version}, "
            f"total_width={self._total_width}, frame_height={self._frame_height}, "
            f"frame_count={self._frame_count}, layout={self._layout.value})"
        )


def _check_magic(magic: bytes) -> None:
    if magic not in Config.MAGIC_TAGS:
        raise BadMagic(magic, Config.MAGIC_TAGS)


def _check_dimensions(width: int, height: int, limit: int) -> None:
    if width <= 0 or height <= 0 or width > limit or height > limit:
        raise InvalidDimensions(width, height, limit)


def parse_header(
    data: BytesLike,
    min_size: int = None,
    max_dimension: int = None,
) -> SpriteHeader:
    """
    Parse and validate the 40 byte header of a frame-strip sprite.

    Args:
        data: Raw container bytes (only the header region is read)
        min_size: Override for Config.MIN_HEADER_SIZE
        max_dimension: Override for Config.MAX_DIMENSION

    Returns:
        SpriteHeader with the effective frame count and frame width derived

    Raises:
        TooSmall: Buffer shorter than the minimum header size
        BadMagic: Unknown signature
        InvalidDimensions: Width or height outside 1..max_dimension
    """
    if min_size is None:
        min_size = Config.MIN_HEADER_SIZE
    if max_dimension is None:
        max_dimension = Config.MAX_DIMENSION

    header_struct = Struct(SpriteHeader.header_format)
    required = max(min_size, header_struct.size)
    if len(data) < required:
        raise TooSmall(len(data), required)

    (
        magic,
        version,
        total_width,
        frame_height,
        frame_count,
    ) = header_struct.unpack_from(data, 0)

    _check_magic(magic)
    _check_dimensions(total_width, frame_height, max_dimension)

    return SpriteHeader(magic, version, total_width, frame_height, frame_count)


def parse_legacy_header(data: BytesLike) -> SpriteHeader:
    """
    Parse the older single-frame header variant.

    Width and height are u16 at offsets 6 and 8 and the bound is tighter
    (Config.LEGACY_MAX_DIMENSION). The result always describes one frame.
    """
    header_struct = Struct(SpriteHeader.legacy_header_format)
    required = max(Config.LEGACY_MIN_HEADER_SIZE, header_struct.size)
    if len(data) < required:
        raise TooSmall(len(data), required)

    magic, version, width, height = header_struct.unpack_from(data, 0)

    _check_magic(magic)
    _check_dimensions(width, height, Config.LEGACY_MAX_DIMENSION)

    return SpriteHeader(magic, version, width, height, 1, layout=HeaderLayout.LEGACY)
