"""
Configuration constants for the D2R sprite codec.
"""


class Config:
    """Configuration constants for the D2R sprite codec."""

    # Container signatures (same tag, two capitalisations seen in game files)
    MAGIC_TAGS = (b'SpA1', b'SPa1')

    # Header geometry
    HEADER_SIZE = 0x28  # Pixel data always starts here
    MIN_HEADER_SIZE = 0x28
    MAX_DIMENSION = 16384

    # Older single-frame header variant (u16 width/height at 6/8)
    LEGACY_MIN_HEADER_SIZE = 16
    LEGACY_MAX_DIMENSION = 4096

    # Missing pixels are zero-filled unless strict reads are requested
    STRICT_PIXEL_READS = False

    # Files
    SPRITE_EXTENSION = '.sprite'
    BACKUP_SUFFIX = '.backup'

    # Animated preview frame delay in milliseconds
    FRAME_DURATION = 100

    DEBUG_MODE = False
