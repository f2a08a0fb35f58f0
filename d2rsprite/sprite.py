import os
from typing import List, Optional, Union

import numpy as np
from PIL import Image

from .channels import bgra_to_rgba, rgba_to_bgra
from .config import Config
from .errors import EmptyFrame
from .header import SpriteHeader, parse_header
from .sprite_decoder import decode_frame_array, decode_image_array
from .sprite_encoder import encode


class Sprite(object):
    """
    A D2R sprite container held in memory.

    The raw bytes are kept as read; frames are decoded from them on every
    access, so a Sprite never goes stale and never needs invalidating.
    Editing produces a new Sprite (see replace_image).
    """

    @property
    def header(self) -> SpriteHeader:
        return self._header

    @property
    def data(self) -> bytes:
        """Raw container bytes."""
        return self._data

    @property
    def total_frames(self) -> int:
        return self._header.frames

    @property
    def width(self) -> int:
        """Width of the whole strip."""
        return self._header.total_width

    @property
    def height(self) -> int:
        return self._header.frame_height

    @property
    def frame_width(self) -> int:
        return self._header.frame_width

    @property
    def frames_data(self) -> List[np.ndarray]:
        """RGBA arrays, one per frame, each of shape (height, frame_width, 4)."""
        return [self.get_frame_array(i) for i in range(self.total_frames)]

    def __init__(self, data: bytes, header: Optional[SpriteHeader] = None):
        """
        Initialize Sprite.

        Args:
            data: Raw container bytes
            header: Already parsed header (parsed from data when omitted)

        Raises:
            SpriteError: data does not start with a valid sprite header
        """
        self._data = bytes(data)
        self._header = header if header is not None else parse_header(self._data)

    @classmethod
    def from_file(cls, file_path: str) -> 'Sprite':
        with open(file_path, 'rb') as fp:
            return cls(fp.read())

    def to_bytes(self) -> bytes:
        return self._data

    def get_frame_array(self, frame_index: int) -> np.ndarray:
        """RGBA array of one frame (0-indexed)."""
        return bgra_to_rgba(decode_frame_array(self._data, self._header, frame_index))

    def get_frame_image(
        self,
        frame_index: int,
        scale: Union[int, float] = 1,
        target_width: int = None,
        target_height: int = None,
    ) -> Image:
        """
        Get Pillow Image of a frame.

        Args:
            frame_index: Frame index (0-indexed)
            scale: Optional scale factor
            target_width: Optional target width
            target_height: Optional target height

        Returns:
            PIL Image in RGBA mode

        Raises:
            IndexError: If frame_index is out of range
            EmptyFrame: The frame is 0 pixels wide (more frames than strip columns)
        """
        frame = self.get_frame_array(frame_index)
        if frame.shape[1] == 0:
            raise EmptyFrame(frame_index, self.width, self.total_frames)
        img = Image.fromarray(frame)
        return self._resize(
            img, scale=scale, target_width=target_width, target_height=target_height
        )

    def get_image(
        self,
        scale: Union[int, float] = 1,
        target_width: int = None,
        target_height: int = None,
    ) -> Image:
        """Pillow Image of the whole strip, all frames side by side."""
        img = Image.fromarray(decode_image_array(self._data, self._header))
        return self._resize(
            img, scale=scale, target_width=target_width, target_height=target_height
        )

    def _resize(
        self,
        img: Image,
        scale: Union[int, float] = 1,
        target_width: int = None,
        target_height: int = None,
    ) -> Image:
        if target_width is not None and target_height is not None:
            return img.resize((target_width, target_height), Image.NEAREST)
        elif target_width is not None:
            new_height = max(1, int(img.height * target_width / img.width))
            return img.resize((target_width, new_height), Image.NEAREST)
        elif target_height is not None:
            new_width = max(1, int(img.width * target_height / img.height))
            return img.resize((new_width, target_height), Image.NEAREST)
        elif scale != 1:
            new_width = max(1, int(img.width * scale))
            new_height = max(1, int(img.height * scale))
            return img.resize((new_width, new_height), Image.NEAREST)
        return img

    def save_to_png(self, output_path: str, scale: Union[int, float] = 1) -> None:
        """Save the whole strip as one PNG."""
        self.get_image(scale=scale).save(output_path, format='PNG')

    def save_frames_to_png(
        self,
        output_dir: str,
        base_name: str = 'frame',
        scale: Union[int, float] = 1,
    ) -> List[str]:
        """
        Save every frame as its own PNG.

        Files are named ``{base_name}_{index:03d}.png``.

        Returns:
            Paths of the written files, in frame order
        """
        os.makedirs(output_dir, exist_ok=True)
        paths = []
        for frame_index in range(self.total_frames):
            path = os.path.join(output_dir, f"{base_name}_{frame_index:03d}.png")
            self.get_frame_image(frame_index, scale=scale).save(path, format='PNG')
            paths.append(path)
        return paths

    def save_to_webp(
        self,
        output_path: str,
        duration: int = None,
        scale: Union[int, float] = 1,
        target_width: int = None,
        target_height: int = None,
    ) -> None:
        """
        Save all frames as a lossless animated WebP.

        Args:
            output_path: Path to save WebP file
            duration: Frame delay in milliseconds (default: Config.FRAME_DURATION)
            scale: Optional scale factor
            target_width: Optional target width
            target_height: Optional target height
        """
        if duration is None:
            duration = Config.FRAME_DURATION

        webp_frames = [
            self.get_frame_image(
                frame_index,
                scale=scale,
                target_width=target_width,
                target_height=target_height,
            )
            for frame_index in range(self.total_frames)
        ]

        webp_frames[0].save(
            output_path,
            format='WEBP',
            append_images=webp_frames[1:],
            duration=duration,
            save_all=True,
            loop=0,
            lossless=True,
        )

    def replace_image(self, image: Union[Image.Image, str]) -> 'Sprite':
        """
        Build a new Sprite whose pixels come from an edited image.

        The image must have the size of the whole strip. Header bytes the
        codec does not understand are carried over from this sprite.

        Args:
            image: Pillow image or path to an image file

        Returns:
            New Sprite; this one is left untouched

        Raises:
            DimensionMismatch: Image size differs from the stored geometry
        """
        if isinstance(image, str):
            with Image.open(image) as opened:
                rgba = np.array(opened.convert('RGBA'))
        else:
            rgba = np.array(image.convert('RGBA'))

        data = encode(self._data, self._header, rgba_to_bgra(rgba))
        return Sprite(data, self._header)

    def save(self, file_path: str, backup: bool = True) -> Optional[str]:
        """
        Write the container to disk.

        When ``backup`` is set and the file already exists, its current
        contents are first copied to ``file_path + Config.BACKUP_SUFFIX``.

        Returns:
            Path of the backup file, or None if none was written
        """
        backup_path = None
        if backup and os.path.exists(file_path):
            backup_path = file_path + Config.BACKUP_SUFFIX
            with open(file_path, 'rb') as src:
                previous = src.read()
            with open(backup_path, 'wb') as dst:
                dst.write(previous)

        with open(file_path, 'wb') as fp:
            fp.write(self._data)
        return backup_path
