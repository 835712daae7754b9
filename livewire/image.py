"""Image buffers handed to the Live-Wire core.

The core only ever sees a flat, row-major RGBA byte buffer. The adapters
below turn numpy arrays and Pillow images into that form; acquiring pixels
from a display surface is the caller's job.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import numpy as np
from numpy.typing import NDArray
from skimage.color import gray2rgb
from skimage.util import img_as_ubyte

from livewire.errors import InvalidImageError

if TYPE_CHECKING:
    from PIL import Image

_CHANNELS = 4
_OPAQUE = 255


@dataclass(frozen=True)
class ImageBuffer:
    """Width, height and interleaved RGBA bytes, row-major."""

    width: int
    height: int
    data: NDArray[np.uint8]

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise InvalidImageError(f"Image must be non-empty, got {self.width}x{self.height}")
        data = self.data
        if isinstance(data, (bytes, bytearray, memoryview)):
            data = np.frombuffer(data, dtype=np.uint8)
        data = np.asarray(data)
        if data.dtype != np.uint8:
            data = data.astype(np.uint8)
        data = np.ascontiguousarray(data).reshape(-1)
        expected = _CHANNELS * self.width * self.height
        if data.size != expected:
            raise InvalidImageError(
                f"RGBA buffer for {self.width}x{self.height} needs {expected} bytes, got {data.size}"
            )
        if data.flags.writeable:
            data = data.copy()
            data.setflags(write=False)
        object.__setattr__(self, "data", data)

    @property
    def shape(self) -> tuple[int, int]:
        return (self.height, self.width)

    def to_array(self) -> NDArray[np.uint8]:
        """(height, width, 4) read-only view of the pixel data."""
        return self.data.reshape(self.height, self.width, _CHANNELS)

    @classmethod
    def from_array(cls, array: Any) -> ImageBuffer:
        """Build a buffer from a grayscale, RGB or RGBA array.

        uint8 arrays and integer arrays already in [0, 255] are taken as-is;
        other dtypes go through ``skimage.util.img_as_ubyte`` (floats must be
        in [0, 1]).
        """
        arr = np.asarray(array)
        if arr.ndim == 3 and arr.shape[2] == 1:
            arr = arr[:, :, 0]
        if arr.ndim not in (2, 3) or (arr.ndim == 3 and arr.shape[2] not in (3, 4)):
            raise InvalidImageError(f"Unsupported image array shape {arr.shape}")
        if arr.shape[0] == 0 or arr.shape[1] == 0:
            raise InvalidImageError(f"Image must be non-empty, got shape {arr.shape}")

        arr = _to_ubyte(arr)
        if arr.ndim == 2:
            arr = gray2rgb(arr)
        if arr.shape[2] == 3:
            alpha = np.full(arr.shape[:2] + (1,), _OPAQUE, dtype=np.uint8)
            arr = np.concatenate([arr, alpha], axis=2)

        height, width = arr.shape[:2]
        return cls(width=width, height=height, data=arr.reshape(-1))

    @classmethod
    def from_pil(cls, image: Image.Image) -> ImageBuffer:
        return cls.from_array(np.asarray(image.convert("RGBA")))


def _to_ubyte(arr: NDArray) -> NDArray[np.uint8]:
    if arr.dtype == np.uint8:
        return arr
    if np.issubdtype(arr.dtype, np.integer) and arr.min() >= 0 and arr.max() <= 255:
        return arr.astype(np.uint8)
    try:
        return img_as_ubyte(arr)
    except ValueError as e:
        raise InvalidImageError(f"Cannot convert image of dtype {arr.dtype}: {e}") from e
