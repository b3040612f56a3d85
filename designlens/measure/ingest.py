# Copyright (c) 2026 DesignLens
# SPDX-License-Identifier: MIT

"""
Raster ingestion and working-resolution downscale.

Decodes an image payload into an immutable RGBA buffer. Everything after
this module reads that buffer and never writes to it.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional, Union

import numpy as np
from numpy.typing import NDArray
from PIL import Image, ImageCms, UnidentifiedImageError

logger = logging.getLogger(__name__)

ImageSource = Union[bytes, bytearray, memoryview, str, Path, BinaryIO, NDArray[np.uint8]]

# Longer side of the working raster, in pixels
MAX_DIMENSION = 800


class IngestionError(ValueError):
    """The image payload could not be decoded into a raster."""


@dataclass(frozen=True, eq=False)
class RasterImage:
    """
    Owned, read-only RGBA pixel buffer.

    Attributes:
        pixels: Array of shape (H, W, 4), uint8, not writeable
        source_width, source_height: Decoded size before downscale
        mime_type: Declared or detected MIME type, if known
    """
    pixels: NDArray[np.uint8]
    source_width: int
    source_height: int
    mime_type: Optional[str] = None

    def __post_init__(self) -> None:
        if self.pixels.ndim != 3 or self.pixels.shape[2] != 4:
            raise ValueError(f"Expected (H, W, 4) array, got shape {self.pixels.shape}")
        if self.pixels.dtype != np.uint8:
            raise ValueError(f"Expected uint8 array, got {self.pixels.dtype}")
        self.pixels.flags.writeable = False

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def rgb(self) -> NDArray[np.uint8]:
        """(H, W, 3) view without alpha."""
        return self.pixels[..., :3]

    @property
    def alpha(self) -> NDArray[np.uint8]:
        """(H, W) alpha channel view."""
        return self.pixels[..., 3]


def load_image(
    image: Union[ImageSource, RasterImage],
    *,
    mime_type: Optional[str] = None,
    max_dimension: int = MAX_DIMENSION,
) -> RasterImage:
    """
    Decode an image payload and cap its working resolution.

    Args:
        image: One of:
            - Encoded image bytes (PNG, JPEG, WebP, GIF, ...)
            - Path to an image file (str or Path)
            - Binary file object opened for reading
            - NumPy array of shape (H, W, 3) or (H, W, 4), uint8 sRGB
            - An existing RasterImage (downscaled again if needed)
        mime_type: Declared MIME type of the payload, e.g. "image/png".
            A non-image type is rejected; a type that disagrees with the
            decoded format is only logged.
        max_dimension: Longer-side cap in pixels (default: 800)

    Returns:
        RasterImage with an RGBA buffer no larger than max_dimension

    Raises:
        IngestionError: Payload is empty, corrupt, not an image or zero-sized
        TypeError: Unsupported input type
    """
    if mime_type is not None and not mime_type.lower().startswith("image/"):
        raise IngestionError(f"Declared type {mime_type!r} is not an image type")

    if isinstance(image, RasterImage):
        pixels = np.array(image.pixels, dtype=np.uint8)
        source_height, source_width = image.source_height, image.source_width
        mime_type = mime_type or image.mime_type
    elif isinstance(image, np.ndarray):
        pixels = _validate_array(image)
        source_height, source_width = pixels.shape[:2]
    elif isinstance(image, (bytes, bytearray, memoryview, str, Path)) or hasattr(image, "read"):
        img, detected = _decode(image)
        if mime_type and detected and mime_type.lower() != detected:
            logger.warning(
                "Declared type %s does not match decoded format %s", mime_type, detected
            )
        mime_type = mime_type or detected
        pixels = np.array(img, dtype=np.uint8)
        source_height, source_width = pixels.shape[:2]
    else:
        raise TypeError(
            f"Expected image bytes, file path, file object or numpy array, got {type(image)}"
        )

    height, width = pixels.shape[:2]
    if height == 0 or width == 0:
        raise IngestionError(f"Image has no pixels ({width}x{height})")

    if max(height, width) > max_dimension:
        new_height, new_width = _capped_size(height, width, max_dimension)
        logger.debug(
            "Downscaling %dx%d to %dx%d", width, height, new_width, new_height
        )
        pixels = _downsample(pixels, new_height, new_width)

    return RasterImage(
        pixels=np.ascontiguousarray(pixels),
        source_width=int(source_width),
        source_height=int(source_height),
        mime_type=mime_type,
    )


def _decode(image: Union[bytes, bytearray, memoryview, str, Path, BinaryIO]) -> tuple[Image.Image, Optional[str]]:
    """
    Open and fully decode an encoded image as RGBA.

    Applies ICC profile conversion to sRGB if the image has an embedded
    color profile, so colors match what color pickers show.

    Returns:
        (RGBA image, detected MIME type or None)
    """
    if isinstance(image, (bytes, bytearray, memoryview)):
        if len(image) == 0:
            raise IngestionError("Image payload is empty")
        source = io.BytesIO(bytes(image))
    else:
        source = image

    try:
        img = Image.open(source)
        img.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError) as e:
        raise IngestionError(f"Could not decode image: {e}") from e

    detected = Image.MIME.get(img.format) if img.format else None

    if "icc_profile" in img.info:
        try:
            embedded_profile = ImageCms.ImageCmsProfile(
                io.BytesIO(img.info["icc_profile"])
            )
            srgb_profile = ImageCms.createProfile("sRGB")
            has_alpha = img.mode in ("RGBA", "LA", "PA") or "transparency" in img.info
            mode = "RGBA" if has_alpha else "RGB"
            if img.mode != mode:
                img = img.convert(mode)
            img = ImageCms.profileToProfile(
                img, embedded_profile, srgb_profile, outputMode=mode
            )
        except (ImageCms.PyCMSError, OSError, ValueError) as e:
            # Fall back to the raw channel values
            logger.warning("ICC profile conversion failed, using raw values: %s", e)

    try:
        if img.mode != "RGBA":
            img = img.convert("RGBA")
    except (OSError, ValueError) as e:
        raise IngestionError(f"Could not convert {img.mode} image to RGBA: {e}") from e

    return img, detected


def _capped_size(height: int, width: int, max_dimension: int) -> tuple[int, int]:
    """Target size whose longer side is exactly max_dimension, aspect kept."""
    if height >= width:
        return max_dimension, max(1, round(width * max_dimension / height))
    return max(1, round(height * max_dimension / width)), max_dimension


def _validate_array(pixels: NDArray) -> NDArray[np.uint8]:
    """Check an in-memory array and return an owned RGBA copy."""
    if pixels.dtype != np.uint8:
        raise IngestionError(f"Expected uint8 array, got {pixels.dtype}")
    if pixels.ndim != 3 or pixels.shape[2] not in (3, 4):
        raise IngestionError(
            f"Expected (H, W, 3) or (H, W, 4) array, got shape {pixels.shape}"
        )
    if pixels.shape[2] == 4:
        return np.array(pixels, dtype=np.uint8)
    alpha = np.full(pixels.shape[:2] + (1,), 255, dtype=np.uint8)
    return np.concatenate([pixels, alpha], axis=2)


def _downsample(
    pixels: NDArray[np.uint8],
    new_height: int,
    new_width: int,
) -> NDArray[np.uint8]:
    """Downsample an RGBA buffer using PIL (Lanczos)."""
    img = Image.fromarray(pixels)
    img = img.resize((new_width, new_height), Image.Resampling.LANCZOS)
    return np.array(img, dtype=np.uint8)
