"""
Image loading and saving.

Images are held as float tensors (3, H, W) with channel values in [0, 1]
(byte / 255). Saving truncates back to bytes.
"""

import logging
from pathlib import Path

import numpy as np
import torch
from PIL import Image, UnidentifiedImageError

from .errors import ImageFormatError

logger = logging.getLogger(__name__)

# Pillow modes for rasters deeper than 8 bits per channel
_WIDE_MODES = ('I', 'I;16', 'I;16B', 'I;16L', 'I;16N', 'F')


def _ppm_maxval(img) -> int:
    """Header max value of an unloaded PPM/PGM, read from Pillow's decoder tile.

    Pillow rescales any maxval to 8 bits while decoding, so the image mode
    alone cannot tell a 255 file from a 100 or 65535 one.
    """
    decoder, _, _, args = img.tile[0][:4]
    if decoder == 'raw':
        rawmode = args if isinstance(args, str) else args[0]
        return 65535 if '16' in rawmode else 255
    return int(args[1])


def load_image(path, device='cpu') -> torch.Tensor:
    """Load an 8-bit image file and convert it to a (3, H, W) tensor."""
    try:
        img = Image.open(path)
    except UnidentifiedImageError as e:
        raise ImageFormatError(f"Could not decode {path}: {e}") from e

    with img:
        if img.mode in _WIDE_MODES:
            raise ImageFormatError(
                f"{path}: only 8-bit channels (max value 255) are supported, got mode {img.mode}"
            )
        if img.format == 'PPM':
            maxval = _ppm_maxval(img)
            if maxval != 255:
                raise ImageFormatError(
                    f"{path}: maximum color value is {maxval}, expected 255"
                )
        img_array = np.array(img.convert('RGB'), dtype=np.float32) / 255.0

    logger.debug("Loaded %s (%dx%d)", path, img_array.shape[1], img_array.shape[0])
    return torch.from_numpy(img_array).permute(2, 0, 1).contiguous().to(device)


def save_image(tensor: torch.Tensor, path, format=None):
    """Save a (3, H, W) tensor as an 8-bit image (PPM for a .ppm path)."""
    img_array = tensor.detach().permute(1, 2, 0).cpu().numpy()
    img_array = (img_array * 255).clip(0, 255).astype(np.uint8)
    img = Image.fromarray(np.ascontiguousarray(img_array))
    img.save(path, format=format)
    logger.info("Saved %s (%dx%d)", path, img_array.shape[1], img_array.shape[0])


def output_path(input_path, suffix: str = "_new", extension: str = "ppm") -> Path:
    """`photo.ppm` -> `photo_new.ppm` in the current working directory."""
    return Path(f"{Path(input_path).stem}{suffix}.{extension}")
