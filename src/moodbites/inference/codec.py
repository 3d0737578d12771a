"""Convert face crops into the flat float tensors each classifier expects."""

from dataclasses import dataclass

import numpy as np
from PIL import Image

from moodbites.config import EMOTION_INPUT_SIZE, FACE_INPUT_SIZE

# ITU-R BT.601 luma weights; the emotion model was trained on luma images
LUMA_WEIGHTS = np.array([0.299, 0.587, 0.114], dtype=np.float32)


@dataclass(frozen=True)
class TensorSpec:
    """Input layout of a model: a square HWC image, RGB or single-channel luma."""

    size: int
    grayscale: bool = False

    @property
    def channels(self) -> int:
        return 1 if self.grayscale else 3

    @property
    def length(self) -> int:
        return self.size * self.size * self.channels


RGB_224 = TensorSpec(FACE_INPUT_SIZE)
GRAY_48 = TensorSpec(EMOTION_INPUT_SIZE, grayscale=True)


def _resize(image: Image.Image, size: int) -> np.ndarray:
    """Stretch the image to size x size and return uint8 RGB pixels (H, W, 3)."""
    rgb = image.convert("RGB")
    if rgb.size != (size, size):
        rgb = rgb.resize((size, size), Image.Resampling.BILINEAR)
    return np.asarray(rgb, dtype=np.uint8)


def to_rgb_tensor(image: Image.Image, size: int = FACE_INPUT_SIZE) -> np.ndarray:
    """Interleaved R, G, B floats in [0, 1], row-major. Length 3 * size * size."""
    pixels = _resize(image, size).astype(np.float32)
    return (pixels / 255.0).reshape(-1)


def to_luma_tensor(image: Image.Image, size: int = EMOTION_INPUT_SIZE) -> np.ndarray:
    """One luma float in [0, 1] per pixel, row-major. Length size * size."""
    pixels = _resize(image, size).astype(np.float32)
    luma = (pixels @ LUMA_WEIGHTS) / 255.0
    return np.clip(luma, 0.0, 1.0).reshape(-1)


def encode(image: Image.Image, spec: TensorSpec) -> np.ndarray:
    """Encode an image region according to a model's input spec."""
    if spec.grayscale:
        return to_luma_tensor(image, spec.size)
    return to_rgb_tensor(image, spec.size)
