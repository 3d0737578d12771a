"""Face detection collaborators."""

import asyncio
import logging
import math
from collections.abc import Iterable
from typing import Protocol

import cv2
import numpy as np
from insightface.app import FaceAnalysis
from PIL import Image

from moodbites.config import DETECTION_SIZE, INSIGHTFACE_MODEL_NAME
from moodbites.models import BoundingBox

LOGGER = logging.getLogger(__name__)


class FaceDetector(Protocol):
    """Anything that can locate faces in an image."""

    async def detect(self, image: Image.Image) -> list[BoundingBox]: ...


def to_boxes(bboxes: Iterable[Iterable[float]]) -> list[BoundingBox]:
    """Convert float (x1, y1, x2, y2) boxes to integer boxes covering the same pixels."""
    boxes = []
    for bbox in bboxes:
        x1, y1, x2, y2 = (float(v) for v in bbox)
        boxes.append(
            BoundingBox(
                left=math.floor(x1),
                top=math.floor(y1),
                right=math.ceil(x2),
                bottom=math.ceil(y2),
            )
        )
    return boxes


class InsightFaceDetector:
    """Detect faces with InsightFace's SCRFD detector (detection module only)."""

    def __init__(
        self,
        model_name: str = INSIGHTFACE_MODEL_NAME,
        device: str = "cpu",
        det_size: tuple[int, int] = DETECTION_SIZE,
    ) -> None:
        providers = (
            ["CUDAExecutionProvider", "CPUExecutionProvider"]
            if device == "cuda"
            else ["CPUExecutionProvider"]
        )
        self.app = FaceAnalysis(
            name=model_name, allowed_modules=["detection"], providers=providers
        )
        self.app.prepare(ctx_id=0 if device == "cuda" else -1, det_size=det_size)

    def detect_sync(self, image: Image.Image) -> list[BoundingBox]:
        """Detect faces, returning boxes in the detector's order."""
        # InsightFace expects OpenCV's BGR layout
        bgr = cv2.cvtColor(np.asarray(image.convert("RGB")), cv2.COLOR_RGB2BGR)
        faces = self.app.get(bgr)
        LOGGER.debug("InsightFace found %d faces", len(faces))
        return to_boxes(face.bbox for face in faces)

    async def detect(self, image: Image.Image) -> list[BoundingBox]:
        return await asyncio.to_thread(self.detect_sync, image)
