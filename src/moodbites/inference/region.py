"""Padded face crops clamped to image bounds."""

import logging
from collections.abc import Iterable

from moodbites.models import BoundingBox

LOGGER = logging.getLogger(__name__)


def padded_region(
    image_width: int,
    image_height: int,
    box: BoundingBox,
    padding: float,
) -> BoundingBox:
    """Expand ``box`` by ``padding * box.width`` on every side and clamp to the image.

    Example:
        box (100, 100, 200, 200) in a 1000x1000 image with padding 0.2
        -> (80, 80, 220, 220)
    """
    margin = int(box.width * padding)
    return BoundingBox(
        left=max(box.left - margin, 0),
        top=max(box.top - margin, 0),
        right=min(box.right + margin, image_width),
        bottom=min(box.bottom + margin, image_height),
    )


def validate_boxes(
    boxes: Iterable[BoundingBox],
    image_width: int,
    image_height: int,
) -> list[BoundingBox]:
    """Clamp detector boxes to the image and drop the ones left empty.

    Order is preserved; it defines the face numbering shown to users.
    """
    valid: list[BoundingBox] = []
    for box in boxes:
        clamped = BoundingBox(
            left=max(box.left, 0),
            top=max(box.top, 0),
            right=min(box.right, image_width),
            bottom=min(box.bottom, image_height),
        )
        if clamped.width <= 0 or clamped.height <= 0:
            LOGGER.warning(
                "Dropping face box %s outside %dx%d image", box, image_width, image_height
            )
            continue
        valid.append(clamped)
    return valid
