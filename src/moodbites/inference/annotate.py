"""Draw numbered face boxes on a copy of an image."""

from collections.abc import Sequence

from PIL import Image, ImageDraw, ImageFont

from moodbites.config import ANNOTATE_PADDING
from moodbites.inference.region import padded_region
from moodbites.models import BoundingBox

BOX_COLOR = (0, 255, 0)
LABEL_COLOR = (0, 0, 255)


def stroke_width(width: int, height: int) -> float:
    """Box outline width, scaled to the image and never thinner than 2px."""
    return max(2.0, min(width, height) * 0.005)


def annotate_faces(image: Image.Image, boxes: Sequence[BoundingBox]) -> Image.Image:
    """Return a copy of ``image`` with a box and a ``#n`` label per face.

    With no faces the original image is returned as is.
    """
    if not boxes:
        return image

    # convert() always returns a new image, so the caller's copy stays untouched
    annotated = image.convert("RGB")
    width, height = annotated.size
    stroke = stroke_width(width, height)
    font = ImageFont.load_default(size=stroke * 12)
    draw = ImageDraw.Draw(annotated)

    for index, box in enumerate(boxes, start=1):
        region = padded_region(width, height, box, ANNOTATE_PADDING)
        draw.rectangle(
            (region.left, region.top, region.right - 1, region.bottom - 1),
            outline=BOX_COLOR,
            width=round(stroke),
        )
        draw.text(
            (region.left, region.top - stroke * 2),
            f"#{index}",
            fill=LABEL_COLOR,
            font=font,
            anchor="ls",
        )

    return annotated
