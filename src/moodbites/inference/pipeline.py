"""Face attribute pipeline: detect faces, then run the three classifiers per face."""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from PIL import Image

from moodbites.config import DETECTION_TIMEOUT, PREDICT_PADDING
from moodbites.errors import DetectionUnavailable
from moodbites.inference.annotate import annotate_faces
from moodbites.inference.classifiers import AGE, EMOTION, GENDER, bucket_age, collapse_emotion
from moodbites.inference.codec import encode
from moodbites.inference.detector import FaceDetector
from moodbites.inference.region import padded_region, validate_boxes
from moodbites.inference.runtime import ModelHandle, load_model
from moodbites.inference.store import ModelStore
from moodbites.models import AttributeResult, BoundingBox

LOGGER = logging.getLogger(__name__)

NO_FACE_MESSAGE = "No face detected."


@dataclass(frozen=True)
class ModelContext:
    """The three loaded classifiers, shared read-only by every inference call."""

    gender: ModelHandle
    age: ModelHandle
    emotion: ModelHandle


def load_context(store: ModelStore, device: str = "cpu") -> ModelContext:
    """Load all three models. Any failure aborts with ModelLoadError."""
    return ModelContext(
        gender=load_model(store.read(GENDER.model_key), name=GENDER.model_key, device=device),
        age=load_model(store.read(AGE.model_key), name=AGE.model_key, device=device),
        emotion=load_model(store.read(EMOTION.model_key), name=EMOTION.model_key, device=device),
    )


def predict_face(context: ModelContext, image: Image.Image, box: BoundingBox) -> AttributeResult:
    """Predict gender, age and mood for one face box."""
    region = padded_region(image.width, image.height, box, PREDICT_PADDING)
    face = image.crop(region.as_tuple())

    # Gender and age share one RGB tensor
    rgb = encode(face, GENDER.input_spec)
    gender = GENDER.interpret(context.gender.run(rgb))
    age = AGE.interpret(context.age.run(rgb))
    age_bucket = bucket_age(age)

    emotion = EMOTION.interpret(context.emotion.run(encode(face, EMOTION.input_spec)))
    mood = collapse_emotion(emotion)

    LOGGER.debug(
        "Gender=%s Age=%d (%s) Emotion=%s Mood=%s",
        gender.value,
        age,
        age_bucket.value,
        emotion.value,
        mood.value,
    )
    return AttributeResult(
        gender=gender, age=age, age_bucket=age_bucket, emotion=emotion, mood=mood
    )


def analyze_faces(
    context: ModelContext,
    image: Image.Image,
    boxes: Sequence[BoundingBox],
) -> list[AttributeResult]:
    """Predict attributes for every face box, in order."""
    rgb_image = image.convert("RGB")
    return [predict_face(context, rgb_image, box) for box in boxes]


def format_result(index: int, result: AttributeResult) -> str:
    """Render one face result as a display line. ``index`` is 1-based."""
    return (
        f"Face {index}: {result.gender.value}, "
        f"Age group {result.age_bucket.value} ({result.age}), "
        f"Mood {result.mood.value}"
    )


def describe(results: Sequence[AttributeResult]) -> list[str]:
    """Display lines for a whole image."""
    if not results:
        return [NO_FACE_MESSAGE]
    return [format_result(i, result) for i, result in enumerate(results, start=1)]


async def detect_faces(
    detector: FaceDetector,
    image: Image.Image,
    timeout: float | None = DETECTION_TIMEOUT,
) -> list[BoundingBox]:
    """Await the detector once and return boxes validated against the image.

    Raises:
        DetectionUnavailable: If the detector fails or times out.
    """
    try:
        boxes = await asyncio.wait_for(detector.detect(image), timeout)
    except TimeoutError as exc:
        LOGGER.warning("Face detection timed out after %ss", timeout)
        raise DetectionUnavailable("Face detection timed out") from exc
    except Exception as exc:
        LOGGER.warning("Face detection failed: %s", exc)
        raise DetectionUnavailable(f"Face detection failed: {exc}") from exc
    return validate_boxes(boxes, image.width, image.height)


class FaceAttributePipeline:
    """Async entry points over a detector and a loaded model context."""

    def __init__(
        self,
        context: ModelContext,
        detector: FaceDetector,
        detection_timeout: float | None = DETECTION_TIMEOUT,
    ) -> None:
        self.context = context
        self.detector = detector
        self.detection_timeout = detection_timeout

    async def detect(self, image: Image.Image) -> list[BoundingBox]:
        """Wait for the detector and return validated boxes."""
        return await detect_faces(self.detector, image, self.detection_timeout)

    async def analyze(self, image: Image.Image) -> list[AttributeResult]:
        """Detect faces and predict attributes. An empty list means no face."""
        boxes = await self.detect(image)
        if not boxes:
            LOGGER.info("No face detected")
            return []
        # ONNX inference is blocking; keep the event loop free for other requests
        return await asyncio.to_thread(analyze_faces, self.context, image, boxes)

    async def annotate(self, image: Image.Image) -> Image.Image:
        """Detect faces and return an annotated copy (or the input if none)."""
        boxes = await self.detect(image)
        return annotate_faces(image, boxes)
