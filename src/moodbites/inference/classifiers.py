"""Interpret raw classifier outputs as discrete face attributes."""

from collections.abc import Sequence

import numpy as np

from moodbites.errors import InferenceError
from moodbites.inference.codec import GRAY_48, RGB_224, TensorSpec
from moodbites.models import AgeBucket, Emotion, Gender, Mood

MAX_AGE = 100

_POSITIVE = {Emotion.HAPPY, Emotion.SURPRISE}


def argmax(scores: Sequence[float] | np.ndarray) -> int:
    """Index of the maximum score; ties resolve to the lowest index."""
    return int(np.argmax(np.asarray(scores)))


def bucket_age(age: int) -> AgeBucket:
    """Map an age in years to its bucket. Out-of-range ages map to UNKNOWN."""
    if 0 <= age <= 17:
        return AgeBucket.UNDERAGE
    if 18 <= age <= 35:
        return AgeBucket.YOUNG_ADULT
    if 36 <= age <= 64:
        return AgeBucket.ADULT
    if 65 <= age <= MAX_AGE:
        return AgeBucket.ELDER
    return AgeBucket.UNKNOWN


def collapse_emotion(emotion: Emotion) -> Mood:
    """Reduce the 7 emotion classes to a 3-class mood."""
    if emotion in _POSITIVE:
        return Mood.POSITIVE
    if emotion is Emotion.NEUTRAL:
        return Mood.NEUTRAL
    return Mood.NEGATIVE


def _check_length(name: str, scores: np.ndarray, expected: int) -> None:
    if scores.size < expected:
        raise InferenceError(f"{name} model returned {scores.size} scores, expected {expected}")


class GenderClassifier:
    """Two-class gender model on the 224x224 RGB view.

    Index 0 is "Woman" for the deepface weights. This polarity belongs to the
    weights, so check it again when swapping the model.
    """

    model_key = "gender"
    input_spec: TensorSpec = RGB_224
    num_classes = 2

    def interpret(self, scores: np.ndarray) -> Gender:
        scores = np.asarray(scores).reshape(-1)
        _check_length(self.model_key, scores, self.num_classes)
        return Gender.WOMAN if scores[0] > scores[1] else Gender.MAN


class AgeClassifier:
    """101 single-year bins (0..100) on the 224x224 RGB view."""

    model_key = "age"
    input_spec: TensorSpec = RGB_224
    num_classes = MAX_AGE + 1

    def interpret(self, scores: np.ndarray) -> int:
        scores = np.asarray(scores).reshape(-1)
        _check_length(self.model_key, scores, self.num_classes)
        return argmax(scores)


class EmotionClassifier:
    """Seven emotion classes on the 48x48 luma view."""

    model_key = "emotion"
    input_spec: TensorSpec = GRAY_48
    labels: tuple[Emotion, ...] = tuple(Emotion)

    def interpret(self, scores: np.ndarray) -> Emotion:
        scores = np.asarray(scores).reshape(-1)
        if scores.size == 0:
            return Emotion.NEUTRAL
        if scores.size != len(self.labels):
            raise InferenceError(
                f"{self.model_key} model returned {scores.size} scores, expected {len(self.labels)}"
            )
        return self.labels[argmax(scores)]


GENDER = GenderClassifier()
AGE = AgeClassifier()
EMOTION = EmotionClassifier()
