"""Data models for faces and their predicted attributes."""

from dataclasses import dataclass
from enum import Enum


class Gender(str, Enum):
    MAN = "Man"
    WOMAN = "Woman"


class AgeBucket(str, Enum):
    UNDERAGE = "Underage"
    YOUNG_ADULT = "Young Adult"
    ADULT = "Adult"
    ELDER = "Elder"
    UNKNOWN = "Unknown"


class Emotion(str, Enum):
    """Emotion model classes, in the order of the model's output vector."""

    ANGRY = "Angry"
    DISGUST = "Disgust"
    FEAR = "Fear"
    HAPPY = "Happy"
    SAD = "Sad"
    SURPRISE = "Surprise"
    NEUTRAL = "Neutral"


class Mood(str, Enum):
    POSITIVE = "Positive"
    NEUTRAL = "Neutral"
    NEGATIVE = "Negative"


@dataclass(frozen=True)
class BoundingBox:
    """A face box in image pixel coordinates. Right and bottom are exclusive."""

    left: int
    top: int
    right: int
    bottom: int

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    def as_tuple(self) -> tuple[int, int, int, int]:
        """Return (left, top, right, bottom), the order PIL expects."""
        return (self.left, self.top, self.right, self.bottom)


@dataclass(frozen=True)
class AttributeResult:
    """Predicted attributes for a single face."""

    gender: Gender
    age: int
    age_bucket: AgeBucket
    emotion: Emotion
    mood: Mood
