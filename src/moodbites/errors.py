"""Exception hierarchy for the attribute pipeline."""


class MoodbitesError(Exception):
    """Base class for all pipeline errors."""


class ModelLoadError(MoodbitesError):
    """A model blob is missing, unreadable, or not a valid model."""


class InferenceError(MoodbitesError):
    """A tensor does not match the shape a model expects.

    This signals a codec/classifier pairing bug rather than bad user input.
    """


class DetectionUnavailable(MoodbitesError):
    """The face detector failed or timed out."""
