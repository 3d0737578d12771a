"""Shared test fixtures."""

import numpy as np
import pytest
from onnx import TensorProto, helper, numpy_helper
from PIL import Image

from moodbites.inference.pipeline import ModelContext
from moodbites.models import BoundingBox


class FakeModel:
    """Stands in for a ModelHandle: returns fixed scores and records inputs."""

    def __init__(self, scores: list[float], input_length: int) -> None:
        self.scores = np.asarray(scores, dtype=np.float32)
        self.input_length = input_length
        self.calls: list[np.ndarray] = []

    def run(self, tensor: np.ndarray) -> np.ndarray:
        assert tensor.size == self.input_length
        self.calls.append(tensor)
        return self.scores


class FakeDetector:
    """Async detector returning canned boxes."""

    def __init__(self, boxes: list[BoundingBox] | None = None, error: Exception | None = None):
        self.boxes = boxes or []
        self.error = error
        self.calls = 0

    async def detect(self, image: Image.Image) -> list[BoundingBox]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.boxes)


def one_hot(length: int, index: int) -> list[float]:
    """Score vector with its maximum at ``index``."""
    scores = [0.01] * length
    scores[index] = 0.9
    return scores


def make_context(
    gender: list[float] | None = None,
    age: list[float] | None = None,
    emotion: list[float] | None = None,
) -> ModelContext:
    """ModelContext backed by FakeModels with the real input lengths."""
    return ModelContext(
        gender=FakeModel(gender or [0.7, 0.3], 224 * 224 * 3),
        age=FakeModel(age or one_hot(101, 25), 224 * 224 * 3),
        emotion=FakeModel(emotion or one_hot(7, 3), 48 * 48),
    )


def make_linear_model(input_shape: list, num_outputs: int) -> bytes:
    """Serialized ONNX model: flatten the input, then sum into ``num_outputs`` scores.

    Output i is (i + 1) * sum(input), so the last score is always the largest
    for a positive input.
    """
    flat = int(np.prod([d for d in input_shape if isinstance(d, int)]))
    weights = np.tile(np.arange(1, num_outputs + 1, dtype=np.float32), (flat, 1))
    graph = helper.make_graph(
        [
            helper.make_node("Flatten", ["input"], ["flat"], axis=1),
            helper.make_node("MatMul", ["flat", "weights"], ["scores"]),
        ],
        "linear",
        [helper.make_tensor_value_info("input", TensorProto.FLOAT, input_shape)],
        [helper.make_tensor_value_info("scores", TensorProto.FLOAT, [None, num_outputs])],
        initializer=[numpy_helper.from_array(weights, "weights")],
    )
    model = helper.make_model(graph, opset_imports=[helper.make_opsetid("", 13)])
    model.ir_version = 8
    return model.SerializeToString()


@pytest.fixture
def context() -> ModelContext:
    return make_context()


@pytest.fixture
def face_image() -> Image.Image:
    """A 400x300 image with a lighter square where a face would be."""
    image = Image.new("RGB", (400, 300), (40, 60, 80))
    image.paste((220, 180, 160), (150, 100, 250, 200))
    return image
