"""ONNX Runtime wrapper exposing a uniform forward pass."""

import logging
import math

import numpy as np
import onnxruntime as ort

from moodbites.errors import InferenceError, ModelLoadError

LOGGER = logging.getLogger(__name__)


def _providers(device: str) -> list[str]:
    return (
        ["CUDAExecutionProvider", "CPUExecutionProvider"]
        if device == "cuda"
        else ["CPUExecutionProvider"]
    )


class ModelHandle:
    """A loaded classifier. Read-only after construction.

    ``InferenceSession.run`` is safe to call concurrently, so one handle can be
    shared by every request for the lifetime of the process.
    """

    def __init__(self, session: ort.InferenceSession, name: str = "model") -> None:
        self.session = session
        self.name = name
        model_input = session.get_inputs()[0]
        self.input_name = model_input.name
        # Symbolic or unknown dims (usually the batch axis) are fed a single item
        self.input_shape = tuple(d if isinstance(d, int) and d > 0 else 1 for d in model_input.shape)
        self.input_length = math.prod(self.input_shape)

    def run(self, tensor: np.ndarray) -> np.ndarray:
        """Run one forward pass and return the first output as a flat float32 vector."""
        if tensor.size != self.input_length:
            raise InferenceError(
                f"{self.name}: got tensor of length {tensor.size}, "
                f"model expects {self.input_length} {self.input_shape}"
            )
        feed = np.ascontiguousarray(tensor, dtype=np.float32).reshape(self.input_shape)
        outputs = self.session.run(None, {self.input_name: feed})
        return np.asarray(outputs[0], dtype=np.float32).reshape(-1)


def load_model(model_bytes: bytes, name: str = "model", device: str = "cpu") -> ModelHandle:
    """Create a handle from a serialized ONNX model.

    Raises:
        ModelLoadError: If the bytes cannot be parsed as a model.
    """
    try:
        session = ort.InferenceSession(model_bytes, providers=_providers(device))
    except Exception as exc:
        raise ModelLoadError(f"Failed to load model {name!r}: {exc}") from exc
    handle = ModelHandle(session, name=name)
    LOGGER.info("Loaded model %s (input %s %s)", name, handle.input_name, handle.input_shape)
    return handle


def run(handle: ModelHandle, tensor: np.ndarray) -> np.ndarray:
    """Run one forward pass on a loaded model."""
    return handle.run(tensor)
