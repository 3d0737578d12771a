"""Project-wide configuration."""

import os
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(os.environ.get("MOODBITES_PROJECT_ROOT", Path.cwd()))

load_dotenv(PROJECT_ROOT / ".env")

MODEL_DIR = Path(os.environ.get("MOODBITES_MODEL_DIR", PROJECT_ROOT / "models"))
MODEL_BASE_URL = os.environ.get("MOODBITES_MODEL_BASE_URL", "")

# Inference device: cpu or cuda
DEVICE = os.environ.get("MOODBITES_DEVICE", "cpu")

LOG_LEVEL = os.environ.get("MOODBITES_LOG_LEVEL", "INFO")

# Attribute classifiers – ONNX conversions of the deepface weights
GENDER_MODEL_FILE = "deep_face_gender.onnx"
AGE_MODEL_FILE = "age_deep.onnx"
EMOTION_MODEL_FILE = "emotion_deep.onnx"

MODEL_FILES: dict[str, str] = {
    "gender": GENDER_MODEL_FILE,
    "age": AGE_MODEL_FILE,
    "emotion": EMOTION_MODEL_FILE,
}

# Gender and age share the RGB input; emotion takes 48x48 luma
FACE_INPUT_SIZE = 224
EMOTION_INPUT_SIZE = 48

# Box padding as a fraction of the detected box width
PREDICT_PADDING = 0.2
ANNOTATE_PADDING = 0.1

# Face detection – InsightFace
INSIGHTFACE_MODEL_NAME = "buffalo_l"
DETECTION_SIZE = (640, 640)
DETECTION_TIMEOUT = float(os.environ.get("MOODBITES_DETECTION_TIMEOUT", "30"))
