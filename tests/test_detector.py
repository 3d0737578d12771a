"""Tests for detector box conversion."""

import numpy as np

from moodbites.inference.detector import to_boxes
from moodbites.models import BoundingBox


def test_to_boxes_covers_fractional_pixels():
    boxes = to_boxes([np.array([10.4, 20.6, 99.2, 120.0], dtype=np.float32)])
    assert boxes == [BoundingBox(10, 20, 100, 120)]


def test_to_boxes_keeps_detector_order():
    boxes = to_boxes([[50, 50, 60, 60], [0, 0, 10, 10]])
    assert [b.left for b in boxes] == [50, 0]


def test_to_boxes_empty():
    assert to_boxes([]) == []
