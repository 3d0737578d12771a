"""Tests for classifier output interpretation."""

import pytest
from conftest import one_hot

from moodbites.errors import InferenceError
from moodbites.inference.classifiers import (
    AGE,
    EMOTION,
    GENDER,
    argmax,
    bucket_age,
    collapse_emotion,
)
from moodbites.inference.codec import GRAY_48, RGB_224
from moodbites.models import AgeBucket, Emotion, Gender, Mood


def test_classifier_input_specs():
    assert GENDER.input_spec == RGB_224
    assert AGE.input_spec == RGB_224
    assert EMOTION.input_spec == GRAY_48


def test_argmax_first_occurrence():
    assert argmax([0.1, 0.5, 0.5, 0.2]) == 1
    assert argmax([3.0]) == 0


def test_gender_rule():
    assert GENDER.interpret([0.7, 0.3]) is Gender.WOMAN
    assert GENDER.interpret([0.3, 0.7]) is Gender.MAN


def test_gender_tie_resolves_to_man():
    assert GENDER.interpret([0.5, 0.5]) is Gender.MAN


def test_gender_short_output_raises():
    with pytest.raises(InferenceError):
        GENDER.interpret([0.5])


def test_age_is_argmax_index():
    assert AGE.interpret(one_hot(101, 10)) == 10
    assert AGE.interpret(one_hot(101, 70)) == 70


def test_age_ties_resolve_to_lowest_index():
    scores = [0.0] * 101
    scores[40] = scores[30] = 1.0
    assert AGE.interpret(scores) == 30


def test_age_empty_output_raises():
    with pytest.raises(InferenceError):
        AGE.interpret([])


def test_age_short_output_raises():
    with pytest.raises(InferenceError, match="age"):
        AGE.interpret(one_hot(50, 10))


@pytest.mark.parametrize(
    ("age", "bucket"),
    [
        (0, AgeBucket.UNDERAGE),
        (10, AgeBucket.UNDERAGE),
        (17, AgeBucket.UNDERAGE),
        (18, AgeBucket.YOUNG_ADULT),
        (35, AgeBucket.YOUNG_ADULT),
        (36, AgeBucket.ADULT),
        (64, AgeBucket.ADULT),
        (65, AgeBucket.ELDER),
        (70, AgeBucket.ELDER),
        (100, AgeBucket.ELDER),
        (101, AgeBucket.UNKNOWN),
        (-1, AgeBucket.UNKNOWN),
    ],
)
def test_bucket_age(age, bucket):
    assert bucket_age(age) is bucket


def test_emotion_label_order():
    assert [e.value for e in EMOTION.labels] == [
        "Angry",
        "Disgust",
        "Fear",
        "Happy",
        "Sad",
        "Surprise",
        "Neutral",
    ]


def test_emotion_interpret_and_collapse():
    happy = EMOTION.interpret(one_hot(7, 3))
    assert happy is Emotion.HAPPY
    assert collapse_emotion(happy) is Mood.POSITIVE

    angry = EMOTION.interpret(one_hot(7, 0))
    assert angry is Emotion.ANGRY
    assert collapse_emotion(angry) is Mood.NEGATIVE

    neutral = EMOTION.interpret(one_hot(7, 6))
    assert neutral is Emotion.NEUTRAL
    assert collapse_emotion(neutral) is Mood.NEUTRAL


def test_emotion_empty_output_defaults_to_neutral():
    assert EMOTION.interpret([]) is Emotion.NEUTRAL


def test_emotion_wrong_length_raises():
    with pytest.raises(InferenceError, match="emotion"):
        EMOTION.interpret(one_hot(8, 3))
    with pytest.raises(InferenceError):
        EMOTION.interpret(one_hot(5, 3))


def test_collapse_emotion_covers_all_classes():
    moods = {emotion: collapse_emotion(emotion) for emotion in Emotion}
    assert moods[Emotion.SURPRISE] is Mood.POSITIVE
    assert moods[Emotion.DISGUST] is Mood.NEGATIVE
    assert moods[Emotion.FEAR] is Mood.NEGATIVE
    assert moods[Emotion.SAD] is Mood.NEGATIVE
