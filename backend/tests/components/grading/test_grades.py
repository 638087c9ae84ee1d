import pytest

from staffrank.components.grading.grades import (
    GRADE_ORDER,
    LetterGrade,
    classify,
    grade_css_class,
    grade_rank,
    parse_grade,
)
from staffrank.components.grading.roles import StaffRole
from staffrank.errors import ValidationError


@pytest.mark.parametrize(
    "score,expected",
    [
        (9.5, LetterGrade.S_PLUS),
        (8.5, LetterGrade.S),
        (7.5, LetterGrade.A_PLUS),
        (6.5, LetterGrade.A),
        (5.5, LetterGrade.B_PLUS),
        (4.5, LetterGrade.B),
        (3.5, LetterGrade.C),
        (2.5, LetterGrade.D),
        (1.0, LetterGrade.E),
    ],
)
def test_boundary_lands_in_higher_bucket(score, expected):
    assert classify(score) == expected


@pytest.mark.parametrize(
    "score,expected",
    [
        (10, LetterGrade.S_PLUS),
        (9.49, LetterGrade.S),
        (8.49, LetterGrade.A_PLUS),
        (2.49, LetterGrade.E),
        (0.99, LetterGrade.E_MINUS),
        (0, LetterGrade.E_MINUS),
    ],
)
def test_scores_just_below_a_boundary(score, expected):
    assert classify(score) == expected


def test_classify_is_monotonic_as_score_decreases():
    previous = grade_rank(classify(10.0))
    for step in range(100, -1, -1):
        current = grade_rank(classify(step / 10))
        assert current >= previous
        previous = current


def test_numeric_scores_never_reach_sss_plus():
    assert classify(10.0) != LetterGrade.SSS_PLUS


@pytest.mark.parametrize("role", [StaffRole.MANAGER, StaffRole.OWNER])
def test_immeasurable_roles_ignore_the_score(role):
    assert classify(10, role=role) == LetterGrade.SSS_PLUS
    assert classify(0, role=role) == LetterGrade.SSS_PLUS


def test_measured_role_uses_thresholds():
    assert classify(9.1, role=StaffRole.MODERATOR) == LetterGrade.S


def test_immeasurable_is_an_alias_for_sss_plus():
    assert parse_grade("Immeasurable") == LetterGrade.SSS_PLUS
    assert parse_grade("immeasurable") == LetterGrade.SSS_PLUS
    assert parse_grade("SSS+") == LetterGrade.SSS_PLUS


def test_parse_grade_rejects_unknown_labels():
    with pytest.raises(ValidationError):
        parse_grade("Z")


def test_grade_order_is_best_first():
    assert GRADE_ORDER[0] == LetterGrade.SSS_PLUS
    assert GRADE_ORDER[-1] == LetterGrade.E_MINUS
    assert grade_rank("S+") < grade_rank("S") < grade_rank("E-")


def test_css_class_falls_back_for_unknown_grade():
    assert grade_css_class("SSS+") == "grade-sss"
    assert grade_css_class("A+") == "grade-aplus"
    assert grade_css_class("bogus") == "grade-c"
