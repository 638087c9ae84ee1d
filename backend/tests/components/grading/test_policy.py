import pytest

from staffrank.components.grading.grades import LetterGrade
from staffrank.components.grading.policy import enforce, parse_role, resolve_rank
from staffrank.components.grading.roles import (
    BUILDER_METRICS,
    MANAGER_METRICS,
    MODERATOR_METRICS,
    StaffRole,
    allowed_ranks,
    role_metadata_payload,
)
from staffrank.components.grading.types import StaffDraft
from staffrank.errors import ValidationError


SCENARIO_METRICS = {
    "responsiveness": 9.6,
    "fairness": 9.2,
    "communication": 8.7,
    "conflictResolution": 9.0,
    "ruleEnforcement": 9.5,
    "engagement": 8.8,
    "supportiveness": 9.3,
    "adaptability": 8.9,
    "objectivity": 9.1,
    "initiative": 9.0,
}


def test_moderator_is_graded_from_metrics():
    staff = enforce(StaffDraft(name="Alex", role=StaffRole.MODERATOR, rank="Mod", metrics=SCENARIO_METRICS))
    assert staff.overall_score == pytest.approx(9.1)
    assert staff.overall_grade == LetterGrade.S
    assert staff.metrics["ruleEnforcement"].letter_grade == LetterGrade.S_PLUS


def test_missing_metrics_default_to_five():
    staff = enforce(StaffDraft(name="Sam", role=StaffRole.BUILDER, metrics={"exterior": 9.0}))
    assert set(staff.metrics) == set(BUILDER_METRICS)
    assert staff.metrics["interior"].score == 5.0
    assert staff.overall_score == 5.4
    assert staff.rank == "Trial Builder"


def test_unknown_metric_key_is_rejected():
    with pytest.raises(ValidationError, match="exterior"):
        enforce(StaffDraft(name="Alex", role=StaffRole.MODERATOR, metrics={"exterior": 7}))


@pytest.mark.parametrize("role", [StaffRole.MANAGER, StaffRole.OWNER])
def test_immeasurable_roles_are_forced_to_maximum(role):
    draft = StaffDraft(name="Boss", role=role, rank="Mod", metrics={"fairness": 1.0, "nonsense": 3})
    staff = enforce(draft)
    assert set(staff.metrics) == set(MANAGER_METRICS)
    assert all(m.score == 10 for m in staff.metrics.values())
    assert all(m.letter_grade == LetterGrade.SSS_PLUS for m in staff.metrics.values())
    assert staff.overall_score == 10
    assert staff.overall_grade == LetterGrade.SSS_PLUS
    assert staff.rank == role.value


def test_enforce_is_idempotent():
    once = enforce(StaffDraft(name="Alex", role=StaffRole.MODERATOR, metrics=SCENARIO_METRICS))
    assert enforce(once) == once


def test_rank_table_per_role():
    assert allowed_ranks(StaffRole.MODERATOR) == ["Sr.Mod", "Mod", "Jr.Mod", "Trial(Mod)"]
    assert allowed_ranks(StaffRole.BUILDER) == ["HeadBuilder", "Builder", "Trial Builder"]
    for rank in allowed_ranks(StaffRole.MODERATOR):
        assert resolve_rank(StaffRole.MODERATOR, rank) == rank
    for rank in allowed_ranks(StaffRole.BUILDER):
        assert resolve_rank(StaffRole.BUILDER, rank) == rank


def test_cross_role_ranks_are_rejected():
    with pytest.raises(ValidationError, match="Invalid Rank"):
        resolve_rank(StaffRole.BUILDER, "Mod")
    with pytest.raises(ValidationError, match="Allowed ranks: Sr.Mod, Mod, Jr.Mod, Trial\\(Mod\\)"):
        resolve_rank(StaffRole.MODERATOR, "HeadBuilder")


def test_legacy_trial_mod_spelling_is_canonicalised():
    assert resolve_rank(StaffRole.MODERATOR, "Trial Mod") == "Trial(Mod)"


def test_blank_rank_uses_role_default():
    assert resolve_rank(StaffRole.MODERATOR, None) == "Trial(Mod)"
    assert resolve_rank(StaffRole.MODERATOR, "  ") == "Trial(Mod)"


def test_blank_name_is_rejected():
    with pytest.raises(ValidationError, match="name"):
        enforce(StaffDraft(name="  ", role=StaffRole.MODERATOR))


def test_parse_role_rejects_unknown():
    assert parse_role("Builder") == StaffRole.BUILDER
    with pytest.raises(ValidationError, match="Unknown role"):
        parse_role("Janitor")


def test_role_metadata_lists_metrics_and_ranks():
    payload = role_metadata_payload()
    assert [m["key"] for m in payload["Moderator"]["metrics"]] == MODERATOR_METRICS
    assert payload["Builder"]["default_rank"] == "Trial Builder"
    assert payload["Owner"]["immeasurable"] is True
