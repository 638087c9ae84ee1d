"""Single source of truth for staff roles, their metric schemas and allowed ranks."""

from __future__ import annotations

from enum import Enum
from typing import Dict, List


class StaffRole(str, Enum):
    MODERATOR = "Moderator"
    BUILDER = "Builder"
    MANAGER = "Manager"
    OWNER = "Owner"


IMMEASURABLE_ROLES = frozenset({StaffRole.MANAGER, StaffRole.OWNER})

# camelCase metric key -> label and persisted column name
METRICS: Dict[str, Dict[str, str]] = {
    "responsiveness": {"label": "Responsiveness", "column": "responsiveness"},
    "fairness": {"label": "Fairness", "column": "fairness"},
    "communication": {"label": "Communication", "column": "communication"},
    "conflictResolution": {"label": "Conflict Resolution", "column": "conflict_resolution"},
    "ruleEnforcement": {"label": "Rule Enforcement", "column": "rule_enforcement"},
    "engagement": {"label": "Engagement", "column": "engagement"},
    "supportiveness": {"label": "Supportiveness", "column": "supportiveness"},
    "adaptability": {"label": "Adaptability", "column": "adaptability"},
    "objectivity": {"label": "Objectivity", "column": "objectivity"},
    "initiative": {"label": "Initiative", "column": "initiative"},
    "exterior": {"label": "Exterior", "column": "exterior"},
    "interior": {"label": "Interior", "column": "interior"},
    "decoration": {"label": "Decoration", "column": "decoration"},
    "effort": {"label": "Effort", "column": "effort"},
    "contribution": {"label": "Contribution", "column": "contribution"},
    "cooperativeness": {"label": "Cooperativeness", "column": "cooperativeness"},
    "creativity": {"label": "Creativity", "column": "creativity"},
    "consistency": {"label": "Consistency", "column": "consistency"},
}

MODERATOR_METRICS: List[str] = [
    "responsiveness",
    "fairness",
    "communication",
    "conflictResolution",
    "ruleEnforcement",
    "engagement",
    "supportiveness",
    "adaptability",
    "objectivity",
    "initiative",
]

BUILDER_METRICS: List[str] = [
    "exterior",
    "interior",
    "decoration",
    "effort",
    "contribution",
    "communication",
    "adaptability",
    "cooperativeness",
    "creativity",
    "consistency",
]

# Moderator keys first, then the builder keys not already present (18 total).
MANAGER_METRICS: List[str] = MODERATOR_METRICS + [k for k in BUILDER_METRICS if k not in MODERATOR_METRICS]

METRIC_SCHEMAS: Dict[StaffRole, List[str]] = {
    StaffRole.MODERATOR: MODERATOR_METRICS,
    StaffRole.BUILDER: BUILDER_METRICS,
    StaffRole.MANAGER: MANAGER_METRICS,
    StaffRole.OWNER: MANAGER_METRICS,
}

# Ordered senior -> junior; the last entry is the default for new staff.
ALLOWED_RANKS: Dict[StaffRole, List[str]] = {
    StaffRole.MODERATOR: ["Sr.Mod", "Mod", "Jr.Mod", "Trial(Mod)"],
    StaffRole.BUILDER: ["HeadBuilder", "Builder", "Trial Builder"],
    StaffRole.MANAGER: ["Manager"],
    StaffRole.OWNER: ["Owner"],
}

# Spellings written by the first version of the dashboard.
RANK_ALIASES: Dict[StaffRole, Dict[str, str]] = {
    StaffRole.MODERATOR: {"Trial Mod": "Trial(Mod)"},
}

# Storage partition per role. Owner rows live in ``managers`` with a role tag.
PARTITIONS: Dict[StaffRole, str] = {
    StaffRole.MODERATOR: "moderators",
    StaffRole.BUILDER: "builders",
    StaffRole.MANAGER: "managers",
    StaffRole.OWNER: "managers",
}


def is_immeasurable(role: StaffRole) -> bool:
    return StaffRole(role) in IMMEASURABLE_ROLES


def metric_keys(role: StaffRole) -> List[str]:
    return list(METRIC_SCHEMAS[StaffRole(role)])


def metric_label(key: str) -> str:
    return METRICS[key]["label"]


def metric_column(key: str) -> str:
    return METRICS[key]["column"]


def allowed_ranks(role: StaffRole) -> List[str]:
    return list(ALLOWED_RANKS[StaffRole(role)])


def default_rank(role: StaffRole) -> str:
    return ALLOWED_RANKS[StaffRole(role)][-1]


def canonical_rank(role: StaffRole, rank: str) -> str:
    cleaned = (rank or "").strip()
    return RANK_ALIASES.get(StaffRole(role), {}).get(cleaned, cleaned)


def partition_for(role: StaffRole) -> str:
    return PARTITIONS[StaffRole(role)]


def role_metadata_payload() -> dict:
    """Role table as served to the admin UI."""
    return {
        role.value: {
            "metrics": [{"key": key, "label": metric_label(key)} for key in METRIC_SCHEMAS[role]],
            "ranks": list(ALLOWED_RANKS[role]),
            "default_rank": default_rank(role),
            "immeasurable": role in IMMEASURABLE_ROLES,
        }
        for role in StaffRole
    }
