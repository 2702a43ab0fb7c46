"""Data models and constants for gl-provision."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from functools import total_ordering

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_GITLAB_URL = "https://gitlab.com"
API_V4 = "/api/v4"
PER_PAGE = 100

# Worker pool size for per-user remote calls
DEFAULT_MAX_WORKERS = 8

DEFAULT_VISIBILITY = "private"
DEFAULT_ACCESS_LEVEL = "developer"


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class Visibility(Enum):
    PUBLIC = "public"
    INTERNAL = "internal"
    PRIVATE = "private"


@total_ordering
class AccessLevel(Enum):
    """GitLab project member access levels, ordered by privilege."""

    NO = 0
    MINIMAL = 5
    GUEST = 10
    REPORTER = 20
    DEVELOPER = 30
    MAINTAINER = 40
    OWNER = 50

    def __lt__(self, other: AccessLevel) -> bool:
        if not isinstance(other, AccessLevel):
            return NotImplemented
        return self.value < other.value


# ---------------------------------------------------------------------------
# Data Classes
# ---------------------------------------------------------------------------


@dataclass
class Project:
    """A GitLab project as returned by the API."""

    id: int
    name: str
    path: str
    visibility: str
    web_url: str = ""

    @classmethod
    def from_api(cls, data: dict) -> Project:
        return cls(
            id=data["id"],
            name=data["name"],
            path=data.get("path_with_namespace") or data.get("path", ""),
            visibility=data.get("visibility", ""),
            web_url=data.get("web_url", ""),
        )


@dataclass
class BatchOutcome:
    """
    Partition of a membership batch.

    Every requested username ends up in exactly one of ``unresolved``,
    ``rejected`` or ``applied``. ``errors`` maps each failed username to the
    reason it failed.
    """

    project_id: int
    access_level: AccessLevel
    requested: list[str] = field(default_factory=list)
    unresolved: set[str] = field(default_factory=set)
    rejected: set[str] = field(default_factory=set)
    applied: set[str] = field(default_factory=set)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.unresolved and not self.rejected

    def to_dict(self) -> dict:
        return {
            "project_id": self.project_id,
            "access_level": self.access_level.name.lower(),
            "unresolved": sorted(self.unresolved),
            "rejected": sorted(self.rejected),
            "applied": sorted(self.applied),
            "errors": dict(sorted(self.errors.items())),
        }


@dataclass
class ActionResult:
    """Result of a single CLI operation step."""

    operation: str
    target_path: str
    target_id: int | None
    action: str  # "created", "applied", "listed", "error"
    detail: str = ""
    outcome: BatchOutcome | None = None

    def to_dict(self) -> dict:
        d = {
            "operation": self.operation,
            "target_path": self.target_path,
            "target_id": self.target_id,
            "action": self.action,
            "detail": self.detail,
        }
        if self.outcome is not None:
            d["outcome"] = self.outcome.to_dict()
        return d
