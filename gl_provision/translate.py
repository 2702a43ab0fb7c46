"""Translate user-supplied visibility and access level strings into enums."""

from __future__ import annotations

from gl_provision.errors import InvalidInput
from gl_provision.models import AccessLevel, Visibility

VISIBILITIES = {
    "public": Visibility.PUBLIC,
    "private": Visibility.PRIVATE,
    "internal": Visibility.INTERNAL,
}

ACCESS_LEVELS = {
    "no": AccessLevel.NO,
    "minimal": AccessLevel.MINIMAL,
    "guest": AccessLevel.GUEST,
    "reporter": AccessLevel.REPORTER,
    "developer": AccessLevel.DEVELOPER,
    "maintainer": AccessLevel.MAINTAINER,
    "owner": AccessLevel.OWNER,
}

_VISIBILITY_NAMES = {v: k for k, v in VISIBILITIES.items()}
_ACCESS_LEVEL_NAMES = {v: k for k, v in ACCESS_LEVELS.items()}

# Every enum member must have exactly one spelling
for _enum, _names in ((Visibility, _VISIBILITY_NAMES), (AccessLevel, _ACCESS_LEVEL_NAMES)):
    _unmapped = set(_enum) - set(_names)
    if _unmapped or len(_names) != len(_enum):
        raise RuntimeError(f"Incomplete {_enum.__name__} mapping: {sorted(m.name for m in _unmapped)}")


def visibility_of(value: str) -> Visibility:
    try:
        return VISIBILITIES[value]
    except (KeyError, TypeError):
        raise InvalidInput("visibility", value, VISIBILITIES) from None


def role_of(value: str) -> AccessLevel:
    try:
        return ACCESS_LEVELS[value]
    except (KeyError, TypeError):
        raise InvalidInput("access_level", value, ACCESS_LEVELS) from None


def visibility_name(visibility: Visibility) -> str:
    return _VISIBILITY_NAMES[visibility]


def role_name(level: AccessLevel) -> str:
    """Canonical string for an access level; inverse of :func:`role_of`."""
    return _ACCESS_LEVEL_NAMES[level]
