"""Base class and registry for operations."""

from __future__ import annotations

import argparse
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from gl_provision.models import DEFAULT_ACCESS_LEVEL, DEFAULT_MAX_WORKERS, DEFAULT_VISIBILITY, ActionResult
from gl_provision.translate import ACCESS_LEVELS, VISIBILITIES

if TYPE_CHECKING:
    from gl_provision.client import GitLabClient

# ---------------------------------------------------------------------------
# Operation Registry
# ---------------------------------------------------------------------------

_operation_registry: dict[str, type[Operation]] = {}


def register_operation(name: str):
    """Decorator to register an operation class under a CLI subcommand name."""

    def decorator(cls):
        _operation_registry[name] = cls
        cls.operation_name = name
        return cls

    return decorator


def get_operation_registry() -> dict[str, type[Operation]]:
    """Get the operation registry."""
    return _operation_registry


# ---------------------------------------------------------------------------
# Operation Base Class
# ---------------------------------------------------------------------------


class Operation(ABC):
    """Base class for all operations."""

    operation_name: str = ""

    def __init__(self, client: GitLabClient, args: argparse.Namespace):
        self.client = client
        self.args = args
        self.logger = logging.getLogger("gl-provision")
        self.results: list[ActionResult] = []

    @property
    def max_workers(self) -> int:
        return getattr(self.args, "max_workers", DEFAULT_MAX_WORKERS)

    @staticmethod
    @abstractmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        """Add operation-specific CLI arguments."""
        ...

    @abstractmethod
    def run(self) -> None:
        """Execute the operation, recording an ActionResult for each step."""
        ...

    def _record(self, result: ActionResult) -> ActionResult:
        self.results.append(result)
        icon = {
            "created": "✓",
            "applied": "✓",
            "listed": "·",
            "error": "✗",
        }.get(result.action, "?")

        handler = self.logger.handlers[0] if self.logger.handlers else None
        if handler and getattr(handler.formatter, "json_mode", False):
            record = self.logger.makeRecord("gl-provision", logging.INFO, "", 0, "", (), None)
            record.action_result = result
            self.logger.handle(record)
        else:
            self.logger.info(
                f"{icon} {result.target_path}: {result.operation} → {result.action}"
                f"{' (' + result.detail + ')' if result.detail else ''}"
            )
        return result


# ---------------------------------------------------------------------------
# Shared arguments
# ---------------------------------------------------------------------------


def add_visibility_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--visibility",
        default=DEFAULT_VISIBILITY,
        choices=list(VISIBILITIES.keys()),
        help=f"Project visibility (default: {DEFAULT_VISIBILITY})",
    )


def add_member_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--user",
        dest="users",
        action="append",
        required=True,
        help="Username to add as a member (repeatable)",
    )
    parser.add_argument(
        "--access-level",
        default=DEFAULT_ACCESS_LEVEL,
        choices=list(ACCESS_LEVELS.keys()),
        help=f"Access level granted to every user (default: {DEFAULT_ACCESS_LEVEL})",
    )
