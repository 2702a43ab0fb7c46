"""Batch membership operation for an existing project."""

from __future__ import annotations

import argparse

from gl_provision.errors import ProvisionError
from gl_provision.models import ActionResult
from gl_provision.operations.base import Operation, add_member_arguments, register_operation
from gl_provision.provisioning import set_members


@register_operation("set-members")
class SetMembersOperation(Operation):
    """Add users to an existing project with one access level."""

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("project", help="Project ID or full path (e.g., 'myorg/myproject')")
        add_member_arguments(parser)

    def _resolve_project(self) -> tuple[int, str]:
        if self.args.project.isdigit():
            return int(self.args.project), self.args.project
        project = self.client.get_project_by_path(self.args.project)
        return project["id"], project["path_with_namespace"]

    def run(self) -> None:
        target_path = self.args.project
        target_id = None
        try:
            target_id, target_path = self._resolve_project()
            outcome = set_members(
                self.client,
                target_id,
                self.args.access_level,
                self.args.users,
                max_workers=self.max_workers,
            )
        except ProvisionError as e:
            self._record(
                ActionResult(
                    operation="set-members",
                    target_path=target_path,
                    target_id=target_id,
                    action="error",
                    detail=str(e),
                    outcome=getattr(e, "outcome", None),
                )
            )
            return

        self._record(
            ActionResult(
                operation="set-members",
                target_path=target_path,
                target_id=target_id,
                action="applied",
                detail=f"{self.args.access_level}: {', '.join(sorted(outcome.applied))}",
                outcome=outcome,
            )
        )
