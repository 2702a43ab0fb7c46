"""Create a project and set its members in one step."""

from __future__ import annotations

import argparse

from gl_provision.errors import ProvisionError
from gl_provision.models import ActionResult
from gl_provision.operations.base import (
    Operation,
    add_member_arguments,
    add_visibility_argument,
    register_operation,
)
from gl_provision.provisioning import create_project_and_set_members


@register_operation("provision")
class ProvisionOperation(Operation):
    """Create a project and add users to it with one access level."""

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("name", help="Project name, also used as its path")
        add_visibility_argument(parser)
        add_member_arguments(parser)

    def run(self) -> None:
        try:
            project = create_project_and_set_members(
                self.client,
                self.args.name,
                self.args.visibility,
                self.args.access_level,
                self.args.users,
                max_workers=self.max_workers,
            )
        except ProvisionError as e:
            # The project exists once creation succeeded, even if members failed
            if e.project is not None:
                self._record_created(e.project.path, e.project.id, e.project.visibility)
            self._record(
                ActionResult(
                    operation="provision",
                    target_path=e.project.path if e.project else self.args.name,
                    target_id=e.project.id if e.project else None,
                    action="error",
                    detail=str(e),
                    outcome=getattr(e, "outcome", None),
                )
            )
            return

        self._record_created(project.path, project.id, project.visibility)
        self._record(
            ActionResult(
                operation="provision",
                target_path=project.path,
                target_id=project.id,
                action="applied",
                detail=f"{self.args.access_level}: {', '.join(sorted(set(self.args.users)))}",
            )
        )

    def _record_created(self, path: str, project_id: int, visibility: str) -> ActionResult:
        return self._record(
            ActionResult(
                operation="provision:create",
                target_path=path,
                target_id=project_id,
                action="created",
                detail=f"visibility={visibility}",
            )
        )
