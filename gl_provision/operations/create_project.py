"""Project creation operation."""

from __future__ import annotations

import argparse

from gl_provision.errors import ProvisionError
from gl_provision.models import ActionResult
from gl_provision.operations.base import Operation, add_visibility_argument, register_operation
from gl_provision.provisioning import create_project


@register_operation("create-project")
class CreateProjectOperation(Operation):
    """Create a project in the token owner's namespace."""

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("name", help="Project name, also used as its path")
        add_visibility_argument(parser)

    def run(self) -> None:
        try:
            project = create_project(self.client, self.args.name, self.args.visibility)
        except ProvisionError as e:
            self._record(
                ActionResult(
                    operation="create-project",
                    target_path=self.args.name,
                    target_id=None,
                    action="error",
                    detail=str(e),
                )
            )
            return

        self._record(
            ActionResult(
                operation="create-project",
                target_path=project.path,
                target_id=project.id,
                action="created",
                detail=f"visibility={project.visibility}",
            )
        )
