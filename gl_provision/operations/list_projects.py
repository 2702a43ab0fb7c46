"""Project listing operation."""

from __future__ import annotations

import argparse

from gl_provision.errors import ProvisionError
from gl_provision.models import ActionResult, Project
from gl_provision.operations.base import Operation, register_operation


@register_operation("list-projects")
class ListProjectsOperation(Operation):
    """List projects visible to the token, or those owned by one user."""

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("--user", default=None, help="Only list projects owned by this username")

    def run(self) -> None:
        try:
            if self.args.user:
                user_id = self.client.resolve_user(self.args.user)
                projects = self.client.list_user_projects(user_id)
            else:
                projects = self.client.list_projects()
        except ProvisionError as e:
            self._record(
                ActionResult(
                    operation="list-projects",
                    target_path=self.args.user or "",
                    target_id=None,
                    action="error",
                    detail=str(e),
                )
            )
            return

        for data in projects:
            project = Project.from_api(data)
            self._record(
                ActionResult(
                    operation="list-projects",
                    target_path=project.path,
                    target_id=project.id,
                    action="listed",
                    detail=f"visibility={project.visibility}",
                )
            )
