"""Project creation and batch member provisioning."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, TypeVar

from gl_provision.client import GitLabClient
from gl_provision.errors import AccountNotFound, MembershipRejected, ProvisionError
from gl_provision.models import DEFAULT_MAX_WORKERS, BatchOutcome, Project
from gl_provision.translate import role_name, role_of, visibility_of

T = TypeVar("T")

logger = logging.getLogger("gl-provision")


def create_project(client: GitLabClient, name: str, visibility: str) -> Project:
    """Create a project named ``name`` (also used as its path)."""
    visibility_value = visibility_of(visibility)
    logger.info(f"Creating project '{name}' ({visibility})")
    project = Project.from_api(client.create_project(name, name, visibility_value))
    logger.info(f"Created project '{project.path}' (id={project.id})")
    return project


def _attempt(fn: Callable[[str], T]) -> Callable[[str], tuple[str, T | None, Exception | None]]:
    """Wrap a per-user call so workers report failures instead of raising them."""

    def run(username: str) -> tuple[str, T | None, Exception | None]:
        try:
            return username, fn(username), None
        except ProvisionError as e:
            return username, None, e

    return run


def _fan_out(fn: Callable[[str], T], usernames: list[str], max_workers: int):
    """Run ``fn`` for each username on a worker pool; results come back in input order."""
    if not usernames:
        return []
    workers = max(1, min(max_workers, len(usernames)))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        return list(executor.map(_attempt(fn), usernames))


def _resolution_failure(username: str, error: Exception) -> str:
    if isinstance(error, AccountNotFound):
        return error.causes.get(username) or "not found"
    return str(error)


def set_members(
    client: GitLabClient,
    project_id: int,
    access_level: str,
    usernames: Iterable[str],
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> BatchOutcome:
    """
    Add every user in ``usernames`` to a project with one access level.

    All usernames are resolved before any membership is added. If any of them
    cannot be resolved, :class:`AccountNotFound` is raised and no member is
    added at all. Otherwise every resolved user is added exactly once, and
    :class:`MembershipRejected` names the users GitLab refused. Users added
    before a rejection stay added.
    """
    level = role_of(access_level)
    requested = list(dict.fromkeys(usernames))
    outcome = BatchOutcome(project_id=project_id, access_level=level, requested=requested)

    # Phase 1: resolve every username
    user_ids: dict[str, int] = {}
    for username, user_id, error in _fan_out(client.resolve_user, requested, max_workers):
        if error is not None:
            outcome.unresolved.add(username)
            outcome.errors[username] = _resolution_failure(username, error)
        else:
            user_ids[username] = user_id

    if outcome.unresolved:
        raise AccountNotFound(outcome.unresolved, outcome.errors, outcome)

    # Phase 2: add every resolved user
    def add(username: str) -> dict:
        return client.add_project_member(project_id, user_ids[username], level)

    for username, _, error in _fan_out(add, requested, max_workers):
        if error is not None:
            outcome.rejected.add(username)
            outcome.errors[username] = str(error)
        else:
            outcome.applied.add(username)
            logger.debug(f"Added '{username}' to project {project_id} as {role_name(level)}")

    if outcome.rejected:
        raise MembershipRejected(outcome.rejected, outcome.errors, outcome)

    logger.info(f"Added {len(outcome.applied)} member(s) to project {project_id} as {role_name(level)}")
    return outcome


def create_project_and_set_members(
    client: GitLabClient,
    name: str,
    visibility: str,
    access_level: str,
    usernames: Iterable[str],
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> Project:
    """
    Create a project and add members to it.

    Both enum strings are checked before anything is created. A creation
    failure is raised before any user lookup. A membership failure is raised
    with the created project attached as ``error.project``; the project is not
    deleted.
    """
    role_of(access_level)
    project = create_project(client, name, visibility)
    try:
        set_members(client, project.id, access_level, usernames, max_workers=max_workers)
    except ProvisionError as e:
        e.project = project
        raise
    return project
