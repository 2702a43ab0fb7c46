"""
gl-provision: Create GitLab projects and assign members to them.

Usernames are resolved to user IDs with an exact match before any membership
is added, and failures across a batch of users are reported together.

Environment:
    GITLAB_TOKEN - GitLab Personal Access Token (required)
    GITLAB_URL   - GitLab instance URL (default: https://gitlab.com)
"""

from gl_provision.cli import main
from gl_provision.client import GitLabClient
from gl_provision.errors import AccountNotFound, InvalidInput, MembershipRejected, ProvisionError, RemoteFailure
from gl_provision.models import AccessLevel, BatchOutcome, Project, Visibility
from gl_provision.provisioning import create_project, create_project_and_set_members, set_members
from gl_provision.translate import role_name, role_of, visibility_name, visibility_of

__version__ = "0.1.0"
__all__ = [
    "main",
    "__version__",
    "GitLabClient",
    "AccessLevel",
    "Visibility",
    "Project",
    "BatchOutcome",
    "ProvisionError",
    "InvalidInput",
    "AccountNotFound",
    "MembershipRejected",
    "RemoteFailure",
    "visibility_of",
    "role_of",
    "visibility_name",
    "role_name",
    "create_project",
    "set_members",
    "create_project_and_set_members",
]
