"""Tests for project creation and the create-and-set-members flow."""

import sys
from pathlib import Path

import pytest
import responses
from responses import matchers

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from gl_provision import (
    AccountNotFound,
    InvalidInput,
    MembershipRejected,
    RemoteFailure,
    create_project,
    create_project_and_set_members,
)

# Constants
MOCK_GITLAB_URL = "https://gitlab.example.com"
MOCK_API_URL = f"{MOCK_GITLAB_URL}/api/v4"


def add_user_lookup(username, users):
    responses.add(
        responses.GET,
        f"{MOCK_API_URL}/users",
        json=users,
        match=[matchers.query_param_matcher({"username": username}, strict_match=False)],
    )


class TestCreateProject:
    """Tests for create_project."""

    @responses.activate
    def test_creates_with_name_as_path(self, mock_client, sample_project):
        responses.add(
            responses.POST,
            f"{MOCK_API_URL}/projects",
            json=sample_project,
            status=201,
            match=[
                matchers.json_params_matcher(
                    {"name": "my-service", "path": "my-service", "visibility": "internal"}
                )
            ],
        )

        project = create_project(mock_client, "my-service", "internal")

        assert project.id == 42
        assert project.name == "my-service"
        assert project.path == "alice/my-service"

    @responses.activate
    def test_invalid_visibility_makes_no_call(self, mock_client):
        with pytest.raises(InvalidInput):
            create_project(mock_client, "my-service", "hidden")

        assert len(responses.calls) == 0

    @responses.activate
    def test_remote_error_propagates(self, mock_client):
        responses.add(
            responses.POST,
            f"{MOCK_API_URL}/projects",
            json={"message": {"path": ["has already been taken"]}},
            status=400,
        )

        with pytest.raises(RemoteFailure) as excinfo:
            create_project(mock_client, "my-service", "private")

        assert excinfo.value.status_code == 400
        assert len(responses.calls) == 1


class TestCreateProjectAndSetMembers:
    """Tests for create_project_and_set_members."""

    @responses.activate
    def test_success_returns_project(self, mock_client, sample_project, sample_users):
        responses.add(responses.POST, f"{MOCK_API_URL}/projects", json=sample_project, status=201)
        add_user_lookup("alice", [sample_users["alice"]])
        responses.add(responses.POST, f"{MOCK_API_URL}/projects/42/members", json={"id": 7}, status=201)

        project = create_project_and_set_members(mock_client, "my-service", "private", "developer", ["alice"])

        assert project.id == 42
        assert len(responses.calls) == 3

    @responses.activate
    def test_failed_creation_skips_members(self, mock_client):
        responses.add(responses.POST, f"{MOCK_API_URL}/projects", status=500)

        with pytest.raises(RemoteFailure) as excinfo:
            create_project_and_set_members(mock_client, "my-service", "private", "developer", ["alice", "bob"])

        assert excinfo.value.project is None
        assert len(responses.calls) == 1  # no user lookups, no member adds

    @responses.activate
    def test_invalid_visibility_makes_no_calls(self, mock_client):
        with pytest.raises(InvalidInput):
            create_project_and_set_members(mock_client, "my-service", "secret", "developer", ["alice"])

        assert len(responses.calls) == 0

    @responses.activate
    def test_unresolved_member_keeps_created_project(self, mock_client, sample_project, sample_users):
        responses.add(responses.POST, f"{MOCK_API_URL}/projects", json=sample_project, status=201)
        add_user_lookup("alice", [sample_users["alice"]])
        add_user_lookup("ghost", [])

        with pytest.raises(AccountNotFound) as excinfo:
            create_project_and_set_members(mock_client, "my-service", "private", "developer", ["alice", "ghost"])

        assert excinfo.value.project.id == 42
        assert excinfo.value.names == frozenset({"ghost"})
        # No DELETE, no member add
        assert [c.request.method for c in responses.calls].count("POST") == 1

    @responses.activate
    def test_rejected_member_keeps_created_project(self, mock_client, sample_project, sample_users):
        responses.add(responses.POST, f"{MOCK_API_URL}/projects", json=sample_project, status=201)
        add_user_lookup("alice", [sample_users["alice"]])
        responses.add(responses.POST, f"{MOCK_API_URL}/projects/42/members", status=403)

        with pytest.raises(MembershipRejected) as excinfo:
            create_project_and_set_members(mock_client, "my-service", "private", "owner", ["alice"])

        assert excinfo.value.project.id == 42
        assert excinfo.value.project.path == "alice/my-service"

    @responses.activate
    def test_invalid_access_level_checked_before_creation(self, mock_client):
        # NO project POST registered - nothing is created for a bad access level
        with pytest.raises(InvalidInput) as excinfo:
            create_project_and_set_members(mock_client, "my-service", "private", "superuser", ["alice"])

        assert excinfo.value.project is None
        assert len(responses.calls) == 0
