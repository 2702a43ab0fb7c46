"""GitLab API client with pagination support."""

from __future__ import annotations

import logging
import urllib.parse
from typing import Any

import requests
import requests.adapters

from gl_provision.errors import AccountNotFound, RemoteFailure
from gl_provision.models import API_V4, DEFAULT_MAX_WORKERS, PER_PAGE, AccessLevel, Visibility


class GitLabClient:
    """
    Thin wrapper around GitLab REST API v4 with pagination support.

    Every request is attempted exactly once. Non-2xx responses and transport
    errors are raised as :class:`RemoteFailure`.
    """

    def __init__(self, base_url: str, token: str, pool_size: int = DEFAULT_MAX_WORKERS):
        self.base_url = base_url.rstrip("/")
        self.api_url = f"{self.base_url}{API_V4}"
        self.session = requests.Session()
        # One pooled connection per concurrent worker
        adapter = requests.adapters.HTTPAdapter(pool_maxsize=max(1, pool_size))
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)
        self.session.headers.update(
            {
                "PRIVATE-TOKEN": token,
                "Content-Type": "application/json",
            }
        )
        self.logger = logging.getLogger("gl-provision")

    def _request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        url = f"{self.api_url}{endpoint}"
        self.logger.debug(f"{method.upper()} {url} {kwargs.get('params', '')} {kwargs.get('json', '')}")
        try:
            resp = self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            raise RemoteFailure(f"{method.upper()} {url} failed: {e}", request=e.request) from e

        if resp.status_code >= 400:
            self.logger.debug(f"API error {resp.status_code}: {resp.text[:500]}")
            raise RemoteFailure.from_response(resp)
        return resp

    @staticmethod
    def _json(resp: requests.Response) -> Any:
        """Decode a successful response body; a non-JSON body is a remote failure."""
        try:
            return resp.json()
        except ValueError as e:
            raise RemoteFailure.from_response(resp) from e

    def get(self, endpoint: str, params: dict | None = None) -> Any:
        return self._json(self._request("GET", endpoint, params=params))

    def post(self, endpoint: str, data: dict | None = None) -> Any:
        return self._json(self._request("POST", endpoint, json=data))

    def paginate(self, endpoint: str, params: dict | None = None) -> list[dict]:
        """Fetch all pages of a paginated endpoint."""
        params = dict(params or {})
        params.setdefault("per_page", PER_PAGE)
        page = 1
        results = []
        while True:
            params["page"] = page
            resp = self._request("GET", endpoint, params=params)
            data = self._json(resp)
            if not data:
                break
            results.extend(data)
            total_pages = int(resp.headers.get("x-total-pages", page))
            if page >= total_pages:
                break
            page += 1
        return results

    # -- Users --

    def search_users(self, username: str) -> list[dict]:
        """Candidate users for a username. GitLab may return near matches."""
        return self.paginate("/users", params={"username": username})

    def resolve_user(self, username: str) -> int:
        """
        Resolve a username to its numeric user ID.

        Only a candidate whose username is exactly equal (case-sensitive) is
        accepted; near matches such as ``bob2`` for ``bob`` are ignored.
        """
        if not username:
            raise AccountNotFound([username], {username: "empty username"})

        for user in self.search_users(username):
            if user.get("username") == username:
                return user["id"]
        raise AccountNotFound([username])

    # -- Projects --

    def create_project(self, name: str, path: str, visibility: Visibility) -> dict:
        return self.post("/projects", data={"name": name, "path": path, "visibility": visibility.value})

    def add_project_member(self, project_id: int, user_id: int, access_level: AccessLevel) -> dict:
        return self.post(
            f"/projects/{project_id}/members",
            data={"user_id": user_id, "access_level": access_level.value},
        )

    def get_project(self, project_id: int) -> dict:
        """Get project details by ID."""
        return self.get(f"/projects/{project_id}")

    def get_project_by_path(self, path: str) -> dict:
        """Get project details by path."""
        encoded_path = urllib.parse.quote(path, safe="")
        return self.get(f"/projects/{encoded_path}")

    def list_projects(self) -> list[dict]:
        return self.paginate("/projects")

    def list_user_projects(self, user_id: int) -> list[dict]:
        return self.paginate(f"/users/{user_id}/projects")
