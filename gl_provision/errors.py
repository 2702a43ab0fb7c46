"""Exception types raised by gl-provision."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

import requests

if TYPE_CHECKING:
    from gl_provision.models import BatchOutcome, Project


class ProvisionError(Exception):
    """
    Base class for provisioning failures.

    ``project`` is set when the failure happened after a project was created,
    so callers still get a handle on the project that now exists.
    """

    project: Project | None = None


class InvalidInput(ProvisionError, ValueError):
    """A visibility or access level string outside its closed set."""

    def __init__(self, field: str, value: str, allowed: Iterable[str]):
        self.field = field
        self.value = value
        self.allowed = tuple(allowed)
        super().__init__(
            f'Invalid {field} "{value}": the value of "{field}" can only be "{", ".join(self.allowed)}"'
        )


class _BatchError(ProvisionError):
    reason = ""

    def __init__(self, names: Iterable[str], causes: dict[str, str] | None = None, outcome: BatchOutcome | None = None):
        self.names = frozenset(names)
        self.causes = dict(causes or {})
        self.outcome = outcome
        message = f'"{",".join(sorted(self.names))}" {self.reason}'
        details = [f"{name}: {self.causes[name]}" for name in sorted(self.names) if self.causes.get(name)]
        if details:
            message += " (" + "; ".join(details) + ")"
        super().__init__(message)


class AccountNotFound(_BatchError):
    """One or more usernames could not be resolved to a user id."""

    reason = "username does not exist in GitLab"


class MembershipRejected(_BatchError):
    """One or more resolved users could not be added to the project."""

    reason = "failed to add GitLab project member"


class RemoteFailure(ProvisionError, requests.HTTPError):
    """Non-2xx response or transport error from the GitLab API."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str = "",
        response: requests.Response | None = None,
        request=None,
    ):
        self.status_code = status_code
        self.body = body
        super().__init__(message, response=response, request=request)

    @classmethod
    def from_response(cls, resp: requests.Response) -> RemoteFailure:
        body = resp.text[:500]
        method = resp.request.method if resp.request is not None else ""
        return cls(
            f"{resp.status_code} {resp.reason} for {method} {resp.url}: {body}",
            status_code=resp.status_code,
            body=body,
            response=resp,
            request=resp.request,
        )

    @property
    def is_client_error(self) -> bool:
        return self.status_code is not None and 400 <= self.status_code < 500
