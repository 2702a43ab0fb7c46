"""Operations for gl-provision."""

# Import all operations to register them
from gl_provision.operations.base import Operation, get_operation_registry, register_operation
from gl_provision.operations.create_project import CreateProjectOperation
from gl_provision.operations.list_projects import ListProjectsOperation
from gl_provision.operations.provision import ProvisionOperation
from gl_provision.operations.set_members import SetMembersOperation

__all__ = [
    "Operation",
    "register_operation",
    "get_operation_registry",
    "CreateProjectOperation",
    "SetMembersOperation",
    "ProvisionOperation",
    "ListProjectsOperation",
]
