"""CLI entry point for gl-provision."""

from __future__ import annotations

import argparse
import os
import sys

# Ensure all operations are registered by importing the operations package
import gl_provision.operations  # noqa: F401
from gl_provision.client import GitLabClient
from gl_provision.logging_utils import setup_logging
from gl_provision.models import DEFAULT_GITLAB_URL, DEFAULT_MAX_WORKERS
from gl_provision.operations import get_operation_registry


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gl-provision",
        description="Create GitLab projects and assign members to them.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment:
    GITLAB_TOKEN - GitLab Personal Access Token (required)
    GITLAB_URL   - GitLab instance URL (default: https://gitlab.com)

Examples:
    # Create a private project
    gl-provision create-project my-service

    # Add developers to an existing project
    gl-provision set-members myorg/my-service --user alice --user bob

    # Create an internal project and add two maintainers
    gl-provision provision my-service --visibility internal \\
        --access-level maintainer --user alice --user bob

    # List the projects owned by a user, as JSON lines
    gl-provision --json list-projects --user alice
""",
    )
    parser.add_argument(
        "--json", action="store_true", dest="json_output", help="Output results as JSON lines (to stderr)"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--gitlab-url", default=None, help="GitLab instance URL (default: from GITLAB_URL env or https://gitlab.com)"
    )
    parser.add_argument(
        "--max-workers",
        type=int,
        default=DEFAULT_MAX_WORKERS,
        help=f"Concurrent API calls per batch phase; 1 runs them sequentially (default: {DEFAULT_MAX_WORKERS})",
    )

    subparsers = parser.add_subparsers(dest="operation", required=True, help="Operation to perform")

    registry = get_operation_registry()
    for name, op_cls in sorted(registry.items()):
        sub = subparsers.add_parser(name, help=op_cls.__doc__)
        op_cls.add_arguments(sub)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # Resolve GitLab URL
    gitlab_url = args.gitlab_url or os.environ.get("GITLAB_URL", DEFAULT_GITLAB_URL)

    # Get token
    token = os.environ.get("GITLAB_TOKEN")
    if not token:
        print("ERROR: GITLAB_TOKEN environment variable is not set.", file=sys.stderr)
        return 1

    if args.max_workers < 1:
        parser.error("--max-workers must be at least 1")

    logger = setup_logging(json_mode=args.json_output, verbose=args.verbose)
    client = GitLabClient(base_url=gitlab_url, token=token, pool_size=args.max_workers)

    registry = get_operation_registry()
    op_cls = registry[args.operation]
    operation = op_cls(client=client, args=args)

    try:
        operation.run()
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130

    errors = sum(1 for r in operation.results if r.action == "error")
    if errors:
        logger.error(f"Done: {args.operation} finished with {errors} error(s)")
        return 1

    logger.info(f"Done: {args.operation} ({len(operation.results)} result(s))")
    return 0


if __name__ == "__main__":
    sys.exit(main())
