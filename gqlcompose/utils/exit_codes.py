"""Centralized exit codes for the gqlcompose CLI."""


class ExitCodes:
    """Standard exit codes for gqlcompose."""

    SUCCESS = 0

    BUILD_FAILED = 1

    USAGE_ERROR = 2
