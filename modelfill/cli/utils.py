"""CLI helpers."""


class ExitCode:
    """Exit codes for CLI commands.

        0 = Success
        1 = Build error (unsupported type, invalid constraint, ...)
        3 = Target not found
    """

    SUCCESS = 0
    BUILD_ERROR = 1
    TARGET_NOT_FOUND = 3
