"""Process exit codes for the `ship` commands.

A release run either finishes (0) or stops (1). A user cancelling the run on
purpose is not an error and also exits 0.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    These values are used as process exit codes and should remain stable.
    """

    OK = 0
    FAILURE = 1

