"""Exception hierarchy for devsetup.

Every error carries the process exit code the CLI should terminate with.
"""


class DevSetupError(Exception):
    """Base exception for devsetup errors."""

    exit_code = 1


class SetupAbortedError(DevSetupError):
    """Raised when the operator declines to continue or gives invalid input."""

    pass


class EndOfInputError(DevSetupError):
    """Raised when the input stream closes while a prompt is waiting."""

    pass


class CommandFailedError(DevSetupError):
    """Raised when an external command exits non-zero.

    The exit code of the failing command becomes the exit code of the run.
    """

    def __init__(self, command: str, exit_code: int, stderr: str = ""):
        self.command = command
        self.exit_code = exit_code
        self.stderr = stderr
        super().__init__(f"Command failed (exit={exit_code}): {command}")
