"""Contains exceptions raised when invoking external version control tools."""

import shlex


class ExternalCommandError(Exception):
    """Raised when an external command exits with a non-zero status."""

    def __init__(self, command: list[str], returncode: int, stderr: str = "") -> None:
        """Initializes the exception with the failed command and its output."""
        self.command = command
        self.returncode = returncode
        self.stderr = stderr.strip()
        message = f"Command '{shlex.join(command)}' failed with exit status {returncode}"
        if self.stderr:
            message += f": {self.stderr}"
        super().__init__(message)
