"""External command execution behind an injectable runner.

Philosophy:
- Single responsibility: run external programs, nothing else
- Commands are plain data (argv list), never shell strings
- Fail fast: a checked command that exits non-zero raises immediately
- No timeouts: installs and interactive logins block until they return

Public API (the "studs"):
    Command: Command description dataclass
    CommandResult: Result dataclass
    CommandRunner: Protocol implemented by runners
    SubprocessRunner: Runner backed by subprocess
    RecordingCommandRunner: Runner for tests, records commands
"""

import logging
import os
import shutil
import subprocess
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from devsetup.errors import CommandFailedError

logger = logging.getLogger(__name__)

# Exit code reported when the program itself cannot be found
COMMAND_NOT_FOUND = 127

# Shell convention for a child killed by signal N: exit status 128 + N
SIGNAL_EXIT_BASE = 128


@dataclass(frozen=True)
class Command:
    """One external program invocation.

    Attributes:
        argv: Program name followed by its arguments
        input_text: Text written to the program's stdin (optional)
        capture: Capture stdout/stderr instead of inheriting the terminal
        check: Raise CommandFailedError on non-zero exit
    """

    argv: tuple[str, ...]
    input_text: str | None = None
    capture: bool = False
    check: bool = True

    @property
    def program(self) -> str:
        return self.argv[0]

    def __str__(self) -> str:
        return " ".join(self.argv)


def cmd(*argv: str, input_text: str | None = None, capture: bool = False, check: bool = True) -> Command:
    """Build a Command from positional arguments.

    Example:
        >>> str(cmd("sudo", "apt", "update"))
        'sudo apt update'
    """
    if not argv:
        raise ValueError("command must have at least a program name")
    return Command(argv=tuple(argv), input_text=input_text, capture=capture, check=check)


@dataclass
class CommandResult:
    """Result of command execution."""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0


@runtime_checkable
class CommandRunner(Protocol):
    """Protocol for running external commands."""

    def run(self, command: Command) -> CommandResult:
        """Run a command to completion.

        Raises:
            CommandFailedError: If command.check is set and the exit code is non-zero
        """
        ...

    def which(self, program: str) -> str | None:
        """Return the resolved path of a program, or None if not on PATH."""
        ...

    def prepend_path(self, directory: str) -> None:
        """Put a directory at the front of PATH for subsequent commands."""
        ...

    def set_env(self, name: str, value: str) -> None:
        """Export a variable to subsequent commands."""
        ...


def _check(command: Command, result: CommandResult) -> CommandResult:
    if command.check and result.returncode != 0:
        logger.debug(f"Command failed with exit code {result.returncode}: {command}")
        raise CommandFailedError(str(command), result.returncode, result.stderr)
    return result


class SubprocessRunner:
    """Run commands with subprocess, inheriting the terminal by default.

    Interactive programs (sudo password prompts, gh auth login) need the
    real terminal, so output is only captured when a command asks for it.
    """

    def __init__(self, env: dict[str, str] | None = None):
        self.env: dict[str, str] = dict(os.environ if env is None else env)

    def run(self, command: Command) -> CommandResult:
        logger.debug(f"Running: {command}")
        try:
            proc = subprocess.run(
                list(command.argv),
                input=command.input_text,
                capture_output=command.capture,
                text=True,
                env=self.env,
                check=False,
            )
        except FileNotFoundError:
            result = CommandResult(
                returncode=COMMAND_NOT_FOUND,
                stderr=f"Command not found: {command.program}",
            )
            logger.error(result.stderr)
            return _check(command, result)
        except PermissionError as e:
            result = CommandResult(returncode=126, stderr=f"Permission denied: {e!s}")
            logger.error(result.stderr)
            return _check(command, result)

        returncode = proc.returncode
        if returncode < 0:
            logger.debug(f"{command.program} killed by signal {-returncode}")
            returncode = SIGNAL_EXIT_BASE - returncode

        result = CommandResult(
            returncode=returncode,
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
        )
        return _check(command, result)

    def which(self, program: str) -> str | None:
        return shutil.which(program, path=self.env.get("PATH"))

    def prepend_path(self, directory: str) -> None:
        current = self.env.get("PATH", "")
        self.env["PATH"] = f"{directory}{os.pathsep}{current}" if current else directory

    def set_env(self, name: str, value: str) -> None:
        self.env[name] = value


@dataclass
class RecordingCommandRunner:
    """Runner for tests: records every command and returns scripted results.

    Responses are matched by substring against the joined command line; the
    first configured pattern that matches wins. Unmatched commands succeed
    with empty output.

    Example:
        >>> runner = RecordingCommandRunner(available={"flatpak"})
        >>> runner.fail_on("apt upgrade", returncode=100)
        >>> runner.which("brew") is None
        True
    """

    available: set[str] = field(default_factory=set)
    commands: list[Command] = field(default_factory=list)
    env: dict[str, str] = field(default_factory=dict)
    path_prefixes: list[str] = field(default_factory=list)
    responses: list[tuple[str, CommandResult]] = field(default_factory=list)
    hooks: list[tuple[str, Callable[[Command], None]]] = field(default_factory=list)

    def respond(self, pattern: str, returncode: int = 0, stdout: str = "", stderr: str = "") -> None:
        self.responses.append((pattern, CommandResult(returncode, stdout, stderr)))

    def fail_on(self, pattern: str, returncode: int = 1, stderr: str = "") -> None:
        self.respond(pattern, returncode=returncode, stderr=stderr)

    def on(self, pattern: str, callback: Callable[[Command], None]) -> None:
        """Call ``callback`` whenever a matching command runs (e.g. to create files)."""
        self.hooks.append((pattern, callback))

    def run(self, command: Command) -> CommandResult:
        self.commands.append(command)
        line = str(command)
        for pattern, callback in self.hooks:
            if pattern in line:
                callback(command)
        for pattern, result in self.responses:
            if pattern in line:
                return _check(command, result)
        return CommandResult(returncode=0)

    def which(self, program: str) -> str | None:
        if program in self.available:
            return f"/usr/bin/{program}"
        return None

    def prepend_path(self, directory: str) -> None:
        self.path_prefixes.append(directory)

    def set_env(self, name: str, value: str) -> None:
        self.env[name] = value

    @property
    def command_lines(self) -> list[str]:
        return [str(c) for c in self.commands]

    def ran(self, fragment: str) -> bool:
        return any(fragment in line for line in self.command_lines)


__all__ = [
    "COMMAND_NOT_FOUND",
    "Command",
    "CommandResult",
    "CommandRunner",
    "RecordingCommandRunner",
    "SIGNAL_EXIT_BASE",
    "SubprocessRunner",
    "cmd",
]
