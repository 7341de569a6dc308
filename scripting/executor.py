"""
Script Executor
---------------
The single process boundary of the package.

Runs the automation interpreter with the script passed as one argument
(never through a shell) and returns what it printed.

Rules:
- No shell, no string-joined command lines
- stderr is logged, not fatal on its own
- Non-zero exit or spawn failure raises ScriptExecutionError
"""

from dataclasses import dataclass
from typing import List, Protocol, Sequence, Tuple
import asyncio
import logging

from core.errors import ScriptExecutionError


DEFAULT_INTERPRETER = "osascript"


class ScriptExecutor(Protocol):
    """Anything that can run a command and hand back its output."""

    async def execute(self, command: str, args: Sequence[str]) -> str:
        ...


@dataclass(frozen=True)
class ScriptInvocation:
    """One script run: the script text and the interpreter that runs it."""
    script: str
    interpreter: str = DEFAULT_INTERPRETER
    flags: Tuple[str, ...] = ("-e",)

    @property
    def args(self) -> List[str]:
        return [*self.flags, self.script]

    @property
    def argv(self) -> List[str]:
        return [self.interpreter, *self.args]


class SubprocessScriptExecutor:
    """Runs commands with asyncio subprocesses."""

    def __init__(self, encoding: str = "utf-8"):
        self._encoding = encoding
        self._logger = logging.getLogger("pages.scripting.executor")

    async def execute(self, command: str, args: Sequence[str]) -> str:
        """
        Run command with args and wait for it.

        Returns stdout with surrounding whitespace stripped.
        Raises ScriptExecutionError if the process cannot be started or
        exits non-zero.
        """
        try:
            process = await asyncio.create_subprocess_exec(
                command, *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE
            )
        except OSError as e:
            self._logger.error(f"Could not start {command}: {e}")
            raise ScriptExecutionError(f"Could not start {command}: {e}") from e

        stdout_bytes, stderr_bytes = await process.communicate()
        stdout = stdout_bytes.decode(self._encoding, errors="replace")
        stderr = stderr_bytes.decode(self._encoding, errors="replace").strip()

        if stderr:
            self._logger.warning(f"{command} stderr: {stderr}")

        if process.returncode != 0:
            message = stderr or f"{command} exited with status {process.returncode}"
            raise ScriptExecutionError(
                message,
                returncode=process.returncode,
                stderr=stderr
            )

        return stdout.strip()


async def run_applescript(
    executor: ScriptExecutor,
    script: str,
    interpreter: str = DEFAULT_INTERPRETER
) -> str:
    """Run an AppleScript snippet through executor."""
    invocation = ScriptInvocation(script=script, interpreter=interpreter)
    return await executor.execute(invocation.interpreter, invocation.args)
