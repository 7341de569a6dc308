"""
Test Configuration
------------------
Shared fixtures and configuration for all tests.

No test may talk to Pages: osascript spawns are blocked and handlers are
exercised through a fake executor.
"""

import asyncio
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


# =============================================================================
# Test Isolation: Block Side Effects
# =============================================================================

@pytest.fixture(autouse=True)
def block_osascript(monkeypatch):
    """
    Block osascript spawns during tests.

    Other commands (e.g. the test interpreter itself) are allowed so the
    real subprocess executor can still be tested.
    """
    _original_exec = asyncio.create_subprocess_exec

    async def _guarded_exec(program, *args, **kwargs):
        if Path(str(program)).name == "osascript":
            raise RuntimeError(
                "osascript is forbidden during tests. "
                "Use the fake_executor fixture."
            )
        return await _original_exec(program, *args, **kwargs)

    monkeypatch.setattr(asyncio, "create_subprocess_exec", _guarded_exec)


# =============================================================================
# Fake executor
# =============================================================================

class FakeScriptExecutor:
    """
    Records every command it is asked to run.

    Returns `output`, or raises `error` when one is set.
    """

    def __init__(self, output: str = "", error: Optional[Exception] = None):
        self.output = output
        self.error = error
        self.calls: List[Tuple[str, List[str]]] = []

    async def execute(self, command: str, args: Sequence[str]) -> str:
        self.calls.append((command, list(args)))
        if self.error is not None:
            raise self.error
        return self.output

    @property
    def scripts(self) -> List[str]:
        """The script argument of every call."""
        return [args[-1] for _, args in self.calls]

    @property
    def last_script(self) -> str:
        return self.scripts[-1]


@pytest.fixture
def fake_executor():
    """A fake executor that succeeds with empty output."""
    return FakeScriptExecutor()


@pytest.fixture
def registry(fake_executor):
    """Registry of all Pages tools bound to the fake executor."""
    from tools import create_pages_registry
    return create_pages_registry(fake_executor)


@pytest.fixture
def run():
    """Run a coroutine to completion."""
    return asyncio.run


@pytest.fixture(scope="session")
def project_root():
    """Return the project root path."""
    return PROJECT_ROOT
