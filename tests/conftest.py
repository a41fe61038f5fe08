"""Shared fixtures: a process runner that records calls instead of spawning."""

import asyncio
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

import pytest

from ssgbridge.adapters import (
    AdapterDescriptor,
    AdapterRegistry,
    Command,
    Dispatcher,
    Probe,
    ProcessResult,
    ProcessRunner,
    Tool,
    ToolParam,
)


@dataclass
class Call:
    executable: str
    args: List[str]
    cwd: Optional[str]
    input: Optional[str]


def ok(stdout: str = "") -> ProcessResult:
    return ProcessResult(success=True, stdout=stdout, stderr="", exit_code=0)


def failed(exit_code: int = 1, stderr: str = "boom") -> ProcessResult:
    return ProcessResult(success=False, stdout="", stderr=stderr, exit_code=exit_code)


def not_found(executable: str) -> ProcessResult:
    return ProcessResult(
        success=False,
        stdout="",
        stderr=f"command not found: {executable}",
        exit_code=None,
    )


class RecordingRunner(ProcessRunner):
    """
    ProcessRunner stand-in.

    Every call is recorded. Results come from ``responses`` keyed by
    executable; executables in ``missing`` behave like absent binaries and
    anything else succeeds with empty output.
    """

    def __init__(
        self,
        responses: Optional[Dict[str, ProcessResult]] = None,
        missing: Sequence[str] = (),
        delay: float = 0.0,
    ):
        self.responses = dict(responses or {})
        self.missing = set(missing)
        self.delay = delay
        self.calls: List[Call] = []
        self.hook: Optional[Callable[[Call], None]] = None

    async def run(self, executable, args=(), cwd=None, input=None) -> ProcessResult:
        call = Call(executable, list(args), cwd, input)
        self.calls.append(call)
        if self.hook is not None:
            self.hook(call)
        if self.delay:
            await asyncio.sleep(self.delay)
        if executable in self.missing:
            return not_found(executable)
        return self.responses.get(executable, ok())

    def argv(self, index: int = -1) -> List[str]:
        call = self.calls[index]
        return [call.executable, *call.args]


@pytest.fixture
def runner():
    return RecordingRunner()


def make_adapter(
    name: str = "demo",
    runner: Optional[ProcessRunner] = None,
    probes: Sequence[Probe] = (),
    tools: Optional[Sequence[Tool]] = None,
) -> AdapterDescriptor:
    """A small adapter with one required-arg tool and one optional-arg tool."""
    if tools is None:
        tools = [
            Tool(
                name="greet",
                description="Say hello",
                params=(
                    ToolParam(name="who", type="string", required=True),
                    ToolParam(name="loud", type="boolean"),
                ),
                build=lambda a: Command("echo", ("hello", a["who"]) + (("!",) if a.get("loud") else ())),
            ),
            Tool(
                name="build",
                description="Build the site",
                params=(ToolParam(name="path"), ToolParam(name="port", type="number")),
                build=lambda a: Command(
                    "demo",
                    ("build",) + (("--port", str(a["port"])) if "port" in a else ()),
                    cwd=a.get("path"),
                ),
            ),
        ]
    return AdapterDescriptor(
        name=name,
        language="Test",
        description="Adapter used in tests",
        probes=probes or [Probe(name, ("--version",))],
        tools=tools,
        runner=runner,
    )


@pytest.fixture
def registry(runner):
    registry = AdapterRegistry()
    registry.register(make_adapter("demo", runner=runner))
    return registry


@pytest.fixture
def dispatcher(registry):
    return Dispatcher(registry)
