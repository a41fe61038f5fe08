"""Tests for tools, probes, and the adapter connection lifecycle."""

import asyncio

import pytest

from conftest import RecordingRunner, failed, make_adapter, ok
from ssgbridge.adapters import AdapterDescriptor, Command, ConnectionState, Probe, ProcessResult, Tool, ToolParam


class TestProbe:
    """Tests for Probe.accepts."""

    def test_success_passes(self):
        assert Probe("zola").accepts(ok()) is True

    def test_failure_fails(self):
        assert Probe("zola").accepts(failed()) is False

    def test_not_spawned_never_passes(self):
        probe = Probe("frog", accept_output="frog", require_success=False)

        assert probe.accepts(ProcessResult(success=False, stderr="frog", exit_code=None)) is False

    def test_accept_output(self):
        """A failing probe passes when the expected text shows up."""
        probe = Probe("raco", ("frog", "--help"), accept_output="frog")

        assert probe.accepts(failed(stderr="usage: raco frog ...")) is True
        assert probe.accepts(failed(stderr="raco: unrecognized command")) is False

    def test_require_success_off(self):
        assert Probe("java", require_success=False).accepts(failed(exit_code=2)) is True


class TestTool:
    """Tests for Tool."""

    def test_single_command_normalized(self):
        tool = Tool("t", "d", build=lambda a: Command("x"))

        assert tool.commands({}) == [Command("x")]

    def test_sequence_preserved(self):
        tool = Tool("t", "d", build=lambda a: [Command("a"), Command("b")])

        assert [c.program for c in tool.commands({})] == ["a", "b"]

    def test_empty_build_rejected(self):
        tool = Tool("t", "d", build=lambda a: [])

        with pytest.raises(ValueError):
            tool.commands({})

    def test_param_lookup(self):
        tool = Tool("t", "d", build=lambda a: Command("x"), params=(ToolParam(name="port", type="number"),))

        assert tool.param("port").type == "number"
        assert tool.param("nope") is None


class TestAdapterDescriptor:
    """Tests for AdapterDescriptor construction and introspection."""

    def test_duplicate_tool_names_rejected(self):
        tool = Tool("t", "d", build=lambda a: Command("x"))

        with pytest.raises(ValueError):
            AdapterDescriptor("demo", "Test", "desc", tools=[tool, tool])

    def test_starts_disconnected(self):
        adapter = make_adapter(runner=RecordingRunner())

        assert adapter.state is ConnectionState.DISCONNECTED
        assert adapter.is_connected() is False

    def test_name_is_read_only(self):
        adapter = make_adapter(runner=RecordingRunner())

        with pytest.raises(AttributeError):
            adapter.name = "other"

    def test_tools_keep_declaration_order(self):
        adapter = make_adapter(runner=RecordingRunner())

        assert [t.name for t in adapter.tools] == ["greet", "build"]

    def test_programs_include_probe_programs(self):
        adapter = AdapterDescriptor(
            "scalatex",
            "Scala",
            "desc",
            probes=[Probe("mill"), Probe("sbt")],
            programs=["mill"],
        )

        assert adapter.programs() == ["mill", "sbt"]

    def test_resolve_uses_binaries(self):
        adapter = AdapterDescriptor("zola", "Rust", "desc", binaries={"zola": "/opt/zola"})

        assert adapter.resolve("zola") == "/opt/zola"
        assert adapter.resolve("make") == "make"

    def test_describe(self):
        adapter = make_adapter(runner=RecordingRunner())
        data = adapter.describe()

        assert data["name"] == "demo"
        assert data["connected"] is False
        assert data["tools"][0]["name"] == "greet"
        assert data["tools"][0]["inputSchema"]["required"] == ["who"]


class TestLifecycle:
    """Tests for connect / disconnect."""

    @pytest.mark.asyncio
    async def test_connect_success(self):
        runner = RecordingRunner()
        adapter = make_adapter(runner=runner)

        assert await adapter.connect() is True
        assert adapter.is_connected() is True
        assert runner.argv() == ["demo", "--version"]

    @pytest.mark.asyncio
    async def test_connect_missing_binary(self):
        adapter = make_adapter(runner=RecordingRunner(missing=["demo"]))

        assert await adapter.connect() is False
        assert adapter.state is ConnectionState.DISCONNECTED

    @pytest.mark.asyncio
    async def test_fallback_probe(self):
        """Probes are tried in order; the first to pass wins."""
        runner = RecordingRunner(missing=["marmot"])
        adapter = make_adapter(
            "marmot",
            runner=runner,
            probes=[Probe("marmot", ("--version",)), Probe("crystal", ("--version",)), Probe("never")],
        )

        assert await adapter.connect() is True
        assert [c.executable for c in runner.calls] == ["marmot", "crystal"]

    @pytest.mark.asyncio
    async def test_probe_uses_binary_override_and_stdin(self):
        runner = RecordingRunner()
        adapter = make_adapter("wub", runner=runner, probes=[Probe("tclsh", stdin="puts [info patchlevel]\n")])
        adapter.binaries["tclsh"] = "/usr/bin/tclsh8.6"

        await adapter.connect()

        assert runner.calls[0].executable == "/usr/bin/tclsh8.6"
        assert runner.calls[0].input == "puts [info patchlevel]\n"

    @pytest.mark.asyncio
    async def test_probe_exception_counts_as_failure(self):
        runner = RecordingRunner()

        def explode(call):
            raise RuntimeError("runner broke")

        runner.hook = explode
        adapter = make_adapter(runner=runner)

        assert await adapter.connect() is False
        assert adapter.is_connected() is False

    @pytest.mark.asyncio
    async def test_reconnect_after_failure(self):
        runner = RecordingRunner(missing=["demo"])
        adapter = make_adapter(runner=runner)
        assert await adapter.connect() is False

        runner.missing.clear()
        assert await adapter.connect() is True

    @pytest.mark.asyncio
    async def test_disconnect_is_idempotent(self):
        adapter = make_adapter(runner=RecordingRunner())
        await adapter.connect()

        adapter.disconnect()
        adapter.disconnect()

        assert adapter.state is ConnectionState.DISCONNECTED

    def test_disconnect_never_connected(self):
        adapter = make_adapter(runner=RecordingRunner())

        adapter.disconnect()

        assert adapter.is_connected() is False

    @pytest.mark.asyncio
    async def test_disconnect_during_probe_wins(self):
        runner = RecordingRunner()
        adapter = make_adapter(runner=runner)
        runner.hook = lambda call: adapter.disconnect()

        assert await adapter.connect() is False
        assert adapter.is_connected() is False

    @pytest.mark.asyncio
    async def test_concurrent_ensure_connected_probes_once(self):
        runner = RecordingRunner(delay=0.05)
        adapter = make_adapter(runner=runner)

        results = await asyncio.gather(*(adapter.ensure_connected() for _ in range(5)))

        assert results == [True] * 5
        assert len(runner.calls) == 1

    @pytest.mark.asyncio
    async def test_concurrent_ensure_connected_shares_failure(self):
        runner = RecordingRunner(missing=["demo"], delay=0.05)
        adapter = make_adapter(runner=runner)

        results = await asyncio.gather(*(adapter.ensure_connected() for _ in range(3)))

        assert results == [False] * 3
        assert len(runner.calls) == 1

    @pytest.mark.asyncio
    async def test_waiter_reprobes_after_disconnect(self):
        """A disconnect between another caller's probe and ours forces a fresh probe."""

        class DisconnectAfterFirstProbe(RecordingRunner):
            async def run(self, executable, args=(), cwd=None, input=None):
                result = await super().run(executable, args, cwd, input)
                if len(self.calls) == 1:
                    asyncio.get_running_loop().call_soon(adapter.disconnect)
                return result

        runner = DisconnectAfterFirstProbe(delay=0.05)
        adapter = make_adapter(runner=runner)

        results = await asyncio.gather(adapter.ensure_connected(), adapter.ensure_connected())

        assert results == [True, True]
        assert len(runner.calls) == 2
        assert adapter.is_connected() is True

    @pytest.mark.asyncio
    async def test_ensure_connected_skips_probe_when_connected(self):
        runner = RecordingRunner()
        adapter = make_adapter(runner=runner)
        await adapter.connect()

        assert await adapter.ensure_connected() is True
        assert len(runner.calls) == 1


class TestExecute:
    """Tests for AdapterDescriptor.execute."""

    @pytest.mark.asyncio
    async def test_command_cwd_wins_over_dispatch_cwd(self):
        runner = RecordingRunner()
        adapter = make_adapter(runner=runner)
        tool = adapter.get_tool("build")

        await adapter.execute(tool, {"path": "/srv/site"}, cwd="/tmp")
        await adapter.execute(tool, {}, cwd="/tmp")

        assert runner.calls[0].cwd == "/srv/site"
        assert runner.calls[1].cwd == "/tmp"

    @pytest.mark.asyncio
    async def test_sequence_stops_at_first_failure(self):
        runner = RecordingRunner(responses={"second": failed(exit_code=4)})
        tool = Tool(
            "deploy",
            "d",
            build=lambda a: [Command("first"), Command("second"), Command("third")],
        )
        adapter = make_adapter(runner=runner, tools=[tool])

        result = await adapter.execute(tool, {})

        assert [c.executable for c in runner.calls] == ["first", "second"]
        assert result.exit_code == 4

    @pytest.mark.asyncio
    async def test_sequence_returns_last_result(self):
        runner = RecordingRunner(responses={"b": ok("done")})
        tool = Tool("t", "d", build=lambda a: [Command("a"), Command("b")])
        adapter = make_adapter(runner=runner, tools=[tool])

        result = await adapter.execute(tool, {})

        assert result.stdout == "done"

    @pytest.mark.asyncio
    async def test_stdin_and_override_forwarded(self):
        runner = RecordingRunner()
        tool = Tool("t", "d", build=lambda a: Command("tclsh", stdin="puts hi\n"))
        adapter = make_adapter(runner=runner, tools=[tool])
        adapter.binaries["tclsh"] = "/opt/tclsh"

        await adapter.execute(tool, {})

        assert runner.calls[0].executable == "/opt/tclsh"
        assert runner.calls[0].input == "puts hi\n"
