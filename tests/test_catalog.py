"""Tests for the adapter catalog: argument lists, defaults, and wiring."""

import pytest

from conftest import RecordingRunner
from ssgbridge.adapters import Command, Dispatcher
from ssgbridge.catalog import ADAPTER_FACTORIES, adapter_names, build_registry, create_adapter
from ssgbridge.catalog._helpers import format_number, identifier, quoted, text
from ssgbridge.catalog.others import tcl_word
from ssgbridge.validation.config import Config


def commands(adapter_name, tool_name, **arguments):
    adapter = create_adapter(adapter_name, runner=RecordingRunner())
    return adapter.get_tool(tool_name).commands(arguments)


def argv(adapter_name, tool_name, **arguments):
    (cmd,) = commands(adapter_name, tool_name, **arguments)
    return [cmd.program, *cmd.args]


class TestHelpers:
    """Tests for value rendering."""

    @pytest.mark.parametrize(
        "value, expected",
        [(8080, "8080"), (8080.0, "8080"), (1.5, "1.5"), (0, "0"), (True, "true"), (False, "false"), ("x", "x")],
    )
    def test_text(self, value, expected):
        assert text(value) == expected

    def test_format_number(self):
        assert format_number(3000.0) == "3000"

    def test_quoted_escapes(self):
        assert quoted('say "hi" \\ now') == '"say \\"hi\\" \\\\ now"'
        assert quoted("$HOME", escape_dollar=True) == '"\\$HOME"'

    def test_identifier(self):
        assert identifier("MyPkg.Sub") == "MyPkg.Sub"
        with pytest.raises(ValueError):
            identifier("Base; rm(\"x\")")

    def test_tcl_word(self):
        assert tcl_word("public dir") == "{public dir}"
        with pytest.raises(ValueError):
            tcl_word("a}b")


class TestCatalogShape:
    """Every adapter is well-formed."""

    def test_twenty_eight_adapters(self):
        assert len(ADAPTER_FACTORIES) == 28
        assert adapter_names() == sorted(adapter_names())

    @pytest.mark.parametrize("name", sorted(ADAPTER_FACTORIES))
    def test_adapter_is_well_formed(self, name):
        adapter = create_adapter(name, runner=RecordingRunner())

        assert adapter.name == name
        assert adapter.probes
        assert adapter.tools
        for tool in adapter.tools:
            assert tool.name.startswith(name + "_")
            assert tool.input_schema["type"] == "object"

    @pytest.mark.parametrize("name", sorted(ADAPTER_FACTORIES))
    def test_version_tool_needs_no_arguments(self, name):
        adapter = create_adapter(name, runner=RecordingRunner())
        tool = adapter.get_tool(f"{name}_version")

        assert tool is not None
        assert tool.requires_connection is False
        assert tool.input_schema["required"] == []
        assert tool.commands({})

    def test_factories_return_fresh_descriptors(self):
        assert create_adapter("zola") is not create_adapter("zola")


class TestRustArguments:
    """Argument lists for Rust generators."""

    def test_zola_build_full(self):
        (cmd,) = commands(
            "zola",
            "zola_build",
            path="/tmp/site",
            baseUrl="https://example.com",
            outputDir="out",
            drafts=True,
        )

        assert cmd == Command(
            "zola",
            ("build", "--base-url", "https://example.com", "--output-dir", "out", "--drafts"),
            cwd="/tmp/site",
        )

    def test_zola_build_minimal(self):
        (cmd,) = commands("zola", "zola_build")

        assert cmd.args == ("build",)
        assert cmd.cwd is None

    def test_false_switch_omitted(self):
        assert argv("zola", "zola_check", drafts=False) == ["zola", "check"]

    def test_float_port_rendered_as_integer(self):
        assert argv("zola", "zola_serve", port=8080.0) == ["zola", "serve", "--port", "8080"]

    def test_zola_init_positional(self):
        assert argv("zola", "zola_init", path="blog", force=True) == ["zola", "init", "blog", "--force"]

    def test_mdbook_path_is_positional(self):
        (cmd,) = commands("mdbook", "mdbook_build", path="book", destDir="out")

        assert [cmd.program, *cmd.args] == ["mdbook", "build", "book", "--dest-dir", "out"]
        assert cmd.cwd is None

    def test_cobalt_new(self):
        (cmd,) = commands("cobalt", "cobalt_new", path="site", title="Hello")

        assert cmd.args == ("new", "Hello")
        assert cmd.cwd == "site"


class TestJuliaArguments:
    """Julia expressions built for ``julia -e``."""

    def test_makedocs_with_sitename(self):
        assert argv("documenter", "documenter_makedocs", sitename='My "Docs"') == [
            "julia",
            "-e",
            'using Documenter; makedocs(sitename="My \\"Docs\\"")',
        ]

    def test_makedocs_without_sitename(self):
        assert argv("documenter", "documenter_makedocs")[-1] == "using Documenter; makedocs()"

    def test_doctest_rejects_bad_module(self):
        with pytest.raises(ValueError):
            commands("documenter", "documenter_doctest", module="X; run(`rm -rf /`)")

    def test_serve_default_port(self):
        assert argv("documenter", "documenter_serve")[-1].endswith("port=8000)")

    def test_dollar_escaped(self):
        assert argv("franklin", "franklin_serve", host="$x")[-1] == 'using Franklin; serve(host="\\$x")'

    def test_optimize_defaults_on(self):
        assert argv("franklin", "franklin_optimize")[-1] == (
            "using Franklin; optimize(minify=true, prerender=true)"
        )

    def test_optimize_explicit_false(self):
        assert argv("franklin", "franklin_optimize", minify=False)[-1] == (
            "using Franklin; optimize(minify=false, prerender=true)"
        )

    def test_newsite_has_no_cwd(self):
        (cmd,) = commands("franklin", "franklin_newsite", path="blog", template="basic")

        assert cmd.args[-1] == 'using Franklin; newsite("blog"; template="basic")'
        assert cmd.cwd is None


class TestOtherEcosystems:
    """Spot checks across the remaining ecosystems."""

    def test_ema_template_default(self):
        assert argv("ema", "ema_init", path="site") == [
            "nix", "flake", "init", "-t", "github:srid/ema-template",
        ]

    def test_hakyll_watch(self):
        assert argv("hakyll", "hakyll_watch", port=8000) == [
            "stack", "exec", "site", "--", "watch", "--port", "8000",
        ]

    def test_orchid_port_joined(self):
        assert argv("orchid", "orchid_serve", port=9000) == ["./gradlew", "orchidServe", "-PorchidPort=9000"]

    def test_scalatex_module_default(self):
        assert argv("scalatex", "scalatex_compile") == ["mill", "docs.compile"]
        assert argv("scalatex", "scalatex_run", module="site") == ["mill", "site.run"]

    def test_perun_task_default(self):
        assert argv("perun", "perun_build") == ["boot", "build"]

    def test_serum_init(self):
        (cmd,) = commands("serum", "serum_init", path="blog")

        assert [cmd.program, *cmd.args] == ["mix", "serum.new", "blog"]
        assert cmd.cwd is None

    def test_frog_new_post(self):
        assert argv("frog", "frog_new_post", title="Hi") == ["raco", "frog", "--new", "Hi"]

    def test_reggae_backend(self):
        assert argv("reggae", "reggae_init", backend="ninja") == ["reggae", "--backend=ninja"]

    def test_nimrod_install_default(self):
        assert argv("nimrod", "nimrod_install") == ["nimble", "install", "nimib"]

    def test_coleslaw_preview_default_port(self):
        assert argv("coleslaw", "coleslaw_preview")[-2] == "(coleslaw:preview :port 8080)"

    def test_coleslaw_new_post_quoted(self):
        assert argv("coleslaw", "coleslaw_new_post", title='A "b"')[-2] == '(coleslaw:new-post "A \\"b\\"")'

    def test_wub_generate_uses_stdin(self):
        (cmd,) = commands("wub", "wub_generate", path="srv")

        assert cmd.program == "tclsh"
        assert cmd.args == ()
        assert "Wub generate {public}" in cmd.stdin
        assert cmd.cwd == "srv"

    def test_zotonic_addsite(self):
        assert argv("zotonic", "zotonic_addsite", name="blog") == ["zotonic", "addsite", "blog"]


class TestBuildRegistry:
    """Catalog wiring into a registry."""

    def test_all_adapters_registered(self):
        registry = build_registry(runner=RecordingRunner())

        assert registry.names() == adapter_names()

    def test_disabled_adapter_skipped(self):
        config = Config(global_config={"adapters": {"zola": {"enabled": False}}}, environ={})
        registry = build_registry(config, runner=RecordingRunner())

        assert "zola" not in registry
        assert len(registry) == 27

    def test_binary_overrides_applied(self):
        config = Config(
            global_config={"adapters": {"orchid": {"binaries": {"./gradlew": "/opt/gradle/bin/gradle"}}}},
            environ={"SSGBRIDGE_BIN_JAVA": "/opt/jdk/bin/java"},
        )
        registry = build_registry(config, runner=RecordingRunner())
        orchid = registry.get("orchid")

        assert orchid.resolve("./gradlew") == "/opt/gradle/bin/gradle"
        assert orchid.resolve("java") == "/opt/jdk/bin/java"
        assert registry.get("laika").resolve("java") == "java"

    @pytest.mark.asyncio
    async def test_shared_runner_and_override_used_at_dispatch(self):
        runner = RecordingRunner()
        config = Config(environ={"SSGBRIDGE_BIN_ZOLA": "/opt/zola"})
        dispatcher = Dispatcher(build_registry(config, runner=runner))

        response = await dispatcher.invoke("zola", "zola_build", {"path": "/tmp/site", "drafts": True})

        assert response.ok is True
        assert runner.argv(0) == ["/opt/zola", "--version"]
        assert runner.argv(1) == ["/opt/zola", "build", "--drafts"]
        assert runner.calls[1].cwd == "/tmp/site"

    @pytest.mark.asyncio
    async def test_connect_all_with_missing_binaries(self):
        runner = RecordingRunner(missing=["zola", "mdbook"])
        registry = build_registry(runner=runner)

        status = await registry.connect_all()

        assert set(status) == set(adapter_names())
        assert status["zola"] is False
        assert status["mdbook"] is False
        assert status["cobalt"] is True
