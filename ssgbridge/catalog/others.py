"""Remaining ecosystems: Coleslaw (Common Lisp), Wub (Tcl), Zotonic (Erlang)."""

from __future__ import annotations

from typing import Any

from ssgbridge.adapters.base import AdapterDescriptor, Command, Probe, Tool
from ssgbridge.catalog._helpers import (
    Arguments,
    command,
    format_number,
    number,
    quoted,
    string,
    value,
    workdir,
)


# ── Coleslaw ──────────────────────────────────────────────────────────────

SBCL = "sbcl"


def coleslaw_eval(expr: str, cwd=None) -> Command:
    """Load coleslaw through Quicklisp, evaluate ``expr``, and quit."""
    return command(SBCL, "--eval", "(ql:quickload :coleslaw)", "--eval", expr, "--quit", cwd=cwd)


def _preview(a: Arguments) -> Command:
    port = format_number(a.get("port", 8080))
    return coleslaw_eval(f"(coleslaw:preview :port {port})", cwd=workdir(a))


def coleslaw(**options) -> AdapterDescriptor:
    tools = [
        Tool(
            name="coleslaw_init",
            description="Initialize a new Coleslaw blog",
            params=(string("path", "Path for the new blog"),),
            build=lambda a: coleslaw_eval(f"(coleslaw:setup {quoted(a.get('path', '.'))})", cwd=workdir(a)),
        ),
        Tool(
            name="coleslaw_build",
            description="Build the Coleslaw site",
            params=(string("path", "Path to site root"),),
            build=lambda a: coleslaw_eval(f"(coleslaw:main {quoted(a.get('path', '.'))})", cwd=workdir(a)),
        ),
        Tool(
            name="coleslaw_preview",
            description="Preview the site locally",
            params=(
                string("path", "Path to site root"),
                number("port", "Port number (default: 8080)"),
            ),
            build=_preview,
        ),
        Tool(
            name="coleslaw_new_post",
            description="Create a new post",
            params=(
                string("path", "Path to site root"),
                string("title", "Post title", required=True),
            ),
            build=lambda a: coleslaw_eval(f"(coleslaw:new-post {quoted(a['title'])})", cwd=workdir(a)),
        ),
        Tool(
            name="coleslaw_version",
            requires_connection=False,
            description="Get SBCL version",
            build=lambda a: command(SBCL, "--version"),
        ),
    ]
    return AdapterDescriptor(
        name="coleslaw",
        display_name="Coleslaw",
        language="Common Lisp",
        description="Flexible static blog/site generator written in Common Lisp",
        homepage="https://github.com/kingcons/coleslaw",
        probes=[Probe(SBCL, ("--version",))],
        tools=tools,
        **options,
    )


# ── Wub ───────────────────────────────────────────────────────────────────

TCLSH = "tclsh"


def tcl_word(raw: Any) -> str:
    """Brace-quote a value for a Tcl script."""
    word = str(raw)
    if any(ch in word for ch in "{}\\\n"):
        raise ValueError(f"value cannot be embedded in a Tcl script: {word!r}")
    return "{" + word + "}"


def tcl_script(script: str, cwd=None) -> Command:
    """tclsh reads the script from stdin when given no file argument."""
    return command(TCLSH, cwd=cwd, stdin=script)


def _wub_generate(a: Arguments) -> Command:
    script = "\n".join(
        [
            "source wub.tcl",
            "package require Wub",
            f"Wub generate {tcl_word(a.get('output', 'public'))}",
            "",
        ]
    )
    return tcl_script(script, cwd=workdir(a))


def wub(**options) -> AdapterDescriptor:
    tools = [
        Tool(
            name="wub_start",
            description="Start Wub server",
            params=(
                string("path", "Path to Wub root"),
                string("config", "Config file (default: wub.tcl)"),
            ),
            build=lambda a: command(TCLSH, value(a, "config", "wub.tcl"), cwd=workdir(a)),
        ),
        Tool(
            name="wub_generate",
            description="Generate static files",
            params=(
                string("path", "Path to Wub root"),
                string("output", "Output directory (default: public)"),
            ),
            build=_wub_generate,
        ),
        Tool(
            name="wub_run",
            description="Run a Tcl script",
            params=(
                string("path", "Working directory"),
                string("script", "Script file to run", required=True),
            ),
            build=lambda a: command(TCLSH, a["script"], cwd=workdir(a)),
        ),
        Tool(
            name="wub_version",
            requires_connection=False,
            description="Get Tcl version",
            build=lambda a: tcl_script('puts "Tcl [info patchlevel]"\n'),
        ),
    ]
    return AdapterDescriptor(
        name="wub",
        display_name="Wub",
        language="Tcl",
        description="Web framework in Tcl with static site generation capabilities",
        homepage="https://wiki.tcl-lang.org/page/Wub",
        probes=[Probe(TCLSH, stdin="puts [info patchlevel]\n")],
        tools=tools,
        **options,
    )


# ── Zotonic ───────────────────────────────────────────────────────────────

ZOTONIC = "zotonic"


def _zotonic(verb: str, description: str) -> Tool:
    return Tool(
        name=f"zotonic_{verb}",
        description=description,
        params=(string("path", "Path to Zotonic root"),),
        build=lambda a: command(ZOTONIC, verb, cwd=workdir(a)),
    )


def zotonic(**options) -> AdapterDescriptor:
    tools = [
        _zotonic("start", "Start Zotonic"),
        _zotonic("stop", "Stop Zotonic"),
        Tool(
            name="zotonic_addsite",
            description="Add a new site",
            params=(
                string("path", "Path to Zotonic root"),
                string("name", "Site name", required=True),
            ),
            build=lambda a: command(ZOTONIC, "addsite", a["name"], cwd=workdir(a)),
        ),
        _zotonic("status", "Show Zotonic status"),
        _zotonic("shell", "Start Erlang shell"),
        _zotonic("compile", "Compile Zotonic"),
        Tool(
            name="zotonic_version",
            requires_connection=False,
            description="Get Zotonic version",
            build=lambda a: command(ZOTONIC, "--version"),
        ),
    ]
    return AdapterDescriptor(
        name="zotonic",
        display_name="Zotonic",
        language="Erlang",
        description="Erlang web framework and CMS with static site export",
        homepage="https://zotonic.com/",
        probes=[Probe(ZOTONIC, ("--version",))],
        tools=tools,
        **options,
    )
