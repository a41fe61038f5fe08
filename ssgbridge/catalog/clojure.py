"""Clojure tooling: Babashka, Cryogen (Leiningen), Perun (Boot)."""

from __future__ import annotations

from ssgbridge.adapters.base import AdapterDescriptor, Probe, Tool
from ssgbridge.catalog._helpers import command, number, option, positional, string, value, workdir


def babashka(**options) -> AdapterDescriptor:
    tools = [
        Tool(
            name="babashka_run",
            description="Run a Babashka script",
            params=(
                string("path", "Working directory"),
                string("script", "Script file to run", required=True),
            ),
            build=lambda a: command("bb", a["script"], cwd=workdir(a)),
        ),
        Tool(
            name="babashka_eval",
            description="Evaluate Clojure expression",
            params=(
                string("path", "Working directory"),
                string("expr", "Clojure expression", required=True),
            ),
            build=lambda a: command("bb", "-e", a["expr"], cwd=workdir(a)),
        ),
        Tool(
            name="babashka_tasks",
            description="List available tasks",
            params=(string("path", "Working directory"),),
            build=lambda a: command("bb", "tasks", cwd=workdir(a)),
        ),
        Tool(
            name="babashka_task",
            description="Run a task from bb.edn",
            params=(
                string("path", "Working directory"),
                string("task", "Task name", required=True),
            ),
            build=lambda a: command("bb", a["task"], cwd=workdir(a)),
        ),
        Tool(
            name="babashka_nrepl",
            description="Start nREPL server",
            params=(
                string("path", "Working directory"),
                number("port", "Port number"),
            ),
            build=lambda a: command("bb", "nrepl-server", *positional(a, "port"), cwd=workdir(a)),
        ),
        Tool(
            name="babashka_version",
            requires_connection=False,
            description="Get Babashka version",
            build=lambda a: command("bb", "--version"),
        ),
    ]
    return AdapterDescriptor(
        name="babashka",
        display_name="Babashka",
        language="Clojure",
        description="Fast Clojure scripting runtime, usable for static site generation",
        homepage="https://babashka.org/",
        probes=[Probe("bb", ("--version",))],
        tools=tools,
        **options,
    )


def cryogen(**options) -> AdapterDescriptor:
    tools = [
        Tool(
            name="cryogen_new",
            description="Create a new Cryogen site",
            params=(
                string("name", "Project name", required=True),
                string("path", "Path for the project"),
            ),
            build=lambda a: command("lein", "new", "cryogen", a["name"], cwd=workdir(a)),
        ),
        Tool(
            name="cryogen_build",
            description="Build the Cryogen site",
            params=(string("path", "Path to site root"),),
            build=lambda a: command("lein", "run", cwd=workdir(a)),
        ),
        Tool(
            name="cryogen_serve",
            description="Start Cryogen server with live reload",
            params=(string("path", "Path to site root"),),
            build=lambda a: command("lein", "ring", "server", cwd=workdir(a)),
        ),
        Tool(
            name="cryogen_clean",
            description="Clean build artifacts",
            params=(string("path", "Path to site root"),),
            build=lambda a: command("lein", "clean", cwd=workdir(a)),
        ),
        Tool(
            name="cryogen_deps",
            description="Fetch dependencies",
            params=(string("path", "Path to site root"),),
            build=lambda a: command("lein", "deps", cwd=workdir(a)),
        ),
        Tool(
            name="cryogen_version",
            requires_connection=False,
            description="Get Leiningen version",
            build=lambda a: command("lein", "version"),
        ),
    ]
    return AdapterDescriptor(
        name="cryogen",
        display_name="Cryogen",
        language="Clojure",
        description="Simple static site generator written in Clojure",
        homepage="https://cryogenweb.org/",
        probes=[Probe("lein", ("version",))],
        tools=tools,
        **options,
    )


def perun(**options) -> AdapterDescriptor:
    tools = [
        Tool(
            name="perun_build",
            description="Build the Perun site",
            params=(
                string("path", "Path to site root"),
                string("task", "Boot task to run (default: build)"),
            ),
            build=lambda a: command("boot", value(a, "task", "build"), cwd=workdir(a)),
        ),
        Tool(
            name="perun_dev",
            description="Start development server with watch",
            params=(string("path", "Path to site root"),),
            build=lambda a: command("boot", "dev", cwd=workdir(a)),
        ),
        Tool(
            name="perun_watch",
            description="Watch and rebuild on changes",
            params=(string("path", "Path to site root"),),
            build=lambda a: command("boot", "watch", "build", cwd=workdir(a)),
        ),
        Tool(
            name="perun_serve",
            description="Serve the built site",
            params=(
                string("path", "Path to site root"),
                number("port", "Port number"),
            ),
            build=lambda a: command("boot", "serve", *option(a, "port", "-p"), cwd=workdir(a)),
        ),
        Tool(
            name="perun_version",
            requires_connection=False,
            description="Get Boot version",
            build=lambda a: command("boot", "--version"),
        ),
    ]
    return AdapterDescriptor(
        name="perun",
        display_name="Perun",
        language="Clojure",
        description="Composable static site generator using Boot build tool",
        homepage="https://perun.io/",
        probes=[Probe("boot", ("--version",))],
        tools=tools,
        **options,
    )
