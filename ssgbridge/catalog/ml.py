"""ML-family generators: Fornax (F#), YOCaml (OCaml)."""

from __future__ import annotations

from ssgbridge.adapters.base import AdapterDescriptor, Probe, Tool
from ssgbridge.catalog._helpers import command, number, option, string, value, workdir

FORNAX = "fornax"
DOTNET = "dotnet"
DUNE = "dune"
OPAM = "opam"


def fornax(**options) -> AdapterDescriptor:
    tools = [
        Tool(
            name="fornax_new",
            description="Create a new Fornax site",
            params=(string("path", "Path for the new site"),),
            build=lambda a: command(FORNAX, "new", cwd=workdir(a)),
        ),
        Tool(
            name="fornax_build",
            description="Build the Fornax site",
            params=(string("path", "Path to site root"),),
            build=lambda a: command(FORNAX, "build", cwd=workdir(a)),
        ),
        Tool(
            name="fornax_watch",
            description="Start Fornax watch server",
            params=(
                string("path", "Path to site root"),
                number("port", "Port number"),
            ),
            build=lambda a: command(FORNAX, "watch", *option(a, "port", "--port"), cwd=workdir(a)),
        ),
        Tool(
            name="fornax_clean",
            description="Clean build output",
            params=(string("path", "Path to site root"),),
            build=lambda a: command(FORNAX, "clean", cwd=workdir(a)),
        ),
        Tool(
            name="fornax_version",
            requires_connection=False,
            description="Get Fornax version",
            build=lambda a: command(FORNAX, "version"),
        ),
    ]
    return AdapterDescriptor(
        name="fornax",
        display_name="Fornax",
        language="F#",
        description="Scriptable static site generator using F# and type providers",
        homepage="https://github.com/ionide/Fornax",
        probes=[
            Probe(FORNAX, ("version",)),
            # installed as a local dotnet tool
            Probe(DOTNET, ("fornax", "version")),
        ],
        tools=tools,
        **options,
    )


def yocaml(**options) -> AdapterDescriptor:
    tools = [
        Tool(
            name="yocaml_init",
            description="Initialize a new YOCaml project",
            params=(
                string("path", "Path for the new site"),
                string("name", "Project name", required=True),
            ),
            build=lambda a: command(DUNE, "init", "project", a["name"], cwd=workdir(a)),
        ),
        Tool(
            name="yocaml_build",
            description="Build the YOCaml site",
            params=(string("path", "Path to site root"),),
            build=lambda a: command(DUNE, "build", cwd=workdir(a)),
        ),
        Tool(
            name="yocaml_exec",
            description="Execute the site generator",
            params=(
                string("path", "Path to site root"),
                string("target", "Build target (default: ./bin/main.exe)"),
            ),
            build=lambda a: command(DUNE, "exec", value(a, "target", "./bin/main.exe"), cwd=workdir(a)),
        ),
        Tool(
            name="yocaml_clean",
            description="Clean build artifacts",
            params=(string("path", "Path to site root"),),
            build=lambda a: command(DUNE, "clean", cwd=workdir(a)),
        ),
        Tool(
            name="yocaml_deps",
            description="Install dependencies via opam",
            params=(string("path", "Path to site root"),),
            build=lambda a: command(OPAM, "install", ".", "--deps-only", cwd=workdir(a)),
        ),
        Tool(
            name="yocaml_version",
            requires_connection=False,
            description="Get Dune version",
            build=lambda a: command(DUNE, "--version"),
        ),
    ]
    return AdapterDescriptor(
        name="yocaml",
        display_name="YOCaml",
        language="OCaml",
        description="Composable static site generator written in OCaml",
        homepage="https://github.com/xhtmlboi/yocaml",
        probes=[Probe(DUNE, ("--version",))],
        programs=[DUNE, OPAM],
        tools=tools,
        **options,
    )
