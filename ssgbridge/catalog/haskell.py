"""Haskell generators: Ema (via Nix flakes), Hakyll (via Stack)."""

from __future__ import annotations

from ssgbridge.adapters.base import AdapterDescriptor, Command, Probe, Tool
from ssgbridge.catalog._helpers import (
    Arguments,
    boolean,
    command,
    number,
    option,
    string,
    switch,
    value,
    workdir,
)

NIX = "nix"
STACK = "stack"


def ema(**options) -> AdapterDescriptor:
    tools = [
        Tool(
            name="ema_init",
            description="Initialize a new Ema site from template",
            params=(
                string("path", "Path for the new site", required=True),
                string("template", "Template to use (default: srid/ema-template)"),
            ),
            build=lambda a: command(
                NIX,
                "flake",
                "init",
                "-t",
                "github:" + value(a, "template", "srid/ema-template"),
                cwd=workdir(a),
            ),
        ),
        Tool(
            name="ema_run",
            description="Run Ema development server with hot reload",
            params=(string("path", "Path to site root"),),
            build=lambda a: command(NIX, "run", cwd=workdir(a)),
        ),
        Tool(
            name="ema_build",
            description="Build the Ema site for production",
            params=(string("path", "Path to site root"),),
            build=lambda a: command(NIX, "build", cwd=workdir(a)),
        ),
        Tool(
            name="ema_develop",
            description="Enter development shell",
            params=(string("path", "Path to site root"),),
            build=lambda a: command(NIX, "develop", cwd=workdir(a)),
        ),
        Tool(
            name="ema_update",
            description="Update flake inputs",
            params=(string("path", "Path to site root"),),
            build=lambda a: command(NIX, "flake", "update", cwd=workdir(a)),
        ),
        Tool(
            name="ema_version",
            requires_connection=False,
            description="Get Nix version",
            build=lambda a: command(NIX, "--version"),
        ),
    ]
    return AdapterDescriptor(
        name="ema",
        display_name="Ema",
        language="Haskell",
        description="Next-gen Haskell static site generator with hot reload and Nix support",
        homepage="https://ema.srid.ca/",
        probes=[Probe(NIX, ("--version",))],
        tools=tools,
        **options,
    )


def site(*args: str, cwd=None) -> Command:
    """Hakyll sites run as ``stack exec site -- <args>``."""
    return command(STACK, "exec", "site", "--", *args, cwd=cwd)


def _hakyll_watch(a: Arguments) -> Command:
    return site(
        "watch",
        *option(a, "port", "--port"),
        *option(a, "host", "--host"),
        cwd=workdir(a),
    )


def hakyll(**options) -> AdapterDescriptor:
    tools = [
        Tool(
            name="hakyll_init",
            description="Initialize a new Hakyll site (using stack template)",
            params=(
                string("name", "Project name", required=True),
                string("path", "Path for the project"),
            ),
            build=lambda a: command(STACK, "new", a["name"], "hakyll-template", cwd=workdir(a)),
        ),
        Tool(
            name="hakyll_build",
            description="Build the Hakyll site",
            params=(string("path", "Path to site root"),),
            build=lambda a: site("build", cwd=workdir(a)),
        ),
        Tool(
            name="hakyll_watch",
            description="Start Hakyll watch server",
            params=(
                string("path", "Path to site root"),
                number("port", "Port number"),
                string("host", "Host to bind to"),
            ),
            build=_hakyll_watch,
        ),
        Tool(
            name="hakyll_clean",
            description="Clean the build cache",
            params=(string("path", "Path to site root"),),
            build=lambda a: site("clean", cwd=workdir(a)),
        ),
        Tool(
            name="hakyll_rebuild",
            description="Clean and rebuild the site",
            params=(string("path", "Path to site root"),),
            build=lambda a: site("rebuild", cwd=workdir(a)),
        ),
        Tool(
            name="hakyll_check",
            description="Check for broken links",
            params=(
                string("path", "Path to site root"),
                boolean("internal", "Check internal links only"),
            ),
            build=lambda a: site("check", *switch(a, "internal", "--internal-links"), cwd=workdir(a)),
        ),
        Tool(
            name="hakyll_deploy",
            description="Deploy the site",
            params=(string("path", "Path to site root"),),
            build=lambda a: site("deploy", cwd=workdir(a)),
        ),
        Tool(
            name="hakyll_version",
            requires_connection=False,
            description="Get Stack/Hakyll version",
            build=lambda a: command(STACK, "--version"),
        ),
    ]
    return AdapterDescriptor(
        name="hakyll",
        display_name="Hakyll",
        language="Haskell",
        description="Haskell library for generating static sites with Pandoc support",
        homepage="https://jaspervdj.be/hakyll/",
        probes=[Probe(STACK, ("--version",))],
        tools=tools,
        **options,
    )
