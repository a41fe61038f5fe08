"""Natively compiled ecosystems: Marmot (Crystal), Nimrod (Nim), Publish (Swift), Reggae (D)."""

from __future__ import annotations

from ssgbridge.adapters.base import AdapterDescriptor, Probe, Tool
from ssgbridge.catalog._helpers import (
    boolean,
    command,
    joined_option,
    number,
    option,
    positional,
    string,
    switch,
    value,
    workdir,
)


# ── Marmot ────────────────────────────────────────────────────────────────

MARMOT = "marmot"
SHARDS = "shards"
CRYSTAL = "crystal"


def marmot(**options) -> AdapterDescriptor:
    tools = [
        Tool(
            name="marmot_init",
            description="Initialize a new Marmot site",
            params=(string("path", "Path for the new site"),),
            build=lambda a: command(MARMOT, "init", cwd=workdir(a)),
        ),
        Tool(
            name="marmot_build",
            description="Build the Marmot site",
            params=(
                string("path", "Path to site root"),
                string("output", "Output directory"),
            ),
            build=lambda a: command(MARMOT, "build", *option(a, "output", "--output"), cwd=workdir(a)),
        ),
        Tool(
            name="marmot_serve",
            description="Start development server",
            params=(
                string("path", "Path to site root"),
                number("port", "Port number"),
            ),
            build=lambda a: command(MARMOT, "serve", *option(a, "port", "--port"), cwd=workdir(a)),
        ),
        Tool(
            name="marmot_watch",
            description="Watch and rebuild on changes",
            params=(string("path", "Path to site root"),),
            build=lambda a: command(MARMOT, "watch", cwd=workdir(a)),
        ),
        Tool(
            name="marmot_clean",
            description="Clean build output",
            params=(string("path", "Path to site root"),),
            build=lambda a: command(MARMOT, "clean", cwd=workdir(a)),
        ),
        Tool(
            name="marmot_deps",
            description="Install Crystal dependencies",
            params=(string("path", "Path to site root"),),
            build=lambda a: command(SHARDS, "install", cwd=workdir(a)),
        ),
        Tool(
            name="marmot_version",
            requires_connection=False,
            description="Get Marmot version",
            build=lambda a: command(MARMOT, "--version"),
        ),
    ]
    return AdapterDescriptor(
        name="marmot",
        display_name="Marmot",
        language="Crystal",
        description="Static site generator written in Crystal",
        homepage="https://github.com/erdnaxeli/marmot",
        probes=[Probe(MARMOT, ("--version",)), Probe(CRYSTAL, ("--version",))],
        programs=[MARMOT, SHARDS],
        tools=tools,
        **options,
    )


# ── Nimrod (nimib / nimibook) ─────────────────────────────────────────────

NIMBLE = "nimble"
NIM = "nim"


def nimrod(**options) -> AdapterDescriptor:
    tools = [
        Tool(
            name="nimrod_init",
            description="Initialize a new Nim project with nimib",
            params=(
                string("path", "Path for the new project"),
                string("name", "Project name", required=True),
            ),
            build=lambda a: command(NIMBLE, "init", a["name"], cwd=workdir(a)),
        ),
        Tool(
            name="nimrod_build",
            description="Build Nim project",
            params=(
                string("path", "Path to project root"),
                boolean("release", "Build in release mode"),
            ),
            build=lambda a: command(NIMBLE, "build", *switch(a, "release", "--release"), cwd=workdir(a)),
        ),
        Tool(
            name="nimrod_run",
            description="Run site generator script",
            params=(
                string("path", "Path to project root"),
                string("script", "Script to run"),
            ),
            build=lambda a: command(NIM, "c", "-r", *positional(a, "script"), cwd=workdir(a)),
        ),
        Tool(
            name="nimrod_install",
            description="Install nimib/nimibook packages",
            params=(string("package", "Package name (default: nimib)"),),
            build=lambda a: command(NIMBLE, "install", value(a, "package", "nimib")),
        ),
        Tool(
            name="nimrod_deps",
            description="Install project dependencies",
            params=(string("path", "Path to project root"),),
            build=lambda a: command(NIMBLE, "install", "-d", cwd=workdir(a)),
        ),
        Tool(
            name="nimrod_docs",
            description="Generate documentation",
            params=(
                string("path", "Path to project root"),
                string("file", "Source file"),
            ),
            build=lambda a: command(NIM, "doc", *positional(a, "file"), cwd=workdir(a)),
        ),
        Tool(
            name="nimrod_version",
            requires_connection=False,
            description="Get Nim/Nimble version",
            build=lambda a: command(NIMBLE, "--version"),
        ),
    ]
    return AdapterDescriptor(
        name="nimrod",
        display_name="Nimrod",
        language="Nim",
        description="Static site generation using Nim (nimib, nimibook ecosystem)",
        probes=[Probe(NIMBLE, ("--version",))],
        programs=[NIMBLE, NIM],
        tools=tools,
        **options,
    )


# ── Publish ───────────────────────────────────────────────────────────────

PUBLISH = "publish"
SWIFT = "swift"


def publish(**options) -> AdapterDescriptor:
    tools = [
        Tool(
            name="publish_new",
            description="Create a new Publish website",
            params=(string("path", "Path for the new site"),),
            build=lambda a: command(PUBLISH, "new", cwd=workdir(a)),
        ),
        Tool(
            name="publish_generate",
            description="Generate the website",
            params=(string("path", "Path to site root"),),
            build=lambda a: command(PUBLISH, "generate", cwd=workdir(a)),
        ),
        Tool(
            name="publish_run",
            description="Start local development server",
            params=(
                string("path", "Path to site root"),
                number("port", "Port number"),
            ),
            build=lambda a: command(PUBLISH, "run", *option(a, "port", "--port"), cwd=workdir(a)),
        ),
        Tool(
            name="publish_deploy",
            description="Deploy the website",
            params=(string("path", "Path to site root"),),
            build=lambda a: command(PUBLISH, "deploy", cwd=workdir(a)),
        ),
        Tool(
            name="publish_build",
            description="Build the Swift package",
            params=(string("path", "Path to site root"),),
            build=lambda a: command(SWIFT, "build", cwd=workdir(a)),
        ),
        Tool(
            name="publish_version",
            requires_connection=False,
            description="Get Swift version",
            build=lambda a: command(SWIFT, "--version"),
        ),
    ]
    return AdapterDescriptor(
        name="publish",
        display_name="Publish",
        language="Swift",
        description="Static site generator built for Swift developers by John Sundell",
        homepage="https://github.com/JohnSundell/Publish",
        probes=[Probe(PUBLISH, ("--help",)), Probe(SWIFT, ("--version",))],
        tools=tools,
        **options,
    )


# ── Reggae ────────────────────────────────────────────────────────────────

REGGAE = "reggae"
MAKE = "make"


def reggae(**options) -> AdapterDescriptor:
    tools = [
        Tool(
            name="reggae_init",
            description="Initialize Reggae build",
            params=(
                string("path", "Path to project root"),
                string("backend", "Build backend (make, ninja, etc.)"),
            ),
            build=lambda a: command(REGGAE, *joined_option(a, "backend", "--backend="), cwd=workdir(a)),
        ),
        Tool(
            name="reggae_build",
            description="Build the project",
            params=(
                string("path", "Path to project root"),
                string("target", "Build target"),
            ),
            # reggae generates the build files; the backend runs them
            build=lambda a: command(MAKE, *positional(a, "target"), cwd=workdir(a)),
        ),
        Tool(
            name="reggae_clean",
            description="Clean build artifacts",
            params=(string("path", "Path to project root"),),
            build=lambda a: command(MAKE, "clean", cwd=workdir(a)),
        ),
        Tool(
            name="reggae_version",
            requires_connection=False,
            description="Get Reggae version",
            build=lambda a: command(REGGAE, "--version"),
        ),
    ]
    return AdapterDescriptor(
        name="reggae",
        display_name="Reggae",
        language="D",
        description="Build system and static site generator in D",
        homepage="https://github.com/atilaneves/reggae",
        probes=[Probe(REGGAE, ("--version",))],
        programs=[REGGAE, MAKE],
        tools=tools,
        **options,
    )
