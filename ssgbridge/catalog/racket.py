"""Racket generators run through ``raco``: Frog, Pollen."""

from __future__ import annotations

from ssgbridge.adapters.base import AdapterDescriptor, Probe, Tool
from ssgbridge.catalog._helpers import command, number, option, positional, string, workdir

RACO = "raco"


def frog(**options) -> AdapterDescriptor:
    tools = [
        Tool(
            name="frog_init",
            description="Initialize a new Frog project",
            params=(string("path", "Path for the new blog"),),
            build=lambda a: command(RACO, "frog", "--init", cwd=workdir(a)),
        ),
        Tool(
            name="frog_build",
            description="Build the Frog blog",
            params=(string("path", "Path to blog root"),),
            build=lambda a: command(RACO, "frog", "--build", cwd=workdir(a)),
        ),
        Tool(
            name="frog_preview",
            description="Build and preview the blog",
            params=(
                string("path", "Path to blog root"),
                number("port", "Port number"),
            ),
            build=lambda a: command(
                RACO, "frog", "--preview", *option(a, "port", "--port"), cwd=workdir(a)
            ),
        ),
        Tool(
            name="frog_new_post",
            description="Create a new blog post",
            params=(
                string("path", "Path to blog root"),
                string("title", "Post title", required=True),
            ),
            build=lambda a: command(RACO, "frog", "--new", a["title"], cwd=workdir(a)),
        ),
        Tool(
            name="frog_clean",
            description="Clean generated files",
            params=(string("path", "Path to blog root"),),
            build=lambda a: command(RACO, "frog", "--clean", cwd=workdir(a)),
        ),
        Tool(
            name="frog_watch",
            description="Watch for changes and rebuild",
            params=(string("path", "Path to blog root"),),
            build=lambda a: command(RACO, "frog", "--watch", cwd=workdir(a)),
        ),
        Tool(
            name="frog_version",
            requires_connection=False,
            description="Get Frog version",
            build=lambda a: command(RACO, "frog", "--version"),
        ),
    ]
    return AdapterDescriptor(
        name="frog",
        display_name="Frog",
        language="Racket",
        description="Static blog generator written in Racket",
        homepage="https://github.com/greghendershott/frog",
        probes=[Probe(RACO, ("frog", "--help"), accept_output="frog")],
        tools=tools,
        **options,
    )


def pollen(**options) -> AdapterDescriptor:
    tools = [
        Tool(
            name="pollen_start",
            description="Start Pollen project server",
            params=(
                string("path", "Path to project root"),
                number("port", "Port number"),
            ),
            build=lambda a: command(RACO, "pollen", "start", *positional(a, "port"), cwd=workdir(a)),
        ),
        Tool(
            name="pollen_render",
            description="Render Pollen source files",
            params=(
                string("path", "Path to project root"),
                string("file", "Specific file to render"),
            ),
            build=lambda a: command(RACO, "pollen", "render", *positional(a, "file"), cwd=workdir(a)),
        ),
        Tool(
            name="pollen_publish",
            description="Publish the project",
            params=(
                string("path", "Path to project root"),
                string("dest", "Destination directory"),
            ),
            build=lambda a: command(RACO, "pollen", "publish", *positional(a, "dest"), cwd=workdir(a)),
        ),
        Tool(
            name="pollen_reset",
            description="Reset Pollen cache",
            params=(string("path", "Path to project root"),),
            build=lambda a: command(RACO, "pollen", "reset", cwd=workdir(a)),
        ),
        Tool(
            name="pollen_setup",
            description="Run setup for Pollen sources",
            params=(string("path", "Path to project root"),),
            build=lambda a: command(RACO, "pollen", "setup", cwd=workdir(a)),
        ),
        Tool(
            name="pollen_version",
            requires_connection=False,
            description="Get Pollen/Racket version",
            build=lambda a: command(RACO, "pollen", "version"),
        ),
    ]
    return AdapterDescriptor(
        name="pollen",
        display_name="Pollen",
        language="Racket",
        description="Publishing system for books and long-form content in Racket",
        homepage="https://docs.racket-lang.org/pollen/",
        probes=[Probe(RACO, ("--version",))],
        tools=tools,
        **options,
    )
