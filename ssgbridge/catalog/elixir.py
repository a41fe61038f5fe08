"""Elixir generators run as Mix tasks: NimblePublisher, Serum, Tableau."""

from __future__ import annotations

from ssgbridge.adapters.base import AdapterDescriptor, Probe, Tool
from ssgbridge.catalog._helpers import command, number, option, string, workdir

MIX = "mix"


def nimble_publisher(**options) -> AdapterDescriptor:
    tools = [
        Tool(
            name="nimble_publisher_new",
            description="Create a new Phoenix project with NimblePublisher",
            params=(
                string("name", "Project name", required=True),
                string("path", "Path for the project"),
            ),
            build=lambda a: command(MIX, "phx.new", a["name"], "--no-ecto", cwd=workdir(a)),
        ),
        Tool(
            name="nimble_publisher_deps",
            description="Fetch and compile dependencies",
            params=(string("path", "Path to project root"),),
            build=lambda a: command(MIX, "deps.get", cwd=workdir(a)),
        ),
        Tool(
            name="nimble_publisher_compile",
            description="Compile the project",
            params=(string("path", "Path to project root"),),
            build=lambda a: command(MIX, "compile", cwd=workdir(a)),
        ),
        Tool(
            name="nimble_publisher_server",
            description="Start Phoenix server",
            params=(string("path", "Path to project root"),),
            build=lambda a: command(MIX, "phx.server", cwd=workdir(a)),
        ),
        Tool(
            name="nimble_publisher_build",
            description="Build release",
            params=(string("path", "Path to project root"),),
            build=lambda a: command(MIX, "release", cwd=workdir(a)),
        ),
        Tool(
            name="nimble_publisher_version",
            requires_connection=False,
            description="Get Mix/Elixir version",
            build=lambda a: command(MIX, "--version"),
        ),
    ]
    return AdapterDescriptor(
        name="nimble_publisher",
        display_name="NimblePublisher",
        language="Elixir",
        description="Markdown-based publishing engine for Phoenix/Elixir applications",
        homepage="https://github.com/dashbitco/nimble_publisher",
        probes=[Probe(MIX, ("--version",))],
        tools=tools,
        **options,
    )


def serum(**options) -> AdapterDescriptor:
    tools = [
        Tool(
            name="serum_init",
            description="Initialize a new Serum project",
            params=(string("path", "Path for the new site", required=True),),
            build=lambda a: command(MIX, "serum.new", a["path"]),
        ),
        Tool(
            name="serum_build",
            description="Build the Serum site",
            params=(
                string("path", "Path to site root"),
                string("output", "Output directory"),
            ),
            build=lambda a: command(MIX, "serum.build", *option(a, "output", "--output"), cwd=workdir(a)),
        ),
        Tool(
            name="serum_server",
            description="Start Serum development server",
            params=(
                string("path", "Path to site root"),
                number("port", "Port number (default: 8080)"),
            ),
            build=lambda a: command(MIX, "serum.server", *option(a, "port", "--port"), cwd=workdir(a)),
        ),
        Tool(
            name="serum_gen_page",
            description="Generate a new page",
            params=(
                string("path", "Path to site root"),
                string("title", "Page title", required=True),
                string("name", "Page filename"),
            ),
            build=lambda a: command(
                MIX, "serum.gen.page", a["title"], *option(a, "name", "--name"), cwd=workdir(a)
            ),
        ),
        Tool(
            name="serum_gen_post",
            description="Generate a new blog post",
            params=(
                string("path", "Path to site root"),
                string("title", "Post title", required=True),
                string("tag", "Tags (comma-separated)"),
            ),
            build=lambda a: command(
                MIX, "serum.gen.post", a["title"], *option(a, "tag", "--tag"), cwd=workdir(a)
            ),
        ),
        Tool(
            name="serum_version",
            requires_connection=False,
            description="Get Serum version",
            build=lambda a: command(MIX, "serum", "--version"),
        ),
    ]
    return AdapterDescriptor(
        name="serum",
        display_name="Serum",
        language="Elixir",
        description="Simple static website generator written in Elixir",
        homepage="https://dalgona.github.io/Serum/",
        # mix exits non-zero for an unknown task but still names it in the output
        probes=[Probe(MIX, ("help", "serum"), accept_output="serum")],
        tools=tools,
        **options,
    )


def tableau(**options) -> AdapterDescriptor:
    tools = [
        Tool(
            name="tableau_new",
            description="Create a new Tableau project",
            params=(
                string("name", "Project name", required=True),
                string("path", "Path for the project"),
            ),
            build=lambda a: command(MIX, "tableau.new", a["name"], cwd=workdir(a)),
        ),
        Tool(
            name="tableau_build",
            description="Build the Tableau site",
            params=(string("path", "Path to project root"),),
            build=lambda a: command(MIX, "tableau.build", cwd=workdir(a)),
        ),
        Tool(
            name="tableau_server",
            description="Start Tableau development server",
            params=(
                string("path", "Path to project root"),
                number("port", "Port number"),
            ),
            build=lambda a: command(MIX, "tableau.server", *option(a, "port", "--port"), cwd=workdir(a)),
        ),
        Tool(
            name="tableau_deps",
            description="Fetch dependencies",
            params=(string("path", "Path to project root"),),
            build=lambda a: command(MIX, "deps.get", cwd=workdir(a)),
        ),
        Tool(
            name="tableau_gen_post",
            description="Generate a new post",
            params=(
                string("path", "Path to project root"),
                string("title", "Post title", required=True),
            ),
            build=lambda a: command(MIX, "tableau.gen.post", a["title"], cwd=workdir(a)),
        ),
        Tool(
            name="tableau_version",
            requires_connection=False,
            description="Get Tableau/Mix version",
            build=lambda a: command(MIX, "--version"),
        ),
    ]
    return AdapterDescriptor(
        name="tableau",
        display_name="Tableau",
        language="Elixir",
        description="Modern static site generator for Elixir with LiveView support",
        homepage="https://github.com/elixir-tools/tableau",
        probes=[Probe(MIX, ("--version",))],
        tools=tools,
        **options,
    )
