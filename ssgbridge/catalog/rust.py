"""Rust generators: Cobalt, mdBook, Zola."""

from __future__ import annotations

from ssgbridge.adapters.base import AdapterDescriptor, Probe, Tool
from ssgbridge.catalog._helpers import (
    boolean,
    command,
    number,
    option,
    positional,
    string,
    switch,
    workdir,
)


def cobalt(**options) -> AdapterDescriptor:
    tools = [
        Tool(
            name="cobalt_init",
            description="Initialize a new Cobalt site",
            params=(string("path", "Path for the new site"),),
            build=lambda a: command("cobalt", "init", *positional(a, "path")),
        ),
        Tool(
            name="cobalt_build",
            description="Build the Cobalt site",
            params=(
                string("path", "Path to site root"),
                string("destination", "Output directory"),
                boolean("drafts", "Include drafts"),
            ),
            build=lambda a: command(
                "cobalt",
                "build",
                *option(a, "destination", "--destination"),
                *switch(a, "drafts", "--drafts"),
                cwd=workdir(a),
            ),
        ),
        Tool(
            name="cobalt_serve",
            description="Start Cobalt development server",
            params=(
                string("path", "Path to site root"),
                number("port", "Port number"),
                string("host", "Host to bind to"),
                boolean("drafts", "Include drafts"),
            ),
            build=lambda a: command(
                "cobalt",
                "serve",
                *option(a, "port", "--port"),
                *option(a, "host", "--host"),
                *switch(a, "drafts", "--drafts"),
                cwd=workdir(a),
            ),
        ),
        Tool(
            name="cobalt_watch",
            description="Watch for changes and rebuild",
            params=(string("path", "Path to site root"),),
            build=lambda a: command("cobalt", "watch", cwd=workdir(a)),
        ),
        Tool(
            name="cobalt_clean",
            description="Clean the build directory",
            params=(string("path", "Path to site root"),),
            build=lambda a: command("cobalt", "clean", cwd=workdir(a)),
        ),
        Tool(
            name="cobalt_new",
            description="Create a new post",
            params=(
                string("path", "Path to site root"),
                string("title", "Post title", required=True),
            ),
            build=lambda a: command("cobalt", "new", a["title"], cwd=workdir(a)),
        ),
        Tool(
            name="cobalt_version",
            requires_connection=False,
            description="Get Cobalt version",
            build=lambda a: command("cobalt", "--version"),
        ),
    ]
    return AdapterDescriptor(
        name="cobalt",
        display_name="Cobalt",
        language="Rust",
        description="Straightforward static site generator written in Rust",
        homepage="https://cobalt-org.github.io/",
        probes=[Probe("cobalt", ("--version",))],
        tools=tools,
        **options,
    )


def mdbook(**options) -> AdapterDescriptor:
    # mdbook takes the book directory as a positional argument, not as cwd
    tools = [
        Tool(
            name="mdbook_init",
            description="Initialize a new mdBook",
            params=(
                string("path", "Path for the new book"),
                string("title", "Book title"),
                boolean("force", "Overwrite existing files"),
            ),
            build=lambda a: command(
                "mdbook",
                "init",
                *positional(a, "path"),
                *option(a, "title", "--title"),
                *switch(a, "force", "--force"),
            ),
        ),
        Tool(
            name="mdbook_build",
            description="Build the book",
            params=(
                string("path", "Path to book root"),
                string("destDir", "Output directory"),
                boolean("open", "Open in browser after build"),
            ),
            build=lambda a: command(
                "mdbook",
                "build",
                *positional(a, "path"),
                *option(a, "destDir", "--dest-dir"),
                *switch(a, "open", "--open"),
            ),
        ),
        Tool(
            name="mdbook_serve",
            description="Start mdBook development server",
            params=(
                string("path", "Path to book root"),
                number("port", "Port number (default: 3000)"),
                string("hostname", "Hostname to bind to"),
                boolean("open", "Open browser automatically"),
            ),
            build=lambda a: command(
                "mdbook",
                "serve",
                *positional(a, "path"),
                *option(a, "port", "--port"),
                *option(a, "hostname", "--hostname"),
                *switch(a, "open", "--open"),
            ),
        ),
        Tool(
            name="mdbook_watch",
            description="Watch for changes and rebuild",
            params=(
                string("path", "Path to book root"),
                string("destDir", "Output directory"),
            ),
            build=lambda a: command(
                "mdbook",
                "watch",
                *positional(a, "path"),
                *option(a, "destDir", "--dest-dir"),
            ),
        ),
        Tool(
            name="mdbook_clean",
            description="Clean the build directory",
            params=(string("path", "Path to book root"),),
            build=lambda a: command("mdbook", "clean", *positional(a, "path")),
        ),
        Tool(
            name="mdbook_test",
            description="Test code samples in the book",
            params=(string("path", "Path to book root"),),
            build=lambda a: command("mdbook", "test", *positional(a, "path")),
        ),
        Tool(
            name="mdbook_version",
            requires_connection=False,
            description="Get mdBook version",
            build=lambda a: command("mdbook", "--version"),
        ),
    ]
    return AdapterDescriptor(
        name="mdbook",
        display_name="mdBook",
        language="Rust",
        description="Create books from Markdown files, used for Rust documentation",
        homepage="https://rust-lang.github.io/mdBook/",
        probes=[Probe("mdbook", ("--version",))],
        tools=tools,
        **options,
    )


def zola(**options) -> AdapterDescriptor:
    tools = [
        Tool(
            name="zola_init",
            description="Initialize a new Zola site",
            params=(
                string("path", "Path for the new site", required=True),
                boolean("force", "Overwrite existing directory"),
            ),
            build=lambda a: command("zola", "init", a["path"], *switch(a, "force", "--force")),
        ),
        Tool(
            name="zola_build",
            description="Build the Zola site",
            params=(
                string("path", "Path to site root"),
                string("baseUrl", "Base URL for the site"),
                string("outputDir", "Output directory"),
                boolean("drafts", "Include drafts"),
            ),
            build=lambda a: command(
                "zola",
                "build",
                *option(a, "baseUrl", "--base-url"),
                *option(a, "outputDir", "--output-dir"),
                *switch(a, "drafts", "--drafts"),
                cwd=workdir(a),
            ),
        ),
        Tool(
            name="zola_serve",
            description="Start Zola development server",
            params=(
                string("path", "Path to site root"),
                number("port", "Port number (default: 1111)"),
                string("interface", "Interface to bind to"),
                boolean("drafts", "Include drafts"),
                boolean("openBrowser", "Open browser automatically"),
            ),
            build=lambda a: command(
                "zola",
                "serve",
                *option(a, "port", "--port"),
                *option(a, "interface", "--interface"),
                *switch(a, "drafts", "--drafts"),
                *switch(a, "openBrowser", "--open"),
                cwd=workdir(a),
            ),
        ),
        Tool(
            name="zola_check",
            description="Check the site for errors",
            params=(
                string("path", "Path to site root"),
                boolean("drafts", "Include drafts"),
            ),
            build=lambda a: command("zola", "check", *switch(a, "drafts", "--drafts"), cwd=workdir(a)),
        ),
        Tool(
            name="zola_version",
            requires_connection=False,
            description="Get Zola version",
            build=lambda a: command("zola", "--version"),
        ),
    ]
    return AdapterDescriptor(
        name="zola",
        display_name="Zola",
        language="Rust",
        description=(
            "Fast static site generator written in Rust with built-in Sass "
            "compilation and syntax highlighting"
        ),
        homepage="https://www.getzola.org/",
        probes=[Probe("zola", ("--version",))],
        tools=tools,
        **options,
    )
