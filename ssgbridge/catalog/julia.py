"""Julia packages driven through ``julia -e``: Documenter.jl, Franklin.jl, StaticWebPages.jl."""

from __future__ import annotations

from typing import List

from ssgbridge.adapters.base import AdapterDescriptor, Command, Probe, Tool
from ssgbridge.catalog._helpers import (
    Arguments,
    boolean,
    command,
    format_number,
    identifier,
    number,
    quoted,
    string,
    workdir,
)

JULIA = "julia"


def julia(code: str, cwd=None) -> Command:
    return command(JULIA, "-e", code, cwd=cwd)


def julia_string(value) -> str:
    return quoted(value, escape_dollar=True)


def _julia_version(a: Arguments) -> Command:
    return command(JULIA, "--version")


# ── Documenter.jl ─────────────────────────────────────────────────────────


def _makedocs(a: Arguments) -> Command:
    kwargs = f"sitename={julia_string(a['sitename'])}" if "sitename" in a else ""
    return julia(f"using Documenter; makedocs({kwargs})", cwd=workdir(a))


def _deploydocs(a: Arguments) -> Command:
    kwargs = f"repo={julia_string(a['repo'])}" if "repo" in a else ""
    return julia(f"using Documenter; deploydocs({kwargs})", cwd=workdir(a))


def _doctest(a: Arguments) -> Command:
    module = identifier(a["module"], "Julia module name")
    return julia(f"using Documenter, {module}; doctest({module})", cwd=workdir(a))


def _livereload(a: Arguments) -> Command:
    port = format_number(a.get("port", 8000))
    return julia(f'using LiveServer; serve(dir="docs/build", port={port})', cwd=workdir(a))


def documenter(**options) -> AdapterDescriptor:
    tools = [
        Tool(
            name="documenter_makedocs",
            description="Build documentation",
            params=(
                string("path", "Path to project root"),
                string("sitename", "Site name"),
            ),
            build=_makedocs,
        ),
        Tool(
            name="documenter_deploydocs",
            description="Deploy documentation",
            params=(
                string("path", "Path to project root"),
                string("repo", "Repository URL"),
            ),
            build=_deploydocs,
        ),
        Tool(
            name="documenter_doctest",
            description="Run doctests",
            params=(
                string("path", "Path to project root"),
                string("module", "Module name", required=True),
            ),
            build=_doctest,
        ),
        Tool(
            name="documenter_serve",
            description="Serve documentation locally with LiveServer",
            params=(
                string("path", "Path to docs/build"),
                number("port", "Port number (default: 8000)"),
            ),
            build=_livereload,
        ),
        Tool(
            name="documenter_version",
            requires_connection=False,
            description="Get Julia/Documenter version",
            build=_julia_version,
        ),
    ]
    return AdapterDescriptor(
        name="documenter",
        display_name="Documenter.jl",
        language="Julia",
        description="Documentation generator for Julia packages",
        homepage="https://documenter.juliadocs.org/",
        probes=[Probe(JULIA, ("--version",))],
        tools=tools,
        **options,
    )


# ── Franklin.jl ───────────────────────────────────────────────────────────


def _newsite(a: Arguments) -> Command:
    target = julia_string(a.get("path", "."))
    template = f"; template={julia_string(a['template'])}" if "template" in a else ""
    return julia(f"using Franklin; newsite({target}{template})")


def _franklin_serve(a: Arguments) -> Command:
    kwargs: List[str] = []
    if "port" in a:
        kwargs.append(f"port={format_number(a['port'])}")
    if "host" in a:
        kwargs.append(f"host={julia_string(a['host'])}")
    return julia(f"using Franklin; serve({', '.join(kwargs)})", cwd=workdir(a))


def _optimize(a: Arguments) -> Command:
    # minify and prerender default on; an explicit false turns them off
    kwargs = [
        f"minify={'false' if a.get('minify') is False else 'true'}",
        f"prerender={'false' if a.get('prerender') is False else 'true'}",
    ]
    return julia(f"using Franklin; optimize({', '.join(kwargs)})", cwd=workdir(a))


def franklin(**options) -> AdapterDescriptor:
    tools = [
        Tool(
            name="franklin_newsite",
            description="Create a new Franklin site",
            params=(
                string("path", "Path for the new site"),
                string("template", "Template name"),
            ),
            build=_newsite,
        ),
        Tool(
            name="franklin_serve",
            description="Start Franklin development server",
            params=(
                string("path", "Path to site root"),
                number("port", "Port number"),
                string("host", "Host to bind to"),
            ),
            build=_franklin_serve,
        ),
        Tool(
            name="franklin_optimize",
            description="Build optimized site for deployment",
            params=(
                string("path", "Path to site root"),
                boolean("minify", "Minify output (default: true)"),
                boolean("prerender", "Prerender pages (default: true)"),
            ),
            build=_optimize,
        ),
        Tool(
            name="franklin_publish",
            description="Publish site to GitHub Pages",
            params=(string("path", "Path to site root"),),
            build=lambda a: julia("using Franklin; publish()", cwd=workdir(a)),
        ),
        Tool(
            name="franklin_version",
            requires_connection=False,
            description="Get Julia/Franklin version",
            build=_julia_version,
        ),
    ]
    return AdapterDescriptor(
        name="franklin",
        display_name="Franklin.jl",
        language="Julia",
        description="Static site generator for technical blogging in Julia with LaTeX support",
        homepage="https://franklinjl.org/",
        probes=[Probe(JULIA, ("--version",))],
        tools=tools,
        **options,
    )


# ── StaticWebPages.jl ─────────────────────────────────────────────────────


def staticwebpages(**options) -> AdapterDescriptor:
    tools = [
        Tool(
            name="staticwebpages_init",
            description="Initialize a new StaticWebPages site",
            params=(string("path", "Path for the new site"),),
            build=lambda a: julia(
                f"using StaticWebPages; init({julia_string(a.get('path', '.'))})",
                cwd=workdir(a),
            ),
        ),
        Tool(
            name="staticwebpages_build",
            description="Build the site",
            params=(string("path", "Path to site root"),),
            build=lambda a: julia("using StaticWebPages; build()", cwd=workdir(a)),
        ),
        Tool(
            name="staticwebpages_serve",
            description="Serve the site locally",
            params=(
                string("path", "Path to site root"),
                number("port", "Port number (default: 8000)"),
            ),
            build=lambda a: julia(
                f"using StaticWebPages; serve(port={format_number(a.get('port', 8000))})",
                cwd=workdir(a),
            ),
        ),
        Tool(
            name="staticwebpages_version",
            requires_connection=False,
            description="Get Julia version",
            build=_julia_version,
        ),
    ]
    return AdapterDescriptor(
        name="staticwebpages",
        display_name="StaticWebPages.jl",
        language="Julia",
        description="Academic and personal website generator in Julia",
        homepage="https://github.com/Azzaare/StaticWebPages.jl",
        probes=[Probe(JULIA, ("--version",))],
        tools=tools,
        **options,
    )
