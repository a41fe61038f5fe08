"""JVM generators: Laika and ScalaTex (Scala), Orchid (Kotlin/Gradle)."""

from __future__ import annotations

from ssgbridge.adapters.base import AdapterDescriptor, Probe, Tool
from ssgbridge.catalog._helpers import command, joined_option, number, option, string, value, workdir

SBT = "sbt"
MILL = "mill"
GRADLEW = "./gradlew"
JAVA = "java"


def laika(**options) -> AdapterDescriptor:
    tools = [
        Tool(
            name="laika_site",
            description="Generate HTML site",
            params=(string("path", "Path to project root"),),
            build=lambda a: command(SBT, "laikaSite", cwd=workdir(a)),
        ),
        Tool(
            name="laika_pdf",
            description="Generate PDF document",
            params=(string("path", "Path to project root"),),
            build=lambda a: command(SBT, "laikaPDF", cwd=workdir(a)),
        ),
        Tool(
            name="laika_epub",
            description="Generate EPUB e-book",
            params=(string("path", "Path to project root"),),
            build=lambda a: command(SBT, "laikaEPUB", cwd=workdir(a)),
        ),
        Tool(
            name="laika_preview",
            description="Start preview server",
            params=(
                string("path", "Path to project root"),
                number("port", "Port number (set through laikaPreviewConfig in build.sbt)"),
            ),
            # the preview port is an sbt setting, not a task argument
            build=lambda a: command(SBT, "laikaPreview", cwd=workdir(a)),
        ),
        Tool(
            name="laika_clean",
            description="Clean generated output",
            params=(string("path", "Path to project root"),),
            build=lambda a: command(SBT, "clean", cwd=workdir(a)),
        ),
        Tool(
            name="laika_version",
            requires_connection=False,
            description="Get sbt version",
            build=lambda a: command(SBT, "--version"),
        ),
    ]
    return AdapterDescriptor(
        name="laika",
        display_name="Laika",
        language="Scala",
        description="Customizable site and e-book generator in Scala",
        homepage="https://typelevel.org/Laika/",
        probes=[Probe(SBT, ("--version",))],
        tools=tools,
        **options,
    )


def scalatex(**options) -> AdapterDescriptor:
    tools = [
        Tool(
            name="scalatex_compile",
            description="Compile ScalaTex documents",
            params=(
                string("path", "Path to project root"),
                string("module", "Module to compile (default: docs)"),
            ),
            build=lambda a: command(MILL, value(a, "module", "docs") + ".compile", cwd=workdir(a)),
        ),
        Tool(
            name="scalatex_run",
            description="Run ScalaTex generation",
            params=(
                string("path", "Path to project root"),
                string("module", "Module to run (default: docs)"),
            ),
            build=lambda a: command(MILL, value(a, "module", "docs") + ".run", cwd=workdir(a)),
        ),
        Tool(
            name="scalatex_watch",
            description="Watch and rebuild on changes",
            params=(
                string("path", "Path to project root"),
                string("module", "Module to watch (default: docs)"),
            ),
            build=lambda a: command(
                MILL, "--watch", value(a, "module", "docs") + ".compile", cwd=workdir(a)
            ),
        ),
        Tool(
            name="scalatex_clean",
            description="Clean build output",
            params=(string("path", "Path to project root"),),
            build=lambda a: command(MILL, "clean", cwd=workdir(a)),
        ),
        Tool(
            name="scalatex_version",
            requires_connection=False,
            description="Get Mill version",
            build=lambda a: command(MILL, "--version"),
        ),
    ]
    return AdapterDescriptor(
        name="scalatex",
        display_name="ScalaTex",
        language="Scala",
        description="Programmable, typesafe document generation in Scala",
        homepage="https://www.lihaoyi.com/Scalatex/",
        probes=[Probe(MILL, ("--version",)), Probe(SBT, ("--version",))],
        tools=tools,
        **options,
    )


def orchid(**options) -> AdapterDescriptor:
    tools = [
        Tool(
            name="orchid_init",
            description="Initialize a new Orchid project",
            params=(
                string("path", "Path for the new site"),
                string("type", "Project type (docs, blog, wiki)"),
            ),
            build=lambda a: command(GRADLEW, "init", *option(a, "type", "--type"), cwd=workdir(a)),
        ),
        Tool(
            name="orchid_build",
            description="Build the Orchid site",
            params=(string("path", "Path to site root"),),
            build=lambda a: command(GRADLEW, "orchidBuild", cwd=workdir(a)),
        ),
        Tool(
            name="orchid_serve",
            description="Start Orchid development server",
            params=(
                string("path", "Path to site root"),
                number("port", "Port number"),
            ),
            build=lambda a: command(
                GRADLEW, "orchidServe", *joined_option(a, "port", "-PorchidPort="), cwd=workdir(a)
            ),
        ),
        Tool(
            name="orchid_deploy",
            description="Deploy the Orchid site",
            params=(string("path", "Path to site root"),),
            build=lambda a: command(GRADLEW, "orchidDeploy", cwd=workdir(a)),
        ),
        Tool(
            name="orchid_run",
            description="Run Orchid (build + serve)",
            params=(string("path", "Path to site root"),),
            build=lambda a: command(GRADLEW, "orchidRun", cwd=workdir(a)),
        ),
        Tool(
            name="orchid_version",
            requires_connection=False,
            description="Get Java/Gradle version",
            build=lambda a: command(JAVA, "-version"),
        ),
    ]
    return AdapterDescriptor(
        name="orchid",
        display_name="Orchid",
        language="Kotlin",
        description="Powerful documentation and static site generator for Kotlin/Java",
        homepage="https://orchid.run/",
        # the Gradle wrapper lives in each project, so only the JVM is probed
        probes=[Probe(JAVA, ("-version",))],
        programs=[GRADLEW],
        tools=tools,
        **options,
    )
