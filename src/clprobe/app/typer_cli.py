from __future__ import annotations

import logging
import sys
from pathlib import Path

import typer

from clprobe.core.errors import ClprobeError
from clprobe.core.query import QueryContext
from clprobe.core.render import render_json, render_text
from clprobe.core.walker import collect_listing, collect_report
from clprobe.infra.config import PROP_MODE_ENV, build_report_config
from clprobe.infra.driver import InfoDriver
from clprobe.infra.logging import configure_logging
from clprobe.infra.opencl import OpenCLDriver

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="clprobe",
    add_completion=False,
    help="Report every OpenCL platform and device with its capability properties.",
)


def create_driver(library_path: Path | None) -> InfoDriver:
    return OpenCLDriver(library_path)


@app.command()
def report_command(
    raw: bool | None = typer.Option(
        None,
        "--raw/--human",
        help="Symbolic property names instead of descriptions (default: from program name).",
    ),
    as_json: bool = typer.Option(False, "--json", help="Emit the report as JSON."),
    list_only: bool = typer.Option(
        False, "--list", "-l", help="Only list platform and device names."
    ),
    prop: str | None = typer.Option(
        None,
        "--prop",
        help="check|try|show: how to treat properties whose preconditions fail.",
    ),
    separator: str | None = typer.Option(
        None, "--separator", help="Separator for multi-valued properties."
    ),
    opencl_library: Path | None = typer.Option(
        None,
        "--opencl-library",
        help="Path to the OpenCL ICD loader (default: CLPROBE_OPENCL_LIBRARY or system lookup).",
    ),
    offline: bool = typer.Option(
        False, "--offline", help="Also report offline devices on platforms that expose them (AMD)."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr."),
) -> None:
    """Enumerate platforms and devices and print their properties."""
    configure_logging(verbose)
    try:
        config = build_report_config(
            raw=raw,
            invocation_name=sys.argv[0],
            output_format="json" if as_json else "text",
            prop_mode=prop,
            separator=separator,
            list_only=list_only,
            opencl_library=opencl_library,
            offline=offline,
        )
    except ValueError as exc:
        hint = "--prop" if prop else PROP_MODE_ENV
        raise typer.BadParameter(str(exc), param_hint=hint) from exc

    ctx = QueryContext(create_driver(config.opencl_library), config)
    try:
        report = collect_listing(ctx) if config.list_only else collect_report(ctx)
    except ClprobeError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=exc.exit_code) from exc
    logger.debug("scratch buffer reallocated %d time(s)", ctx.buffer.reallocations)

    if config.output_format == "json":
        typer.echo(render_json(report), nl=False)
    else:
        typer.echo(render_text(report, config), nl=False)


def run() -> None:
    """Console-script entrypoint."""
    app()
