from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import httpx
import typer
from dotenv import load_dotenv
from rich.console import Console

from .version import __version__
from .utils.io import SourceError
from .utils.logging import get_logger, setup_logger
from .pipeline import RunConfig, run
from .report import FORMATS, candidates_table, candidates_to_json
from .srcset.errors import SrcsetError
from .srcset.parser import parse
from .srcset.selector import pick_best


app = typer.Typer(add_completion=False, help="Pick the highest-resolution image URLs out of srcset attributes.")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def main(
    log_level: str = typer.Option("INFO", "--log-level", envvar="IMGPICK_LOG_LEVEL", help="Logging level"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Print version and exit"
    ),
):
    setup_logger(log_level)


@app.command("parse")
def parse_cmd(
    srcset: str = typer.Argument(..., help="srcset attribute value"),
    strict: bool = typer.Option(False, "--strict/--loose", help="Reject invalid candidate lists"),
    as_json: bool = typer.Option(False, "--json", help="Print candidates as JSON"),
):
    """Parse a srcset value and list its candidates."""
    try:
        candidates = parse(srcset, strict=strict)
    except SrcsetError as e:
        get_logger().error(f"{type(e).__name__}: {e}")
        raise typer.Exit(code=2)
    if as_json:
        typer.echo(candidates_to_json(candidates))
    else:
        Console().print(candidates_table(candidates))


@app.command("best")
def best_cmd(
    srcset: str = typer.Argument(..., help="srcset attribute value"),
    strict: bool = typer.Option(False, "--strict/--loose", help="Reject invalid candidate lists"),
):
    """Print the URL of the largest candidate of a srcset value."""
    try:
        url = pick_best(parse(srcset, strict=strict))
    except SrcsetError as e:
        get_logger().error(f"{type(e).__name__}: {e}")
        raise typer.Exit(code=2)
    if url is None:
        get_logger().warning("No image candidate found")
        raise typer.Exit(code=1)
    typer.echo(url)


@app.command("page")
def page_cmd(
    source: str = typer.Argument(..., help="Page URL or local HTML file"),
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Also write the result to this file"),
    selector: Optional[str] = typer.Option(
        None, "--selector", help="Structural selector such as 'body > div.gallery > img'; default every <img>"
    ),
    strict: bool = typer.Option(False, "--strict/--loose", help="Reject invalid srcset values (falls back to src)"),
    output_format: str = typer.Option("text", "--format", help=f"Output format: {', '.join(FORMATS)}"),
    timeout: float = typer.Option(40.0, "--timeout", envvar="IMGPICK_TIMEOUT", help="Timeout seconds"),
    retry: int = typer.Option(1, "--retry", min=0, help="Retries for transient errors"),
    header: List[str] = typer.Option(None, "--header", help="Extra HTTP header KEY=VALUE", show_default=False),
    cookie: List[str] = typer.Option(None, "--cookie", help="Cookie NAME=VALUE", show_default=False),
):
    """Print the best URL of every matching image on a page."""
    if output_format not in FORMATS:
        raise typer.BadParameter(f"expected one of {', '.join(FORMATS)}", param_hint="--format")
    cfg = RunConfig(
        source=source,
        output=output,
        selector=selector,
        strict=strict,
        timeout=timeout,
        retries=retry,
        headers=header,
        cookies=cookie,
        output_format=output_format,
    )
    try:
        rendered = run(cfg)
    except (SourceError, httpx.HTTPError) as e:
        get_logger().error(f"Failed to load {source}: {e}")
        raise typer.Exit(code=1)
    except ValueError as e:
        get_logger().error(str(e))
        raise typer.Exit(code=2)
    typer.echo(rendered, nl=False)


def entrypoint():
    load_dotenv()
    app()


if __name__ == "__main__":
    entrypoint()
