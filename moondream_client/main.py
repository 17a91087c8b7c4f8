"""Entry point — wires Config → MoondreamVisionClient → terminal output."""
import asyncio
import logging
from collections.abc import Coroutine
from pathlib import Path
from typing import Any, TypeVar

import typer
from rich.console import Console
from rich.logging import RichHandler

from moondream_client.config import Config
from moondream_client.constants import VERSION
from moondream_client.errors import MoondreamError
from moondream_client.vision.moondream import MoondreamVisionClient
from moondream_client.vision.tasks import CaptionLength, TaskKind, TaskResult

T = TypeVar("T")

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    name="moondream",
    help="Detect, point, query and caption images with the Moondream API.",
    no_args_is_help=True,
)


def _setup_logging(level: str) -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    list(map(root.removeHandler, root.handlers[:]))
    root.addHandler(RichHandler(console=err_console, rich_tracebacks=True))


def _load_config() -> Config:
    try:
        config = Config.from_env()
    except ValueError as e:
        err_console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(1) from None
    _setup_logging(config.log_level)
    return config


def _run(coro: Coroutine[Any, Any, T]) -> T:
    try:
        return asyncio.run(coro)
    except MoondreamError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from None


async def _submit(config: Config, kind: TaskKind, image: Path, argument) -> TaskResult:
    async with MoondreamVisionClient.from_config(config) as client:
        return await client.submit(kind, image, argument)


async def _stream(config: Config, kind: TaskKind, image: Path, argument) -> str:
    async with MoondreamVisionClient.from_config(config) as client:
        try:
            return await client.stream_to(
                kind,
                image,
                argument,
                lambda chunk: console.print(chunk, end="", markup=False, highlight=False, soft_wrap=True),
            )
        finally:
            # ends the transcript line before any error is reported
            console.print()


def _execute(kind: TaskKind, image: Path, argument, stream: bool = False) -> None:
    config = _load_config()
    match stream:
        case True:
            _run(_stream(config, kind, image, argument))
        case False:
            result = _run(_submit(config, kind, image, argument))
            match result.text:
                case str() as text:
                    console.print(text, markup=False, highlight=False)
                case None:
                    console.print_json(data=result.value)


# ── commands ──────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"moondream-client {VERSION}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Moondream vision-language client."""


@app.command()
def detect(
    image: Path = typer.Argument(..., exists=True, dir_okay=False, help="Image file"),
    obj: str = typer.Argument(..., metavar="OBJECT", help="What to detect"),
) -> None:
    """Detect bounding boxes of OBJECT in IMAGE."""
    _execute(TaskKind.DETECT, image, obj)


@app.command()
def point(
    image: Path = typer.Argument(..., exists=True, dir_okay=False, help="Image file"),
    obj: str = typer.Argument(..., metavar="OBJECT", help="What to locate"),
) -> None:
    """Locate center points of OBJECT in IMAGE."""
    _execute(TaskKind.POINT, image, obj)


@app.command()
def query(
    image: Path = typer.Argument(..., exists=True, dir_okay=False, help="Image file"),
    question: str = typer.Argument(..., help="Question about the image"),
    stream: bool = typer.Option(False, "--stream", "-s", help="Print the answer as it is generated"),
) -> None:
    """Ask QUESTION about IMAGE."""
    _execute(TaskKind.QUERY, image, question, stream)


@app.command()
def caption(
    image: Path = typer.Argument(..., exists=True, dir_okay=False, help="Image file"),
    length: CaptionLength = typer.Option(CaptionLength.NORMAL, "--length", "-l", help="Caption detail"),
    stream: bool = typer.Option(False, "--stream", "-s", help="Print the caption as it is generated"),
) -> None:
    """Caption IMAGE."""
    _execute(TaskKind.CAPTION, image, length, stream)


if __name__ == "__main__":
    app()
