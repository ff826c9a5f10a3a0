from __future__ import annotations
import logging
import typer
from rich.console import Console
from rich.markup import escape
from typing import Optional
from .config import load_config, with_overrides
from .errors import ConfigError, DetectorLoadError, VideoOpenError
from .log import setup_logging
from .runtime.events import BlinkEvent
from .runtime.scan import count_blinks

log = logging.getLogger("flickerkit")

app = typer.Typer(add_completion=False, help="Count eye blinks in a video file (flickers)")

# soft_wrap keeps long paths on one line
out = Console(soft_wrap=True)
err = Console(stderr=True, soft_wrap=True)

@app.command()
def main(video: str = typer.Argument(..., help="Path to the video file"),
         config: Optional[str] = typer.Option(None, "--config", "-c", help="YAML config file"),
         min_frames: Optional[int] = typer.Option(None, "--min-frames", help="Shortest eyes-absent run that is a blink"),
         max_frames: Optional[int] = typer.Option(None, "--max-frames", help="Longest eyes-absent run that is still a blink"),
         no_face: Optional[str] = typer.Option(None, "--no-face", help="Frames without a face: reset | pause"),
         detector: Optional[str] = typer.Option(None, "--detector", help="haar | mesh"),
         jsonl: bool = typer.Option(False, "--jsonl", help="Print blink events and the report as JSON lines"),
         verbose: bool = typer.Option(False, "--verbose", "-v")):
    """
    Scan VIDEO frame by frame and report every blink onset.
    """
    setup_logging(verbose)
    # with --jsonl, stdout carries JSON only
    diag = err if jsonl else out
    try:
        cfg = with_overrides(load_config(config),
                             tracker={"min_frames_for_blink": min_frames,
                                      "max_frames_for_blink": max_frames,
                                      "no_face": no_face},
                             detector={"backend": detector})
    except ConfigError as e:
        diag.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        raise typer.Exit(2)

    def emit(ev: BlinkEvent):
        typer.echo(ev.model_dump_json())

    try:
        report = count_blinks(video, cfg, on_blink=emit if jsonl else None)
    except VideoOpenError as e:
        log.error("%s", e)
        diag.print(f"[red]Could not open video:[/red] {escape(video)}")
        diag.print("Total blinks detected: 0")
        raise typer.Exit(1)
    except DetectorLoadError as e:
        log.error("%s", e)
        diag.print(f"[red]Could not load detector assets:[/red] {escape(str(e))}")
        diag.print("Total blinks detected: 0")
        raise typer.Exit(1)

    if jsonl:
        typer.echo(report.model_dump_json())
        return
    out.print(f"file: {escape(video)} was examined")
    out.print(f"Video duration: {report.duration_s:.2f} s, frame rate: {report.fps:.2f}")
    out.print(f"Total frames processed: {report.frames_processed} ({report.frames_skipped} skipped)")
    out.print(f"[green]Total blinks detected: {report.blinks}[/green]")

if __name__ == "__main__":
    app()
