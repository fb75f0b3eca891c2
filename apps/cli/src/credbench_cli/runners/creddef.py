from __future__ import annotations
import logging

import typer

from credbench import CredBenchError
from credbench.params import DEFAULT_BACKEND
from .common import get_backend, render_environment, render_report, run_creddef

app = typer.Typer(add_completion=False)


def _progress(k: int, i: int) -> None:
    typer.echo(f"\r// attribute count: {k}; iteration: {i}", nl=False)


@app.command()
def main(
    n_attrs: int = typer.Argument(..., min=1, help="Sweep attribute counts 1..N_ATTRS."),
    n_iters: int = typer.Argument(..., min=1, help="Iterations per attribute count."),
    backend: str = typer.Option(DEFAULT_BACKEND, help="Big-integer backend (see `credbench list-backends`)."),
    reset_per_step: bool = typer.Option(
        False,
        "--reset-per-step/--cumulative",
        help="Summarise each attribute count from its own iterations instead of the whole run so far.",
        show_default=True,
    ),
    show_env: bool = typer.Option(True, "--env/--no-env", help="Print host details before the tables."),
    log_level: str = typer.Option("WARNING", help="Logging level for diagnostics on stderr."),
):
    """
    Benchmark CPU time of CredDef generation: 2x 1024-bit safe primes and k QRs mod n.
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise typer.BadParameter(f"unknown logging level {log_level!r}", param_hint="--log-level")
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    try:
        get_backend(backend)
    except KeyError as exc:
        typer.echo(f"error: {exc.args[0]}", err=True)
        raise typer.Exit(code=1)
    try:
        result = run_creddef(
            backend,
            n_attrs,
            n_iters,
            reset_per_step=reset_per_step,
            progress_cb=_progress,
        )
    except CredBenchError as exc:
        typer.echo("")
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1)
    typer.echo("\n")
    if show_env:
        typer.echo(render_environment(result.backend))
        typer.echo("")
    typer.echo(render_report(result))


def app_main():
    app()

if __name__ == "__main__":
    app_main()
