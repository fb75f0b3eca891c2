from __future__ import annotations
import logging

import typer

from credbench import CredBenchError, CredentialMaterialGenerator, registry
from credbench.params import DEFAULT_BACKEND, SAFE_PRIME_BITS
from .runners.common import _load_backends, get_backend
from .runners.creddef import main as creddef_main

app = typer.Typer(add_completion=False, help="CredDef generation benchmark CLI")

@app.command()
def list_backends():
    """List registered big-integer backends."""
    _load_backends()
    for name in registry.list().keys():
        typer.echo(f"- {name}")

@app.command()
def probe(
    backend: str = typer.Option(DEFAULT_BACKEND, help="Backend to exercise."),
    attrs: int = typer.Option(1, min=0, help="Residues to sample."),
    bits: int = typer.Option(SAFE_PRIME_BITS, min=3, help="Safe prime size (diagnostic only)."),
):
    """Generate one set of CredDef material and show what was produced."""
    logging.basicConfig(level=logging.WARNING)
    try:
        impl = get_backend(backend)
    except KeyError as exc:
        typer.echo(f"error: {exc.args[0]}", err=True)
        raise typer.Exit(code=1)
    try:
        generator = CredentialMaterialGenerator(impl, bits=bits)
        timings, material = generator.generate_material(attrs)
    except CredBenchError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"[{backend}] p: {material.p.bit_length()} bits, q: {material.q.bit_length()} bits, "
               f"n: {material.n.bit_length()} bits, residues: {len(material.residues)}")
    typer.echo(f"cpu ms: total={timings.total_ms} primes={timings.primes_ms} qrs={timings.qrs_ms}")

app.command(name="creddef")(creddef_main)

def app_main():
    app()

if __name__ == "__main__":
    app_main()
