from __future__ import annotations

from credbench import MeanStd, PhaseSeries
from credbench_cli.runners.common import (
    SweepResult,
    render_environment,
    render_report,
    render_table,
)


def _series(phase: str, label: str, rows) -> PhaseSeries:
    series = PhaseSeries(phase, label)
    for mean, std in rows:
        series.append(MeanStd(mean, std, 1))
    return series


def test_table_layout() -> None:
    series = _series("primes", "CredDef prime generation", [(1.5, 0.0), (2.0, 0.25)])
    assert render_table(series, 7) == (
        "#Benchmarks for CredDef prime generation\n"
        "#Data obtained iterating 7 times\n"
        "#Num attrs\tMean time (ms)\tStd dev (ms)\n"
        "1\t\t1.500000\t0.000000\n"
        "2\t\t2.000000\t0.250000"
    )


def test_report_has_three_tables_in_fixed_order() -> None:
    result = SweepResult(
        n_attrs=1,
        n_iters=4,
        all=_series("all", "whole CredDef generation", [(10.0, 1.0)]),
        primes=_series("primes", "CredDef prime generation", [(8.0, 1.0)]),
        qrs=_series("qrs", "CredDef QRns generation", [(1.0, 0.5)]),
    )
    report = render_report(result)
    tables = report.split("\n\n")
    assert len(tables) == 3
    assert tables[0].startswith("#Benchmarks for whole CredDef generation")
    assert tables[1].startswith("#Benchmarks for CredDef prime generation")
    assert tables[2].startswith("#Benchmarks for CredDef QRns generation")
    assert report.count("#Data obtained iterating 4 times") == 3
    assert tables[2].splitlines()[-1] == "1\t\t1.000000\t0.500000"


def test_environment_preamble_is_commented() -> None:
    text = render_environment("openssl")
    lines = text.splitlines()
    assert all(line.startswith("#") for line in lines)
    assert "#backend: openssl" in lines
    assert any(line.startswith("#cores_logical: ") for line in lines)
