"""Integration-style checks for the command line interface."""

import pandas as pd
import pytest

from fit_usl import format_report, main, parse_args, resolve_sources
from usl.datasets import CISCO
from usl.model import Model


def test_requires_exactly_one_source():
    with pytest.raises(SystemExit):
        resolve_sources(parse_args([]))
    with pytest.raises(SystemExit):
        resolve_sources(parse_args(["--dataset", "cisco", "--inputs", "a.csv"]))


def test_missing_input_file_exits(tmp_path):
    with pytest.raises(SystemExit):
        resolve_sources(parse_args(["--inputs", str(tmp_path / "missing.csv")]))


def test_report_for_limitless_model():
    report = format_report("linear", Model.of(0.05, 0.0, 100.0), [1, 2])
    assert "limitless" in report
    assert "contention" in report
    assert "N_max" not in report


def test_report_for_balanced_model():
    report = format_report("balanced", Model.of(0.06, 0.06, 40), [1])
    assert "balanced" in report
    assert "N_max" in report


def test_main_fits_dataset(capsys):
    main(["--dataset", "cisco", "--predict", "1", "35"])
    out = capsys.readouterr().out
    assert "Model for cisco" in out
    assert "N_max" in out
    assert "contention" in out


def test_main_fits_csv_inputs(tmp_path, capsys):
    path = tmp_path / "bench.csv"
    pd.DataFrame(CISCO.points, columns=["concurrency", "throughput"]).to_csv(path, index=False)
    main(["--inputs", str(path)])
    assert str(path) in capsys.readouterr().out


def test_main_reports_insufficient_data(tmp_path):
    path = tmp_path / "short.csv"
    pd.DataFrame(CISCO.points[:4], columns=["concurrency", "throughput"]).to_csv(path, index=False)
    with pytest.raises(SystemExit, match="at least 6"):
        main(["--inputs", str(path)])


def test_main_rejects_bad_solver_settings():
    with pytest.raises(SystemExit):
        main(["--dataset", "cisco", "--max-iterations", "0"])


def test_main_rejects_tolerance_below_machine_epsilon():
    with pytest.raises(SystemExit):
        main(["--dataset", "cisco", "--tolerance", "1e-17"])


def test_main_reports_non_numeric_rows(tmp_path):
    path = tmp_path / "bad.csv"
    rows = list(CISCO.points) + [("n/a", 12000.0)]
    pd.DataFrame(rows, columns=["concurrency", "throughput"]).to_csv(path, index=False)
    with pytest.raises(SystemExit, match="rows: \\[32\\]"):
        main(["--inputs", str(path)])
