# Tests for the command line entry point

import logging

import numpy as np
import pandas as pd
import pytest

from icc_explorer.model import icc_1pl
from icc_explorer.run_explorer import main, parse_assignment


def test_parse_assignment():
    assert parse_assignment("theta=1.5") == ("theta", 1.5)
    assert parse_assignment(" c = 0.2") == ("c", 0.2)
    with pytest.raises(ValueError):
        parse_assignment("theta")
    with pytest.raises(ValueError):
        parse_assignment("theta=high")
    with pytest.raises(ValueError):
        parse_assignment("=1")


def test_headless_run_writes_figures_and_table(tmp_path, capsys):
    figures_dir = tmp_path / "figures"
    csv_path = tmp_path / "curves.csv"
    code = main([
        "--no-show",
        "--save", str(figures_dir),
        "--export-csv", str(csv_path),
        "--set", "c=0.3",
        "--dpi", "50",
        "--figsize", "4", "4",
    ])
    assert code == 0
    for key in ["1PL", "2PL", "3PL", "4PL"]:
        assert (figures_dir / f"icc_{key}.png").exists()

    df = pd.read_csv(csv_path)
    assert list(df.columns) == ["theta", "P_1PL", "P_2PL", "P_3PL", "P_4PL"]
    assert len(df) == 400
    assert df["P_3PL"].min() >= 0.3
    assert "Figure saved to" in capsys.readouterr().out


def test_lock_flag_syncs_difficulty(tmp_path):
    csv_path = tmp_path / "curves.csv"
    main(["--family", "1PL", "--no-show", "--lock", "--set", "theta=2", "--export-csv", str(csv_path)])
    df = pd.read_csv(csv_path)
    assert list(df.columns) == ["theta", "P_1PL"]
    np.testing.assert_allclose(df["P_1PL"], icc_1pl(df["theta"].to_numpy(), 2.0))


def test_unused_parameter_is_reported(caplog):
    with caplog.at_level(logging.WARNING):
        main(["--family", "1PL", "--no-show", "--set", "d=0.8"])
    assert "Parameter 'd' is not used by 1PL" in caplog.text


def test_malformed_override_exits():
    with pytest.raises(SystemExit) as excinfo:
        main(["--no-show", "--set", "theta"])
    assert excinfo.value.code == 2
