"""Tests for the command line interface."""

from __future__ import annotations

import pandas as pd
import pytest

from modelflow import load_workflow
from modelflow.cli import main


@pytest.fixture
def mtcars_csv(mtcars, temp_dir):
    """mtcars written to a CSV file."""
    path = temp_dir / "mtcars.csv"
    mtcars.to_csv(path, index=False)
    return path


class TestCli:
    """Tests for the fit, predict and info commands."""

    def test_no_command(self, capsys):
        """Running without a command prints help and fails."""
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out

    @pytest.mark.integration
    def test_fit_predict_info(self, mtcars_csv, temp_dir, capsys):
        """A workflow fit from the CLI can be inspected and used to predict."""
        model_path = temp_dir / "workflow.pkl"
        predictions_path = temp_dir / "predictions.csv"

        assert main(
            ["fit", str(mtcars_csv), "--formula", "mpg ~ cyl + wt", "--model", "linear_reg",
             "-o", str(model_path)]
        ) == 0
        assert load_workflow(model_path).fit is not None

        assert main(["predict", str(model_path), str(mtcars_csv), "-o", str(predictions_path)]) == 0
        predictions = pd.read_csv(predictions_path)
        assert list(predictions.columns) == [".pred"]
        assert len(predictions) == 32

        capsys.readouterr()
        assert main(["info", str(model_path)]) == 0
        output = capsys.readouterr().out
        assert "linear_reg" in output
        assert "mpg ~ cyl + wt" in output
        assert "- wt" in output

    def test_fit_with_mode(self, mtcars_csv, temp_dir):
        """--mode sets the mode of tree models."""
        model_path = temp_dir / "tree.pkl"

        assert main(
            ["fit", str(mtcars_csv), "-f", "mpg ~ .", "-m", "decision_tree",
             "--mode", "regression", "-o", str(model_path)]
        ) == 0
        assert load_workflow(model_path).fit.spec.model_type == "decision_tree"

    def test_fit_missing_file(self, temp_dir, capsys):
        """A missing dataset is reported."""
        assert main(["fit", str(temp_dir / "none.csv"), "-f", "y ~ x", "-m", "linear_reg"]) == 1
        assert "not found" in capsys.readouterr().out

    def test_fit_error_is_reported(self, mtcars_csv, temp_dir, capsys):
        """Workflow errors become a failing exit code."""
        code = main(
            ["fit", str(mtcars_csv), "-f", "mpg ~ gear", "-m", "linear_reg",
             "-o", str(temp_dir / "bad.pkl")]
        )

        assert code == 1
        assert "Error:" in capsys.readouterr().out

    def test_info_missing_file(self, temp_dir, capsys):
        """A missing workflow file is reported."""
        assert main(["info", str(temp_dir / "none.pkl")]) == 1
        assert "not found" in capsys.readouterr().out
