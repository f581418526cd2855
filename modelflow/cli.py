"""
modelflow: preprocess-then-fit model workflows

CLI interface for fitting workflows and making predictions.

Usage:
    modelflow fit <data.csv> --formula "y ~ x" --model <type> [OPTIONS]
    modelflow predict <workflow.pkl> <data.csv> [OPTIONS]
    modelflow info <workflow.pkl>
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import pandas as pd

from modelflow import (
    ProgressUpdate,
    WorkflowConfig,
    WorkflowError,
    add_formula,
    add_model,
    boost_tree,
    decision_tree,
    fit,
    linear_reg,
    load_artifact,
    load_workflow,
    logistic_reg,
    nearest_neighbor,
    predict,
    rand_forest,
    save_workflow,
    set_mode,
    workflow,
)
from modelflow.core import FormulaAction

MODEL_CONSTRUCTORS = {
    "linear_reg": linear_reg,
    "logistic_reg": logistic_reg,
    "decision_tree": decision_tree,
    "rand_forest": rand_forest,
    "boost_tree": boost_tree,
    "nearest_neighbor": nearest_neighbor,
}


def cmd_fit(args: argparse.Namespace) -> int:
    """Fit a formula workflow on a dataset."""
    dataset_path = Path(args.input)

    if not dataset_path.exists():
        print(f"Error: Dataset file not found: {dataset_path}")
        return 1

    print(f"Loading data from {dataset_path}...")
    data = pd.read_csv(dataset_path)
    print(f"Loaded {len(data)} rows, {len(data.columns)} columns")

    def on_progress(update: ProgressUpdate) -> None:
        print(f"[{update.progress * 100:5.1f}%] {update.stage.value}: {update.message}")

    try:
        spec = MODEL_CONSTRUCTORS[args.model](engine=args.engine)
        if args.mode:
            spec = set_mode(spec, args.mode)

        config = WorkflowConfig.builder().random_seed(args.seed).build()
        wf = add_model(add_formula(workflow(config), args.formula), spec)
        fitted = fit(wf, data, on_progress=on_progress)
    except WorkflowError as e:
        print(f"Error: {e}")
        return 1

    assert fitted.fit is not None
    assert fitted.mold is not None
    print(f"\nModel:      {fitted.fit.spec.model_type} ({fitted.fit.spec.engine} engine)")
    print(f"Predictors: {', '.join(map(str, fitted.mold.predictors.columns))}")
    print(f"Fit time:   {fitted.fit.elapsed:.3f}s")

    path = save_workflow(fitted, args.output)
    print(f"\nWorkflow saved to: {path}")
    return 0


def cmd_predict(args: argparse.Namespace) -> int:
    """Make batch predictions."""
    data_path = Path(args.input)

    if not data_path.exists():
        print(f"Error: Data file not found: {data_path}")
        return 1

    try:
        print(f"Loading workflow from {args.workflow}...")
        fitted = load_workflow(args.workflow)

        print(f"Making predictions on {data_path}...")
        predictions = predict(fitted, pd.read_csv(data_path))
    except WorkflowError as e:
        print(f"Error: {e}")
        return 1

    output_path = Path(args.output)
    predictions.to_csv(output_path, index=False)
    print(f"Predictions saved to: {output_path}")
    return 0


def cmd_info(args: argparse.Namespace) -> int:
    """Show information about a saved workflow."""
    try:
        artifact = load_artifact(args.workflow)
    except WorkflowError as e:
        print(f"Error: {e}")
        return 1

    wf = artifact.workflow
    assert wf.pre is not None
    assert wf.mold is not None
    assert wf.fit is not None

    preprocessor = wf.pre.formula if isinstance(wf.pre, FormulaAction) else wf.pre.recipe.formula
    print(f"Workflow: {args.workflow}")
    print(f"  Version:      {artifact.version}")
    print(f"  Saved:        {artifact.saved_at}")
    print(f"  Preprocessor: {wf.pre.kind} ({preprocessor})")
    print(f"  Blueprint:    {wf.mold.blueprint}")
    print(f"  Model:        {wf.fit.spec.model_type}")
    print(f"  Engine:       {wf.fit.spec.engine}")
    print(f"  Mode:         {wf.fit.spec.mode.value}")
    print(f"  Fit Time:     {wf.fit.elapsed:.3f}s")

    print("\nPredictors:")
    for name in wf.mold.predictors.columns:
        print(f"  - {name}")

    print("\nOutcomes:")
    for name in wf.mold.outcomes.columns:
        print(f"  - {name}")

    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="modelflow: preprocess-then-fit model workflows",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Fit command
    fit_parser = subparsers.add_parser("fit", help="Fit a workflow")
    fit_parser.add_argument("input", help="Input CSV file")
    fit_parser.add_argument("-f", "--formula", required=True, help='Formula, e.g. "mpg ~ cyl"')
    fit_parser.add_argument(
        "-m", "--model", required=True, choices=sorted(MODEL_CONSTRUCTORS), help="Model type"
    )
    fit_parser.add_argument("-e", "--engine", help="Engine (default engine if not specified)")
    fit_parser.add_argument(
        "--mode", choices=["classification", "regression"], help="Model mode"
    )
    fit_parser.add_argument("-o", "--output", default="workflow.pkl", help="Output workflow path")
    fit_parser.add_argument("--seed", type=int, default=42, help="Random seed")

    # Predict command
    predict_parser = subparsers.add_parser("predict", help="Make batch predictions")
    predict_parser.add_argument("workflow", help="Workflow file (.pkl)")
    predict_parser.add_argument("input", help="Input CSV file")
    predict_parser.add_argument("-o", "--output", default="predictions.csv", help="Output CSV path")

    # Info command
    info_parser = subparsers.add_parser("info", help="Show workflow information")
    info_parser.add_argument("workflow", help="Workflow file (.pkl)")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == "fit":
        return cmd_fit(args)
    elif args.command == "predict":
        return cmd_predict(args)
    elif args.command == "info":
        return cmd_info(args)

    return 0


if __name__ == "__main__":
    sys.exit(main())
