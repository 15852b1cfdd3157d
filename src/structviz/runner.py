"""Convenience helpers for running a table of engine commands end-to-end."""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Optional

import pandas as pd

from .config import WorkbenchConfig
from .workbench import Command, Workbench, WorkbenchRun

REQUIRED_COLUMNS = ("engine", "operation")
_INTEGER_PATTERN = re.compile(r"[+-]?\d+")


def parse_args(raw: str) -> tuple:
    """Split a whitespace separated argument cell into ints and words."""

    tokens = str(raw or "").replace(",", " ").split()
    return tuple(int(token) if _INTEGER_PATTERN.fullmatch(token) else token for token in tokens)


def commands_from_frame(dataframe: pd.DataFrame) -> List[Command]:
    missing = [column for column in REQUIRED_COLUMNS if column not in dataframe.columns]
    if missing:
        raise KeyError(f"Missing column(s): {', '.join(missing)}")
    frame = dataframe.fillna("")
    arguments = frame["args"] if "args" in frame.columns else pd.Series([""] * len(frame), index=frame.index)
    return [
        Command(str(engine).strip().lower(), str(operation).strip().lower(), parse_args(raw))
        for engine, operation, raw in zip(frame["engine"], frame["operation"], arguments)
    ]


def annotate(dataframe: pd.DataFrame, run: WorkbenchRun) -> pd.DataFrame:
    df = dataframe.copy()
    df["success"] = [result.success for result in run.results]
    df["kind"] = [result.kind.value for result in run.results]
    df["message"] = [result.message for result in run.results]
    df["value"] = ["" if result.value is None else str(result.value) for result in run.results]
    df["trace"] = [" ".join(str(step) for step in result.trace) for result in run.results]
    return df


def run_script(
    input_path: str | Path,
    output_path: str | Path,
    config: Optional[WorkbenchConfig] = None,
) -> WorkbenchRun | None:
    """Run every command in `input_path` and write the annotated table to `output_path`."""

    input_path = Path(input_path)
    output_path = Path(output_path)

    try:
        dataframe = _load_dataframe(input_path)
    except FileNotFoundError:
        print(f"ERROR: Input file not found at '{input_path}'.")
        return None
    except ValueError:
        print(f"ERROR: Unsupported file format for '{input_path}'. Please provide a CSV or Excel file.")
        return None

    try:
        commands = commands_from_frame(dataframe)
    except KeyError as exc:
        print(f"ERROR: {exc.args[0]} in '{input_path}'. Expected columns: engine, operation, args.")
        return None

    workbench = Workbench(config or WorkbenchConfig())
    run = workbench.run(commands)
    try:
        _save_dataframe(annotate(dataframe, run), output_path)
    except ValueError as exc:
        print(f"ERROR: {exc}")
        return None
    if workbench.config.verbose:
        print(f"   Results saved to '{output_path}'")
    return run


def _load_dataframe(path: Path) -> pd.DataFrame:
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return pd.read_csv(path, dtype=str)
    if suffix in {".xls", ".xlsx"}:
        return pd.read_excel(path, dtype=str)
    raise ValueError("unsupported format")


def _save_dataframe(dataframe: pd.DataFrame, path: Path) -> None:
    suffix = path.suffix.lower()
    if suffix == ".csv":
        dataframe.to_csv(path, index=False)
        return
    if suffix in {".xls", ".xlsx"}:
        dataframe.to_excel(path, index=False)
        return
    raise ValueError(f"Unsupported output file format: '{suffix}'")
