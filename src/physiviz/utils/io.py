"""Reading and writing problems and playback histories."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pandas as pd

from physiviz.problem import ProblemDescription, ProblemFormatError


def save_simulation_history(history: list[dict[str, Any]], filepath: str | Path) -> Path:
    """
    Save a list of state dictionaries to a CSV file.

    Parameters
    ----------
    history : list[dict]
        Rows, e.g. ``[{"t": 0.05, "x": 0.7, "y": 25.1}, ...]``
    filepath : str | Path
        Destination path (e.g. ``results/run1.csv``)

    Raises
    ------
    ValueError
        If ``history`` is empty
    """
    if not history:
        raise ValueError("Simulation history is empty. Nothing to save.")

    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)

    pd.DataFrame(history).to_csv(path, index=False)
    print(f"Simulation results saved to {path.absolute()}")
    return path


def load_problem(filepath: str | Path) -> ProblemDescription:
    """
    Read a problem description from a JSON file.

    The file may hold the problem itself or a parse-service response
    ``{"success": true, "result": {...}}``.

    Raises
    ------
    ProblemFormatError
        If the file is not valid JSON or not a valid problem
    """
    path = Path(filepath)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ProblemFormatError(f"{path} is not valid JSON: {exc}") from exc
    if isinstance(data, dict) and "result" in data and "motion_type" not in data:
        data = data["result"]
    return ProblemDescription.from_payload(data)


def save_problem(problem: ProblemDescription, filepath: str | Path) -> Path:
    """Write a problem description as indented JSON."""
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(problem.model_dump_json(indent=2), encoding="utf-8")
    return path
