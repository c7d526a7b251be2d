# swarmviz/evaluation/export.py

from __future__ import annotations
import json
import math
from pathlib import Path
from typing import Any, Dict

import numpy as np

from swarmviz.methods.result import RunResult


def _jsonable(value: Any) -> Any:
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, (np.floating, float)):
        v = float(value)
        return v if math.isfinite(v) else None
    if isinstance(value, np.integer):
        return int(value)
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


def save_result_json(path: str, result: RunResult, extra: Dict[str, Any] | None = None) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    payload = {
        "method_name": result.method_name,
        "best_score": _jsonable(result.best_score),
        "best_solution": _jsonable(np.asarray(result.best_solution)) if result.best_solution is not None else None,
        "history": [_jsonable(x) for x in result.history],
        "time_sec": float(result.time_sec),
        "ticks": int(result.ticks),
        "iterations": int(result.iterations),
        "status": result.status,
        "params_used": result.params_used,
        "message": result.message,
    }
    if extra:
        payload["extra"] = _jsonable(extra)

    p.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def save_snapshot_json(path: str, snapshot: Dict[str, Any]) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(_jsonable(snapshot), indent=2), encoding="utf-8")
