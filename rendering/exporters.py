"""
Data exporters to convert simulation state into renderer-friendly format.
Keeps rendering module decoupled from simulation code.
"""

import json
from pathlib import Path
from typing import Any, Dict


def encode_information(info: Any) -> Any:
    """JSON-friendly form of a node or attractor payload."""
    if info is None or isinstance(info, (bool, int, float, str)):
        return info
    if hasattr(info, '_asdict'):
        return {'type': type(info).__name__, **info._asdict()}
    return repr(info)


def snapshot(engine) -> Dict[str, Any]:
    """
    Capture the engine state as plain data.

    Format:
    {
        "dim": int,
        "iteration": int,
        "nodes": [
            {
                "position": [x, y(, z)],
                "parent": int | null,   # null for roots
                "root": int,
                "length": int,          # segments from root
                "branches": int,
                "information": ...
            }
        ],
        "attractors": [
            {"position": [...], "active_from_iteration": int, "information": ...}
        ]
    }
    """
    nodes = [
        {
            "position": [float(c) for c in node.position],
            "parent": node.parent,
            "root": node.root,
            "length": node.length,
            "branches": node.branches,
            "information": encode_information(node.assigned_information)
        }
        for node in engine.nodes
    ]
    attractors = [
        {
            "position": [float(c) for c in a.position],
            "active_from_iteration": a.active_from_iteration,
            "information": encode_information(a.information)
        }
        for a in engine.iter_attractors()
    ]
    return {
        "dim": engine.dim,
        "iteration": engine.iteration,
        "nodes": nodes,
        "attractors": attractors
    }


def export_growth_data(engine, output_path: str) -> Dict[str, Any]:
    data = snapshot(engine)

    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, 'w') as f:
        json.dump(data, f, indent=2)

    return data


def load_growth_data(path: str) -> Dict[str, Any]:
    with open(path, 'r') as f:
        return json.load(f)
