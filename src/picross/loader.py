import json
import os
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd

from src.utils.io import load_json

TEXT_SUFFIXES = (".non", ".txt")
PUZZLE_SUFFIXES = (".json", ".jsonl", ".parquet") + TEXT_SUFFIXES


def _coerce_jsonable(value: Any) -> Any:
    """Turn numpy arrays and scalars coming out of parquet into plain Python values."""
    if isinstance(value, dict):
        return {k: _coerce_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_coerce_jsonable(v) for v in value]
    if hasattr(value, "tolist"):
        return _coerce_jsonable(value.tolist())
    return value


def load_puzzles(file_path: str) -> List[Dict[str, Any]]:
    """
    Reads puzzles from a file. Handles .parquet, .json, .jsonl and .non/.txt formats.
    Returns a list of raw puzzle dictionaries for `parse_puzzle`.
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    path = Path(file_path)
    suffix = path.suffix.lower()

    def _normalize_record(record: Dict[str, Any], index: int) -> Dict[str, Any]:
        record = _coerce_jsonable(record)
        if not record.get("id"):
            record["id"] = path.stem if index == 0 else f"{path.stem}-{index}"
        return record

    # Case 1: Parquet File (Binary)
    if suffix == ".parquet":
        df = pd.read_parquet(file_path)
        records = df.to_dict(orient="records")
        return [_normalize_record(r, i) for i, r in enumerate(records)]

    # Case 2: plain-text .non description, one puzzle per file
    if suffix in TEXT_SUFFIXES:
        text = path.read_text(encoding="utf-8")
        return [{"id": path.stem, "puzzle": text}]

    # Case 3: JSON File (Text; array or object)
    if suffix == ".json":
        try:
            payload = load_json(path)
        except json.JSONDecodeError:
            # Some sources use ".json" but actually store JSONL.
            return _load_jsonl(path, _normalize_record)
        if isinstance(payload, list):
            return [_normalize_record(p, i) for i, p in enumerate(payload) if isinstance(p, dict)]
        if isinstance(payload, dict):
            return [_normalize_record(payload, 0)]
        return []

    # Case 4: JSONL File (Text)
    return _load_jsonl(path, _normalize_record)


def _load_jsonl(path: Path, normalize) -> List[Dict[str, Any]]:
    data = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            if not line.strip():
                continue
            try:
                obj = json.loads(line)
            except json.JSONDecodeError:
                continue
            if isinstance(obj, dict):
                data.append(normalize(obj, len(data)))
    return data
