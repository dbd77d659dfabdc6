"""Output handlers: engine records to JSON.

Assembled workouts and recommendations are frozen dataclasses holding
enums, dates and tuples. ``to_jsonable`` turns them into plain JSON values
with camelCase keys, the shape the presentation layer reads.
"""

from __future__ import annotations

import dataclasses
import json
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic.alias_generators import to_camel


def to_jsonable(obj: Any) -> Any:
    """Recursively convert dataclasses, enums, dates and tuples to JSON values."""
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {
            to_camel(f.name): to_jsonable(getattr(obj, f.name))
            for f in dataclasses.fields(obj)
        }
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, date):
        return obj.isoformat()
    if isinstance(obj, dict):
        return {str(key): to_jsonable(value) for key, value in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_jsonable(item) for item in obj]
    return obj


def dumps(obj: Any) -> str:
    return json.dumps(to_jsonable(obj), indent=2, ensure_ascii=False)


def write_json(obj: Any, output_path: str | Path) -> Path:
    """Write an engine record to a JSON file. Returns the path written."""
    path = Path(output_path)
    with path.open("w") as f:
        json.dump(to_jsonable(obj), f, indent=2, ensure_ascii=False)
        f.write("\n")
    return path
