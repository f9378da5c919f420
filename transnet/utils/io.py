"""JSON Lines input of translation records and JSON output of network artefacts."""
from __future__ import annotations

import json
import pathlib
from typing import Any, Iterator

from .logging import get_logger

LOGGER = get_logger(__name__)


def read_jsonl(path: str | pathlib.Path) -> Iterator[Any]:
    """Yield one decoded value per non-blank line of a JSON Lines record file.

    A malformed line raises ``ValueError`` naming the file and line number.
    """
    data_path = pathlib.Path(path)
    if not data_path.exists():
        raise FileNotFoundError(f"JSONL file not found: {data_path}")
    with data_path.open("r", encoding="utf-8") as handle:
        for line_number, line in enumerate(handle, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                payload = json.loads(line)
            except json.JSONDecodeError as exc:
                raise ValueError(
                    f"{data_path}:{line_number}: invalid JSON record ({exc.msg})"
                ) from exc
            yield payload


def write_json(path: str | pathlib.Path, payload: dict[str, Any]) -> pathlib.Path:
    """Write a snapshot or metrics document, creating parent folders as needed."""
    data_path = pathlib.Path(path)
    data_path.parent.mkdir(parents=True, exist_ok=True)
    with data_path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, ensure_ascii=False, indent=2)
    LOGGER.info("Wrote JSON document to %s", data_path)
    return data_path
