"""Utility functions for artifact generation."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import orjson

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from pydantic import BaseModel


def _to_dict(obj: BaseModel) -> dict[str, Any]:
    """Convert a model to its JSON wire form (camelCase, unset fields omitted)."""
    return obj.model_dump(mode="json", by_alias=True, exclude_none=True)


def _write_jsonl(path: Path, records: Sequence[BaseModel]) -> None:
    with path.open("wb") as f:
        for rec in records:
            payload = _to_dict(rec)
            f.write(orjson.dumps(payload, option=orjson.OPT_SORT_KEYS))
            f.write(b"\n")


def _write_json(path: Path, obj: BaseModel) -> None:
    payload = _to_dict(obj)
    opts = orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2 | orjson.OPT_APPEND_NEWLINE
    path.write_bytes(orjson.dumps(payload, option=opts))
