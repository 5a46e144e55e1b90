"""Helpers shared by the JSON repositories for in-memory row lists."""

from __future__ import annotations


def next_id(rows: list[dict]) -> int:
    if not rows:
        return 1
    return max(r["id"] for r in rows) + 1


def upsert(rows: list[dict], raw: dict, key: str = "id") -> None:
    """Replace the row with the same *key* if it exists, otherwise append."""
    for i, existing in enumerate(rows):
        if existing[key] == raw[key]:
            rows[i] = raw
            return
    rows.append(raw)
