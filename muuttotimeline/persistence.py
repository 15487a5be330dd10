import json
from datetime import date
from pathlib import Path

from .constants import STORE_SCHEMA_VERSION
from .model import TimelineItem, parse_day


def save_items(path: str | Path, items, anchor_date: date | None) -> None:
    payload = {
        "schema_version": STORE_SCHEMA_VERSION,
        "move_date": anchor_date.isoformat() if anchor_date else None,
        "items": [item.to_dict() for item in items],
    }
    path = Path(path)
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")


def load_items(path: str | Path) -> tuple[list[TimelineItem], date | None]:
    path = Path(path)
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, list):
        data = {"schema_version": STORE_SCHEMA_VERSION, "items": data}
    if not isinstance(data, dict):
        raise ValueError("Unsupported task store")
    schema_version = data.get("schema_version", 0)
    if schema_version != STORE_SCHEMA_VERSION:
        raise ValueError(f"Unsupported schema version: {schema_version}")
    entries = data.get("items", [])
    if not isinstance(entries, list) or not all(isinstance(entry, dict) for entry in entries):
        raise ValueError("Unsupported task store")
    items = [TimelineItem.from_dict(entry) for entry in entries]
    return items, parse_day(data.get("move_date"))
