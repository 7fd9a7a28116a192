from __future__ import annotations

import json
import logging
import threading
from datetime import date
from pathlib import Path
from typing import Any

from venue_scheduler.application.ports.block_store import CalendarBlockStorePort
from venue_scheduler.domain.entities.calendar_block import CalendarBlock


class JsonCalendarBlockStore(CalendarBlockStorePort):
    """Calendar blocks kept in a single JSON file.

    Writes go to a temp file that then replaces the store file, so readers see
    either the old or the new list.
    """

    def __init__(self, path: str = "./data/calendar_blocks.json") -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def list_blocks(self) -> list[CalendarBlock]:
        return self._parse(self._load())

    def add_if_absent(self, block: CalendarBlock) -> bool:
        with self._lock:
            items = self._load()
            if any(existing.same_slot(block.date, block.recurring) for existing in self._parse(items)):
                return False
            items.append(self._serialize_block(block))
            self._save(items)
            return True

    def remove(self, block_id: str) -> bool:
        with self._lock:
            items = self._load()
            remaining = [item for item in items if _record_id(item) != block_id]
            if len(remaining) == len(items):
                return False
            self._save(remaining)
            return True

    def _load(self) -> list[dict[str, Any]]:
        """Load raw block records, empty if the file is missing or corrupted."""
        if not self._path.exists():
            return []
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (ValueError, OSError) as e:
            self._logger.error("Calendar block file unreadable", extra={"error": str(e)})
            return []
        if isinstance(data, dict):
            data = data.get("blocks", [])
        if not isinstance(data, list):
            return []
        return [item for item in data if isinstance(item, dict) and item.get("date")]

    def _save(self, items: list[dict[str, Any]]) -> None:
        """Save block records atomically."""
        temp_path = self._path.with_suffix(".json.tmp")
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump({"version": 1, "blocks": items}, f, indent=2, ensure_ascii=False)
            temp_path.replace(self._path)
        except Exception:
            if temp_path.exists():
                temp_path.unlink()
            raise

    def _parse(self, items: list[dict[str, Any]]) -> list[CalendarBlock]:
        blocks: list[CalendarBlock] = []
        for item in items:
            try:
                blocks.append(self._deserialize_block(item))
            except ValueError as e:
                self._logger.warning("Skipping malformed calendar block", extra={"error": str(e)})
        return blocks

    def _serialize_block(self, block: CalendarBlock) -> dict[str, Any]:
        return {
            "id": block.id,
            "date": block.date.isoformat(),
            "reason": block.reason,
            "recurring": block.recurring,
        }

    def _deserialize_block(self, data: dict[str, Any]) -> CalendarBlock:
        day = date.fromisoformat(str(data["date"])[:10])
        return CalendarBlock(
            id=_record_id(data),
            date=day,
            reason=str(data.get("reason") or ""),
            recurring=bool(data.get("recurring", False)),
        )


def _record_id(data: dict[str, Any]) -> str:
    # Legacy browser-stored blocks have no id; the date was their key.
    return str(data.get("id") or str(data.get("date", ""))[:10])
