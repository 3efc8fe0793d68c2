from __future__ import annotations

import json
import logging
import math
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 15
MAX_SCORE = 999999


class InvalidScoreEntry(ValueError):
    """Raised when a submitted name or score fails validation."""


@dataclass
class ScoreEntry:
    name: str
    score: int


def normalize_name(name: object) -> str:
    if not isinstance(name, str) or not name.strip():
        raise InvalidScoreEntry("Invalid name")
    return name.strip().upper()[:MAX_NAME_LENGTH]


def normalize_score(score: object) -> int:
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        raise InvalidScoreEntry("Invalid score")
    if math.isnan(score) or score < 0 or score > MAX_SCORE:
        raise InvalidScoreEntry("Invalid score")
    return int(math.floor(score))


class Leaderboard:
    """Best score per player name, optionally persisted to a JSON file."""

    def __init__(self, path: Path | str | None = None) -> None:
        self._path = Path(path) if path is not None else None
        self._entries: Dict[str, int] = {}
        if self._path is not None:
            self.load()

    @property
    def path(self) -> Optional[Path]:
        return self._path

    def load(self) -> None:
        assert self._path is not None
        try:
            with self._path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except FileNotFoundError:
            self._entries = {}
            return
        except json.JSONDecodeError:
            logger.warning("leaderboard file %s is corrupt; starting empty", self._path)
            self._entries = {}
            return
        if not isinstance(payload, list):
            logger.warning("leaderboard file %s does not hold a list of entries; starting empty", self._path)
            self._entries = {}
            return
        entries: Dict[str, int] = {}
        for item in payload:
            try:
                name = normalize_name(item.get("name"))
                score = normalize_score(item.get("score"))
            except (AttributeError, InvalidScoreEntry):
                logger.warning("skipping malformed leaderboard row %r", item)
                continue
            entries[name] = max(score, entries.get(name, 0))
        self._entries = entries

    def save(self) -> None:
        if self._path is None:
            return
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("w", encoding="utf-8") as handle:
            json.dump([asdict(e) for e in self.top(limit=None)], handle, indent=2)

    def submit(self, name: object, score: object) -> ScoreEntry:
        """Record ``score`` for ``name``; an existing entry only ever goes up."""
        clean_name = normalize_name(name)
        clean_score = normalize_score(score)
        existing = self._entries.get(clean_name)
        if existing is None or clean_score > existing:
            self._entries[clean_name] = clean_score
            logger.info("leaderboard: %s -> %d", clean_name, clean_score)
            self.save()
        return ScoreEntry(clean_name, self._entries[clean_name])

    def top(self, limit: Optional[int] = 10) -> List[ScoreEntry]:
        ranked = sorted(self._entries.items(), key=lambda kv: (-kv[1], kv[0]))
        if limit is not None:
            ranked = ranked[:limit]
        return [ScoreEntry(name, score) for name, score in ranked]

    def __len__(self) -> int:
        return len(self._entries)
