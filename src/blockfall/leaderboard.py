from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional


DEFAULT_NAME = "Anonymous"


@dataclass(frozen=True)
class ScoreEntry:
    name: str
    score: int
    date: str  # ISO-8601, UTC


class Leaderboard:
    """Top-N score table kept in memory.

    Storage is up to the host: ``to_records`` and ``from_records`` convert to
    and from plain dicts that serialize to JSON or anything else.
    """

    def __init__(self, capacity: int = 10, entries: Optional[Iterable[ScoreEntry]] = None) -> None:
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._entries: List[ScoreEntry] = []
        for entry in entries or ():
            self._insert(entry)

    @property
    def entries(self) -> List[ScoreEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def _insert(self, entry: ScoreEntry) -> None:
        self._entries.append(entry)
        # sort is stable, so earlier equal scores stay ahead
        self._entries.sort(key=lambda e: e.score, reverse=True)
        del self._entries[self.capacity :]

    def rank_of(self, score: int) -> Optional[int]:
        for idx, entry in enumerate(self._entries):
            if score > entry.score:
                return idx + 1
        rank = len(self._entries) + 1
        return rank if rank <= self.capacity else None

    def qualifies(self, score: int) -> bool:
        return self.rank_of(score) is not None

    def add(self, name: str, score: int, when: Optional[datetime] = None) -> ScoreEntry:
        name = (name or "").strip() or DEFAULT_NAME
        stamp = (when or datetime.now(timezone.utc)).isoformat()
        entry = ScoreEntry(name=name, score=int(score), date=stamp)
        self._insert(entry)
        return entry

    def to_records(self) -> List[Dict[str, Any]]:
        return [asdict(e) for e in self._entries]

    @classmethod
    def from_records(cls, records: Iterable[Dict[str, Any]], capacity: int = 10) -> "Leaderboard":
        entries: List[ScoreEntry] = []
        for rec in records:
            try:
                entries.append(ScoreEntry(name=str(rec["name"]), score=int(rec["score"]), date=str(rec["date"])))
            except (KeyError, TypeError, ValueError) as exc:
                raise ValueError(f"malformed leaderboard record: {rec!r}") from exc
        return cls(capacity=capacity, entries=entries)
