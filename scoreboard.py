from __future__ import annotations

import logging
from pathlib import Path

from models import ScoreRecord

logger = logging.getLogger(__name__)


class ScoreboardFile:
    """Local leaderboard kept as a tab-separated text file, best score first."""

    def __init__(self, path: Path, max_entries: int = 50) -> None:
        self.path = path
        self.max_entries = max_entries

    def load(self) -> list[ScoreRecord]:
        if not self.path.exists():
            return []

        entries: list[ScoreRecord] = []
        for line in self.path.read_text(encoding="utf-8").splitlines():
            parts = line.split("\t")
            if len(parts) != 3:
                continue
            name, sc, lvl = parts
            try:
                entries.append(ScoreRecord(name, int(sc), int(lvl)))
            except ValueError:
                continue
            if len(entries) >= self.max_entries:
                break
        return entries

    def is_new_record(self, score: int, entries: list[ScoreRecord] | None = None) -> bool:
        """True when the board is empty or *score* beats every stored score."""
        if entries is None:
            entries = self.load()
        if not entries:
            return True
        return score > max(e.score for e in entries)

    def record(self, entry: ScoreRecord) -> tuple[list[ScoreRecord], bool]:
        """Insert *entry*, rewrite the file, and report whether it set a new high score.

        A full board only takes the entry if it beats the lowest score.
        """
        entries = self.load()
        new_record = self.is_new_record(entry.score, entries)

        entries.sort(key=lambda e: e.score, reverse=True)
        if len(entries) < self.max_entries:
            entries.append(entry)
        elif entry.score > entries[-1].score:
            entries[-1] = entry
        entries.sort(key=lambda e: e.score, reverse=True)

        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as f:
            for e in entries:
                f.write(f"{_clean_field(e.name)}\t{e.score}\t{e.level}\n")
        logger.info("leaderboard updated with %s (%s), new record=%s", entry.name, entry.score, new_record)
        return entries, new_record

    def top_scores(self, limit: int = 10) -> list[ScoreRecord]:
        entries = self.load()
        entries.sort(key=lambda e: e.score, reverse=True)
        return entries[:limit]


def _clean_field(name: str) -> str:
    return " ".join(name.split()) or "Player"
