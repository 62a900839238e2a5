"""SQLite persistence helpers for finished games and best scores."""

from __future__ import annotations

import json
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Mapping, Optional, Sequence, Tuple

from chembalance.game.model import GameChallenge

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS game (
  id INTEGER PRIMARY KEY,
  level INTEGER NOT NULL,
  points INTEGER NOT NULL,
  perfect_score INTEGER NOT NULL,
  elapsed_s REAL,
  settings JSON,
  started_utc TEXT
);
CREATE TABLE IF NOT EXISTS challenge_result (
  game_id INTEGER,
  position INTEGER,
  equation TEXT,
  incorrect_attempts INTEGER,
  points INTEGER,
  solved INTEGER DEFAULT 0,
  revealed INTEGER DEFAULT 0,
  PRIMARY KEY (game_id, position),
  FOREIGN KEY (game_id) REFERENCES game(id)
);
CREATE TABLE IF NOT EXISTS best_score (
  level INTEGER PRIMARY KEY,
  points INTEGER NOT NULL,
  best_time_s REAL
);
"""


def connect(store_file: str | Path) -> sqlite3.Connection:
    """Open (and create) a results database."""
    path = Path(store_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    connection = sqlite3.connect(path)
    connection.execute("PRAGMA foreign_keys = ON;")
    return connection


def ensure_schema(connection: sqlite3.Connection) -> None:
    connection.executescript(SCHEMA_SQL)
    connection.commit()


def save_game(
    connection: sqlite3.Connection,
    level: int,
    points: int,
    perfect_score: int,
    elapsed_s: float | None = None,
    settings: Mapping[str, object] | None = None,
    started_utc: str | None = None,
) -> int:
    """Persist a finished game and return its ID."""
    started_utc = started_utc or _utc_now()
    cursor = connection.execute(
        "INSERT INTO game (level, points, perfect_score, elapsed_s, settings, started_utc)"
        " VALUES (?, ?, ?, ?, ?, ?)",
        (level, points, perfect_score, elapsed_s, _json_dumps(settings or {}), started_utc),
    )
    connection.commit()
    return int(cursor.lastrowid)


def save_challenges(
    connection: sqlite3.Connection,
    game_id: int,
    challenges: Sequence[GameChallenge],
) -> None:
    rows_list: list[tuple[object, ...]] = []
    for position, challenge in enumerate(challenges):
        rows_list.append(
            (
                game_id,
                position,
                challenge.equation.name,
                challenge.incorrect_attempts,
                challenge.points,
                int(challenge.solved),
                int(challenge.revealed),
            )
        )
    connection.executemany(
        "INSERT INTO challenge_result"
        " (game_id, position, equation, incorrect_attempts, points, solved, revealed)"
        " VALUES (?, ?, ?, ?, ?, ?, ?)",
        rows_list,
    )
    connection.commit()


def save_best_scores(
    connection: sqlite3.Connection,
    best_scores: Sequence[int],
    best_times: Sequence[Optional[float]],
) -> None:
    """Store per-level best scores, never lowering a stored score or raising a stored time."""
    stored = load_best_scores(connection)
    for level, (points, best_time) in enumerate(zip(best_scores, best_times, strict=True)):
        old_points, old_time = stored.get(level, (0, None))
        if best_time is None or (old_time is not None and old_time < best_time):
            best_time = old_time
        connection.execute(
            "INSERT OR REPLACE INTO best_score (level, points, best_time_s) VALUES (?, ?, ?)",
            (level, max(points, old_points), best_time),
        )
    connection.commit()


def load_best_scores(connection: sqlite3.Connection) -> Dict[int, Tuple[int, Optional[float]]]:
    """Return ``{level: (points, best_time_s)}`` for every stored level."""
    cursor = connection.execute("SELECT level, points, best_time_s FROM best_score ORDER BY level")
    return {int(level): (int(points), best_time) for level, points, best_time in cursor.fetchall()}


def _json_dumps(payload: Mapping[str, object]) -> str:
    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True)


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()
