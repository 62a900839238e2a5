"""Persistence helpers for chembalance."""

from chembalance.persistence.sqlite_store import (
    connect,
    ensure_schema,
    load_best_scores,
    save_best_scores,
    save_challenges,
    save_game,
)

__all__ = [
    "connect",
    "ensure_schema",
    "load_best_scores",
    "save_best_scores",
    "save_challenges",
    "save_game",
]
