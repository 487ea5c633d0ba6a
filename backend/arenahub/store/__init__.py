"""Storage backends for the score ledger.

`make_store` picks the backend from the `LEADERBOARD_STORE` setting; the
SQL backend is imported lazily because it needs the app's `db`.
"""

from arenahub.store.base import (
    GUEST,
    WALLET,
    LeaderboardStore,
    ProfileStats,
    ResetRecord,
    ScoreRecord,
    StoreHealth,
)
from arenahub.store.memory import InMemoryStore


def make_store(kind: str) -> LeaderboardStore:
    kind = (kind or 'sql').lower()
    if kind == 'memory':
        return InMemoryStore()
    if kind == 'sql':
        from arenahub.store.sql import SqlStore
        return SqlStore()
    raise ValueError(f"Unknown LEADERBOARD_STORE: {kind!r}")
