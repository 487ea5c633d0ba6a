import threading
from dataclasses import replace
from typing import Dict, List, Optional, Set, Tuple

from arenahub.errors import DuplicateSubmission
from arenahub.services.leaderboard.ranking import ordered, rank_in
from arenahub.store.base import LeaderboardStore, ProfileStats, ResetRecord, ScoreRecord, StoreHealth


class InMemoryStore(LeaderboardStore):
    """Process-local ledger. Nothing survives a restart."""

    def __init__(self):
        self._lock = threading.Lock()
        self._entries: List[ScoreRecord] = []
        self._wallet_keys: Set[Tuple[str, str, int]] = set()
        self._profiles: Dict[str, ProfileStats] = {}
        self._audit: List[ResetRecord] = []
        self._next_id = 1

    def append(self, record: ScoreRecord) -> Tuple[ScoreRecord, Optional[int]]:
        with self._lock:
            key = None
            if record.is_wallet:
                key = (record.game, record.address, record.client_timestamp)
                if key in self._wallet_keys:
                    raise DuplicateSubmission()
            stored = replace(record, id=self._next_id)
            self._next_id += 1
            self._entries.append(stored)
            if key is not None:
                self._wallet_keys.add(key)
                profile = self._profiles.setdefault(stored.address, ProfileStats(address=stored.address))
                profile.games_played += 1
                profile.total_score += stored.score
                profile.best_score = max(profile.best_score, stored.score)
                rank = rank_in((e for e in self._entries if e.game == stored.game), stored.address)
                return stored, rank
            return stored, None

    def clear_and_log(self, game: str, timestamp: int) -> ResetRecord:
        with self._lock:
            entry = ResetRecord(game=game, timestamp=timestamp, id=len(self._audit) + 1)
            self._entries = [e for e in self._entries if e.game != game]
            self._wallet_keys = {k for k in self._wallet_keys if k[0] != game}
            self._audit.append(entry)
            return entry

    def last_reset(self, game: str) -> Optional[ResetRecord]:
        with self._lock:
            matches = [a for a in self._audit if a.game == game]
        if not matches:
            return None
        return max(matches, key=lambda a: (a.timestamp, a.id))

    def rank_of(self, game: str, address: str) -> Optional[int]:
        with self._lock:
            entries = [e for e in self._entries if e.game == game]
        return rank_in(entries, address)

    def top_n(self, game: str, limit: int) -> List[ScoreRecord]:
        with self._lock:
            entries = [e for e in self._entries if e.game == game]
        return ordered(entries)[:max(0, limit)]

    def get_profile(self, address: str) -> ProfileStats:
        address = address.lower()
        with self._lock:
            profile = self._profiles.get(address)
            if profile is None:
                return ProfileStats(address=address)
            return replace(profile)

    def count(self, game: str) -> int:
        with self._lock:
            return sum(1 for e in self._entries if e.game == game)

    def health(self) -> StoreHealth:
        return StoreHealth.OK
