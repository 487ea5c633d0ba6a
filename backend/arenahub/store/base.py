from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple


WALLET = 'wallet'
GUEST = 'guest'


@dataclass
class ScoreRecord:
    actor_kind: str
    game: str
    score: int
    display_name: str = 'Anonymous'
    address: Optional[str] = None
    client_timestamp: Optional[int] = None
    recorded_at: int = 0
    id: Optional[int] = None

    @property
    def is_wallet(self) -> bool:
        return self.actor_kind == WALLET


@dataclass
class ProfileStats:
    address: str
    games_played: int = 0
    total_score: int = 0
    best_score: int = 0

    def to_dict(self):
        return {
            'address': self.address,
            'gamesPlayed': self.games_played,
            'totalScore': self.total_score,
            'bestScore': self.best_score,
        }


@dataclass
class ResetRecord:
    game: str
    timestamp: int
    action: str = 'reset'
    id: Optional[int] = None


class StoreHealth(Enum):
    OK = 'ok'
    UNAVAILABLE = 'unavailable'


class LeaderboardStore(ABC):
    """Ledger of score entries, profiles and the reset audit log.

    Implementations must make `append` (duplicate check, insert, profile
    update, rank read) and `clear_and_log` (delete, audit insert) atomic. Backend
    failures are raised as `StoreUnavailable`.
    """

    @abstractmethod
    def append(self, record: ScoreRecord) -> Tuple[ScoreRecord, Optional[int]]:
        """Store `record` and return it with the address's rank right after the insert.

        The rank is None for guest entries. Raises `DuplicateSubmission` for a
        repeated wallet submission.
        """

    @abstractmethod
    def clear_and_log(self, game: str, timestamp: int) -> ResetRecord:
        pass

    @abstractmethod
    def last_reset(self, game: str) -> Optional[ResetRecord]:
        pass

    @abstractmethod
    def rank_of(self, game: str, address: str) -> Optional[int]:
        """1-based position of the address's best entry, or None if it has none."""

    @abstractmethod
    def top_n(self, game: str, limit: int) -> List[ScoreRecord]:
        pass

    @abstractmethod
    def get_profile(self, address: str) -> ProfileStats:
        pass

    @abstractmethod
    def count(self, game: str) -> int:
        pass

    @abstractmethod
    def health(self) -> StoreHealth:
        pass
