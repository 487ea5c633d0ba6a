import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from arenahub.errors import (
    InvalidGame,
    InvalidScore,
    InvalidSignature,
    InvalidTimestamp,
    LeaderboardError,
    MissingFields,
)
from arenahub.store.base import GUEST, WALLET, LeaderboardStore, ProfileStats, ScoreRecord
from .admin import AdminResetController
from .ranking import leaderboard_rows
from .replay import REPLAY_WINDOW_MS, check_freshness
from .signature import verify_submission


DEFAULT_NAME = 'Anonymous'
GAME_MAX_LENGTH = 64


def now_ms() -> int:
    return int(time.time() * 1000)


def _as_int(value: Any) -> Optional[int]:
    """Integer value of a JSON number, or None for anything else (bools included)."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


@dataclass
class SubmissionResult:
    record: ScoreRecord
    rank: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        payload = {'success': True, 'message': 'Score submitted'}
        if self.record.is_wallet:
            payload['message'] = 'Score submitted and verified'
            payload['rank'] = self.rank
        return payload


class LeaderboardService:
    """Submission flow, leaderboard reads, profiles and admin resets for one store."""

    def __init__(
        self,
        store: LeaderboardStore,
        clock: Callable[[], int] = now_ms,
        default_game: str = 'roninoid',
        replay_window_ms: int = REPLAY_WINDOW_MS,
        max_score: int = 10_000_000,
        max_limit: int = 100,
        name_max_length: int = 64,
        admin_password: Optional[str] = None,
        admin_password_hash: Optional[str] = None,
        bcrypt=None,
        logger: Optional[logging.Logger] = None,
    ):
        self.store = store
        self.clock = clock
        self.default_game = default_game
        self.replay_window_ms = replay_window_ms
        self.max_score = max_score
        self.max_limit = max_limit
        self.name_max_length = name_max_length
        self.logger = logger or logging.getLogger(__name__)
        self.admin = AdminResetController(
            store,
            clock,
            password=admin_password,
            password_hash=admin_password_hash,
            bcrypt=bcrypt,
            logger=self.logger,
        )

    @classmethod
    def from_config(cls, store: LeaderboardStore, config, bcrypt=None, logger=None, clock=now_ms):
        return cls(
            store,
            clock=clock,
            default_game=config.get('DEFAULT_GAME', 'roninoid'),
            replay_window_ms=int(config.get('REPLAY_WINDOW_MS', REPLAY_WINDOW_MS)),
            max_score=int(config.get('MAX_SCORE', 10_000_000)),
            max_limit=int(config.get('LEADERBOARD_MAX_LIMIT', 100)),
            name_max_length=int(config.get('DISPLAY_NAME_MAX_LENGTH', 64)),
            admin_password=config.get('ADMIN_PASSWORD'),
            admin_password_hash=config.get('ADMIN_PASSWORD_HASH'),
            bcrypt=bcrypt,
            logger=logger,
        )

    # -- field normalization -------------------------------------------------

    def normalize_game(self, game: Any) -> str:
        if game is None:
            return self.default_game
        if not isinstance(game, str):
            raise InvalidGame()
        game = game.strip()
        if not game:
            return self.default_game
        if len(game) > GAME_MAX_LENGTH:
            raise InvalidGame()
        return game

    def normalize_name(self, name: Any) -> str:
        if not isinstance(name, str) or not name.strip():
            return DEFAULT_NAME
        return name.strip()[:self.name_max_length]

    def parse_score(self, value: Any) -> int:
        score = _as_int(value)
        if score is None or score < 0 or score > self.max_score:
            raise InvalidScore()
        return score

    def clamp_limit(self, value: Any) -> int:
        try:
            limit = int(value)
        except (TypeError, ValueError):
            return self.max_limit
        if limit < 1:
            return self.max_limit
        return min(limit, self.max_limit)

    # -- submissions ---------------------------------------------------------

    def submit(self, data: Dict[str, Any]) -> SubmissionResult:
        """Validate and store one submission.

        Wallet submissions (any of `address`/`signature` present) run through
        the replay window and signature check before the ledger is touched.
        """
        data = data or {}
        if data.get('score') is None:
            raise MissingFields()
        score = self.parse_score(data.get('score'))
        game = self.normalize_game(data.get('game'))
        name = self.normalize_name(data.get('playerName'))

        if data.get('address') or data.get('signature'):
            return self._submit_wallet(data, score, game, name)
        return self._submit_guest(score, game, name)

    def _submit_wallet(self, data, score: int, game: str, name: str) -> SubmissionResult:
        address = data.get('address')
        signature = data.get('signature')
        raw_timestamp = data.get('timestamp')
        if not address or not signature or not raw_timestamp:
            raise MissingFields()
        if not isinstance(address, str) or not isinstance(signature, str):
            raise MissingFields()
        timestamp = _as_int(raw_timestamp)
        if timestamp is None or timestamp <= 0:
            raise InvalidTimestamp()

        now = self.clock()
        check_freshness(timestamp, now, self.replay_window_ms)
        if not verify_submission(address, score, timestamp, signature):
            raise InvalidSignature()

        address = address.lower()
        record, rank = self.store.append(ScoreRecord(
            actor_kind=WALLET,
            game=game,
            score=score,
            display_name=name,
            address=address,
            client_timestamp=timestamp,
            recorded_at=now,
        ))
        self.logger.info(f"[submit] game={game} address={address} score={score} rank={rank}")
        return SubmissionResult(record=record, rank=rank)

    def _submit_guest(self, score: int, game: str, name: str) -> SubmissionResult:
        record, _ = self.store.append(ScoreRecord(
            actor_kind=GUEST,
            game=game,
            score=score,
            display_name=name,
            recorded_at=self.clock(),
        ))
        self.logger.info(f"[submit-guest] game={game} name={name!r} score={score}")
        return SubmissionResult(record=record)

    # -- reads ---------------------------------------------------------------

    def rank_of(self, game: str, address: str) -> Optional[int]:
        return self.store.rank_of(game, address.lower())

    def top_n(self, game: str, limit: Any = None) -> List[ScoreRecord]:
        return self.store.top_n(game, self.clamp_limit(limit))

    def leaderboard(self, game: str, limit: Any = None) -> List[dict]:
        return leaderboard_rows(self.top_n(game, limit))

    def profile(self, address: str) -> ProfileStats:
        return self.store.get_profile(address.lower())

    # -- admin ---------------------------------------------------------------

    def reset(self, game: str, password: Optional[str]) -> int:
        return self.admin.reset(game, password)

    def last_reset_info(self, game: str):
        return self.admin.last_reset_info(game)


def describe_rejection(exc: LeaderboardError) -> str:
    return exc.reason or exc.message
