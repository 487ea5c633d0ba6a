import hmac
import logging
from datetime import datetime, timezone
from typing import Callable, Optional, Tuple

from arenahub.errors import InvalidCredential, MissingCredential
from arenahub.store.base import LeaderboardStore


NEVER_RESET = 'Never'


def format_reset_time(timestamp: Optional[int]) -> str:
    if timestamp is None:
        return NEVER_RESET
    return datetime.fromtimestamp(timestamp / 1000.0, tz=timezone.utc).strftime('%Y-%m-%d %H:%M:%S UTC')


class AdminResetController:
    """Authenticated leaderboard resets with an audit trail.

    The secret is either a plain password, compared in constant time, or a
    bcrypt hash checked through Flask-Bcrypt. Without either, every reset
    is refused.
    """

    def __init__(
        self,
        store: LeaderboardStore,
        clock: Callable[[], int],
        password: Optional[str] = None,
        password_hash: Optional[str] = None,
        bcrypt=None,
        logger: Optional[logging.Logger] = None,
    ):
        self.store = store
        self.clock = clock
        self._password = password or None
        self._password_hash = password_hash or None
        self._bcrypt = bcrypt
        self.logger = logger or logging.getLogger(__name__)

    @property
    def configured(self) -> bool:
        return bool(self._password or (self._password_hash and self._bcrypt is not None))

    def authenticate(self, supplied: Optional[str]) -> None:
        if not supplied:
            raise MissingCredential()
        if not isinstance(supplied, str):
            raise InvalidCredential()
        if self._password_hash and self._bcrypt is not None:
            try:
                if self._bcrypt.check_password_hash(self._password_hash, supplied):
                    return
            except ValueError:
                self.logger.error("[reset-config] ADMIN_PASSWORD_HASH is not a valid bcrypt hash")
        elif self._password:
            if hmac.compare_digest(supplied.encode('utf-8'), self._password.encode('utf-8')):
                return
        else:
            self.logger.warning("[reset-config] no admin secret configured; refusing reset")
        raise InvalidCredential()

    def reset(self, game: str, supplied: Optional[str]) -> int:
        """Clear `game` and record the reset. Returns the reset timestamp (ms)."""
        try:
            self.authenticate(supplied)
        except (MissingCredential, InvalidCredential) as exc:
            self.logger.warning(f"[reset-rejected] game={game} reason={exc.message}")
            raise
        timestamp = self.clock()
        entry = self.store.clear_and_log(game, timestamp)
        self.logger.info(f"[reset] game={game} at={entry.timestamp}")
        return entry.timestamp

    def last_reset_info(self, game: str) -> Tuple[Optional[int], str]:
        entry = self.store.last_reset(game)
        timestamp = entry.timestamp if entry else None
        return timestamp, format_reset_time(timestamp)
