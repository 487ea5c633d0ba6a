from arenahub.errors import TimestampExpired

REPLAY_WINDOW_MS = 5 * 60 * 1000


def check_freshness(client_timestamp: int, now_ms: int, window_ms: int = REPLAY_WINDOW_MS) -> None:
    """Reject timestamps more than `window_ms` away from server time, past or future."""
    skew = abs(now_ms - client_timestamp)
    if skew > window_ms:
        raise TimestampExpired(skew)
