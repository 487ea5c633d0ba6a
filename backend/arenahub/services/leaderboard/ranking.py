from typing import TYPE_CHECKING, Iterable, List, Optional, Tuple

if TYPE_CHECKING:
    from arenahub.store.base import ScoreRecord


def ranking_key(record: 'ScoreRecord') -> Tuple[int, int, int]:
    """Sort key for a game's leaderboard.

    Higher score first; on equal scores the earlier `recorded_at` wins, then
    the lower insertion id, so the order is total on every backend.
    """
    return (-record.score, record.recorded_at, record.id or 0)


def ordered(records: Iterable['ScoreRecord']) -> List['ScoreRecord']:
    return sorted(records, key=ranking_key)


def rank_in(records: Iterable['ScoreRecord'], address: str) -> Optional[int]:
    address = address.lower()
    for position, record in enumerate(ordered(records), start=1):
        if record.address == address:
            return position
    return None


def truncate_address(address: Optional[str]) -> Optional[str]:
    if not address:
        return None
    if len(address) <= 10:
        return address
    return f"{address[:6]}...{address[-4:]}"


def leaderboard_rows(records: List['ScoreRecord']) -> List[dict]:
    return [
        {
            'rank': position,
            'name': record.display_name,
            'score': record.score,
            'address': truncate_address(record.address),
        }
        for position, record in enumerate(records, start=1)
    ]
