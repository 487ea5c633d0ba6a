from typing import List, Optional, Tuple

from sqlalchemy import and_, case, func, or_, text, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from arenahub import db
from arenahub.errors import DuplicateSubmission, StoreUnavailable
from arenahub.models import AdminLog, Profile, ScoreEntry
from arenahub.store.base import LeaderboardStore, ProfileStats, ResetRecord, ScoreRecord, StoreHealth


WALLET_CONSTRAINT = 'uq_score_entry_wallet_submission'
# SQLite reports the columns of a failed unique constraint, not its name
WALLET_CONSTRAINT_COLUMNS = 'score_entry.game, score_entry.address, score_entry.client_timestamp'

_UPSERT_DIALECTS = {
    'postgresql': postgresql.insert,
    'sqlite': sqlite.insert,
}


def _ranking_order():
    return (ScoreEntry.score.desc(), ScoreEntry.recorded_at.asc(), ScoreEntry.id.asc())


def is_wallet_duplicate(exc: IntegrityError) -> bool:
    message = str(getattr(exc, 'orig', exc))
    return WALLET_CONSTRAINT in message or WALLET_CONSTRAINT_COLUMNS in message


def _bump_profile(address: str, score: int, at: int) -> None:
    """Add one accepted submission to the address's profile in a single statement."""
    table = Profile.__table__
    insert = _UPSERT_DIALECTS.get(db.session.get_bind().dialect.name)
    if insert is not None:
        stmt = insert(table).values(
            address=address, games_played=1, total_score=score, best_score=score, updated_at=at,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[table.c.address],
            set_={
                'games_played': table.c.games_played + 1,
                'total_score': table.c.total_score + score,
                'best_score': case((table.c.best_score < score, score), else_=table.c.best_score),
                'updated_at': at,
            },
        )
        db.session.execute(stmt)
        return
    # Other backends: in-place increment, insert only when no row exists yet
    result = db.session.execute(
        update(table)
        .where(table.c.address == address)
        .values(
            games_played=table.c.games_played + 1,
            total_score=table.c.total_score + score,
            best_score=case((table.c.best_score < score, score), else_=table.c.best_score),
            updated_at=at,
        )
    )
    if result.rowcount == 0:
        db.session.execute(table.insert().values(
            address=address, games_played=1, total_score=score, best_score=score, updated_at=at,
        ))


def _rank_in_session(game: str, address: str) -> Optional[int]:
    best = (
        ScoreEntry.query.filter_by(game=game, address=address)
        .order_by(*_ranking_order())
        .first()
    )
    if best is None:
        return None
    ahead = ScoreEntry.query.filter(
        ScoreEntry.game == game,
        or_(
            ScoreEntry.score > best.score,
            and_(ScoreEntry.score == best.score, ScoreEntry.recorded_at < best.recorded_at),
            and_(
                ScoreEntry.score == best.score,
                ScoreEntry.recorded_at == best.recorded_at,
                ScoreEntry.id < best.id,
            ),
        ),
    ).count()
    return ahead + 1


class SqlStore(LeaderboardStore):
    """Ledger backed by the Flask-SQLAlchemy session of the current app context."""

    def find_wallet_entry(self, record: ScoreRecord) -> Optional[ScoreEntry]:
        return ScoreEntry.query.filter_by(
            game=record.game,
            address=record.address,
            client_timestamp=record.client_timestamp,
        ).first()

    def append(self, record: ScoreRecord) -> Tuple[ScoreRecord, Optional[int]]:
        try:
            if record.is_wallet and self.find_wallet_entry(record) is not None:
                db.session.rollback()
                raise DuplicateSubmission()
            entry = ScoreEntry(
                actor_kind=record.actor_kind,
                address=record.address,
                display_name=record.display_name,
                game=record.game,
                score=record.score,
                client_timestamp=record.client_timestamp,
                recorded_at=record.recorded_at,
            )
            db.session.add(entry)
            rank = None
            if record.is_wallet:
                # A racing duplicate fails here on the unique constraint,
                # before the profile counters move
                db.session.flush()
                _bump_profile(record.address, record.score, record.recorded_at)
                rank = _rank_in_session(record.game, record.address)
            db.session.commit()
            return entry.to_record(), rank
        except IntegrityError as exc:
            db.session.rollback()
            if is_wallet_duplicate(exc):
                raise DuplicateSubmission()
            raise StoreUnavailable('append', str(exc))
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise StoreUnavailable('append', str(exc))

    def clear_and_log(self, game: str, timestamp: int) -> ResetRecord:
        try:
            ScoreEntry.query.filter_by(game=game).delete(synchronize_session=False)
            log = AdminLog(action='reset', game=game, timestamp=timestamp)
            db.session.add(log)
            db.session.commit()
            return log.to_record()
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise StoreUnavailable('reset', str(exc))

    def last_reset(self, game: str) -> Optional[ResetRecord]:
        try:
            log = (
                AdminLog.query.filter_by(game=game)
                .order_by(AdminLog.timestamp.desc(), AdminLog.id.desc())
                .first()
            )
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise StoreUnavailable('last_reset', str(exc))
        return log.to_record() if log else None

    def rank_of(self, game: str, address: str) -> Optional[int]:
        try:
            return _rank_in_session(game, address.lower())
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise StoreUnavailable('rank_of', str(exc))

    def top_n(self, game: str, limit: int) -> List[ScoreRecord]:
        try:
            rows = (
                ScoreEntry.query.filter_by(game=game)
                .order_by(*_ranking_order())
                .limit(max(0, limit))
                .all()
            )
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise StoreUnavailable('top_n', str(exc))
        return [r.to_record() for r in rows]

    def get_profile(self, address: str) -> ProfileStats:
        address = address.lower()
        try:
            profile = db.session.get(Profile, address)
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise StoreUnavailable('get_profile', str(exc))
        return profile.to_stats() if profile else ProfileStats(address=address)

    def count(self, game: str) -> int:
        try:
            return db.session.query(func.count(ScoreEntry.id)).filter(ScoreEntry.game == game).scalar() or 0
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise StoreUnavailable('count', str(exc))

    def health(self) -> StoreHealth:
        try:
            db.session.execute(text('SELECT 1'))
            return StoreHealth.OK
        except SQLAlchemyError:
            db.session.rollback()
            return StoreHealth.UNAVAILABLE
