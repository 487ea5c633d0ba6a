from arenahub import db
from arenahub.store.base import ScoreRecord, ProfileStats, ResetRecord


class ScoreEntry(db.Model):
    __tablename__ = 'score_entry'
    __table_args__ = (
        # Wallet submissions are unique per game; guest rows have a NULL address
        db.UniqueConstraint('game', 'address', 'client_timestamp', name='uq_score_entry_wallet_submission'),
        db.Index('ix_score_entry_ranking', 'game', 'score', 'recorded_at'),
    )
    id = db.Column(db.Integer, primary_key=True)
    actor_kind = db.Column(db.String(16), nullable=False)  # wallet, guest
    address = db.Column(db.String(64), nullable=True, index=True)
    display_name = db.Column(db.String(64), nullable=False, default='Anonymous')
    game = db.Column(db.String(64), nullable=False, index=True)
    score = db.Column(db.Integer, nullable=False)
    client_timestamp = db.Column(db.BigInteger, nullable=True)
    recorded_at = db.Column(db.BigInteger, nullable=False)

    def to_record(self) -> ScoreRecord:
        return ScoreRecord(
            id=self.id,
            actor_kind=self.actor_kind,
            address=self.address,
            display_name=self.display_name,
            game=self.game,
            score=self.score,
            client_timestamp=self.client_timestamp,
            recorded_at=self.recorded_at,
        )


class Profile(db.Model):
    __tablename__ = 'profile'
    address = db.Column(db.String(64), primary_key=True)
    games_played = db.Column(db.Integer, nullable=False, default=0)
    total_score = db.Column(db.BigInteger, nullable=False, default=0)
    best_score = db.Column(db.Integer, nullable=False, default=0)
    updated_at = db.Column(db.BigInteger, nullable=True)

    def to_stats(self) -> ProfileStats:
        return ProfileStats(
            address=self.address,
            games_played=self.games_played or 0,
            total_score=self.total_score or 0,
            best_score=self.best_score or 0,
        )


class AdminLog(db.Model):
    __tablename__ = 'admin_log'
    id = db.Column(db.Integer, primary_key=True)
    action = db.Column(db.String(32), nullable=False, default='reset')
    game = db.Column(db.String(64), nullable=False, index=True)
    timestamp = db.Column(db.BigInteger, nullable=False)

    def to_record(self) -> ResetRecord:
        return ResetRecord(id=self.id, action=self.action, game=self.game, timestamp=self.timestamp)
