from sports_scheduler.app import db
from sports_scheduler.time_utils import utcnow_naive

ROLES = ('admin', 'player')
SESSION_STATUSES = ('scheduled', 'cancelled', 'completed')


def _iso(value):
    return value.isoformat() if value else None


class User(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(254), unique=True, nullable=False)
    password_hash = db.Column(db.String(256), nullable=False)
    role = db.Column(db.String(20), nullable=False, default='player')  # admin, player
    created_at = db.Column(db.DateTime, default=lambda: utcnow_naive())

    def to_dict(self):
        return {
            'id': self.id, 'name': self.name, 'email': self.email,
            'role': self.role, 'created_at': _iso(self.created_at),
        }


class Sport(db.Model):
    """A sport defined by an admin; ownership never changes."""
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    created_by = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    created_at = db.Column(db.DateTime, default=lambda: utcnow_naive())
    updated_at = db.Column(
        db.DateTime, default=lambda: utcnow_naive(), onupdate=lambda: utcnow_naive(),
    )

    creator = db.relationship('User', backref='sports')

    def to_dict(self):
        return {
            'id': self.id, 'name': self.name, 'created_by': self.created_by,
            'created_at': _iso(self.created_at),
        }


class PlaySession(db.Model):
    """Scheduled play session for a sport."""
    id = db.Column(db.Integer, primary_key=True)
    sport_id = db.Column(db.Integer, db.ForeignKey('sport.id'), nullable=False)
    created_by = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    team_a = db.Column(db.String(120), default='')
    team_b = db.Column(db.String(120), default='')
    looking_for = db.Column(db.Integer, default=0, nullable=False)
    start_time = db.Column(db.DateTime, nullable=False)
    venue = db.Column(db.String(200), nullable=False)
    status = db.Column(db.String(20), default='scheduled', nullable=False)  # scheduled, cancelled, completed
    cancel_reason = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=lambda: utcnow_naive(), index=True)
    updated_at = db.Column(
        db.DateTime, default=lambda: utcnow_naive(), onupdate=lambda: utcnow_naive(),
    )

    sport = db.relationship('Sport', backref='play_sessions')
    creator = db.relationship('User', backref='play_sessions')
    participants = db.relationship(
        'SessionParticipant', backref='session', lazy='selectin',
        cascade='all, delete-orphan',
        order_by=lambda: [SessionParticipant.joined_at, SessionParticipant.id],
    )

    def has_participant(self, user_id):
        return any(p.user_id == user_id for p in (self.participants or []))

    def to_dict(self):
        return {
            'id': self.id,
            'sport_id': self.sport_id,
            'sport_name': self.sport.name if self.sport else None,
            'created_by': self.created_by,
            'creator_name': self.creator.name if self.creator else None,
            'team_a': self.team_a or '',
            'team_b': self.team_b or '',
            'looking_for': self.looking_for,
            'start_time': _iso(self.start_time),
            'venue': self.venue,
            'status': self.status,
            'cancel_reason': self.cancel_reason,
            'participant_count': len(self.participants or []),
            'created_at': _iso(self.created_at),
        }


class SessionParticipant(db.Model):
    """A user who joined a play session. One row per (session, user)."""
    id = db.Column(db.Integer, primary_key=True)
    session_id = db.Column(db.Integer, db.ForeignKey('play_session.id'), nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    joined_at = db.Column(db.DateTime, default=lambda: utcnow_naive())

    user = db.relationship('User', backref='session_participations')

    __table_args__ = (
        db.UniqueConstraint('session_id', 'user_id', name='uq_session_participant_user'),
    )

    def to_dict(self):
        return {
            'id': self.user_id,
            'name': self.user.name if self.user else None,
            'email': self.user.email if self.user else None,
            'joined_at': _iso(self.joined_at),
        }
