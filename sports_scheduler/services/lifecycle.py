"""Play session lifecycle: create, list, view, join and cancel."""
import re

from flask import current_app
from sqlalchemy.exc import IntegrityError

from sports_scheduler.app import db
from sports_scheduler.auth_utils import can_manage, is_authenticated
from sports_scheduler.errors import (
    AlreadyJoined, NotFound, SessionInPast, Unauthorized, ValidationError,
)
from sports_scheduler.models import PlaySession, SessionParticipant, Sport
from sports_scheduler.time_utils import parse_datetime, utcnow_naive

_LEADING_INT = re.compile(r'\s*([+-]?\d+)')


def _require_identity(identity):
    if not is_authenticated(identity):
        raise Unauthorized('Sign in required')


def _get_session_or_404(session_id):
    play_session = db.session.get(PlaySession, session_id) if session_id is not None else None
    if not play_session:
        raise NotFound('Session not found')
    return play_session


def _parse_looking_for(raw_value):
    """Lenient: read the leading integer, so "2.5" is 2 and "3 players" is 3.

    Input without leading digits, or a negative count, becomes 0.
    """
    match = _LEADING_INT.match(str(raw_value if raw_value is not None else ''))
    if not match:
        return 0
    return max(0, int(match.group(1)))


def _parse_sport_id(raw_value):
    try:
        return int(str(raw_value).strip())
    except (TypeError, ValueError):
        return None


def list_sessions_for(identity, now=None):
    """Return the upcoming, created and joined views for ``identity``.

    Each view is queried and ordered on its own; a session may show up in
    more than one of them.
    """
    _require_identity(identity)
    if now is None:
        now = utcnow_naive()

    upcoming = PlaySession.query.filter(
        PlaySession.status == 'scheduled',
        PlaySession.start_time >= now,
        PlaySession.created_by != identity.id,
    ).order_by(PlaySession.start_time.asc(), PlaySession.id.asc()).all()

    created = PlaySession.query.filter_by(
        created_by=identity.id,
    ).order_by(PlaySession.start_time.desc(), PlaySession.id.desc()).all()

    joined = PlaySession.query.join(
        SessionParticipant, SessionParticipant.session_id == PlaySession.id,
    ).filter(
        SessionParticipant.user_id == identity.id,
    ).order_by(PlaySession.start_time.desc(), PlaySession.id.desc()).all()

    return {
        'upcoming': [s.to_dict() for s in upcoming],
        'created': [s.to_dict() for s in created],
        'joined': [s.to_dict() for s in joined],
    }


def create_session(creator, sport_id, team_a, team_b, looking_for, start_time, venue):
    _require_identity(creator)
    venue = str(venue or '').strip()
    raw_start = str(start_time or '').strip()
    if not str(sport_id or '').strip() or not raw_start or not venue:
        raise ValidationError('Sport, time and venue are required')

    parsed_start = parse_datetime(raw_start)
    if parsed_start is None:
        raise ValidationError('Start time must be a valid date and time')

    parsed_sport_id = _parse_sport_id(sport_id)
    sport = db.session.get(Sport, parsed_sport_id) if parsed_sport_id is not None else None
    if not sport:
        raise NotFound('Sport not found')

    play_session = PlaySession(
        sport_id=sport.id,
        created_by=creator.id,
        team_a=str(team_a or '').strip(),
        team_b=str(team_b or '').strip(),
        looking_for=_parse_looking_for(looking_for),
        start_time=parsed_start,
        venue=venue,
        status='scheduled',
    )
    db.session.add(play_session)
    db.session.commit()
    current_app.logger.info(
        'User %s created session %s for sport %s', creator.id, play_session.id, sport.id,
    )
    return play_session


def get_session_detail(identity, session_id):
    """View-model for a single session; visible to any signed-in user."""
    _require_identity(identity)
    play_session = _get_session_or_404(session_id)
    return {
        'session': play_session.to_dict(),
        'participants': [p.to_dict() for p in play_session.participants],
        'joined': play_session.has_participant(identity.id),
        'can_manage': can_manage(identity, play_session),
    }


def join_session(identity, session_id, now=None):
    """Add ``identity`` to the session's participants.

    Only the start time is checked: ``looking_for`` is not a cap, and a
    cancelled session that has not started yet still accepts joins.
    """
    _require_identity(identity)
    play_session = _get_session_or_404(session_id)
    if now is None:
        now = utcnow_naive()
    if play_session.start_time < now:
        raise SessionInPast('Cannot join a past session')
    if play_session.has_participant(identity.id):
        raise AlreadyJoined('Already joined')

    # The unique constraint on (session_id, user_id) turns a racing second
    # insert into an IntegrityError instead of a duplicate row.
    db.session.add(SessionParticipant(
        session_id=play_session.id, user_id=identity.id, joined_at=now,
    ))
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise AlreadyJoined('Already joined')

    current_app.logger.info('User %s joined session %s', identity.id, play_session.id)
    return play_session


def cancel_session(identity, session_id, reason=None):
    _require_identity(identity)
    play_session = _get_session_or_404(session_id)
    if not can_manage(identity, play_session):
        current_app.logger.warning(
            'User %s denied cancelling session %s', identity.id, play_session.id,
        )
        raise Unauthorized('Not authorized to cancel this session')

    play_session.status = 'cancelled'
    play_session.cancel_reason = str(reason or '').strip() or None
    db.session.commit()
    current_app.logger.info('User %s cancelled session %s', identity.id, play_session.id)
    return play_session
