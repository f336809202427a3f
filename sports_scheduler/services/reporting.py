"""Admin usage report over play sessions created in a date window."""
from datetime import timedelta

from flask import current_app
from sqlalchemy import func

from sports_scheduler.app import db
from sports_scheduler.auth_utils import is_admin
from sports_scheduler.errors import Unauthorized
from sports_scheduler.models import PlaySession, Sport
from sports_scheduler.time_utils import parse_datetime, utcnow_naive


def _default_window_days():
    raw_value = current_app.config.get('REPORT_DEFAULT_DAYS', 30)
    try:
        parsed = int(raw_value)
    except (TypeError, ValueError):
        parsed = 30
    return max(1, parsed)


def resolve_window(from_value=None, to_value=None, now=None, days=30):
    """Return ``(from_date, to_date)``; each bound falls back on its own."""
    if now is None:
        now = utcnow_naive()
    to_date = parse_datetime(to_value) or now
    from_date = parse_datetime(from_value) or now - timedelta(days=days)
    return from_date, to_date


def build_report(requester, from_value=None, to_value=None, now=None):
    if not is_admin(requester):
        raise Unauthorized('Admin access required')

    from_date, to_date = resolve_window(
        from_value, to_value, now=now, days=_default_window_days(),
    )
    in_window = PlaySession.created_at.between(from_date, to_date)

    total = PlaySession.query.filter(in_window).count()
    completed = PlaySession.query.filter(in_window, PlaySession.status == 'completed').count()
    cancelled = PlaySession.query.filter(in_window, PlaySession.status == 'cancelled').count()

    session_count = func.count(PlaySession.id)
    rows = db.session.query(
        Sport.name, session_count.label('count'),
    ).join(
        PlaySession, PlaySession.sport_id == Sport.id,
    ).filter(in_window).group_by(
        Sport.id, Sport.name,
    ).order_by(session_count.desc(), Sport.name.asc()).all()

    return {
        'summary': {'total': total, 'completed': completed, 'cancelled': cancelled},
        'by_sport': [{'sport': name, 'count': count} for name, count in rows],
        'from_date': from_date.isoformat(),
        'to_date': to_date.isoformat(),
    }
