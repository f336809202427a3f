"""Sport catalog maintained by admins."""
from flask import current_app

from sports_scheduler.app import db
from sports_scheduler.auth_utils import is_admin
from sports_scheduler.errors import Unauthorized, ValidationError
from sports_scheduler.models import Sport


def _require_admin(identity):
    if not is_admin(identity):
        raise Unauthorized('Admin access required')


def list_sports(owner):
    """Sports created by ``owner``, alphabetical."""
    _require_admin(owner)
    sports = Sport.query.filter_by(created_by=owner.id).order_by(
        Sport.name.asc(), Sport.id.asc()
    ).all()
    return [s.to_dict() for s in sports]


def list_all_sports():
    sports = Sport.query.order_by(Sport.name.asc(), Sport.id.asc()).all()
    return [s.to_dict() for s in sports]


def create_sport(owner, name):
    _require_admin(owner)
    name = str(name or '').strip()
    if not name:
        raise ValidationError('Sport name required')
    sport = Sport(name=name, created_by=owner.id)
    db.session.add(sport)
    db.session.commit()
    current_app.logger.info('Admin %s created sport %s (%s)', owner.id, sport.id, sport.name)
    return sport
