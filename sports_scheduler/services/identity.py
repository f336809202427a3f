"""Sign-up and sign-in against the user table."""
from email_validator import EmailNotValidError, validate_email
from flask import current_app
from sqlalchemy.exc import IntegrityError
from werkzeug.security import check_password_hash, generate_password_hash

from sports_scheduler.app import db
from sports_scheduler.auth_utils import Identity
from sports_scheduler.errors import ConflictError, InvalidCredentials, ValidationError
from sports_scheduler.models import ROLES, User


def normalize_email(raw_email):
    """Return the canonical lowercase form of an email, or None if malformed."""
    candidate = str(raw_email or '').strip()
    if not candidate:
        return None
    try:
        result = validate_email(candidate, check_deliverability=False)
    except EmailNotValidError:
        return None
    return result.normalized.lower()


def _normalize_role(raw_role):
    role = str(raw_role or '').strip()
    return role if role in ROLES else None


def _min_password_length():
    raw_value = current_app.config.get('MIN_PASSWORD_LENGTH', 6)
    try:
        parsed = int(raw_value)
    except (TypeError, ValueError):
        parsed = 6
    return max(1, parsed)


def sign_up(name, email, password, role):
    """Create a user and return its identity.

    Every violated field rule is reported at once through ``ValidationError``.
    """
    errors = []
    name = str(name or '').strip()
    if not name:
        errors.append('Name is required')
    normalized_email = normalize_email(email)
    if not normalized_email:
        errors.append('Valid email is required')
    password = str(password or '')
    min_length = _min_password_length()
    if len(password) < min_length:
        errors.append(f'Password must be at least {min_length} characters')
    normalized_role = _normalize_role(role)
    if not normalized_role:
        errors.append('Role is required')
    if errors:
        raise ValidationError(*errors)

    if User.query.filter_by(email=normalized_email).first():
        raise ConflictError('Email already in use')

    user = User(
        name=name,
        email=normalized_email,
        password_hash=generate_password_hash(password),
        role=normalized_role,
    )
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError('Email already in use')

    current_app.logger.info('User %s signed up as %s', user.id, user.role)
    return Identity.from_user(user)


def sign_in(email, password, role):
    """Return the identity for a matching email, role and password.

    Unknown email, role mismatch and wrong password all raise the same
    ``InvalidCredentials`` so callers cannot tell them apart.
    """
    errors = []
    normalized_email = normalize_email(email)
    if not normalized_email:
        errors.append('Valid email is required')
    password = str(password or '')
    if not password:
        errors.append('Password is required')
    normalized_role = _normalize_role(role)
    if not normalized_role:
        errors.append('Role is required')
    if errors:
        raise ValidationError(*errors)

    user = User.query.filter_by(email=normalized_email, role=normalized_role).first()
    if not user or not check_password_hash(user.password_hash, password):
        current_app.logger.warning('Failed sign-in for %s as %s', normalized_email, normalized_role)
        raise InvalidCredentials('Invalid email or password')
    return Identity.from_user(user)
