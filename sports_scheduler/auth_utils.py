import hmac
import secrets
from functools import wraps

from flask import flash, g, redirect, session, url_for

_SESSION_USER_KEY = 'user'
_SESSION_CSRF_KEY = 'csrf_token'


class Identity:
    """Authenticated caller bound to a single request."""

    def __init__(self, id, name, email, role):
        self.id = id
        self.name = name
        self.email = email
        self.role = role

    @classmethod
    def from_user(cls, user):
        return cls(user.id, user.name, user.email, user.role)

    @classmethod
    def from_session(cls, data):
        """Rebuild an identity from cookie data, or None when absent or malformed."""
        if not isinstance(data, dict):
            return None
        try:
            user_id = int(data['id'])
        except (KeyError, TypeError, ValueError):
            return None
        return cls(user_id, data.get('name', ''), data.get('email', ''), data.get('role', ''))

    def to_session(self):
        return {'id': self.id, 'name': self.name, 'email': self.email, 'role': self.role}

    def __eq__(self, other):
        return isinstance(other, Identity) and self.to_session() == other.to_session()

    def __repr__(self):
        return f"Identity(id={self.id}, email={self.email}, role={self.role})"


# ── Predicates ──────────────────────────────────────────────────────────

def is_authenticated(identity):
    return identity is not None


def is_admin(identity):
    return is_authenticated(identity) and identity.role == 'admin'


def can_manage(identity, play_session):
    """Admins manage every session; players only the ones they created."""
    if not is_authenticated(identity):
        return False
    return is_admin(identity) or play_session.created_by == identity.id


# ── Cookie-session binding ─────────────────────────────────────────────

def load_identity():
    """Read the identity from the cookie session once per request."""
    g.identity = Identity.from_session(session.get(_SESSION_USER_KEY))
    return g.identity


def bind_identity(identity):
    session[_SESSION_USER_KEY] = identity.to_session()
    session.permanent = True
    g.identity = identity


def clear_identity():
    session.clear()
    g.identity = None


def current_identity():
    return getattr(g, 'identity', None)


# ── Anti-forgery tokens ────────────────────────────────────────────────

def get_csrf_token():
    """Return the per-session anti-forgery token, creating it on first use."""
    token = session.get(_SESSION_CSRF_KEY)
    if not token:
        token = secrets.token_urlsafe(32)
        session[_SESSION_CSRF_KEY] = token
    return token


def csrf_token_matches(candidate):
    expected = str(session.get(_SESSION_CSRF_KEY) or '')
    provided = str(candidate or '').strip()
    if not expected or not provided:
        return False
    return hmac.compare_digest(expected, provided)


# ── Route decorators ───────────────────────────────────────────────────

def login_required(f):
    """Redirect to the sign-in page if no identity is bound."""
    @wraps(f)
    def decorated(*args, **kwargs):
        if not is_authenticated(current_identity()):
            return redirect(url_for('auth.signin_form'))
        return f(*args, **kwargs)
    return decorated


def admin_required(f):
    """Require an authenticated admin; runs before any form handling."""
    @wraps(f)
    @login_required
    def decorated(*args, **kwargs):
        if not is_admin(current_identity()):
            flash('Admin access required', 'error')
            return redirect(url_for('dashboard'))
        return f(*args, **kwargs)
    return decorated


def redirect_if_signed_in(f):
    @wraps(f)
    def decorated(*args, **kwargs):
        if is_authenticated(current_identity()):
            return redirect(url_for('dashboard'))
        return f(*args, **kwargs)
    return decorated
