"""Tests for the pure authorization predicates."""
from sports_scheduler.auth_utils import Identity, can_manage, is_admin, is_authenticated


class _Session:
    def __init__(self, created_by):
        self.created_by = created_by


def test_is_authenticated():
    assert is_authenticated(Identity(1, 'Pat', 'pat@club.org', 'player'))
    assert not is_authenticated(None)


def test_is_admin():
    assert is_admin(Identity(1, 'Ada', 'ada@club.org', 'admin'))
    assert not is_admin(Identity(2, 'Pat', 'pat@club.org', 'player'))
    assert not is_admin(None)


def test_can_manage_owner_or_admin_only():
    owner = Identity(1, 'Pat', 'pat@club.org', 'player')
    stranger = Identity(2, 'Quinn', 'quinn@club.org', 'player')
    admin = Identity(3, 'Ada', 'ada@club.org', 'admin')
    play_session = _Session(created_by=1)

    assert can_manage(owner, play_session)
    assert can_manage(admin, play_session)
    assert not can_manage(stranger, play_session)
    assert not can_manage(None, play_session)


def test_identity_from_session_rejects_malformed_data():
    assert Identity.from_session(None) is None
    assert Identity.from_session({'name': 'x'}) is None
    assert Identity.from_session({'id': 'abc'}) is None

    identity = Identity.from_session({'id': '7', 'name': 'Pat', 'email': 'p@club.org', 'role': 'player'})
    assert identity.id == 7
    assert identity.to_session() == {
        'id': 7, 'name': 'Pat', 'email': 'p@club.org', 'role': 'player',
    }


def test_pages_require_sign_in(client):
    for path in ('/dashboard', '/sessions', '/sessions/new', '/sessions/1', '/admin/sports'):
        res = client.get(path)
        assert res.status_code == 302, path
        assert res.headers['Location'].endswith('/signin'), path
