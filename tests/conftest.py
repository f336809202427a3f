import pytest
from sports_scheduler.app import create_app, db

DEFAULT_PASSWORD = 'secret123'


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_client(app):
    """Return a factory producing a fresh test client signed up with the given role."""
    def _make(name, email, role='player', password=DEFAULT_PASSWORD):
        user_client = app.test_client()
        res = user_client.post('/signup', data={
            'name': name, 'email': email, 'password': password, 'role': role,
        })
        assert res.status_code == 302
        assert res.headers['Location'].endswith('/dashboard')
        return user_client
    return _make


@pytest.fixture
def make_identity(app):
    """Sign up a user through the service layer and return the identity."""
    from sports_scheduler.services.identity import sign_up

    def _make(name, email, role='player', password=DEFAULT_PASSWORD):
        return sign_up(name, email, password, role)
    return _make


@pytest.fixture
def admin(make_identity):
    return make_identity('Ada Admin', 'ada@club.org', 'admin')


@pytest.fixture
def player(make_identity):
    return make_identity('Pat Player', 'pat@club.org', 'player')


@pytest.fixture
def other_player(make_identity):
    return make_identity('Quinn Player', 'quinn@club.org', 'player')


@pytest.fixture
def sport(admin):
    from sports_scheduler.services.catalog import create_sport
    return create_sport(admin, 'Tennis')
