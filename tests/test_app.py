"""Tests for app-level behavior: anti-forgery tokens, error pages, config."""
from datetime import datetime

import pytest

from sports_scheduler.app import create_app
from sports_scheduler.config import DEFAULT_SECRET_KEY, ProductionConfig
from sports_scheduler.models import User
from sports_scheduler.time_utils import parse_datetime


def _signup_data(**overrides):
    data = {'name': 'Pat', 'email': 'pat@club.org', 'password': 'secret123', 'role': 'player'}
    data.update(overrides)
    return data


def test_post_without_csrf_token_is_rejected(app, client):
    app.config['CSRF_ENABLED'] = True

    res = client.post('/signup', data=_signup_data())
    assert res.status_code == 302
    assert User.query.count() == 0

    page = client.get(res.headers['Location'])
    assert b'Invalid CSRF token. Please try again.' in page.data


def test_post_with_wrong_csrf_token_redirects_back(app, client):
    app.config['CSRF_ENABLED'] = True
    client.get('/signup')

    res = client.post(
        '/signup', data=_signup_data(csrf_token='forged'),
        headers={'Referer': 'http://localhost/signup'},
    )
    assert res.status_code == 302
    assert res.headers['Location'].endswith('/signup')
    assert User.query.count() == 0


def test_post_with_valid_csrf_token(app, client):
    app.config['CSRF_ENABLED'] = True
    client.get('/signup')
    with client.session_transaction() as sess:
        token = sess['csrf_token']

    res = client.post('/signup', data=_signup_data(csrf_token=token))
    assert res.status_code == 302
    assert res.headers['Location'].endswith('/dashboard')
    assert User.query.count() == 1


def test_csrf_token_accepted_from_header(app, client):
    app.config['CSRF_ENABLED'] = True
    client.get('/signin')
    with client.session_transaction() as sess:
        token = sess['csrf_token']

    res = client.post('/signup', data=_signup_data(), headers={'X-CSRF-Token': token})
    assert res.headers['Location'].endswith('/dashboard')


def test_unknown_path_renders_404(client):
    res = client.get('/no/such/page')
    assert res.status_code == 404
    assert b'Page not found' in res.data


def test_unexpected_error_renders_generic_page():
    app = create_app('testing')
    app.config['PROPAGATE_EXCEPTIONS'] = False

    @app.route('/boom')
    def boom():
        raise RuntimeError('kaboom')

    res = app.test_client().get('/boom')
    assert res.status_code == 500
    assert b'Something went wrong' in res.data
    assert b'kaboom' not in res.data


def test_production_refuses_default_secret(monkeypatch):
    monkeypatch.setattr(ProductionConfig, 'SECRET_KEY', DEFAULT_SECRET_KEY)
    with pytest.raises(RuntimeError, match='SECRET_KEY'):
        create_app('production')


def test_parse_datetime():
    assert parse_datetime('2025-03-01') == datetime(2025, 3, 1)
    assert parse_datetime('2025-03-01T10:15') == datetime(2025, 3, 1, 10, 15)
    assert parse_datetime('2025-03-01T10:15:00Z') == datetime(2025, 3, 1, 10, 15)
    assert parse_datetime('') is None
    assert parse_datetime(None) is None
    assert parse_datetime('31/12/2025') is None
