"""Play sessions: list, create, view, join, cancel."""
from flask import Blueprint, flash, g, redirect, render_template, request, url_for

from sports_scheduler.auth_utils import login_required
from sports_scheduler.errors import NotFound, SchedulerError
from sports_scheduler.routes.helpers import flash_errors
from sports_scheduler.services.catalog import list_all_sports
from sports_scheduler.services import lifecycle

sessions_bp = Blueprint('sessions', __name__)


@sessions_bp.route('', methods=['GET'])
@login_required
def index():
    views = lifecycle.list_sessions_for(g.identity)
    return render_template(
        'sessions/index.html',
        upcoming=views['upcoming'], my_created=views['created'], my_joined=views['joined'],
    )


@sessions_bp.route('/new', methods=['GET'])
@login_required
def new():
    return render_template('sessions/new.html', sports=list_all_sports())


@sessions_bp.route('', methods=['POST'])
@sessions_bp.route('/new', methods=['POST'])
@login_required
def create():
    form = request.form
    try:
        lifecycle.create_session(
            g.identity,
            sport_id=form.get('sport_id'),
            team_a=form.get('team_a'),
            team_b=form.get('team_b'),
            looking_for=form.get('looking_for'),
            start_time=form.get('start_time'),
            venue=form.get('venue'),
        )
    except SchedulerError as exc:
        flash_errors(exc)
        return redirect(url_for('sessions.new'))
    flash('Session created', 'success')
    return redirect(url_for('sessions.index'))


@sessions_bp.route('/<int:session_id>', methods=['GET'])
@login_required
def show(session_id):
    try:
        detail = lifecycle.get_session_detail(g.identity, session_id)
    except SchedulerError as exc:
        flash_errors(exc)
        return redirect(url_for('sessions.index'))
    return render_template(
        'sessions/show.html',
        sess=detail['session'], participants=detail['participants'],
        joined=detail['joined'], can_manage=detail['can_manage'],
    )


@sessions_bp.route('/<int:session_id>/join', methods=['POST'])
@login_required
def join(session_id):
    try:
        lifecycle.join_session(g.identity, session_id)
    except NotFound as exc:
        flash_errors(exc)
        return redirect(url_for('sessions.index'))
    except SchedulerError as exc:
        flash_errors(exc)
        return redirect(url_for('sessions.show', session_id=session_id))
    flash('Joined session', 'success')
    return redirect(url_for('sessions.show', session_id=session_id))


@sessions_bp.route('/<int:session_id>/cancel', methods=['POST'])
@login_required
def cancel(session_id):
    try:
        lifecycle.cancel_session(g.identity, session_id, request.form.get('reason'))
    except NotFound as exc:
        flash_errors(exc)
        return redirect(url_for('sessions.index'))
    except SchedulerError as exc:
        flash_errors(exc)
        return redirect(url_for('sessions.show', session_id=session_id))
    flash('Session cancelled', 'success')
    return redirect(url_for('sessions.show', session_id=session_id))
