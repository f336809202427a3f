from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for

from sports_scheduler.auth_utils import bind_identity, clear_identity, redirect_if_signed_in
from sports_scheduler.errors import SchedulerError
from sports_scheduler.routes.helpers import flash_errors
from sports_scheduler.services.identity import sign_in, sign_up

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/signup', methods=['GET'])
@redirect_if_signed_in
def signup_form():
    return render_template('auth/signup.html')


@auth_bp.route('/signup', methods=['POST'])
@redirect_if_signed_in
def signup():
    form = request.form
    try:
        identity = sign_up(
            form.get('name'), form.get('email'), form.get('password'), form.get('role'),
        )
    except SchedulerError as exc:
        flash_errors(exc)
        return redirect(url_for('auth.signup_form'))
    bind_identity(identity)
    flash('Signed up successfully', 'success')
    return redirect(url_for('dashboard'))


@auth_bp.route('/signin', methods=['GET'])
@redirect_if_signed_in
def signin_form():
    return render_template('auth/signin.html')


@auth_bp.route('/signin', methods=['POST'])
@redirect_if_signed_in
def signin():
    form = request.form
    try:
        identity = sign_in(form.get('email'), form.get('password'), form.get('role'))
    except SchedulerError as exc:
        flash_errors(exc)
        return redirect(url_for('auth.signin_form'))
    bind_identity(identity)
    current_app.logger.info('User %s signed in', identity.id)
    flash('Signed in', 'success')
    return redirect(url_for('dashboard'))


@auth_bp.route('/signout', methods=['POST'])
def signout():
    """Drop the login session; safe to call when already signed out."""
    clear_identity()
    return redirect(url_for('index'))
