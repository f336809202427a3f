"""Admin pages: sport catalog and usage reports."""
from flask import Blueprint, flash, g, redirect, render_template, request, url_for

from sports_scheduler.auth_utils import admin_required
from sports_scheduler.errors import SchedulerError, ValidationError
from sports_scheduler.routes.helpers import flash_errors
from sports_scheduler.services.catalog import create_sport, list_sports
from sports_scheduler.services.reporting import build_report

admin_bp = Blueprint('admin', __name__)


@admin_bp.route('/sports', methods=['GET'])
@admin_required
def sports():
    return render_template('admin/sports.html', sports=list_sports(g.identity))


@admin_bp.route('/sports/new', methods=['GET'])
@admin_required
def new_sport():
    return render_template('admin/new_sport.html')


@admin_bp.route('/sports', methods=['POST'])
@admin_required
def create():
    try:
        create_sport(g.identity, request.form.get('name'))
    except ValidationError as exc:
        flash_errors(exc)
        return redirect(url_for('admin.new_sport'))
    except SchedulerError as exc:
        flash_errors(exc)
        return redirect(url_for('dashboard'))
    flash('Sport created', 'success')
    return redirect(url_for('admin.sports'))


@admin_bp.route('/reports', methods=['GET'])
@admin_required
def reports():
    try:
        report = build_report(g.identity, request.args.get('from'), request.args.get('to'))
    except SchedulerError as exc:
        flash_errors(exc)
        return redirect(url_for('dashboard'))
    return render_template('admin/reports.html', **report)
