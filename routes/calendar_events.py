from flask import Blueprint, current_app, jsonify, request
from sqlalchemy.exc import SQLAlchemyError

from extensions import db
from routes.auth import get_current_user, login_required
from services import calendar_service
from services.errors import UpstreamError
from services.patches import CalendarEventPatch

calendar_events_bp = Blueprint('calendar_events', __name__)


@calendar_events_bp.route('', methods=['GET'])
@login_required
def get_events():
    """Events for `?date=YYYY-MM-DD`, `?month=YYYY-MM`, or everything when neither is given."""
    user = get_current_user()
    date = request.args.get('date') or None
    month = request.args.get('month') or None
    current_app.logger.info(f'Fetching calendar events for user {user.id} (date {date}, month {month})')

    try:
        events = calendar_service.list_events(user.id, date=date, month=month)
    except SQLAlchemyError as e:
        current_app.logger.error(f'Failed to fetch calendar events for user {user.id}: {e}')
        raise UpstreamError('Failed to fetch calendar events') from e

    return jsonify([event.to_dict() for event in events])


@calendar_events_bp.route('', methods=['POST'])
@login_required
def add_event():
    user = get_current_user()
    try:
        event = calendar_service.create_event(user.id, request.get_json(silent=True))
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Failed to create calendar event for user {user.id}: {e}')
        raise UpstreamError('Failed to create calendar event') from e
    return jsonify(event.to_dict()), 201


@calendar_events_bp.route('/<event_id>', methods=['PUT'])
@login_required
def update_event(event_id):
    user = get_current_user()
    patch = CalendarEventPatch.from_json(request.get_json(silent=True))
    current_app.logger.info(f'Updating calendar event {event_id} for user {user.id}: {sorted(patch.changes())}')

    try:
        event = calendar_service.update_event(user.id, event_id, patch)
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Failed to update calendar event {event_id} for user {user.id}: {e}')
        raise UpstreamError('Failed to update calendar event') from e
    return jsonify(event.to_dict())


@calendar_events_bp.route('/<event_id>', methods=['DELETE'])
@login_required
def delete_event(event_id):
    user = get_current_user()
    try:
        calendar_service.delete_event(user.id, event_id)
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Failed to delete calendar event {event_id} for user {user.id}: {e}')
        raise UpstreamError('Failed to delete calendar event') from e
    return jsonify(success=True)
