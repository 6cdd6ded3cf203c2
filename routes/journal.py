from flask import Blueprint, current_app, jsonify, request
from sqlalchemy.exc import SQLAlchemyError

from extensions import db
from routes.auth import get_current_user, login_required
from services import journal_service
from services.errors import UpstreamError
from services.patches import JournalEntryPatch

journal_bp = Blueprint('journal', __name__)


@journal_bp.route('', methods=['GET'])
@login_required
def get_entries():
    user = get_current_user()
    try:
        entries = journal_service.list_entries(user.id)
    except SQLAlchemyError as e:
        current_app.logger.error(f'Failed to fetch journal entries for user {user.id}: {e}')
        raise UpstreamError('Failed to fetch journal entries') from e

    current_app.logger.info(f'Fetched {len(entries)} journal entries for user {user.id}')
    return jsonify([entry.to_dict() for entry in entries])


@journal_bp.route('', methods=['POST'])
@login_required
def add_entry():
    user = get_current_user()
    try:
        entry = journal_service.create_entry(user.id, request.get_json(silent=True))
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Failed to create journal entry for user {user.id}: {e}')
        raise UpstreamError('Failed to create journal entry') from e
    return jsonify(entry.to_dict()), 201


@journal_bp.route('/stats', methods=['GET'])
@login_required
def get_stats():
    user = get_current_user()
    try:
        stats = journal_service.get_journal_stats(user.id)
    except SQLAlchemyError as e:
        current_app.logger.error(f'Failed to compute journal stats for user {user.id}: {e}')
        raise UpstreamError('Failed to fetch journal statistics') from e

    current_app.logger.info(f'Journal stats for user {user.id}: {stats["totalEntries"]} entries')
    return jsonify(stats)


@journal_bp.route('/<entry_id>', methods=['GET'])
@login_required
def get_entry(entry_id):
    user = get_current_user()
    try:
        entry = journal_service.get_entry(user.id, entry_id)
    except SQLAlchemyError as e:
        current_app.logger.error(f'Failed to fetch journal entry {entry_id} for user {user.id}: {e}')
        raise UpstreamError('Failed to fetch journal entry') from e
    return jsonify(entry.to_dict())


@journal_bp.route('/<entry_id>', methods=['PUT'])
@login_required
def update_entry(entry_id):
    user = get_current_user()
    patch = JournalEntryPatch.from_json(request.get_json(silent=True))
    current_app.logger.info(f'Updating journal entry {entry_id} for user {user.id}: {sorted(patch.changes())}')

    try:
        entry = journal_service.update_entry(user.id, entry_id, patch)
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Failed to update journal entry {entry_id} for user {user.id}: {e}')
        raise UpstreamError('Failed to update journal entry') from e
    return jsonify(entry.to_dict())


@journal_bp.route('/<entry_id>', methods=['DELETE'])
@login_required
def delete_entry(entry_id):
    user = get_current_user()
    try:
        journal_service.delete_entry(user.id, entry_id)
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Failed to delete journal entry {entry_id} for user {user.id}: {e}')
        raise UpstreamError('Failed to delete journal entry') from e
    return jsonify(success=True)
