"""Owner check shared by every update and delete on user-scoped entities."""
from flask import current_app
from extensions import db
from services.errors import AuthorizationError, NotFoundError


def get_owned_or_raise(model, entity_id, user_id, label):
    """Fetch `model` by id and make sure `user_id` owns it.

    Raises NotFoundError when the row is absent and AuthorizationError when it
    belongs to someone else.
    """
    entity = db.session.get(model, entity_id)
    if entity is None:
        current_app.logger.warning(f'{label} {entity_id} not found (user {user_id})')
        raise NotFoundError(f'{label} not found')

    if entity.user_id != user_id:
        current_app.logger.warning(
            f'User {user_id} attempted to access {label.lower()} {entity_id} owned by {entity.user_id}')
        raise AuthorizationError('Unauthorized')

    return entity
