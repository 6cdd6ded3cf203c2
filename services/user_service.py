"""User account and profile service functions."""
from datetime import datetime
import re
from typing import Optional

from flask import current_app

from extensions import db
from models import User
from services import validation
from services.auth_service import AuthService
from services.errors import AuthenticationError, ValidationError
from services.notification_service import NotificationService
from services.password_validation import validate_password
from services.patches import ProfilePatch
from services.timezone_service import get_user_today, validate_timezone

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')

TEXT_FIELDS = (
    'display_name',
    'sponsor_name',
    'sponsor_phone',
    'emergency_contact_name',
    'emergency_contact_phone',
)


def normalize_email(email: str) -> str:
    if not isinstance(email, str):
        return ''
    return email.strip().lower()


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.match(email or '') is not None


def create_user(email: str, password: str, **profile_data) -> User:
    """Create a new user with the given email and password."""
    email = normalize_email(email)
    if not is_valid_email(email):
        raise ValidationError('Please enter a valid email address')

    valid, errors = validate_password(password)
    if not valid:
        raise ValidationError(errors[0])

    if User.query.filter_by(email=email).first():
        raise ValidationError('An account with this email already exists')

    user = User(
        email=email,
        **{k: v for k, v in profile_data.items() if v is not None}
    )
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    current_app.logger.info(f'User {user.id} created')
    return user


def get_profile(user: User) -> dict:
    """Profile fields shown on the settings screen."""
    return user.to_dict()


def _sobriety_date(value, user_timezone: Optional[str]):
    if value is None or value == '':
        return None
    validation.date_string(value)
    try:
        parsed = datetime.strptime(value, '%Y-%m-%d').date()
    except ValueError:
        raise ValidationError('Invalid sobriety date')
    if parsed > get_user_today(user_timezone):
        raise ValidationError('Sobriety date cannot be in the future')
    return parsed


def _timezone(value):
    value = validation.optional_text(value, 'timezone')
    if value is not None and not validate_timezone(value):
        raise ValidationError('Invalid timezone')
    return value


def _timer_minutes(value):
    message = 'timer_minutes must be a positive number'
    value = validation.whole_number(value, message)
    if value <= 0:
        raise ValidationError(message)
    return value


def update_profile(user: User, patch: ProfilePatch) -> User:
    """Apply only the profile fields present in the patch."""
    for name in TEXT_FIELDS:
        if patch.is_set(name):
            setattr(patch, name, validation.optional_text(getattr(patch, name), name))
    if patch.is_set('timezone'):
        patch.timezone = _timezone(patch.timezone)
    if patch.is_set('timer_minutes'):
        patch.timer_minutes = _timer_minutes(patch.timer_minutes)
    if patch.is_set('sobriety_date'):
        # A timezone sent in the same request decides what "today" is
        tz = patch.timezone if patch.is_set('timezone') else user.timezone
        patch.sobriety_date = _sobriety_date(patch.sobriety_date, tz)
    if patch.is_set('onboarded'):
        patch.onboarded = validation.boolean(patch.onboarded, 'onboarded')
    patch.require_changes()

    patch.apply_to(user)
    db.session.commit()
    current_app.logger.info(f'Profile updated for user {user.id}: {sorted(patch.changes())}')
    return user


def change_password(user: User, current_password: str, new_password: str,
                    keep_token: Optional[str] = None) -> None:
    """Replace the user's password and revoke their other bearer tokens."""
    if not isinstance(current_password, str) or not current_password \
            or not user.check_password(current_password):
        current_app.logger.warning(f'Incorrect current password for user {user.id}')
        raise AuthenticationError('Current password is incorrect')

    valid, errors = validate_password(new_password)
    if not valid:
        raise ValidationError('New password does not meet requirements: ' + '; '.join(errors))

    if current_password == new_password:
        raise ValidationError('New password must be different from current password')

    user.set_password(new_password)
    db.session.commit()
    AuthService().revoke_all(user.id, keep_token=keep_token)
    current_app.logger.info(f'Password changed for user {user.id}')

    NotificationService().send_password_changed_notice(user)
