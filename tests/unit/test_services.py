"""
Unit tests for service layer components.
"""
import pytest
from datetime import datetime, timedelta

import pytz

from models import (
    AuthSession, CalendarEvent, CopingTool, CopingToolCompletion, JournalEntry,
    MANDATORY_TOOL_IDS, DEFAULT_COPING_TOOLS, init_default_coping_tools,
)
from services import calendar_service, coping_tool_service, journal_service, user_service
from services.auth_service import AuthService
from services.errors import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from services.ownership import get_owned_or_raise
from services.patches import ProfilePatch
from services.timezone_service import get_user_today, validate_timezone
from tests.conftest import TEST_PASSWORD


class TestMonthRange:
    """Test cases for calendar_service.month_range."""

    @pytest.mark.parametrize('month, expected', [
        ('2024-02', ('2024-02-01', '2024-02-29')),
        ('2023-02', ('2023-02-01', '2023-02-28')),
        ('2024-04', ('2024-04-01', '2024-04-30')),
        ('2024-12', ('2024-12-01', '2024-12-31')),
        ('2000-02', ('2000-02-01', '2000-02-29')),
        ('1900-02', ('1900-02-01', '1900-02-28')),
        ('9999-12', ('9999-12-01', '9999-12-31')),
    ])
    def test_month_range(self, month, expected):
        assert calendar_service.month_range(month) == expected

    @pytest.mark.parametrize('month', ['2024-13', '2024-00', '2024-2', 'abcd-ef'])
    def test_invalid_month(self, month):
        with pytest.raises(ValidationError, match='Invalid month format'):
            calendar_service.month_range(month)


class TestCalendarService:
    """Test cases for calendar event queries."""

    def _event(self, user, date, time='09:00'):
        return calendar_service.create_event(user.id, {
            'title': f'Event {date} {time}', 'date': date, 'time': time,
            'duration': 30, 'reminder': 0,
        })

    def test_month_filter_and_order(self, db_session, test_user):
        self._event(test_user, '2024-01-31')
        self._event(test_user, '2024-02-01', '08:00')
        self._event(test_user, '2024-02-01', '18:00')
        self._event(test_user, '2024-02-29')
        self._event(test_user, '2024-03-01')

        events = calendar_service.list_events(test_user.id, month='2024-02')
        assert [(e.date, e.time) for e in events] == [
            ('2024-02-29', '09:00'),
            ('2024-02-01', '18:00'),
            ('2024-02-01', '08:00'),
        ]

    def test_date_takes_precedence_over_month(self, db_session, test_user):
        self._event(test_user, '2024-02-10')
        self._event(test_user, '2024-03-10')

        events = calendar_service.list_events(test_user.id, date='2024-03-10', month='2024-02')
        assert [e.date for e in events] == ['2024-03-10']

    def test_only_own_events_listed(self, db_session, test_user, other_user):
        self._event(test_user, '2024-02-10')
        self._event(other_user, '2024-02-10')
        assert len(calendar_service.list_events(test_user.id)) == 1

    def test_reminder_enabled_defaults_true(self, db_session, test_user):
        assert self._event(test_user, '2024-02-10').reminder_enabled is True

    @pytest.mark.parametrize('field, value, message', [
        ('duration', 0, 'Duration must be a positive number'),
        ('duration', -5, 'Duration must be a positive number'),
        ('duration', 12.5, 'Duration must be a positive number'),
        ('reminder', -1, 'Reminder must be a non-negative number'),
        ('title', '   ', 'Title is required'),
        ('time', '7pm', 'Invalid time format'),
    ])
    def test_create_event_validation(self, db_session, test_user, sample_event_data, field, value, message):
        sample_event_data[field] = value
        with pytest.raises(ValidationError, match=message):
            calendar_service.create_event(test_user.id, sample_event_data)
        assert CalendarEvent.query.count() == 0


class TestOwnership:
    """Test cases for the shared ownership check."""

    def test_missing_entity(self, db_session, test_user):
        with pytest.raises(NotFoundError, match='Calendar event not found'):
            get_owned_or_raise(CalendarEvent, 'missing', test_user.id, 'Calendar event')

    def test_foreign_entity(self, db_session, test_user, other_user, sample_event_data):
        event = calendar_service.create_event(other_user.id, sample_event_data)
        with pytest.raises(AuthorizationError, match='Unauthorized'):
            get_owned_or_raise(CalendarEvent, event.id, test_user.id, 'Calendar event')

    def test_owned_entity(self, db_session, test_user, sample_event_data):
        event = calendar_service.create_event(test_user.id, sample_event_data)
        assert get_owned_or_raise(CalendarEvent, event.id, test_user.id, 'Calendar event') is event


class TestCopingToolService:
    """Test cases for the catalog and completion ledger."""

    def test_seed_catalog(self, db_session):
        created = init_default_coping_tools()
        assert created == len(DEFAULT_COPING_TOOLS)
        mandatory = {tool.id for tool in CopingTool.query.filter_by(is_mandatory=True)}
        assert mandatory == set(MANDATORY_TOOL_IDS)

    def test_reseed_refreshes_mandatory_flag_only(self, db_session, coping_tools):
        tool = db_session.get(CopingTool, 'tool-short-walk')
        tool.is_mandatory = True
        extra = CopingTool(id='custom', title='Custom Tool', duration='1 minute',
                           steps=['Do it'], when_to_use='Any time', is_mandatory=True)
        db_session.add(extra)
        db_session.commit()

        assert init_default_coping_tools() == 0
        assert db_session.get(CopingTool, 'tool-short-walk').is_mandatory is False
        assert db_session.get(CopingTool, 'custom').is_mandatory is False
        assert CopingTool.query.count() == len(DEFAULT_COPING_TOOLS) + 1

    def test_reseed_keeps_completion_history(self, db_session, test_user, coping_tools):
        coping_tool_service.record_completion(test_user.id, 'tool-grounding')
        coping_tool_service.record_completion(test_user.id, 'tool-short-walk')

        init_default_coping_tools()
        assert CopingToolCompletion.query.count() == 2

    def test_catalog_ordered_by_title(self, db_session, coping_tools):
        titles = [tool.title for tool in coping_tool_service.list_coping_tools()]
        assert titles == sorted(titles)

    def test_record_completion_appends(self, db_session, test_user, coping_tools):
        coping_tool_service.record_completion(test_user.id, 'tool-deep-breathing')
        coping_tool_service.record_completion(test_user.id, 'tool-deep-breathing')
        assert CopingToolCompletion.query.filter_by(user_id=test_user.id).count() == 2

    def test_record_completion_unknown_tool(self, db_session, test_user, coping_tools):
        with pytest.raises(NotFoundError, match='Coping tool not found'):
            coping_tool_service.record_completion(test_user.id, 'tool-nope')

    def test_record_completion_requires_tool_id(self, db_session, test_user):
        with pytest.raises(ValidationError, match='tool_id is required'):
            coping_tool_service.record_completion(test_user.id, None)

    def test_record_completion_foreign_session(self, db_session, other_user, coping_tools, craving_session):
        with pytest.raises(AuthorizationError):
            coping_tool_service.record_completion(other_user.id, 'tool-grounding', craving_session.id)
        assert CopingToolCompletion.query.count() == 0

    def test_record_completion_unknown_session(self, db_session, test_user, coping_tools):
        with pytest.raises(NotFoundError, match='Craving session not found'):
            coping_tool_service.record_completion(test_user.id, 'tool-grounding', 'missing')

    def test_completions_scoped_to_session(self, db_session, test_user, coping_tools, craving_session):
        coping_tool_service.record_completion(test_user.id, 'tool-grounding', craving_session.id)
        coping_tool_service.record_completion(test_user.id, 'tool-short-walk')

        scoped = coping_tool_service.list_completions(test_user.id, craving_session.id)
        assert [c.tool_id for c in scoped] == ['tool-grounding']
        assert len(coping_tool_service.list_completions(test_user.id)) == 2

    def test_mandatory_progress(self, db_session, test_user, coping_tools):
        for tool_id in MANDATORY_TOOL_IDS[:3]:
            coping_tool_service.record_completion(test_user.id, tool_id)
        coping_tool_service.record_completion(test_user.id, MANDATORY_TOOL_IDS[0])

        progress = coping_tool_service.get_mandatory_progress(test_user.id)
        assert progress == {'completed': 3, 'total': len(MANDATORY_TOOL_IDS), 'satisfied': False}


class TestJournalService:
    """Test cases for journal entries and statistics."""

    def _entry(self, user, created_at, **data):
        data.setdefault('outcome', 'resisted')
        entry = journal_service.create_entry(user.id, data)
        entry.created_at = created_at
        return entry

    def test_create_entry_defaults(self, db_session, test_user):
        entry = journal_service.create_entry(test_user.id, {'outcome': 'partial'})
        assert entry.had_craving is False
        assert entry.triggers == []
        assert entry.tools_used == []
        assert entry.intensity is None
        assert entry.notes is None

    def test_create_entry_invalid_outcome(self, db_session, test_user):
        with pytest.raises(ValidationError, match='Outcome must be one of'):
            journal_service.create_entry(test_user.id, {'outcome': 'relapsed'})

    def test_intensity_range_not_enforced(self, db_session, test_user):
        entry = journal_service.create_entry(test_user.id, {'outcome': 'used', 'intensity': 42})
        assert entry.intensity == 42

    def test_stats(self, db_session, test_user):
        base = datetime(2024, 2, 1, 12, 0)
        self._entry(test_user, base, had_craving=True, triggers=['Stress', 'Boredom'], intensity=6,
                    tools_used=['Deep Breathing'], outcome='resisted')
        self._entry(test_user, base + timedelta(hours=1), had_craving=True, triggers=['Stress'],
                    intensity=7, outcome='partial')
        self._entry(test_user, base + timedelta(hours=2), had_craving=False, outcome='resisted')
        db_session.commit()

        stats = journal_service.get_journal_stats(test_user.id)
        assert stats['totalEntries'] == 3
        assert stats['cravingCount'] == 2
        assert stats['resistedCount'] == 2
        assert stats['partialCount'] == 1
        assert stats['usedCount'] == 0
        assert stats['commonTriggers'][0] == 'Stress'
        assert stats['commonTriggers'] == ['Stress', 'Boredom']
        assert stats['commonTools'] == ['Deep Breathing']
        assert stats['averageIntensity'] == 6.5

    def test_stats_empty(self, db_session, test_user):
        stats = journal_service.get_journal_stats(test_user.id)
        assert stats['totalEntries'] == 0
        assert stats['commonTriggers'] == []
        assert stats['averageIntensity'] == 0

    def test_stats_rankings_use_recent_window(self, db_session, test_user):
        """Triggers only count from the most recent entries; counts cover all of them."""
        base = datetime(2024, 1, 1)
        self._entry(test_user, base, triggers=['Old'])
        self._entry(test_user, base + timedelta(days=1), triggers=['Old'])
        self._entry(test_user, base + timedelta(days=2), triggers=['New'])
        db_session.commit()

        stats = journal_service.get_journal_stats(test_user.id, window=1)
        assert stats['totalEntries'] == 3
        assert stats['commonTriggers'] == ['New']

    def test_stats_ties_keep_first_seen_order(self, db_session, test_user):
        self._entry(test_user, datetime(2024, 1, 2), triggers=['B', 'A'])
        db_session.commit()
        assert journal_service.get_journal_stats(test_user.id)['commonTriggers'] == ['B', 'A']


class TestUserService:
    """Test cases for user_service."""

    def test_create_user(self, db_session):
        user = user_service.create_user(email=' New@Example.com ', password='Secure123', display_name='Sam')
        assert user.email == 'new@example.com'
        assert user.display_name == 'Sam'
        assert user.check_password('Secure123')
        assert not user.check_password('wrongpassword')

    def test_create_user_duplicate_email(self, db_session, test_user):
        with pytest.raises(ValidationError, match='already exists'):
            user_service.create_user(email=test_user.email, password='Secure123')

    def test_create_user_weak_password(self, db_session):
        with pytest.raises(ValidationError):
            user_service.create_user(email='weak@example.com', password='weak')

    def test_update_profile_only_sent_fields(self, db_session, test_user):
        test_user.sponsor_name = 'Alex'
        db_session.commit()

        user_service.update_profile(test_user, ProfilePatch.from_json({'timer_minutes': 20}))
        assert test_user.timer_minutes == 20
        assert test_user.sponsor_name == 'Alex'

    def test_update_profile_future_sobriety_date(self, db_session, test_user):
        tomorrow = get_user_today('UTC') + timedelta(days=1)
        with pytest.raises(ValidationError, match='cannot be in the future'):
            user_service.update_profile(test_user, ProfilePatch.from_json({'sobriety_date': tomorrow.isoformat()}))

    def test_update_profile_invalid_timezone(self, db_session, test_user):
        with pytest.raises(ValidationError, match='Invalid timezone'):
            user_service.update_profile(test_user, ProfilePatch.from_json({'timezone': 'Mars/Olympus'}))

    def test_change_password(self, db_session, test_user):
        keep = AuthService().issue_token(test_user)
        other = AuthService().issue_token(test_user)

        user_service.change_password(test_user, TEST_PASSWORD, 'NewPass456', keep_token=keep.token)

        assert test_user.check_password('NewPass456')
        assert db_session.get(AuthSession, keep.id).is_active
        assert not db_session.get(AuthSession, other.id).is_active

    def test_change_password_wrong_current(self, db_session, test_user):
        with pytest.raises(AuthenticationError, match='Current password is incorrect'):
            user_service.change_password(test_user, 'Nope12345', 'NewPass456')

    def test_change_password_same_password(self, db_session, test_user):
        with pytest.raises(ValidationError, match='must be different'):
            user_service.change_password(test_user, TEST_PASSWORD, TEST_PASSWORD)

    def test_change_password_non_string_values(self, db_session, test_user):
        with pytest.raises(AuthenticationError, match='Current password is incorrect'):
            user_service.change_password(test_user, 12345678, 'NewPass456')
        with pytest.raises(ValidationError, match='does not meet requirements'):
            user_service.change_password(test_user, TEST_PASSWORD, ['NewPass456'])
        assert test_user.check_password(TEST_PASSWORD)

    def test_create_user_non_string_email(self, db_session):
        assert user_service.normalize_email(42) == ''
        with pytest.raises(ValidationError, match='valid email'):
            user_service.create_user(email=42, password='Secure123')


class TestAuthService:
    """Test cases for bearer tokens."""

    def test_authenticate(self, db_session, test_user):
        auth_session = AuthService().authenticate('TEST@example.com', TEST_PASSWORD)
        assert auth_session.user_id == test_user.id
        assert AuthService().resolve_token(auth_session.token) is auth_session

    def test_authenticate_wrong_password(self, db_session, test_user):
        with pytest.raises(AuthenticationError, match='Invalid email or password'):
            AuthService().authenticate(test_user.email, 'Wrong1234')

    @pytest.mark.parametrize('email, password', [
        ('test@example.com', 12345678),
        (None, TEST_PASSWORD),
        (['test@example.com'], TEST_PASSWORD),
    ])
    def test_authenticate_non_string_credentials(self, db_session, test_user, email, password):
        with pytest.raises(AuthenticationError, match='Invalid email or password'):
            AuthService().authenticate(email, password)

    def test_expired_token(self, db_session, test_user):
        auth_session = AuthService().issue_token(test_user)
        auth_session.expires_at = datetime.utcnow() - timedelta(seconds=1)
        db_session.commit()
        assert AuthService().resolve_token(auth_session.token) is None

    def test_revoked_token(self, db_session, test_user):
        auth_session = AuthService().issue_token(test_user)
        assert AuthService().revoke_token(auth_session.token)
        assert AuthService().resolve_token(auth_session.token) is None
        assert not AuthService().revoke_token(auth_session.token)


class TestTimezoneService:
    """Test cases for timezone helpers."""

    def test_validate_timezone(self):
        assert validate_timezone('America/New_York')
        assert not validate_timezone('Invalid/Timezone')

    def test_user_today_crosses_midnight(self):
        now = pytz.UTC.localize(datetime(2024, 3, 1, 2, 30))
        assert get_user_today('America/Los_Angeles', now=now).isoformat() == '2024-02-29'
        assert get_user_today('Asia/Tokyo', now=now).isoformat() == '2024-03-01'
        assert get_user_today(None, now=now).isoformat() == '2024-03-01'
