"""
Pytest configuration and shared fixtures for the test suite.
"""
import pytest
from datetime import datetime

from app import create_app, db
from models import User, CravingSession, init_default_coping_tools
from services.auth_service import AuthService

TEST_PASSWORD = 'Password123'


@pytest.fixture(scope='function')
def app():
    """Create application for testing."""
    app = create_app('testing')
    app.config.update({
        'SECRET_KEY': 'test-secret-key',
        'MAIL_SUPPRESS_SEND': True,
    })

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()

@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()

@pytest.fixture(scope='function')
def runner(app):
    """Create test CLI runner."""
    return app.test_cli_runner()

@pytest.fixture
def db_session(app):
    """Create database session."""
    with app.app_context():
        yield db.session

@pytest.fixture
def coping_tools(db_session):
    """Seed the default coping-tool catalog."""
    init_default_coping_tools()

@pytest.fixture
def make_user(db_session):
    """Factory for users with a known password."""
    def _make_user(email='test@example.com', **profile):
        user = User(email=email, email_verified=True, **profile)
        user.set_password(TEST_PASSWORD)
        db_session.add(user)
        db_session.commit()
        return user
    return _make_user

@pytest.fixture
def test_user(make_user):
    """Create test user."""
    return make_user()

@pytest.fixture
def other_user(make_user):
    """A second user, for ownership checks."""
    return make_user(email='other@example.com')

@pytest.fixture
def headers_for(db_session):
    """Build bearer-token headers for a user."""
    def _headers_for(user):
        token = AuthService().issue_token(user).token
        return {'Authorization': f'Bearer {token}'}
    return _headers_for

@pytest.fixture
def auth_headers(test_user, headers_for):
    """Authentication headers for the test user."""
    return headers_for(test_user)

@pytest.fixture
def craving_session(db_session, test_user):
    """An open craving session for the test user."""
    craving = CravingSession(
        user_id=test_user.id,
        started_at=datetime.utcnow(),
        triggers=['Stress'],
        intensity=7,
        need_type='calm',
    )
    db_session.add(craving)
    db_session.commit()
    return craving

@pytest.fixture
def sample_event_data():
    """Sample calendar event payload."""
    return {
        'title': 'Group meeting',
        'description': 'Tuesday evening group',
        'date': '2024-02-13',
        'time': '19:00',
        'duration': 60,
        'reminder': 15,
    }

@pytest.fixture
def sample_journal_data():
    """Sample journal entry payload."""
    return {
        'had_craving': True,
        'triggers': ['Stress', 'Boredom'],
        'intensity': 6,
        'tools_used': ['Deep Breathing'],
        'outcome': 'resisted',
        'notes': 'Went for a walk afterwards',
    }
