"""Client-side session context.

Holds the signed-in user and bearer token, keeps the session fresh with a
periodic refresh job, and coalesces bursts of deep links into a single
refresh.
"""
import logging
import time

import schedule

from client.api import ApiClient, ApiRequestError

logger = logging.getLogger(__name__)

INITIAL_LOAD_WINDOW = 2.0
DEEP_LINK_DEBOUNCE = 1.0
DEFAULT_REFRESH_MINUTES = 10


class SessionContext:

    def __init__(self, api: ApiClient, clock=time.monotonic):
        self.api = api
        self.clock = clock
        self.user = None
        self.token = None
        self.created_at = clock()
        self.pending_since = None
        self.refresh_pending = False
        self.scheduler = schedule.Scheduler()
        self._refresh_job = None

    @property
    def is_authenticated(self):
        return self.user is not None and self.token is not None

    def _store(self, payload):
        self.user = payload['user']
        self.token = payload['session']['token']
        self.api.set_token(self.token)
        return self.user

    def _clear(self):
        self.user = None
        self.token = None
        self.api.clear_token()

    def sign_in(self, email, password):
        payload = self.api.post('/api/auth/sign-in', {'email': email, 'password': password})
        logger.info(f"Signed in as {payload['user']['email']}")
        return self._store(payload)

    def sign_up(self, email, password, name=None):
        body = {'email': email, 'password': password}
        if name:
            body['name'] = name
        payload = self.api.post('/api/auth/sign-up', body)
        logger.info(f"Signed up as {payload['user']['email']}")
        return self._store(payload)

    def sign_out(self):
        if self.token:
            try:
                self.api.post('/api/auth/sign-out')
            except ApiRequestError as e:
                logger.warning(f'Sign-out request failed: {e.message}')
        self._clear()

    def fetch_user(self):
        """Re-read the session from the server; any failure signs the user out locally."""
        if not self.token:
            self._clear()
            return None
        try:
            payload = self.api.get('/api/auth/session')
        except ApiRequestError as e:
            logger.info(f'Session refresh failed, clearing user: {e.message}')
            self._clear()
            return None
        return self._store(payload)

    # Periodic refresh

    def start_refresh(self, minutes=DEFAULT_REFRESH_MINUTES):
        self.stop_refresh()
        self._refresh_job = self.scheduler.every(minutes).minutes.do(self.fetch_user)
        logger.debug(f'Session refresh scheduled every {minutes} minutes')
        return self._refresh_job

    def stop_refresh(self):
        if self._refresh_job is not None:
            self.scheduler.cancel_job(self._refresh_job)
            self._refresh_job = None

    def run_pending(self):
        self.scheduler.run_pending()

    # Deep links

    def deep_link_received(self, url, now=None):
        """Queue a refresh for an incoming deep link. Returns False when ignored."""
        now = self.clock() if now is None else now
        if now - self.created_at < INITIAL_LOAD_WINDOW:
            logger.debug(f'Ignoring deep link during initial load: {url}')
            return False
        self.pending_since = now
        self.refresh_pending = True
        return True

    def process_deep_links(self, now=None):
        """Run the queued refresh once the latest link is DEEP_LINK_DEBOUNCE seconds old."""
        if not self.refresh_pending:
            return False
        now = self.clock() if now is None else now
        if now - self.pending_since < DEEP_LINK_DEBOUNCE:
            return False
        self.refresh_pending = False
        self.pending_since = None
        self.fetch_user()
        return True
