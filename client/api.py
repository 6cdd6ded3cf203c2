"""Thin JSON-over-HTTP wrapper around the Recovery Tracker REST API."""
import logging

import requests

logger = logging.getLogger(__name__)


class ApiRequestError(Exception):
    """Request failed: transport error (status None) or non-2xx response."""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ApiClient:

    def __init__(self, base_url, token=None, http=None, timeout=10):
        self.base_url = base_url.rstrip('/')
        self.token = token
        self.http = http or requests.Session()
        self.timeout = timeout

    def set_token(self, token):
        self.token = token

    def clear_token(self):
        self.token = None

    def _headers(self):
        headers = {'Accept': 'application/json'}
        if self.token:
            headers['Authorization'] = f'Bearer {self.token}'
        return headers

    def request(self, method, path, json=None, params=None):
        url = f'{self.base_url}{path}'
        try:
            response = self.http.request(
                method,
                url,
                json=json,
                params=params,
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout:
            logger.error(f'{method} {path} timed out')
            raise ApiRequestError('Request timed out')
        except requests.exceptions.RequestException as e:
            logger.error(f'{method} {path} failed: {e}')
            raise ApiRequestError(f'Connection error: {e}')

        if not 200 <= response.status_code < 300:
            try:
                message = response.json().get('error') or f'HTTP {response.status_code}'
            except (ValueError, AttributeError):
                message = f'HTTP {response.status_code}'
            logger.warning(f'{method} {path} returned {response.status_code}: {message}')
            raise ApiRequestError(message, response.status_code)

        return response.json()

    def get(self, path, params=None):
        return self.request('GET', path, params=params)

    def post(self, path, json=None):
        return self.request('POST', path, json=json if json is not None else {})

    def put(self, path, json=None):
        return self.request('PUT', path, json=json if json is not None else {})

    def delete(self, path):
        return self.request('DELETE', path)
