"""
Test suite for the Recovery Tracker API and client.

This package contains:
- Unit tests
- API endpoint tests
- Integration tests (client flows against the in-process API)
- Database migration tests
- Regression tests
- Security tests
- Property-based tests
"""
