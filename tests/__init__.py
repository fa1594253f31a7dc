"""Test package for the map clustering service.

This package contains:
- Unit tests (test_zoom_policy.py, test_grid.py, test_caches.py, test_engine.py, ...)
- HTTP action tests (test_actions.py)
- Test configuration (conftest.py)
"""
