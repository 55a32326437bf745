"""Shared fixtures for BDD feature tests.

Fixtures from ``tests/conftest.py`` (fake GitHub and Zoho collaborators)
are available to every step module.
"""
