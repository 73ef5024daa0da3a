"""
Pytest configuration for unit tests.

Provides fixtures that apply to all unit tests.
"""

import os

import pytest


@pytest.fixture(autouse=True, scope="function")
def isolated_settings(monkeypatch, tmp_path):
    """
    Give every unit test freshly loaded default settings.

    This prevents unit tests from:
    - Reusing a settings singleton cached by an earlier test
    - Picking up FLUENT_XML_* variables from the developer's shell
    - Reading a .env file from the working directory
    """
    from fluent_xml.config import reset_settings

    for name in list(os.environ):
        if name.upper().startswith('FLUENT_XML_'):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)

    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def people_xml():
    """Small people document used by the traversal tests."""
    return (
        '<people>'
        '<!--staff list-->'
        '<person name="John Doe" age="20"/>'
        '<person name="Mary Sue" age="22" active="true"/>'
        '<team>core</team>'
        '</people>'
    )
