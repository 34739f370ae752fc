"""
Pytest configuration and shared fixtures.
"""

import pytest

from physcalc.context import default_context
from physcalc.physics.quantity import Quantity


@pytest.fixture
def context():
    """Provide the context built from the bundled datasets."""
    return default_context()


@pytest.fixture
def registry(context):
    """Provide the default unit registry."""
    return context.registry


@pytest.fixture
def elements(context):
    """Provide the periodic table."""
    return context.elements


@pytest.fixture
def nuclides(context):
    """Provide the nuclide ground state table."""
    return context.nuclides


@pytest.fixture
def q():
    """Shorthand for parsing quantity literals."""
    return Quantity
