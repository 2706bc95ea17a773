"""
Shared pytest fixtures for modbase tests.

This module provides common fixtures including:
- Environment scrubbing so login names and MODBASE_* settings never leak in
- An isolated extension catalog installed as the process default
- Sample module instances
"""

import os
import sys
from unittest.mock import MagicMock

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import modbase.modules.extensions.catalog as catalog_module
from modbase.config import reset_config
from modbase.modules.extensions import ExtensionCatalog

from fixtures.sample_modules import HttpClientExtension, ReportExtension, SampleScanner

MANAGED_ENV_VARS = (
    "LOGNAME",
    "USERNAME",
    "USER",
    "MODBASE_DEFAULT_LICENSE",
    "MODBASE_LOG_LEVEL",
    "MODBASE_EXTENSION_CATALOG",
    "MODBASE_DEBUG",
)


# =============================================================================
# Environment
# =============================================================================


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Remove login and framework variables, and drop cached configuration."""
    for var in MANAGED_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    reset_config()
    yield
    reset_config()


# =============================================================================
# Extensions
# =============================================================================


@pytest.fixture
def catalog():
    """Catalog holding the sample extensions."""
    catalog = ExtensionCatalog()
    catalog.add(HttpClientExtension)
    catalog.add(ReportExtension)
    return catalog


@pytest.fixture(autouse=True)
def default_catalog(monkeypatch, catalog):
    """Install the sample catalog as the process default."""
    monkeypatch.setattr(catalog_module, "_default", catalog)
    return catalog


# =============================================================================
# Modules
# =============================================================================


@pytest.fixture
def scanner():
    """A freshly constructed sample scanner."""
    return SampleScanner()


@pytest.fixture
def mock_output():
    """Output channel recording every call."""
    output = MagicMock()
    output.print_status = MagicMock()
    output.print_good = MagicMock()
    output.print_error = MagicMock()
    output.print_warning = MagicMock()
    output.print_line = MagicMock()
    return output
