"""Root-level pytest fixtures for the rawbatch test suite.

Provides shared configuration fixtures following the Pydantic-based
architecture. Tests use these fixtures instead of raw dict configs.
"""

import pytest

from rawbatch.schemas import ParamConfig, CLIConfig, resolve_config

from tests.helpers.fake_converter import FakeInvoker


# =============================================================================
# Configuration Fixtures (Pydantic-based)
# =============================================================================

@pytest.fixture
def param_config():
    """Expert configuration with all defaults."""
    return ParamConfig()


@pytest.fixture
def internal_config(param_config):
    """Fully validated runtime configuration (no overrides)."""
    return resolve_config(param_config, None, None)


@pytest.fixture
def make_config(param_config):
    """Factory fixture for creating custom test configs.

    Returns a callable that accepts CLIConfig-compatible kwargs.

    Examples
    --------
    >>> def test_no_dual(make_config):
    ...     config = make_config(dual=False, fbin=2)
    ...     assert config.dual is False
    """
    def _make(**cli_overrides):
        if cli_overrides:
            return resolve_config(param_config, None, CLIConfig(**cli_overrides))
        return resolve_config(param_config, None, None)

    return _make


# =============================================================================
# Converter Fixtures
# =============================================================================

@pytest.fixture
def fake_invoker():
    """Converter stand-in that always succeeds and records every call."""
    return FakeInvoker()


@pytest.fixture
def make_invoker():
    """Factory for converter stand-ins with per-scan exit codes.

    Examples
    --------
    >>> invoker = make_invoker({"scan_b": 2})
    """
    def _make(exit_codes=None):
        return FakeInvoker(exit_codes)

    return _make
