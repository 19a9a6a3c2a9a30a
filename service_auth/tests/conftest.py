"""
Shared fixtures for Auth service tests.
"""

import pytest

from shared.secrets_manager import SecretProvider
from shared.test_helpers import TEST_SECRET
from service_auth.app.tokens.claims import Principal
from service_auth.app.tokens.issuer import TokenIssuer
from service_auth.app.tokens.refresh import RefreshCoordinator
from service_auth.app.validation.token_validator import TokenValidator


@pytest.fixture
def secrets():
    """Secret provider holding the test secret."""
    return SecretProvider(TEST_SECRET)


@pytest.fixture
def issuer(secrets):
    """Issuer with the default 15 minute / 7 day lifetimes."""
    return TokenIssuer(secrets)


@pytest.fixture
def validator(secrets):
    """Validator sharing the issuer's secret."""
    return TokenValidator(secrets)


@pytest.fixture
def coordinator(issuer, validator):
    """Refresh coordinator wired to the test issuer and validator."""
    return RefreshCoordinator(issuer, validator)


@pytest.fixture
def alice():
    """Principal used across scenarios."""
    return Principal(user_id=2, name="alice")
