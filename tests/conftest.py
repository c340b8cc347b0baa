import os

import pytest

from referral_discount import ResolverSettings
from referral_discount.config import ENV_PREFIX


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in list(os.environ):
        if name.upper().startswith(ENV_PREFIX):
            monkeypatch.delenv(name)


@pytest.fixture
def settings() -> ResolverSettings:
    return ResolverSettings()
