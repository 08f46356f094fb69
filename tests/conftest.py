"""Shared pytest fixtures for the ingress-log-faker test suite."""

from __future__ import annotations

import random
import signal
from unittest.mock import Mock

import pytest

from ingress_faker.config import Config
from ingress_faker.fields import make_faker

FIXED_LISTS = {
    "ip_addresses": ("10.0.0.1",),
    "http_methods": ("GET",),
    "paths": ("/api/users",),
    "status_codes": (200,),
    "hosts": ("shop.example.com",),
}


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture()
def faker():
    return make_faker(1234)


@pytest.fixture()
def stub_faker() -> Mock:
    """A Faker stand-in returning constant, easy-to-spot values."""
    fake = Mock()
    fake.word.return_value = "seg"
    fake.http_method.return_value = "OPTIONS"
    fake.ipv4.return_value = "192.0.2.10"
    fake.ipv6.return_value = "2001:db8::10"
    fake.domain_name.return_value = "fake.example.org"
    fake.url.return_value = "https://ref.example.net/"
    fake.user_agent.return_value = "Mozilla/5.0 (test)"
    return fake


@pytest.fixture()
def config() -> Config:
    return Config()


@pytest.fixture()
def fixed_config() -> Config:
    return Config(mode="fixed", **FIXED_LISTS)


@pytest.fixture()
def restore_signals():
    """Put back SIGINT/SIGTERM handlers installed by the code under test."""
    saved = {sig: signal.getsignal(sig) for sig in (signal.SIGINT, signal.SIGTERM)}
    yield
    for sig, handler in saved.items():
        signal.signal(sig, handler)
