import logging

import numpy as np

import settings


def test_resolve_rng_is_deterministic_under_a_seed():
    a = settings.resolve_rng(123).random(3)
    b = settings.resolve_rng(123).random(3)
    np.testing.assert_array_equal(a, b)


def test_resolve_rng_passes_generators_through():
    gen = np.random.default_rng(0)
    assert settings.resolve_rng(gen) is gen


def test_default_seed_from_environment(monkeypatch):
    monkeypatch.setattr(settings, "DEFAULT_SEED", "7")
    np.testing.assert_array_equal(
        settings.resolve_rng(None).random(2), np.random.default_rng(7).random(2)
    )


def test_interrupt_interval_is_positive():
    assert settings.INTERRUPT_CHECK_INTERVAL >= 1


def test_configure_logging_sets_root_level(monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", logging.WARNING)
    settings.configure_logging("DEBUG")
    assert root.level == logging.DEBUG
