from __future__ import annotations

from dataclasses import replace

from omnirag.app.settings import settings


def test_seed_samples_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("OMNIRAG_SEED_SAMPLES", "false")
    assert settings.seed_samples is False
    monkeypatch.setenv("OMNIRAG_SEED_SAMPLES", "Yes")
    assert settings.seed_samples is True


def test_seed_samples_falls_back_to_raw_field(monkeypatch) -> None:
    monkeypatch.delenv("OMNIRAG_SEED_SAMPLES", raising=False)
    assert replace(settings, seed_samples_raw="no").seed_samples is False
    assert replace(settings, seed_samples_raw="1").seed_samples is True
