from __future__ import annotations

"""Shared pytest fixtures and test environment defaults."""

import os
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ["OMNIRAG_LLM_PROVIDER"] = "ollama"
os.environ["OMNIRAG_METRICS_ENABLED"] = "true"
os.environ.setdefault("OMNIRAG_SEED_SAMPLES", "true")
os.environ.pop("GEMINI_API_KEY", None)
os.environ.pop("OPENAI_API_KEY", None)


@pytest.fixture
def anyio_backend():
    """Run anyio-marked tests on asyncio only; the code under test uses asyncio."""
    return "asyncio"
