"""Tests for the serverless entrypoint."""

import importlib.util
from pathlib import Path

import pytest
from fastapi import FastAPI

INDEX_PATH = Path(__file__).resolve().parents[1] / "api" / "index.py"


def test_index_exposes_asgi_app(monkeypatch: pytest.MonkeyPatch, settings) -> None:
    monkeypatch.setenv("SUPABASE_URL", settings.supabase_url)
    monkeypatch.setenv("SUPABASE_SERVICE_KEY", settings.supabase_service_key)
    spec = importlib.util.spec_from_file_location("vercel_index", INDEX_PATH)
    assert spec is not None
    assert spec.loader is not None
    module = importlib.util.module_from_spec(spec)

    spec.loader.exec_module(module)

    assert isinstance(module.app, FastAPI)
    assert module.__all__ == ["app"]
