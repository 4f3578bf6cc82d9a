"""Tests for repository backend selection logic."""

import pytest

from app.db import repository_factory


def test_get_repository_returns_psycopg_for_postgres_backend(monkeypatch):
    monkeypatch.setattr(repository_factory.settings, "db_backend", "psycopg2")
    repo = repository_factory.get_repository()
    assert repo is repository_factory.get_psycopg_repository()


def test_get_repository_returns_shared_memory_repository(monkeypatch):
    monkeypatch.setattr(repository_factory.settings, "db_backend", "memory")
    monkeypatch.setattr(repository_factory, "_memory_repo", None)

    first = repository_factory.get_repository()
    second = repository_factory.get_repository()

    assert isinstance(first, repository_factory.MemoryRepository)
    assert first is second


def test_get_repository_raises_for_unknown_backend(monkeypatch):
    monkeypatch.setattr(repository_factory.settings, "db_backend", "mongo")
    with pytest.raises(RuntimeError, match="Unknown DB backend: mongo"):
        repository_factory.get_repository()


def test_psycopg_repository_delegates_to_query_module(monkeypatch):
    calls = []
    monkeypatch.setattr(
        repository_factory.psycopg_repo,
        "record_answer",
        lambda question_id, answer, is_correct: calls.append((question_id, answer, is_correct)) or {"id": question_id},
    )

    result = repository_factory.get_psycopg_repository().record_answer(7, "True", True)

    assert result == {"id": 7}
    assert calls == [(7, "True", True)]
