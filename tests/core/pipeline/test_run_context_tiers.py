# tests/core/pipeline/test_run_context_tiers.py
"""
Testes do RunContext: snapshot de ambiente, substituição de saída e logging.

Invariantes:
    - `environment` é imutável após a criação
    - `replace_output` substitui integralmente (nunca mescla)
    - Eventos de log são estruturados e incluem `run_id`
"""

import pytest

from workflow_runner.core.pipeline.context import RunContext


def test_environment_is_snapshot(monkeypatch):
    monkeypatch.setenv("WR_SNAPSHOT_TEST", "before")
    ctx = RunContext.create()
    monkeypatch.setenv("WR_SNAPSHOT_TEST", "after")

    assert ctx.environment["WR_SNAPSHOT_TEST"] == "before"


def test_environment_is_read_only(ctx):
    with pytest.raises(TypeError):
        ctx.environment["NEW"] = "x"


def test_explicit_environment_and_run_id():
    ctx = RunContext.create(environment={"A": "1"}, run_id="fixed")
    assert ctx.run_id == "fixed"
    assert dict(ctx.environment) == {"A": "1"}
    assert ctx.created_at.tzinfo is not None


def test_last_output_starts_empty(ctx):
    assert ctx.last_output == {}


def test_replace_output_is_wholesale_and_stringified(ctx):
    ctx.replace_output({"a": 1, "b": None})
    assert ctx.last_output == {"a": "1", "b": ""}

    ctx.replace_output({"c": "3"})
    assert ctx.last_output == {"c": "3"}


def test_tiers_follow_order(ctx):
    ctx.replace_output({"x": "1"})
    names = [name for name, _ in ctx.tiers()]
    assert names == ["output", "environment"]
    assert ctx.tiers()[0][1]["x"] == "1"


def test_unknown_tier_rejected(env):
    from datetime import datetime, timezone

    with pytest.raises(ValueError):
        RunContext(
            run_id="r",
            created_at=datetime(2026, 1, 16, tzinfo=timezone.utc),
            environment=env,
            tier_order=("output", "secrets"),
        )


def test_structured_log_event(ctx):
    ctx.log(step=0, level="info", message="hello", foo=1)
    ev = ctx.events[-1]
    assert ev["run_id"] == "run-test-001"
    assert ev["step"] == 0
    assert ev["level"] == "info"
    assert ev["message"] == "hello"
    assert ev["foo"] == 1
    assert "timestamp" in ev
