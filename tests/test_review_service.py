# tests/test_review_service.py
from __future__ import annotations

import json
from types import SimpleNamespace

import pytest

from iustime.models.entities import Project, Risk
from iustime.services.review_service import (
    FALLBACK_DRAFT,
    MonthlyReviewGenerator,
    ReviewDraft,
    build_review_prompt,
    month_bounds,
    month_stats,
    parse_draft,
)


class _FakeModels:
    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error
        self.calls = []

    def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(text=self.text)


def _client(**kw):
    return SimpleNamespace(models=_FakeModels(**kw))


def test_month_bounds():
    assert [d.isoformat() for d in month_bounds("2024-02")] == ["2024-02-01", "2024-02-29"]
    assert [d.isoformat() for d in month_bounds("2023-12")] == ["2023-12-01", "2023-12-31"]


def test_month_stats(make_task):
    tasks = [
        make_task(start_date="2024-02-20", end_date="2024-03-05", status="Completed"),
        make_task(start_date="2024-03-10", end_date="2024-04-10"),
        make_task(start_date="2024-01-01", end_date="2024-02-28", status="Completed"),  # before March
        make_task(start_date="", end_date="2024-03-10"),                              # undated
    ]
    risks = [
        Risk(id="r1", line_id="L1", description="a", status="Open"),
        Risk(id="r2", line_id="L1", description="b", status="In Progress"),
        Risk(id="r3", line_id="L1", description="c", status="Closed"),
    ]
    stats = month_stats("2024-03", tasks, risks)
    assert (stats.total_active, stats.completed, stats.open_risks) == (2, 1, 2)
    assert stats.completion_ratio == pytest.approx(0.5)


def test_prompt_mentions_real_data(make_task):
    prompt = build_review_prompt(
        "2024-03",
        [Project(id="P1", line_id="L1", name="Alpha", status="In Progress", progress=58)],
        [make_task(title="Cierre", status="Completed"), make_task(title="Carga", status="Delayed")],
        [Risk(id="r", line_id="L1", description="Proveedor caído", status="Open")],
    )
    assert "2024-03" in prompt
    assert "Alpha" in prompt and "58%" in prompt
    assert "Cierre" in prompt and "Carga" in prompt and "Proveedor caído" in prompt


def test_parse_fenced_json_with_lists():
    text = "```json\n" + json.dumps({
        "summary": "Mes estable",
        "achievements": ["Entrega A", "Entrega B"],
        "issues": "Ninguno",
    }) + "\n```"
    draft = parse_draft(text)
    assert draft.summary == "Mes estable"
    assert draft.achievements == "- Entrega A\n- Entrega B"
    assert draft.next_steps == ""


@pytest.mark.parametrize("text", [None, "", "[1, 2]", "no es json"])
def test_parse_rejects_garbage(text):
    with pytest.raises(ValueError):
        parse_draft(text)


def test_generate_uses_client_reply():
    client = _client(text=json.dumps({"summary": "S", "achievements": "A", "issues": "I", "nextSteps": "N"}))
    gen = MonthlyReviewGenerator(model="test-model", client=client)
    draft = gen.generate("2024-03", [], [], [])
    assert draft == ReviewDraft("S", "A", "I", "N")
    call = client.models.calls[0]
    assert call["model"] == "test-model"
    assert "2024-03" in call["contents"]


@pytest.mark.parametrize("client", [_client(error=RuntimeError("quota")), _client(text="oops")])
def test_generate_falls_back_on_any_failure(client):
    gen = MonthlyReviewGenerator(client=client)
    assert gen.generate("2024-03", [], [], []) is FALLBACK_DRAFT


def test_generate_without_key_falls_back(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("API_KEY", raising=False)
    assert MonthlyReviewGenerator().generate("2024-03", [], [], []) is FALLBACK_DRAFT


def test_draft_dict_uses_camel_case():
    assert ReviewDraft(next_steps="x").to_dict()["nextSteps"] == "x"
