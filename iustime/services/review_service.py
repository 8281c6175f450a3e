# Rev 0.2.0

"""Monthly review drafting (Rev 0.2.0)

Aggregates a line's month into statistics and asks Gemini for four text
sections. Any failure (missing key, network, quota, unparseable reply) is
turned into FALLBACK_DRAFT; generate() never raises.
"""
from __future__ import annotations
import json
import os
import re
from dataclasses import dataclass, asdict
from datetime import date
from typing import Any, Optional, Sequence

from iustime.models.entities import Project, Risk, Task
from iustime.models.types import ACTIVE_RISK_STATUSES
from iustime.services.timeline import add_months, parse_date
from iustime.utils.logging_setup import get_logger

DEFAULT_MODEL = "gemini-2.5-flash"

SYSTEM_INSTRUCTION = (
    "Actúa como un Director de Proyectos (PMO) senior con experiencia en gestión estratégica. "
    "Tu objetivo es redactar informes ejecutivos claros, profesionales y orientados a la acción. "
    "Devuelve siempre un JSON válido con las claves: summary, achievements, issues, nextSteps."
)

_FENCE = re.compile(r"^\s*```(?:json)?\s*|\s*```\s*$", re.IGNORECASE)


@dataclass(frozen=True)
class ReviewDraft:
    summary: str = ""
    achievements: str = ""
    issues: str = ""
    next_steps: str = ""

    def to_dict(self) -> dict[str, str]:
        d = asdict(self)
        d["nextSteps"] = d.pop("next_steps")
        return d


FALLBACK_DRAFT = ReviewDraft(
    summary="Error al generar el resumen automático. Por favor intente más tarde.",
    achievements="No se pudieron cargar los datos de la IA.",
    issues="Verifique su conexión o clave API.",
    next_steps="Proceda con la revisión manual.",
)


@dataclass(frozen=True)
class MonthStats:
    total_active: int
    completed: int
    open_risks: int

    @property
    def completion_ratio(self) -> float:
        return self.completed / self.total_active if self.total_active else 0.0


def month_bounds(month: str) -> tuple[date, date]:
    """'2024-03' -> (2024-03-01, 2024-03-31)."""
    year, mon = (int(p) for p in month.split("-")[:2])
    first = date(year, mon, 1)
    return first, date.fromordinal(add_months(first, 1).toordinal() - 1)


def month_stats(month: str, tasks: Sequence[Task], risks: Sequence[Risk]) -> MonthStats:
    first, last = month_bounds(month)
    active = []
    for t in tasks:
        start, end = parse_date(t.start_date), parse_date(t.end_date)
        if start is not None and end is not None and start <= last and end >= first:
            active.append(t)
    return MonthStats(
        total_active=len(active),
        completed=sum(1 for t in active if t.status == "Completed"),
        open_risks=sum(1 for r in risks if r.status in ACTIVE_RISK_STATUSES),
    )


def build_review_prompt(month: str, projects: Sequence[Project], tasks: Sequence[Task], risks: Sequence[Risk]) -> str:
    completed = ", ".join(t.title for t in tasks if t.status == "Completed")
    delayed = ", ".join(t.title for t in tasks if t.status == "Delayed")
    active_risks = ", ".join(r.description for r in risks if r.status in ACTIVE_RISK_STATUSES)
    project_lines = "\n".join(
        f"- Proyecto: {p.name} (Estado: {p.status}, Progreso: {p.progress}%)" for p in projects
    )
    return (
        f"Genera el contenido para el Informe de Revisión Mensual correspondiente a: {month}.\n\n"
        "Usa estrictamente los siguientes datos reales del sistema:\n\n"
        "DATOS DE PROYECTOS:\n"
        f"{project_lines or '- Sin proyectos'}\n\n"
        "ACTIVIDAD DEL MES:\n"
        f"- Tareas Completadas: {completed or 'Ninguna'}\n"
        f"- Tareas Retrasadas/Bloqueadas: {delayed or 'Ninguna'}\n"
        f"- Riesgos Activos Detectados: {active_risks or 'Ninguno'}\n\n"
        "Genera una respuesta en formato JSON."
    )


def parse_draft(text: Optional[str]) -> ReviewDraft:
    """Best-effort: strip code fences, keep the four known keys, stringify values."""
    if not text:
        raise ValueError("empty response")
    data = json.loads(_FENCE.sub("", text))
    if not isinstance(data, dict):
        raise ValueError("response is not a JSON object")

    def field_(key: str) -> str:
        value = data.get(key)
        if value is None:
            return ""
        if isinstance(value, list):
            return "\n".join(f"- {v}" for v in value)
        return str(value)

    return ReviewDraft(
        summary=field_("summary"),
        achievements=field_("achievements"),
        issues=field_("issues"),
        next_steps=field_("nextSteps"),
    )


class MonthlyReviewGenerator:
    """
    Usage:
        gen = MonthlyReviewGenerator(model=settings["review"]["model"])
        draft = gen.generate("2024-03", projects, tasks, risks)
    """

    def __init__(self, model: str = DEFAULT_MODEL, api_key: Optional[str] = None, client: Any = None):
        self._log = get_logger("MonthlyReviewGenerator")
        self.model = model
        self._api_key = api_key
        self._client = client

    def _get_client(self):
        if self._client is None:
            from google import genai

            api_key = self._api_key or os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY")
            if not api_key:
                raise RuntimeError("GEMINI_API_KEY is not configured")
            self._client = genai.Client(api_key=api_key)
        return self._client

    def _request(self, prompt: str) -> Optional[str]:
        from google.genai import types

        response = self._get_client().models.generate_content(
            model=self.model,
            contents=prompt,
            config=types.GenerateContentConfig(
                system_instruction=SYSTEM_INSTRUCTION,
                response_mime_type="application/json",
            ),
        )
        return response.text

    def generate(self, month: str, projects: Sequence[Project], tasks: Sequence[Task], risks: Sequence[Risk]) -> ReviewDraft:
        prompt = build_review_prompt(month, projects, tasks, risks)
        try:
            draft = parse_draft(self._request(prompt))
        except Exception as e:  # any provider/parse failure degrades to the fixed draft
            self._log.warning("Review generation failed for %s: %s", month, e)
            return FALLBACK_DRAFT
        self._log.info("Review drafted for %s with %s", month, self.model)
        return draft
