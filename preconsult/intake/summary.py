# preconsult/intake/summary.py
from __future__ import annotations

from typing import List

from pydantic import BaseModel

from preconsult.intake.schema import PatientContext
from preconsult.intake.state import ConsultationState

NO_RESPONSE = "No response provided"


class SummaryItem(BaseModel):
    number: int
    question: str
    answer: str


class ConsultationSummary(BaseModel):
    patient_context: PatientContext
    items: List[SummaryItem]


def build_summary(state: ConsultationState) -> ConsultationSummary:
    """
    Summary of what the patient provided, as shown once the session is complete.
    Blank answers are reported as "No response provided".
    """
    items = [
        SummaryItem(
            number=index + 1,
            question=response.question,
            answer=response.answer or NO_RESPONSE,
        )
        for index, response in enumerate(state.responses)
    ]
    return ConsultationSummary(
        patient_context=state.patient_context.model_copy(),
        items=items,
    )


def render_summary_text(summary: ConsultationSummary) -> str:
    """
    Plain text rendering, e.g.:

      Name: Jo
      DOB: 01/01/2000
      Gender: Male

      Medical Responses (5 Questions)
      Q1: ...
        A: ...
    """
    ctx = summary.patient_context
    lines: List[str] = [
        f"Name: {ctx.name}",
        f"DOB: {ctx.dob}",
        f"Gender: {ctx.gender}",
        "",
        f"Medical Responses ({len(summary.items)} Questions)",
    ]
    for item in summary.items:
        lines.append(f"Q{item.number}: {item.question}")
        lines.append(f"  A: {item.answer}")
    return "\n".join(lines)
