# preconsult/intake/state.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from preconsult.intake.steps import Step
from preconsult.intake.schema import (
    ConsultationPayload,
    PatientContext,
    QuestionItem,
    QuestionResponse,
)


@dataclass
class ConsultationState:
    """
    In-memory representation of one pre-consultation session.

    ``responses`` is always parallel to ``selected_questions``: same length,
    and ``responses[i].question == selected_questions[i].text``.
    """

    selected_questions: List[QuestionItem] = field(default_factory=list)
    responses: List[QuestionResponse] = field(default_factory=list)

    step: Step = Step.CONSENT
    patient_context: PatientContext = field(default_factory=PatientContext)

    current_question_index: int = 0

    # Scratch buffer for the question currently on screen
    draft_answer: str = ""

    error_message: Optional[str] = None
    is_saving: bool = False

    session_id: Optional[str] = None
    saved_payload: Optional[ConsultationPayload] = None

    @classmethod
    def for_questions(cls, questions: List[QuestionItem]) -> "ConsultationState":
        return cls(
            selected_questions=list(questions),
            responses=[QuestionResponse(question=q.text, answer="") for q in questions],
        )

    # ------------------------------------------------------------------
    # Progress helpers
    # ------------------------------------------------------------------

    @property
    def total_questions(self) -> int:
        return len(self.selected_questions)

    @property
    def question_number(self) -> int:
        return self.current_question_index + 1

    @property
    def is_first_question(self) -> bool:
        return self.current_question_index == 0

    @property
    def is_last_question(self) -> bool:
        return self.current_question_index == self.total_questions - 1

    @property
    def progress_percent(self) -> float:
        if not self.total_questions:
            return 0.0
        return self.question_number / self.total_questions * 100

    @property
    def current_question(self) -> Optional[QuestionItem]:
        if 0 <= self.current_question_index < self.total_questions:
            return self.selected_questions[self.current_question_index]
        return None
