# preconsult/api/schemas.py
from __future__ import annotations

from typing import Optional, List

from pydantic import BaseModel

from preconsult.intake.schema import (
    PatientContext,
    PersonalQuestion,
    QuestionItem,
    QuestionResponse,
)
from preconsult.intake.state import ConsultationState
from preconsult.intake.steps import Step
from preconsult.intake.summary import ConsultationSummary


class FormResponse(BaseModel):
    personal_questions: List[PersonalQuestion]
    gender_options: List[str]


class ConsentRequest(BaseModel):
    agreed: bool


class PersonalInfoRequest(BaseModel):
    name: Optional[str] = None
    dob: Optional[str] = None
    gender: Optional[str] = None


class DraftAnswerRequest(BaseModel):
    answer: str


class NextQuestionRequest(BaseModel):
    answer: Optional[str] = None


class ProgressSchema(BaseModel):
    question_number: int
    total_questions: int
    percent: float
    is_first_question: bool
    is_last_question: bool


class ConsultationResponse(BaseModel):
    session_id: str
    step: str
    patient_context: PatientContext
    current_question: Optional[QuestionItem]
    progress: ProgressSchema
    draft_answer: str
    error_message: Optional[str]
    is_saving: bool
    responses: List[QuestionResponse]

    @classmethod
    def from_state(cls, state: ConsultationState) -> "ConsultationResponse":
        return cls(
            session_id=state.session_id or "",
            step=state.step.value,
            patient_context=state.patient_context,
            current_question=(
                state.current_question if state.step == Step.MEDICAL_QUESTIONS else None
            ),
            progress=ProgressSchema(
                question_number=state.question_number,
                total_questions=state.total_questions,
                percent=state.progress_percent,
                is_first_question=state.is_first_question,
                is_last_question=state.is_last_question,
            ),
            draft_answer=state.draft_answer,
            error_message=state.error_message,
            is_saving=state.is_saving,
            responses=state.responses,
        )


class SummaryResponse(ConsultationSummary):
    text: str
