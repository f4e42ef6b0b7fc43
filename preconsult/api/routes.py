# preconsult/api/routes.py
from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException

from preconsult.services import ConsultationSessionService, SessionNotFoundError
from preconsult.intake.questions import GENDER_OPTIONS, PERSONAL_QUESTIONS
from preconsult.intake.state import ConsultationState
from preconsult.intake.steps import Step
from preconsult.intake.summary import build_summary, render_summary_text
from .schemas import (
    FormResponse,
    ConsentRequest,
    PersonalInfoRequest,
    DraftAnswerRequest,
    NextQuestionRequest,
    ConsultationResponse,
    SummaryResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@lru_cache(maxsize=1)
def get_service() -> ConsultationSessionService:
    return ConsultationSessionService()


def _load(service: ConsultationSessionService, session_id: str) -> ConsultationState:
    try:
        return service.get(session_id)
    except SessionNotFoundError:
        raise HTTPException(
            status_code=404,
            detail="Consultation session not found. Start a new consultation.",
        )


@router.get("/form", response_model=FormResponse)
def get_form() -> FormResponse:
    return FormResponse(
        personal_questions=list(PERSONAL_QUESTIONS),
        gender_options=list(GENDER_OPTIONS),
    )


@router.post("/consultations", response_model=ConsultationResponse)
def start_consultation(
    service: ConsultationSessionService = Depends(get_service),
) -> ConsultationResponse:
    state = service.start_session()
    return ConsultationResponse.from_state(state)


@router.get("/consultations/{session_id}", response_model=ConsultationResponse)
def get_consultation(
    session_id: str,
    service: ConsultationSessionService = Depends(get_service),
) -> ConsultationResponse:
    return ConsultationResponse.from_state(_load(service, session_id))


@router.post("/consultations/{session_id}/consent", response_model=ConsultationResponse)
def give_consent(
    session_id: str,
    payload: ConsentRequest,
    service: ConsultationSessionService = Depends(get_service),
) -> ConsultationResponse:
    _load(service, session_id)
    state = service.consent(session_id, payload.agreed)
    return ConsultationResponse.from_state(state)


@router.post("/consultations/{session_id}/restart", response_model=ConsultationResponse)
def restart_consultation(
    session_id: str,
    service: ConsultationSessionService = Depends(get_service),
) -> ConsultationResponse:
    _load(service, session_id)
    state = service.restart(session_id)
    return ConsultationResponse.from_state(state)


@router.patch("/consultations/{session_id}/personal-info", response_model=ConsultationResponse)
def update_personal_info(
    session_id: str,
    payload: PersonalInfoRequest,
    service: ConsultationSessionService = Depends(get_service),
) -> ConsultationResponse:
    _load(service, session_id)
    state = service.update_patient_context(
        session_id,
        name=payload.name,
        dob=payload.dob,
        gender=payload.gender,
    )
    return ConsultationResponse.from_state(state)


@router.post(
    "/consultations/{session_id}/personal-info/confirm",
    response_model=ConsultationResponse,
)
def confirm_personal_info(
    session_id: str,
    service: ConsultationSessionService = Depends(get_service),
) -> ConsultationResponse:
    _load(service, session_id)
    state = service.confirm_personal_info(session_id)
    return ConsultationResponse.from_state(state)


@router.put("/consultations/{session_id}/draft", response_model=ConsultationResponse)
def set_draft_answer(
    session_id: str,
    payload: DraftAnswerRequest,
    service: ConsultationSessionService = Depends(get_service),
) -> ConsultationResponse:
    _load(service, session_id)
    state = service.set_draft_answer(session_id, payload.answer)
    return ConsultationResponse.from_state(state)


@router.post("/consultations/{session_id}/next", response_model=ConsultationResponse)
def next_question(
    session_id: str,
    background_tasks: BackgroundTasks,
    payload: NextQuestionRequest | None = None,
    service: ConsultationSessionService = Depends(get_service),
) -> ConsultationResponse:
    """
    Commit the current answer and move on.
    Entering the saving step schedules the save to run after the response.
    """
    before = _load(service, session_id).step
    answer = payload.answer if payload is not None else None
    state = service.next_question(session_id, answer=answer)

    if before == Step.MEDICAL_QUESTIONS and state.step == Step.SAVING:
        background_tasks.add_task(service.save, session_id)

    return ConsultationResponse.from_state(state)


@router.post("/consultations/{session_id}/back", response_model=ConsultationResponse)
def go_back(
    session_id: str,
    service: ConsultationSessionService = Depends(get_service),
) -> ConsultationResponse:
    _load(service, session_id)
    state = service.back(session_id)
    return ConsultationResponse.from_state(state)


@router.get("/consultations/{session_id}/summary", response_model=SummaryResponse)
def get_summary(
    session_id: str,
    service: ConsultationSessionService = Depends(get_service),
) -> SummaryResponse:
    state = _load(service, session_id)
    if state.step != Step.COMPLETE:
        raise HTTPException(
            status_code=409,
            detail="Consultation is not complete yet.",
        )

    summary = build_summary(state)
    return SummaryResponse(**summary.model_dump(), text=render_summary_text(summary))


@router.delete("/consultations/{session_id}", status_code=204)
def end_consultation(
    session_id: str,
    service: ConsultationSessionService = Depends(get_service),
) -> None:
    try:
        service.end_session(session_id)
    except SessionNotFoundError:
        raise HTTPException(
            status_code=404,
            detail="Consultation session not found. Start a new consultation.",
        )
