# preconsult/services/consultation_session.py
from __future__ import annotations

import logging
import uuid
from typing import Dict, Optional

from preconsult.config import Settings, get_settings
from preconsult.intake.controller import ConsultationFlowController
from preconsult.intake.state import ConsultationState
from preconsult.intake.steps import Step
from preconsult.services.store import ConsultationStore, MockConsultationStore

logger = logging.getLogger(__name__)


class SessionNotFoundError(KeyError):
    def __init__(self, session_id: str):
        super().__init__(session_id)
        self.session_id = session_id

    def __str__(self) -> str:
        return f"Consultation session {self.session_id} not found"


class ConsultationSessionService:
    """
    Service that coordinates:
      - creating sessions and keeping their state in memory
      - driving the ConsultationFlowController
      - handing finished consultations to the store
    """

    def __init__(
        self,
        controller: Optional[ConsultationFlowController] = None,
        store: Optional[ConsultationStore] = None,
        settings: Optional[Settings] = None,
    ):
        settings = settings or get_settings()
        self.controller = controller or ConsultationFlowController(
            num_questions=settings.num_questions
        )
        self.store = store or MockConsultationStore(delay_seconds=settings.save_delay_seconds)
        self._sessions: Dict[str, ConsultationState] = {}

    def start_session(self) -> ConsultationState:
        state = self.controller.start()
        state.session_id = str(uuid.uuid4())
        self._sessions[state.session_id] = state
        logger.info("Started consultation session %s", state.session_id)
        return state

    def get(self, session_id: str) -> ConsultationState:
        state = self._sessions.get(session_id)
        if state is None:
            raise SessionNotFoundError(session_id)
        return state

    def consent(self, session_id: str, agreed: bool) -> ConsultationState:
        return self.controller.consent(self.get(session_id), agreed)

    def restart(self, session_id: str) -> ConsultationState:
        return self.controller.restart(self.get(session_id))

    def update_patient_context(
        self,
        session_id: str,
        name: Optional[str] = None,
        dob: Optional[str] = None,
        gender: Optional[str] = None,
    ) -> ConsultationState:
        return self.controller.update_patient_context(
            self.get(session_id), name=name, dob=dob, gender=gender
        )

    def confirm_personal_info(self, session_id: str) -> ConsultationState:
        return self.controller.confirm_personal_info(self.get(session_id))

    def set_draft_answer(self, session_id: str, answer: str) -> ConsultationState:
        return self.controller.set_draft_answer(self.get(session_id), answer)

    def next_question(self, session_id: str, answer: Optional[str] = None) -> ConsultationState:
        """
        Optionally replace the draft, then move forward.
        If this enters the saving step, ``save`` must be awaited next;
        ``advance`` does both.
        """
        state = self.get(session_id)
        if answer is not None:
            self.controller.set_draft_answer(state, answer)
        return self.controller.next_question(state)

    async def advance(self, session_id: str, answer: Optional[str] = None) -> ConsultationState:
        """
        Like ``next_question``, but when the saving step is entered the save
        is awaited here, so the session comes back complete.
        """
        before = self.get(session_id).step
        state = self.next_question(session_id, answer=answer)
        if before == Step.MEDICAL_QUESTIONS and state.step == Step.SAVING:
            state = await self.save(session_id)
        return state

    def back(self, session_id: str) -> ConsultationState:
        return self.controller.back(self.get(session_id))

    async def save(self, session_id: str) -> ConsultationState:
        return await self.controller.save(self.get(session_id), self.store)

    def end_session(self, session_id: str) -> ConsultationState:
        """
        Drop a session from memory. Sessions are otherwise kept until the
        process exits; callers end them once the patient has left.
        """
        state = self._sessions.pop(session_id, None)
        if state is None:
            raise SessionNotFoundError(session_id)
        logger.info("Ended consultation session %s in step %s", session_id, state.step.value)
        return state
