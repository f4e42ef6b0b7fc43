# preconsult/intake/controller.py
from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, Optional, Sequence

from preconsult.intake.errors import ValidationError
from preconsult.intake.questions import NUM_QUESTIONS, QUESTIONS_POOL, select_random_questions
from preconsult.intake.schema import (
    ConsultationPayload,
    PatientContext,
    QuestionItem,
    QuestionResponse,
)
from preconsult.intake.state import ConsultationState
from preconsult.intake.steps import Step
from preconsult.intake.validation import validate_answer, validate_personal_info

if TYPE_CHECKING:
    from preconsult.services.store import ConsultationStore

logger = logging.getLogger(__name__)


class ConsultationFlowController:
    """
    ConsultationFlowController drives a pre-consultation session through its steps:

      consent -> personal info -> medical questions -> saving -> complete
                 (or consent -> denied -> consent)

    The controller owns the transition rules; the session data lives in a
    ConsultationState that the controller mutates in place and returns.
    Validation failures never escape: they block the transition and land in
    ``state.error_message``.

    Events sent in a step that does not accept them are ignored.
    """

    def __init__(
        self,
        question_pool: Sequence[QuestionItem] = QUESTIONS_POOL,
        num_questions: int = NUM_QUESTIONS,
        rng: Optional[random.Random] = None,
    ):
        if num_questions <= 0:
            raise ValueError("num_questions must be a positive integer")
        self.question_pool = tuple(question_pool)
        if not self.question_pool:
            raise ValueError("question_pool must not be empty")
        self.num_questions = num_questions
        self.rng = rng

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def start(self) -> ConsultationState:
        """
        Create a fresh session at the consent step with its questions drawn.
        """
        questions = select_random_questions(self.question_pool, self.num_questions, self.rng)
        state = ConsultationState.for_questions(questions)
        logger.debug("Started consultation with question ids %s", [q.id for q in questions])
        return state

    def consent(self, state: ConsultationState, agreed: bool) -> ConsultationState:
        if not self._accepts(state, "consent", Step.CONSENT):
            return state

        self._move_to(state, Step.PERSONAL_INFO if agreed else Step.DENIED)
        return state

    def restart(self, state: ConsultationState) -> ConsultationState:
        """
        Go back to consent from the denied step with everything but the
        question draw reset.
        """
        if not self._accepts(state, "restart", Step.DENIED):
            return state

        state.patient_context = PatientContext()
        state.responses = [
            QuestionResponse(question=q.text, answer="") for q in state.selected_questions
        ]
        state.current_question_index = 0
        state.draft_answer = ""
        self._move_to(state, Step.CONSENT)
        return state

    def update_patient_context(
        self,
        state: ConsultationState,
        name: Optional[str] = None,
        dob: Optional[str] = None,
        gender: Optional[str] = None,
    ) -> ConsultationState:
        if not self._accepts(state, "update_patient_context", Step.PERSONAL_INFO):
            return state

        changes = {
            key: value
            for key, value in (("name", name), ("dob", dob), ("gender", gender))
            if value is not None
        }
        state.patient_context = state.patient_context.model_copy(update=changes)
        return state

    def confirm_personal_info(self, state: ConsultationState) -> ConsultationState:
        if not self._accepts(state, "confirm_personal_info", Step.PERSONAL_INFO):
            return state

        try:
            validate_personal_info(state.patient_context)
        except ValidationError as exc:
            state.error_message = exc.message
            return state

        self._move_to(state, Step.MEDICAL_QUESTIONS)
        self._enter_question(state, 0)
        return state

    def set_draft_answer(self, state: ConsultationState, answer: str) -> ConsultationState:
        if not self._accepts(state, "set_draft_answer", Step.MEDICAL_QUESTIONS):
            return state

        state.draft_answer = answer
        return state

    def next_question(self, state: ConsultationState) -> ConsultationState:
        """
        Commit the draft and move forward. The draft must not be blank.
        From the last question this enters the saving step; the caller is
        responsible for running ``save`` afterwards.
        """
        if not self._accepts(state, "next_question", Step.MEDICAL_QUESTIONS):
            return state

        try:
            validate_answer(state.draft_answer)
        except ValidationError as exc:
            state.error_message = exc.message
            return state

        self._commit_draft(state)

        if state.is_last_question:
            self._move_to(state, Step.SAVING)
            return state

        self._enter_question(state, state.current_question_index + 1)
        return state

    def back(self, state: ConsultationState) -> ConsultationState:
        if state.step == Step.PERSONAL_INFO:
            self._move_to(state, Step.CONSENT)
            return state

        if not self._accepts(state, "back", Step.MEDICAL_QUESTIONS):
            return state

        # No validation when going backwards; whatever was typed is kept
        self._commit_draft(state)

        if state.current_question_index > 0:
            self._enter_question(state, state.current_question_index - 1)
        else:
            self._move_to(state, Step.PERSONAL_INFO)
        return state

    def build_payload(self, state: ConsultationState) -> ConsultationPayload:
        """
        Payload for the persistence boundary. Every answer is trimmed and the
        draft for the active question wins over its committed value.
        """
        responses = [
            QuestionResponse(
                question=response.question,
                answer=(
                    state.draft_answer if index == state.current_question_index else response.answer
                ).strip(),
            )
            for index, response in enumerate(state.responses)
        ]
        return ConsultationPayload(
            patient_context=state.patient_context.model_copy(),
            user_responses=responses,
        )

    async def save(self, state: ConsultationState, store: ConsultationStore) -> ConsultationState:
        """
        Write the payload and complete the session.

        Only runs once per session: outside the saving step, or with a save
        already in flight, it returns the state untouched.
        """
        if state.step != Step.SAVING or state.is_saving:
            logger.warning(
                "Ignoring save for session %s (step=%s, is_saving=%s)",
                state.session_id,
                state.step.value,
                state.is_saving,
            )
            return state

        state.is_saving = True
        payload = self.build_payload(state)

        await store.write(payload)

        state.saved_payload = payload
        state.responses = [response.model_copy() for response in payload.user_responses]
        state.is_saving = False
        self._move_to(state, Step.COMPLETE)
        return state

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _accepts(self, state: ConsultationState, event: str, *steps: Step) -> bool:
        if state.step in steps:
            return True
        logger.warning(
            "Ignoring %s for session %s in step %s",
            event,
            state.session_id,
            state.step.value,
        )
        return False

    def _move_to(self, state: ConsultationState, step: Step) -> None:
        logger.info(
            "Session %s: %s -> %s", state.session_id, state.step.value, step.value
        )
        state.step = step
        state.error_message = None

    def _enter_question(self, state: ConsultationState, index: int) -> None:
        """
        Show the question at ``index``: reload its committed answer into the
        draft and clear any error.
        """
        state.current_question_index = index
        response = state.responses[index] if index < len(state.responses) else None
        state.draft_answer = response.answer if response is not None else ""
        state.error_message = None

    def _commit_draft(self, state: ConsultationState) -> None:
        index = state.current_question_index
        state.responses[index] = state.responses[index].model_copy(
            update={"answer": state.draft_answer}
        )
