import random

import pytest

from preconsult.config import Settings
from preconsult.intake.controller import ConsultationFlowController
from preconsult.intake.steps import Step
from preconsult.services import ConsultationSessionService, MockConsultationStore

VALID_PERSONAL_INFO = {"name": "Jo", "dob": "01/01/2000", "gender": "Male"}


@pytest.fixture
def controller():
    """Controller with the default pool and a seeded RNG."""
    return ConsultationFlowController(rng=random.Random(1234))


@pytest.fixture
def state(controller):
    return controller.start()


@pytest.fixture
def questions_state(controller, state):
    """Session already sitting on the first medical question."""
    controller.consent(state, True)
    controller.update_patient_context(state, **VALID_PERSONAL_INFO)
    controller.confirm_personal_info(state)
    assert state.step == Step.MEDICAL_QUESTIONS
    return state


@pytest.fixture
def store():
    """Store without simulated latency."""
    return MockConsultationStore(delay_seconds=0)


@pytest.fixture
def service(controller, store):
    return ConsultationSessionService(
        controller=controller,
        store=store,
        settings=Settings(NUM_QUESTIONS=5, SAVE_DELAY_SECONDS=0),
    )
