# preconsult/intake/steps.py
from enum import Enum


class Step(str, Enum):
    CONSENT = "consent"
    PERSONAL_INFO = "personal_info"
    MEDICAL_QUESTIONS = "medical_questions"
    SAVING = "saving"
    COMPLETE = "complete"
    DENIED = "denied"
