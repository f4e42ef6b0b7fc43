# preconsult/intake/__init__.py
from .steps import Step
from .schema import PatientContext, QuestionItem, QuestionResponse, ConsultationPayload
from .errors import ValidationError

__all__ = [
    "Step",
    "PatientContext",
    "QuestionItem",
    "QuestionResponse",
    "ConsultationPayload",
    "ValidationError",
]
