# preconsult/services/__init__.py
from .store import ConsultationStore, MockConsultationStore
from .consultation_session import ConsultationSessionService, SessionNotFoundError

__all__ = [
    "ConsultationStore",
    "MockConsultationStore",
    "ConsultationSessionService",
    "SessionNotFoundError",
]
