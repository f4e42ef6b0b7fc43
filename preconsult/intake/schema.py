# preconsult/intake/schema.py
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class PatientContext(BaseModel):
    name: str = ""
    dob: str = Field("", description="Date of birth as DD/MM/YYYY")
    gender: str = ""


class QuestionItem(BaseModel):
    id: int
    text: str

    model_config = ConfigDict(frozen=True)


class QuestionResponse(BaseModel):
    question: str
    answer: str = ""


class PersonalQuestion(BaseModel):
    label: str
    key: Literal["name", "dob", "gender"]
    type: Literal["text", "select"] = "text"
    placeholder: Optional[str] = None


class ConsultationPayload(BaseModel):
    """
    What gets handed to the persistence boundary when a consultation is saved.

    Serialised with ``model_dump(by_alias=True)`` to match the wire shape:

      {"patientContext": {...}, "userResponses": [{"question": ..., "answer": ...}]}
    """

    patient_context: PatientContext = Field(..., alias="patientContext")
    user_responses: List[QuestionResponse] = Field(
        default_factory=list, alias="userResponses"
    )

    model_config = ConfigDict(populate_by_name=True)
