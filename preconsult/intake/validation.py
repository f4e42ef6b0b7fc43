# preconsult/intake/validation.py
from __future__ import annotations

import re

from preconsult.intake.errors import ValidationError
from preconsult.intake.schema import PatientContext

# Shape only: "31/02/9999" is accepted.
DOB_PATTERN = re.compile(r"[0-9]{2}/[0-9]{2}/[0-9]{4}")

NAME_REQUIRED = "Name is required."
GENDER_REQUIRED = "Gender is required. Please select an option."
DOB_FORMAT = "Date of Birth must be in DD/MM/YYYY format (e.g., 25/12/1990)."
ANSWER_REQUIRED = "Please provide an answer to continue."


def validate_personal_info(context: PatientContext) -> None:
    """
    Check the personal information fields in order: name, gender, dob.
    Raises ValidationError for the first rule that fails.
    """
    if not context.name.strip():
        raise ValidationError(NAME_REQUIRED)
    if not context.gender.strip():
        raise ValidationError(GENDER_REQUIRED)
    if not DOB_PATTERN.fullmatch(context.dob):
        raise ValidationError(DOB_FORMAT)


def validate_answer(answer: str) -> None:
    if not answer.strip():
        raise ValidationError(ANSWER_REQUIRED)
