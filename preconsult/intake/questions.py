# preconsult/intake/questions.py
from __future__ import annotations

import random
from typing import List, Optional, Sequence

from preconsult.intake.schema import PersonalQuestion, QuestionItem


NUM_QUESTIONS = 5

QUESTIONS_POOL: tuple[QuestionItem, ...] = (
    QuestionItem(id=1, text="Do you have any known allergies to medications, food, or environmental factors?"),
    QuestionItem(id=2, text="Please describe your main symptom and when it started."),
    QuestionItem(id=3, text="Have you experienced fever or chills in the last 48 hours?"),
    QuestionItem(id=4, text="Are you currently taking any prescription medications, over-the-counter drugs, or supplements?"),
    QuestionItem(id=5, text="Have you recently traveled outside the country or been in contact with anyone who has been sick?"),
    QuestionItem(id=6, text="On a scale of 1 to 10 (1 being minimal, 10 being severe), how would you rate your current pain level?"),
    QuestionItem(id=7, text="Do you have a history of chronic conditions like diabetes, high blood pressure, or heart disease?"),
    QuestionItem(id=8, text="Have you had any recent surgeries or hospitalizations?"),
    QuestionItem(id=9, text="Do you smoke or consume alcohol regularly?"),
    QuestionItem(id=10, text="Are you pregnant or is there any chance you might be?"),
)

# Fields shown on the personal information step, in display order.
PERSONAL_QUESTIONS: tuple[PersonalQuestion, ...] = (
    PersonalQuestion(label="What is your name?", key="name"),
    PersonalQuestion(
        label="What is your Date of birth (DD/MM/YYYY)?",
        key="dob",
        placeholder="e.g., 25/12/1990",
    ),
    PersonalQuestion(label="What is your gender?", key="gender", type="select"),
)

GENDER_OPTIONS: tuple[str, ...] = ("Male", "Female", "Prefer not to say")


def select_random_questions(
    pool: Sequence[QuestionItem],
    count: int,
    rng: Optional[random.Random] = None,
) -> List[QuestionItem]:
    """
    Pick ``count`` distinct questions from ``pool``.

    Shuffles a copy of the pool and takes the first ``count`` items. When
    ``count`` covers the whole pool, the pool is returned in its own order.
    """
    if count >= len(pool):
        return list(pool)

    shuffled = list(pool)
    (rng or random).shuffle(shuffled)
    return shuffled[:count]
