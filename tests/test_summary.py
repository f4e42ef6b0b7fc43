from preconsult.intake.schema import PatientContext, QuestionResponse
from preconsult.intake.state import ConsultationState
from preconsult.intake.summary import NO_RESPONSE, build_summary, render_summary_text


def _state():
    state = ConsultationState(
        patient_context=PatientContext(name="Jo", dob="01/01/2000", gender="Male"),
        responses=[
            QuestionResponse(question="First?", answer="yes"),
            QuestionResponse(question="Second?", answer=""),
        ],
    )
    return state


def test_summary_numbers_items_and_fills_blanks():
    summary = build_summary(_state())
    assert [item.number for item in summary.items] == [1, 2]
    assert summary.items[0].answer == "yes"
    assert summary.items[1].answer == NO_RESPONSE
    assert summary.patient_context.name == "Jo"


def test_summary_text():
    text = render_summary_text(build_summary(_state()))
    assert text.splitlines() == [
        "Name: Jo",
        "DOB: 01/01/2000",
        "Gender: Male",
        "",
        "Medical Responses (2 Questions)",
        "Q1: First?",
        "  A: yes",
        "Q2: Second?",
        "  A: No response provided",
    ]
