# preconsult/intake/errors.py


class ValidationError(ValueError):
    """
    Raised by the intake guards when user input blocks a transition.

    The controller catches it and copies the message into
    ConsultationState.error_message; it is never meant to reach callers.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
