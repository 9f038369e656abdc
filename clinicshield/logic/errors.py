"""Domain errors raised by the questionnaire handlers.

Each error carries the HTTP status and stable problem code it maps to, so
routes never hardcode numbers or strings when surfacing failures.
"""

from __future__ import annotations


class QuestionnaireError(Exception):
    status = 400
    code = "QUESTIONNAIRE_ERROR"
    title = "Bad Request"

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class NotAuthenticatedError(QuestionnaireError):
    status = 401
    code = "AUTH_REQUIRED"
    title = "Unauthorized"

    def __init__(self, detail: str = "Not authenticated") -> None:
        super().__init__(detail)


class ForbiddenError(QuestionnaireError):
    status = 403
    code = "FORBIDDEN"
    title = "Forbidden"

    def __init__(self, detail: str = "Forbidden") -> None:
        super().__init__(detail)


class NotFoundError(QuestionnaireError):
    status = 404
    code = "RESOURCE_NOT_FOUND"
    title = "Not Found"


class AnswerValidationError(QuestionnaireError):
    status = 422
    code = "ANSWER_VALUE_REQUIRED"
    title = "Unprocessable Entity"


class UnsupportedInputTypeError(QuestionnaireError):
    status = 422
    code = "INPUT_TYPE_UNSUPPORTED"
    title = "Unprocessable Entity"

    def __init__(self, input_type: str) -> None:
        super().__init__(f'Input type "{input_type}" is not supported')
        self.input_type = input_type


__all__ = [
    "QuestionnaireError",
    "NotAuthenticatedError",
    "ForbiddenError",
    "NotFoundError",
    "AnswerValidationError",
    "UnsupportedInputTypeError",
]
