"""Типы ошибок приложения и их отображение в HTTP-ответы."""
from typing import Any, Dict


class ApiError(Exception):
    """Ошибка, которая напрямую превращается в тело ответа ``{status, message}``."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        if status_code is not None:
            self.status_code = status_code
        self.message = message
        super().__init__(message)

    def payload(self) -> Dict[str, Any]:
        return {"status": self.status_code, "message": self.message}


class FieldValidationError(ApiError):
    """
    Ошибка проверки тела запроса.

    За один проход валидации выбрасывается ровно одна такая ошибка,
    ``kind`` совпадает с названием нарушенной проверки.
    """

    status_code = 422
    kind: str = "Invalid"

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message)


class UnknownFieldError(FieldValidationError):
    status_code = 400
    kind = "UnknownField"

    def __init__(self, field: str) -> None:
        super().__init__(field, f"{field} is not a valid field.")


class MissingFieldError(FieldValidationError):
    kind = "MissingField"

    def __init__(self, field: str) -> None:
        super().__init__(field, f"Missing '{field}' in request body.")


class NotUpdateableError(FieldValidationError):
    status_code = 400
    kind = "NotUpdateable"

    def __init__(self, field: str) -> None:
        super().__init__(field, f"'{field}' is not an updateable field.")


class TypeMismatchError(FieldValidationError):
    kind = "TypeMismatch"

    def __init__(self, field: str, expected: str) -> None:
        self.expected = expected
        super().__init__(field, f"Field: '{field}' must be a {expected}.")


class NotPositiveError(FieldValidationError):
    kind = "NotPositive"

    def __init__(self, field: str) -> None:
        super().__init__(field, f"Field: '{field}' must be a positive number.")


class NotTrimmedError(FieldValidationError):
    kind = "NotTrimmed"

    def __init__(self, field: str) -> None:
        super().__init__(field, f"Field: '{field}' cannot start or end with a whitespace.")


class TooShortError(FieldValidationError):
    kind = "TooShort"

    def __init__(self, field: str, min_length: int) -> None:
        self.min = min_length
        unit = "character" if min_length == 1 else "characters"
        super().__init__(field, f"Field: '{field}' must be at least {min_length} {unit} long.")


class TooLongError(FieldValidationError):
    kind = "TooLong"

    def __init__(self, field: str, max_length: int) -> None:
        self.max = max_length
        super().__init__(field, f"Field: '{field}' must be at most {max_length} characters long.")


class InvalidDatetimeError(FieldValidationError):
    kind = "InvalidDatetime"

    def __init__(self, field: str) -> None:
        super().__init__(field, f"Field: '{field}' must be a valid date.")


class AuthenticationError(ApiError):
    """
    Любой отказ в аутентификации.

    Клиент всегда получает одинаковый ответ 401, внутренняя причина
    отказа пишется только в лог.
    """

    status_code = 401
    name = "AuthenticationError"

    def __init__(self) -> None:
        super().__init__("Unauthorized")

    def payload(self) -> Dict[str, Any]:
        return {"status": self.status_code, "message": self.message, "name": self.name}


class InvalidCredentialsError(AuthenticationError):
    """Неверная пара логин/пароль."""


class UnauthorizedError(AuthenticationError):
    """Отсутствующий, поддельный или истекший токен либо удаленный аккаунт."""


class ResourceNotFoundError(ApiError):
    status_code = 404

    def __init__(self, resource: str, resource_id: int) -> None:
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"Could not find {resource} with {resource}_id: {resource_id}.")


class DuplicateAccountError(ApiError):
    status_code = 400

    def __init__(self) -> None:
        super().__init__("The username or email already exists.")
