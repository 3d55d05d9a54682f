"""
Проверка тела запроса по описанию полей ресурса.

Проверки выполняются в фиксированном порядке и останавливаются на первом
нарушении, поэтому одинаковый ввод всегда дает одинаковую ошибку:

1. неизвестный ключ (400);
2. отсутствует обязательное поле, только create (422);
3. поле нельзя изменять, только update (400);
4. числовое поле не является числом (422);
5. число не положительное (422);
6. строковое поле не является строкой (422);
7. строка с пробелами по краям (422);
8. строка короче минимума (422);
9. строка длиннее максимума (422).
"""
from typing import Any, Dict, List, Mapping

from .errors import (
    MissingFieldError,
    NotPositiveError,
    NotTrimmedError,
    NotUpdateableError,
    TooLongError,
    TooShortError,
    TypeMismatchError,
    UnknownFieldError,
)
from .fields import (
    FieldKind,
    FieldSpec,
    Operation,
    Resource,
    field_specs,
    required_fields_for,
    updateable_field_names,
    valid_field_names,
)


def _is_number(value: Any) -> bool:
    # bool наследуется от int, но числом в JSON не является
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _present(resource: Resource, payload: Mapping[str, Any], kind: FieldKind) -> List[FieldSpec]:
    return [spec for spec in field_specs(resource) if spec.kind is kind and spec.name in payload]


def validate_payload(
    resource: Resource, operation: Operation, payload: Mapping[str, Any]
) -> Dict[str, Any]:
    """
    Проверяет входные данные ресурса и возвращает их без изменений.

    Значения не приводятся к типам: числа, булевы значения и даты
    передаются дальше в том виде, в каком пришли. При нарушении
    выбрасывается подкласс ``FieldValidationError``.
    """
    valid = set(valid_field_names(resource))
    for key in payload:
        if key not in valid:
            raise UnknownFieldError(key)

    for name in required_fields_for(resource, operation):
        if name not in payload:
            raise MissingFieldError(name)

    if operation is Operation.UPDATE:
        updateable = set(updateable_field_names(resource))
        for key in payload:
            if key not in updateable:
                raise NotUpdateableError(key)

    numbers = _present(resource, payload, FieldKind.NUMBER)
    for spec in numbers:
        if not _is_number(payload[spec.name]):
            raise TypeMismatchError(spec.name, "number")
    for spec in numbers:
        if payload[spec.name] <= 0:
            raise NotPositiveError(spec.name)

    strings = _present(resource, payload, FieldKind.STRING)
    for spec in strings:
        if not isinstance(payload[spec.name], str):
            raise TypeMismatchError(spec.name, "string")
    for spec in strings:
        value = payload[spec.name]
        if value.strip() != value:
            raise NotTrimmedError(spec.name)

    sized = [spec for spec in strings if spec.size is not None]
    for spec in sized:
        if spec.size.min is not None and len(payload[spec.name]) < spec.size.min:
            raise TooShortError(spec.name, spec.size.min)
    for spec in sized:
        if spec.size.max is not None and len(payload[spec.name]) > spec.size.max:
            raise TooLongError(spec.name, spec.size.max)

    return dict(payload)
