"""Predicados de consulta (`field-operator-value`).

El servidor traduce cada predicado a SQL:

- eq / neq: `=` / `!=` (case-sensitive para strings)
- lt / gt / lte / gte: comparaciones de orden
- re / rei: regex POSIX de PostgreSQL (`~` / `~*`)
- like: `LIKE` (case-sensitive)
- is / nt: `IS` / `IS NOT`, necesarios para NULL (`field-eq-null` siempre es falso)

Nota:
- Los guiones dentro de `value` no se escapan; el protocolo no lo permite.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Operator(str, Enum):
    """Operadores conocidos por el servidor."""

    EQ = "eq"
    NEQ = "neq"
    LT = "lt"
    GT = "gt"
    LTE = "lte"
    GTE = "gte"
    RE = "re"
    REI = "rei"
    LIKE = "like"
    IS = "is"
    NT = "nt"


def _render(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def encode(field: str, operator: Operator | str, value: Any) -> str:
    """Serializa un predicado como `field-operator-value`.

    Operadores desconocidos se reenvían sin validar: la validación es del servidor.
    """

    return f"{field}-{_render(operator)}-{_render(value)}"


@dataclass(frozen=True)
class Predicate:
    field: str
    operator: Operator | str
    value: Any

    def encode(self) -> str:
        return encode(self.field, self.operator, self.value)

    def __str__(self) -> str:
        return self.encode()


def eq(field: str, value: Any) -> Predicate:
    return Predicate(field, Operator.EQ, value)


def is_null(field: str) -> Predicate:
    return Predicate(field, Operator.IS, None)


def not_null(field: str) -> Predicate:
    return Predicate(field, Operator.NT, None)
