"""Petición de comando: el valor transitorio que se traduce a una llamada HTTP."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from tmapi.core.domain.query import Predicate

# Verbos usados por la capa de recursos. Cualquier otro string es válido.
GET = "GET"
PUT = "PUT"
POST = "POST"
CREATE_OR_UPDATE = "CREATEORUPDATE"
TRIGGER = "TRIGGER"
QUEUE = "QUEUE"
APPROVE = "APPROVE"
PROOF = "PROOF"
APPROVAL = "APPROVAL"


@dataclass(frozen=True)
class CommandRequest:
    """Parámetros de un único comando sobre un recurso."""

    resource: str
    command: str
    record_id: str | None = None
    body: str | None = None
    parameters: Mapping[str, str] = field(default_factory=dict)
    query: Sequence[str | Predicate] = ()

    @property
    def http_method(self) -> str:
        # Comparación literal: cualquier verbo distinto de "GET" viaja por POST.
        return "GET" if self.command == GET else "POST"

    @property
    def has_body(self) -> bool:
        return bool(self.body)

    def predicates(self) -> list[str]:
        return [p.encode() if isinstance(p, Predicate) else p for p in self.query]
