"""Recurso genérico: get / find / create / update sobre un tipo de registro.

Por qué una clase base genérica:
- Todos los recursos comparten el mismo contrato de request/respuesta; solo
  cambian el nombre del recurso y el modelo.
- Cada recurso recibe el dispatcher por constructor (nada global).
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import ValidationError

from tmapi.core.domain import command as verbs
from tmapi.core.domain.command import CommandRequest
from tmapi.core.domain.models import Record
from tmapi.core.domain.query import Predicate
from tmapi.core.errors import RecordNotFoundError, UnexpectedPayloadError
from tmapi.core.interfaces.dispatcher import CommandDispatcher

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=Record)

QueryLike = Sequence[str | Predicate]


def encode_body(payload: Mapping[str, Any]) -> str:
    """Body estándar: un array JSON con exactamente un objeto."""

    return json.dumps([dict(payload)], ensure_ascii=False)


def parse_records(text: str) -> list[dict[str, Any]]:
    """Decodifica la respuesta: se espera un array JSON de objetos."""

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise UnexpectedPayloadError(f"response is not JSON: {exc}") from exc
    if not isinstance(payload, list) or not all(isinstance(item, dict) for item in payload):
        raise UnexpectedPayloadError("response is not a JSON array of objects")
    return payload


def page_parameters(sort: str, order: str, offset: int, limit: int) -> dict[str, str]:
    if order not in ("asc", "desc"):
        raise ValueError("order must be 'asc' or 'desc'")
    if offset < 0:
        raise ValueError("offset must be >= 0")
    if limit <= 0:
        raise ValueError("limit must be > 0")
    return {"sort": sort, "order": order, "offset": str(offset), "limit": str(limit)}


class RecordResource(Generic[RecordT]):
    """Acceso a un recurso remoto con registros de tipo `RecordT`."""

    model: ClassVar[type[Record]] = Record
    find_parameters: ClassVar[Mapping[str, str]] = {}

    def __init__(self, dispatcher: CommandDispatcher, *, page_size: int = 100) -> None:
        self._dispatcher = dispatcher
        self._page_size = page_size

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def resource_type(self) -> str:
        return self.model.resource_type

    def _issue(
        self,
        command: str,
        *,
        record_id: str | None = None,
        body: str | None = None,
        parameters: Mapping[str, str] | None = None,
        query: QueryLike | None = None,
    ) -> str:
        request = CommandRequest(
            resource=self.resource_type,
            command=command,
            record_id=record_id,
            body=body,
            parameters=dict(parameters or {}),
            query=tuple(query or ()),
        )
        return self._dispatcher.dispatch(request)

    def _load(self, data: dict[str, Any]) -> RecordT:
        try:
            return self.model.model_validate(data)  # type: ignore[return-value]
        except ValidationError as exc:
            raise UnexpectedPayloadError(f"invalid {self.resource_type} record: {exc}") from exc

    def _first(self, text: str, record_id: str | None = None) -> RecordT:
        records = parse_records(text)
        if not records:
            raise RecordNotFoundError(self.resource_type, record_id)
        return self._load(records[0])

    def get(self, record_id: str | int, parameters: Mapping[str, str] | None = None) -> RecordT:
        """Obtiene un registro por su ID."""

        rid = str(record_id)
        text = self._issue(verbs.GET, record_id=rid, parameters=parameters)
        return self._first(text, rid)

    def find(
        self,
        *,
        sort: str = "id",
        order: str = "asc",
        offset: int = 0,
        limit: int | None = None,
        query: QueryLike | None = None,
    ) -> list[RecordT]:
        """Lista registros filtrados por predicados (`field-operator-value`).

        Sin `limit` se usa el tamaño de página del recurso.
        """

        parameters = dict(self.find_parameters)
        parameters.update(page_parameters(sort, order, offset, self._page_size if limit is None else limit))
        text = self._issue(verbs.GET, parameters=parameters, query=query)
        records = [self._load(item) for item in parse_records(text)]
        logger.debug("find %s returned %d records", self.resource_type, len(records))
        return records

    def create(self, record: RecordT) -> RecordT:
        """Crea el registro (POST) y devuelve la versión del servidor."""

        text = self._issue(verbs.POST, body=encode_body(record.to_wire()))
        return self._first(text)

    def update(self, record: RecordT) -> RecordT:
        """Guarda cambios de un registro existente (PUT)."""

        if record.record_id is None:
            raise ValueError(f"cannot update {self.resource_type} without id")
        text = self._issue(verbs.PUT, record_id=record.record_id, body=encode_body(record.to_wire()))
        return self._first(text, record.record_id)

    def send_command(self, command: str, record: Record, payload: Mapping[str, Any]) -> str:
        """Comando propio del recurso (TRIGGER, QUEUE, ...) sobre un registro.

        Devuelve el texto crudo de la respuesta; su semántica es del servidor.
        """

        if record.record_id is None:
            raise ValueError(f"{command} requires a saved {self.resource_type}")
        return self._issue(command, record_id=record.record_id, body=encode_body(payload))
