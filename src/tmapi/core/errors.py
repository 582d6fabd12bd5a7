"""Errores del cliente.

Por qué una jerarquía propia:
- Permite distinguir "no encontrado" de "validación" o "error del servidor"
  sin inspeccionar excepciones de httpx.
- Los errores de transporte (DNS, conexión, timeout) NO se traducen: httpx
  los propaga tal cual.
"""

from __future__ import annotations


class TMAPIError(Exception):
    """Base de todos los errores propios del cliente."""


class ProtocolError(TMAPIError):
    """El servidor respondió con un status no exitoso (no 2xx)."""

    def __init__(
        self,
        *,
        status_code: int,
        body: str,
        resource: str,
        command: str,
    ) -> None:
        self.status_code = status_code
        self.body = body
        self.resource = resource
        self.command = command
        super().__init__(f"{command} {resource} failed with HTTP {status_code}: {body[:200]}")


class ResponseDecodeError(TMAPIError):
    """El cuerpo de la respuesta no es UTF-8 válido."""

    def __init__(self, *, resource: str, command: str) -> None:
        self.resource = resource
        self.command = command
        super().__init__(f"{command} {resource}: response body is not valid UTF-8")


class UnexpectedPayloadError(TMAPIError):
    """La respuesta no es un array JSON de objetos."""


class RecordNotFoundError(TMAPIError):
    """Una operación de un único registro devolvió un array vacío."""

    def __init__(self, resource: str, record_id: str | None = None) -> None:
        self.resource = resource
        self.record_id = record_id
        if record_id is None:
            super().__init__(f"{resource}: server response contained no record")
        else:
            super().__init__(f"{resource} {record_id} not found")
