"""Contrato del dispatcher de comandos.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite que la capa de recursos sea testeable con un dispatcher en memoria
  sin acoplarse a httpx.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from tmapi.core.domain.command import CommandRequest


@runtime_checkable
class CommandDispatcher(Protocol):
    """Contrato mínimo: un comando entra, el texto de la respuesta sale.

    Reglas de diseño:
    - `dispatch` es síncrono y emite exactamente una petición HTTP.
    - Devuelve el cuerpo sin decodificar el JSON.
    """

    def dispatch(self, request: CommandRequest) -> str:
        """Ejecuta el comando y devuelve el cuerpo de la respuesta (UTF-8)."""

        ...
