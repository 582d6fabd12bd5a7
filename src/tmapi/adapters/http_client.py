"""Wrapper de httpx: construcción y envío de comandos TaguchiMail.

Por qué un wrapper:
- Estandariza timeouts, headers, autenticación y el formato de URL del API.
- Facilita testeo: se puede sustituir el `httpx.Client` por uno con
  `MockTransport`.

Formato en el cable:

    https://{host}/admin/api/{org}/{resource}/{id?}?_method={VERB}&auth={user}|{pass}
        [&query={field}-{op}-{value}]*[&{param}={value}]*

Nota de seguridad:
- Las credenciales viajan en el query string (`auth=`) porque así lo exige el
  protocolo; además se envían por Basic Auth en la primera petición.
"""

from __future__ import annotations

import logging
import re
from urllib.parse import quote

import httpx

from tmapi.core.config import AppSettings
from tmapi.core.domain.command import CommandRequest
from tmapi.core.domain.connection import Connection
from tmapi.core.errors import ProtocolError, ResponseDecodeError

logger = logging.getLogger(__name__)

_AUTH_RE = re.compile(r"([?&]auth=)[^&]*")


def _escape(value: str) -> str:
    # Equivalente a un escape de "data string": solo quedan sin escapar A-Z a-z 0-9 - _ . ~
    return quote(value, safe="")


def redact_url(url: str) -> str:
    """Oculta el parámetro `auth` para poder loguear la URL."""

    return _AUTH_RE.sub(r"\1***", url)


def build_url(connection: Connection, request: CommandRequest) -> str:
    """Arma la URL completa de un comando. El orden de los parámetros es fijo.

    Los valores de `parameters` se concatenan sin escapar (las claves sí se escapan).
    """

    parts = [f"{connection.base_url}/{request.resource}/"]
    if request.record_id is not None:
        parts.append(str(request.record_id))
    parts.append("?_method=" + _escape(request.command))
    parts.append("&auth=" + _escape(connection.credentials))
    for predicate in request.predicates():
        parts.append("&query=" + _escape(predicate))
    for key, value in request.parameters.items():
        parts.append(f"&{_escape(key)}={value}")
    return "".join(parts)


def build_headers(settings: AppSettings, request: CommandRequest) -> dict[str, str]:
    headers: dict[str, str] = {
        "Accept": "application/json",
        "User-Agent": settings.user_agent,
    }
    if request.has_body:
        assert request.body is not None
        headers["Content-Type"] = "application/json"
        headers["Content-Length"] = str(len(request.body.encode("utf-8")))
    return headers


def build_client(settings: AppSettings | None = None) -> httpx.Client:
    """Crea un `httpx.Client` con defaults del API.

    Por qué un builder:
    - Centraliza timeout/headers para que todos los recursos se comporten igual.
    - Facilita testeo y futuras políticas (proxies, certificados).
    """

    settings = settings or AppSettings()
    return httpx.Client(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers={"User-Agent": settings.user_agent, "Accept": "application/json"},
    )


class HttpDispatcher:
    """Implementación de `CommandDispatcher` sobre httpx (síncrona).

    Una llamada a `dispatch` = una petición HTTP. Sin reintentos ni caché;
    cualquier fallo llega al llamador en el acto.
    """

    def __init__(
        self,
        connection: Connection,
        settings: AppSettings | None = None,
        *,
        client: httpx.Client | None = None,
    ) -> None:
        self._connection = connection
        self._settings = settings or AppSettings()
        self._owns_client = client is None
        self._client = client or build_client(self._settings)

    @property
    def connection(self) -> Connection:
        return self._connection

    @property
    def settings(self) -> AppSettings:
        return self._settings

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "HttpDispatcher":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def build_request(self, request: CommandRequest) -> httpx.Request:
        content = request.body.encode("utf-8") if request.has_body else None
        return self._client.build_request(
            request.http_method,
            build_url(self._connection, request),
            headers=build_headers(self._settings, request),
            content=content,
            timeout=httpx.Timeout(self._settings.http_timeout_seconds),
        )

    def dispatch(self, request: CommandRequest) -> str:
        http_request = self.build_request(request)
        logger.debug(
            "%s %s (command=%s, record_id=%s)",
            http_request.method,
            request.resource,
            request.command,
            request.record_id,
        )

        # Basic Auth preventivo: las credenciales van en la primera petición.
        auth = httpx.BasicAuth(
            self._connection.username,
            self._connection.password.get_secret_value(),
        )
        try:
            response = self._client.send(http_request, auth=auth)
        except httpx.TransportError as exc:
            logger.warning(
                "%s %s failed: %s (%s)",
                request.command,
                request.resource,
                exc.__class__.__name__,
                redact_url(str(http_request.url)),
            )
            raise

        if not response.is_success:
            body = response.content.decode("utf-8", errors="replace")
            logger.warning(
                "%s %s returned HTTP %s",
                request.command,
                request.resource,
                response.status_code,
            )
            raise ProtocolError(
                status_code=response.status_code,
                body=body,
                resource=request.resource,
                command=request.command,
            )

        try:
            return response.content.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ResponseDecodeError(resource=request.resource, command=request.command) from exc
