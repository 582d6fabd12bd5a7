"""Sesión de cliente: un dispatcher + los recursos enlazados a él.

Ejemplo:

    with TMAPIClient.from_settings(AppSettings()) as tm:
        lists = tm.lists.find(limit=10)
        sub = tm.subscribers.find(query=[eq("email", "a@b.com")], limit=1)[0]
"""

from __future__ import annotations

import httpx

from tmapi.adapters.http_client import HttpDispatcher
from tmapi.adapters.resources import (
    ActivityResource,
    CampaignResource,
    RecordResource,
    SubscriberListResource,
    SubscriberResource,
    TemplateResource,
)
from tmapi.core.config import AppSettings
from tmapi.core.domain.connection import Connection


class TMAPIClient:
    """Punto de entrada: agrupa los recursos sobre una única conexión."""

    def __init__(
        self,
        connection: Connection,
        settings: AppSettings | None = None,
        *,
        client: httpx.Client | None = None,
    ) -> None:
        self.dispatcher = HttpDispatcher(connection, settings, client=client)
        page_size = self.dispatcher.settings.default_page_size
        self.subscribers = SubscriberResource(self.dispatcher, page_size=page_size)
        self.lists = SubscriberListResource(self.dispatcher, page_size=page_size)
        self.campaigns = CampaignResource(self.dispatcher, page_size=page_size)
        self.activities = ActivityResource(self.dispatcher, page_size=page_size)
        self.templates = TemplateResource(self.dispatcher, page_size=page_size)

    @classmethod
    def from_settings(cls, settings: AppSettings, *, client: httpx.Client | None = None) -> "TMAPIClient":
        return cls(Connection.from_settings(settings), settings, client=client)

    @property
    def connection(self) -> Connection:
        return self.dispatcher.connection

    def resource(self, name: str) -> RecordResource:
        """Recurso por nombre de API (`subscriber`, `list`, ...)."""

        for res in (self.subscribers, self.lists, self.campaigns, self.activities, self.templates):
            if res.resource_type == name:
                return res
        raise KeyError(name)

    def close(self) -> None:
        self.dispatcher.close()

    def __enter__(self) -> "TMAPIClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
