"""Recurso `subscriber`.

Además de las operaciones genéricas soporta CREATEORUPDATE (upsert por email
/ ref, decidido por el servidor) y la resolución de las listas a las que el
suscriptor pertenece.
"""

from __future__ import annotations

from tmapi.adapters.resources.base import RecordResource, encode_body
from tmapi.adapters.resources.subscriber_list import SubscriberListResource
from tmapi.core.domain import command as verbs
from tmapi.core.domain.models import Subscriber, SubscriberList
from tmapi.core.interfaces.dispatcher import CommandDispatcher


class SubscriberResource(RecordResource[Subscriber]):
    model = Subscriber

    def __init__(self, dispatcher: CommandDispatcher, *, page_size: int = 100) -> None:
        super().__init__(dispatcher, page_size=page_size)
        self._lists = SubscriberListResource(dispatcher, page_size=page_size)

    def create_or_update(self, record: Subscriber) -> Subscriber:
        """Crea el suscriptor o actualiza el existente que coincida."""

        text = self._issue(verbs.CREATE_OR_UPDATE, body=encode_body(record.to_wire()))
        return self._first(text)

    def subscribed_lists(self, subscriber: Subscriber) -> list[SubscriberList]:
        return [self._lists.get(list_id) for list_id in subscriber.subscribed_list_ids()]

    def unsubscribed_lists(self, subscriber: Subscriber) -> list[SubscriberList]:
        return [self._lists.get(list_id) for list_id in subscriber.unsubscribed_list_ids()]
