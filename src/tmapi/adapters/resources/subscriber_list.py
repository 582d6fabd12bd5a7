"""Recurso `list` (listas de suscriptores)."""

from __future__ import annotations

from tmapi.adapters.resources.base import RecordResource
from tmapi.core.domain.models import Subscriber, SubscriberList
from tmapi.core.domain.query import eq


class SubscriberListResource(RecordResource[SubscriberList]):
    model = SubscriberList

    def subscribers(
        self,
        subscriber_list: SubscriberList,
        *,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[Subscriber]:
        """Suscriptores de la lista, ordenados por id ascendente."""

        # Import diferido: subscriber.py importa este módulo.
        from tmapi.adapters.resources.subscriber import SubscriberResource

        if subscriber_list.record_id is None:
            raise ValueError("subscriber list has no id")
        return SubscriberResource(self._dispatcher, page_size=self._page_size).find(
            sort="id",
            order="asc",
            offset=offset,
            limit=limit,
            query=[eq("list_id", subscriber_list.record_id)],
        )

    @staticmethod
    def subscribe_subscriber(
        subscriber_list: SubscriberList,
        subscriber: Subscriber,
        option: str | None = None,
    ) -> None:
        """Cambio local; persiste al guardar el suscriptor."""

        subscriber.subscribe_to_list(subscriber_list, option)

    @staticmethod
    def unsubscribe_subscriber(subscriber_list: SubscriberList, subscriber: Subscriber) -> None:
        subscriber.unsubscribe_from_list(subscriber_list)
