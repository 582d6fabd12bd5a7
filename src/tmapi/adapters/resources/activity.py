"""Recurso `activity`: envíos con workflow de aprobación.

Comandos propios (todos viajan por POST con un body de un único objeto):
- PROOF: envía una prueba a una lista.
- APPROVAL: solicita aprobación a una lista.
- APPROVE: aprueba la última revisión para un target y fecha.
- QUEUE: encola el envío con un throttle.
- TRIGGER: envío transaccional a suscriptores concretos o a una expresión.

Lo que cada comando hace en el servidor es opaco para el cliente.
"""

from __future__ import annotations

from collections.abc import Sequence

from tmapi.adapters.resources.revisioned import LATEST_REVISIONS, RevisionedResource
from tmapi.core.domain import command as verbs
from tmapi.core.domain.models import Activity, ListRef, RecordId, Subscriber, list_id_of

SubscriberRef = RecordId | Subscriber


def _subscriber_id(value: SubscriberRef) -> str:
    if isinstance(value, Subscriber):
        if value.record_id is None:
            raise ValueError("subscriber has no id")
        return value.record_id
    return str(value)


class ActivityResource(RevisionedResource[Activity]):
    model = Activity
    find_parameters = LATEST_REVISIONS

    def proof(
        self,
        activity: Activity,
        proof_list: ListRef,
        subject_tag: str | None = None,
        custom_message: str | None = None,
    ) -> str:
        payload = {
            "id": activity.record_id,
            "list_id": list_id_of(proof_list),
            "tag": subject_tag,
            "message": custom_message,
        }
        return self.send_command(verbs.PROOF, activity, payload)

    def request_approval(
        self,
        activity: Activity,
        approval_list: ListRef,
        subject_tag: str | None = None,
        custom_message: str | None = None,
    ) -> str:
        payload = {
            "id": activity.record_id,
            "list_id": list_id_of(approval_list),
            "tag": subject_tag,
            "message": custom_message,
        }
        return self.send_command(verbs.APPROVAL, activity, payload)

    def approve(self, activity: Activity) -> str:
        """Aprueba la última revisión con el target y la fecha actuales."""

        revision = activity.latest_revision
        if revision is None or revision.record_id is None:
            raise ValueError("activity has no saved revision to approve")
        payload = {
            "revision.id": revision.record_id,
            "target_expression": activity.target_expression,
            "date": activity.deploy_datetime,
        }
        return self.send_command(verbs.APPROVE, activity, payload)

    def queue(self, activity: Activity, throttle: int) -> str:
        return self.send_command(verbs.QUEUE, activity, {"throttle": throttle, "method": "queue"})

    def trigger(
        self,
        activity: Activity,
        subscribers: Sequence[SubscriberRef] | None = None,
        *,
        expression: str | None = None,
        request_content: str | None = None,
        test: bool = False,
    ) -> str:
        """Dispara el envío a una lista de suscriptores o a una expresión de target.

        Exactamente uno de `subscribers` / `expression` debe indicarse.
        """

        if (subscribers is None) == (expression is None):
            raise ValueError("pass either subscribers or expression")
        conditions: list[str] | dict[str, str]
        if expression is not None:
            conditions = {"expression": expression}
        else:
            assert subscribers is not None
            conditions = [_subscriber_id(s) for s in subscribers]
        payload = {
            "id": activity.record_id,
            "test": 1 if test else 0,
            "request_content": request_content,
            "conditions": conditions,
        }
        return self.send_command(verbs.TRIGGER, activity, payload)
