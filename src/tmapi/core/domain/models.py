"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Cada recurso tiene un set de campos explícito en lugar de un documento JSON
  mutable compartido.
- Los campos desconocidos se conservan (`extra="allow"`) y vuelven al servidor
  al guardar, así una versión nueva del API no pierde datos.

Nota:
- Estos modelos describen *qué* es un registro, no *cómo* se obtiene.
- Al serializar solo viajan los campos cargados o asignados (`exclude_unset`).
"""

from __future__ import annotations

from abc import abstractmethod
from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, Field, PrivateAttr
from pydantic.config import ConfigDict

RecordId = int | str


def _as_str(value: RecordId | None) -> str | None:
    return None if value is None else str(value)


class Record(BaseModel):
    """Base de todos los registros TaguchiMail."""

    model_config = ConfigDict(extra="allow", populate_by_name=True, coerce_numbers_to_str=True)

    resource_type: ClassVar[str] = ""

    id: RecordId | None = Field(
        default=None,
        description="Identificador único asignado por el servidor.",
    )
    ref: str | None = Field(
        default=None,
        description="Referencia externa definida por el usuario.",
    )

    @property
    def record_id(self) -> str | None:
        return _as_str(self.id)

    def to_wire(self) -> dict[str, Any]:
        """Objeto JSON que se envía dentro del array del body."""

        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class CustomField(BaseModel):
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    field: str
    data: str | None = None


class ListSubscription(BaseModel):
    """Estado de un suscriptor en una lista concreta.

    `unsubscribed` es None mientras la suscripción está activa; el servidor
    devuelve la fecha de baja y el cliente envía `true` para solicitarla.
    """

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    list_id: RecordId
    option: str | None = None
    unsubscribed: str | bool | None = None

    @property
    def is_active(self) -> bool:
        return self.unsubscribed is None


class SubscriberList(Record):
    resource_type: ClassVar[str] = "list"

    name: str | None = None
    type: str | None = None
    creation_datetime: str | None = Field(
        default=None,
        alias="timestamp",
        description="Fecha de creación (solo lectura).",
    )
    xml_data: str | None = Field(default=None, alias="data")
    status: str | None = None


ListRef = RecordId | SubscriberList


def list_id_of(value: ListRef) -> str:
    if isinstance(value, SubscriberList):
        if value.record_id is None:
            raise ValueError("subscriber list has no id")
        return value.record_id
    return str(value)


def _wire_list_id(list_id: str) -> RecordId:
    return int(list_id) if list_id.isdigit() else list_id


class Subscriber(Record):
    """Suscriptor: datos personales + custom fields + suscripciones a listas."""

    resource_type: ClassVar[str] = "subscriber"

    title: str | None = None
    first_name: str | None = Field(default=None, alias="firstname")
    last_name: str | None = Field(default=None, alias="lastname")
    notifications: str | None = None
    extra: str | None = None
    phone: str | None = None
    dob: str | None = Field(default=None, description="Fecha de nacimiento ISO8601.")
    address: str | None = None
    address2: str | None = None
    address3: str | None = None
    suburb: str | None = None
    state: str | None = None
    country: str | None = None
    postcode: str | None = None
    gender: str | None = None
    email: str | None = None
    social_rating: int | None = Field(default=None, description="Solo lectura.")
    social_profile: str | None = Field(default=None, description="Solo lectura.")
    unsubscribe_datetime: str | None = Field(default=None, alias="unsubscribed")
    bounce_datetime: str | None = Field(default=None, alias="bounced")
    xml_data: str | None = Field(default=None, alias="data")
    custom_fields: list[CustomField] = Field(default_factory=list)
    lists: list[ListSubscription] = Field(default_factory=list)

    def get_custom_field(self, field: str) -> str | None:
        for item in self.custom_fields:
            if item.field == field:
                return item.data
        return None

    def set_custom_field(self, field: str, data: str | None) -> None:
        fields = list(self.custom_fields)
        for item in fields:
            if item.field == field:
                item.data = data
                break
        else:
            fields.append(CustomField(field=field, data=data))
        # Reasignar marca el campo como "set" y lo incluye al serializar.
        self.custom_fields = fields

    def _find_subscription(self, list_ref: ListRef) -> ListSubscription | None:
        key = list_id_of(list_ref)
        for item in self.lists:
            if str(item.list_id) == key:
                return item
        return None

    def is_subscribed_to_list(self, list_ref: ListRef) -> bool:
        item = self._find_subscription(list_ref)
        return item is not None and item.is_active

    def is_unsubscribed_from_list(self, list_ref: ListRef) -> bool:
        item = self._find_subscription(list_ref)
        return item is not None and not item.is_active

    def get_subscription_option(self, list_ref: ListRef) -> str | None:
        item = self._find_subscription(list_ref)
        return item.option if item is not None else None

    def subscribed_list_ids(self) -> list[str]:
        return [str(item.list_id) for item in self.lists if item.is_active]

    def unsubscribed_list_ids(self) -> list[str]:
        return [str(item.list_id) for item in self.lists if not item.is_active]

    def subscribe_to_list(self, list_ref: ListRef, option: str | None = None) -> None:
        """Suscribe (o re-suscribe) al suscriptor con la opción indicada."""

        lists = list(self.lists)
        item = self._find_subscription(list_ref)
        if item is not None:
            item.option = option
            item.unsubscribed = None
        else:
            lists.append(ListSubscription(list_id=_wire_list_id(list_id_of(list_ref)), option=option))
        self.lists = lists

    def unsubscribe_from_list(self, list_ref: ListRef) -> None:
        """Marca la baja; si la lista no estaba, se añade ya dada de baja."""

        lists = list(self.lists)
        item = self._find_subscription(list_ref)
        if item is not None:
            if item.is_active:
                item.unsubscribed = True
        else:
            lists.append(ListSubscription(list_id=_wire_list_id(list_id_of(list_ref)), unsubscribed=True))
        self.lists = lists


class Campaign(Record):
    resource_type: ClassVar[str] = "campaign"

    name: str | None = None
    start_datetime: str | None = Field(default=None, alias="date")
    xml_data: str | None = Field(default=None, alias="data")
    status: str | None = None


class ActivityRevision(BaseModel):
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    id: RecordId | None = None
    content: str | None = None
    approval_status: str | None = None

    @property
    def record_id(self) -> str | None:
        return _as_str(self.id)


class TemplateRevision(BaseModel):
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    id: RecordId | None = None
    format: str | None = None
    content: str | None = None

    @property
    def record_id(self) -> str | None:
        return _as_str(self.id)


class RevisionState(str, Enum):
    """Estado de las revisiones de un registro versionado."""

    UNSAVED = "unsaved"
    SAVED = "saved"


class RevisionedRecord(Record):
    """Registro con revisiones de contenido (activities y templates).

    Máquina de estados explícita:
    - UNSAVED: `revisions` contiene revisiones pendientes que viajarán al guardar.
    - SAVED: tras un fetch/create/update las revisiones confirmadas se apartan
      y `revisions` queda vacío, así un segundo guardado no las duplica.

    `latest_revision` consulta primero las pendientes y luego las confirmadas.
    Clase abstracta: cada subclase define qué campos de una revisión se envían.
    """

    _committed_revisions: list[Any] = PrivateAttr(default_factory=list)
    _revision_state: RevisionState = PrivateAttr(default=RevisionState.UNSAVED)

    revisions: list[Any] = Field(default_factory=list)

    @property
    def revision_state(self) -> RevisionState:
        return self._revision_state

    @property
    def committed_revisions(self) -> list[Any]:
        return list(self._committed_revisions)

    @property
    def latest_revision(self) -> Any | None:
        if self.revisions:
            return self.revisions[0]
        if self._committed_revisions:
            return self._committed_revisions[0]
        return None

    @abstractmethod
    def _pending_copy(self, revision: Any) -> Any:
        """Copia de `revision` con solo los campos que se envían al guardar."""

    def set_latest_revision(self, revision: Any) -> None:
        """Reemplaza (o añade) la revisión pendiente que se enviará al guardar."""

        pending = list(self.revisions)
        new = self._pending_copy(revision)
        if pending:
            pending[0] = new
        else:
            pending.append(new)
        self.revisions = pending
        self._revision_state = RevisionState.UNSAVED

    def mark_saved(self, previous: "RevisionedRecord | None" = None) -> None:
        """Transición a SAVED: aparta las revisiones confirmadas y vacía las pendientes.

        Si el servidor no devolvió revisiones, se heredan las de `previous`.
        """

        if self.revisions:
            self._committed_revisions = list(self.revisions)
        elif previous is not None and not self._committed_revisions:
            self._committed_revisions = list(previous.revisions) or previous.committed_revisions
        self.revisions = []
        self._revision_state = RevisionState.SAVED


class Activity(RevisionedRecord):
    """Activity (envío): metadatos de deploy + revisiones de contenido."""

    resource_type: ClassVar[str] = "activity"

    name: str | None = None
    type: str | None = None
    subtype: str | None = None
    target_expression: str | None = None
    approval_status: str | None = None
    deploy_datetime: str | None = Field(default=None, alias="date")
    template_id: RecordId | None = None
    campaign_id: RecordId | None = None
    throttle: int | None = None
    xml_data: str | None = Field(default=None, alias="data")
    status: str | None = None
    revisions: list[ActivityRevision] = Field(default_factory=list)

    def _pending_copy(self, revision: ActivityRevision) -> ActivityRevision:
        return ActivityRevision(content=revision.content)


class Template(RevisionedRecord):
    resource_type: ClassVar[str] = "template"

    name: str | None = None
    type: str | None = None
    subtype: str | None = None
    xml_data: str | None = Field(default=None, alias="data")
    status: str | None = None
    revisions: list[TemplateRevision] = Field(default_factory=list)

    def _pending_copy(self, revision: TemplateRevision) -> TemplateRevision:
        return TemplateRevision(content=revision.content, format=revision.format)
