"""Cliente tipado para el API REST v4 de TaguchiMail."""

from tmapi.client import TMAPIClient
from tmapi.core.config import AppSettings
from tmapi.core.domain.connection import Connection
from tmapi.core.domain.models import (
    Activity,
    ActivityRevision,
    Campaign,
    Subscriber,
    SubscriberList,
    Template,
    TemplateRevision,
)
from tmapi.core.domain.query import Operator, Predicate, encode
from tmapi.core.errors import (
    ProtocolError,
    RecordNotFoundError,
    ResponseDecodeError,
    TMAPIError,
    UnexpectedPayloadError,
)

__all__ = [
    "Activity",
    "ActivityRevision",
    "AppSettings",
    "Campaign",
    "Connection",
    "Operator",
    "Predicate",
    "ProtocolError",
    "RecordNotFoundError",
    "ResponseDecodeError",
    "Subscriber",
    "SubscriberList",
    "TMAPIClient",
    "TMAPIError",
    "Template",
    "TemplateRevision",
    "UnexpectedPayloadError",
    "encode",
]
