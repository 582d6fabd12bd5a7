"""Recursos del API (una clase por tipo de registro).

Por qué un paquete:
- Agrupa módulos por recurso (subscriber, list, activity, ...).
- Cada clase extiende `RecordResource` y recibe un `CommandDispatcher`.
"""

from tmapi.adapters.resources.activity import ActivityResource
from tmapi.adapters.resources.base import RecordResource
from tmapi.adapters.resources.campaign import CampaignResource
from tmapi.adapters.resources.subscriber import SubscriberResource
from tmapi.adapters.resources.subscriber_list import SubscriberListResource
from tmapi.adapters.resources.template import TemplateResource

__all__ = [
	"ActivityResource",
	"CampaignResource",
	"RecordResource",
	"SubscriberListResource",
	"SubscriberResource",
	"TemplateResource",
]
