"""Recurso `campaign`: solo operaciones genéricas."""

from __future__ import annotations

from tmapi.adapters.resources.base import RecordResource
from tmapi.core.domain.models import Campaign


class CampaignResource(RecordResource[Campaign]):
    model = Campaign
