"""Recursos con revisiones: aplican la transición UNSAVED -> SAVED al leer o guardar."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar, TypeVar

from tmapi.adapters.resources.base import RecordResource
from tmapi.core.domain.models import RevisionedRecord

RevisionedT = TypeVar("RevisionedT", bound=RevisionedRecord)

LATEST_REVISIONS = {"revisions": "latest"}


class RevisionedResource(RecordResource[RevisionedT]):
    model: ClassVar[type[RevisionedRecord]]

    def _load(self, data: dict[str, Any]) -> RevisionedT:
        record = super()._load(data)
        record.mark_saved()
        return record

    def get_with_content(
        self,
        record_id: str | int,
        parameters: Mapping[str, str] | None = None,
    ) -> RevisionedT:
        """Como `get`, pero pide al servidor la última revisión de contenido."""

        merged = dict(parameters or {})
        merged.update(LATEST_REVISIONS)
        return self.get(record_id, merged)

    def create(self, record: RevisionedT) -> RevisionedT:
        saved = super().create(record)
        saved.mark_saved(previous=record)
        return saved

    def update(self, record: RevisionedT) -> RevisionedT:
        saved = super().update(record)
        saved.mark_saved(previous=record)
        return saved

