"""Recurso `template`: registros con revisiones (formato + contenido)."""

from __future__ import annotations

from tmapi.adapters.resources.revisioned import RevisionedResource
from tmapi.core.domain.models import Template


class TemplateResource(RevisionedResource[Template]):
    model = Template
