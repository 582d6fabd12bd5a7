"""Descriptor de conexión a una instancia TaguchiMail."""

from __future__ import annotations

from pydantic import BaseModel, Field, SecretStr
from pydantic.config import ConfigDict

from tmapi.core.config import AppSettings


class Connection(BaseModel):
    """Host + credenciales + organización. Inmutable tras construirse.

    Por qué inmutable:
    - Se comparte entre hilos sin locks; cada request usa su propio ciclo.
    """

    model_config = ConfigDict(frozen=True)

    host: str = Field(..., min_length=1, description="Hostname o IP de la instancia.")
    username: str = Field(..., min_length=1, description="Usuario (email) autorizado.")
    password: SecretStr = Field(..., description="Password del usuario.")
    organization_id: str = Field(..., min_length=1, description="ID de organización.")

    @property
    def base_url(self) -> str:
        return f"https://{self.host}/admin/api/{self.organization_id}"

    @property
    def credentials(self) -> str:
        """Credenciales concatenadas tal como viajan en `auth=`."""

        return f"{self.username}|{self.password.get_secret_value()}"

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "Connection":
        missing = settings.missing_connection_fields()
        if missing:
            raise ValueError(f"missing connection settings: {', '.join(missing)}")
        assert settings.password is not None
        return cls(
            host=settings.host,
            username=settings.username,
            password=settings.password,
            organization_id=settings.organization_id,
        )
