from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import List, Mapping, Optional

from pydantic import AnyHttpUrl, BaseModel, ConfigDict, Field, field_validator


class ConnectionStatus(Enum):
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"


class Target(BaseModel):
    """One endpoint to probe. A missing timeout falls back to the checker default."""

    model_config = ConfigDict(frozen=True)

    uri: AnyHttpUrl
    headers: Mapping[str, str] = Field(default_factory=dict, validate_default=True)
    timeout_s: Optional[float] = Field(default=None, gt=0)

    @field_validator("headers", mode="after")
    @classmethod
    def _freeze_headers(cls, v: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(v))

    def __hash__(self) -> int:
        return hash((str(self.uri), tuple(sorted(self.headers.items())), self.timeout_s))


class Defaults(BaseModel):
    timeout_s: Optional[float] = Field(default=None, gt=0)


class TargetsFile(BaseModel):
    defaults: Defaults = Defaults()
    targets: List[Target]
