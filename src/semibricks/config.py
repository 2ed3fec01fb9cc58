from enum import Enum
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from semibricks import log


class TypeResolutionFallback(str, Enum):
    """What to do with a union/interface value that carries no discriminant tag."""

    ERROR = "error"
    DEFAULT_MEMBER = "default-member"


class FactoryConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)

    typename_key: str = Field("__typename", alias="typenameKey")
    type_resolution_fallback: TypeResolutionFallback = Field(
        TypeResolutionFallback.ERROR, alias="typeResolutionFallback"
    )
    warn_on_root_field_override: bool = Field(True, alias="warnOnRootFieldOverride")
    validate_schema: bool = Field(True, alias="validateSchema")

    @field_validator("typename_key")
    @classmethod
    def typename_key_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("typenameKey cannot be empty")
        return value


def load_factory_config(config_path: Path | None) -> FactoryConfig | None:
    """Read a FactoryConfig from YAML. No path gives ``None``; an empty document gives the defaults."""
    if config_path is None:
        return None

    raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise TypeError(f"Factory config must be a mapping of options, got {type(raw).__name__}")

    config = FactoryConfig.model_validate(raw)
    log.debug(f"Factory config from {config_path}: {config.model_dump(by_alias=True, mode='json')}")
    return config
