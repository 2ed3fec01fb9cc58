from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from semibricks.config import FactoryConfig, TypeResolutionFallback, load_factory_config
from tests.conftest import TestSchemaData as TSD


def test_defaults() -> None:
    config = FactoryConfig()

    assert config.typename_key == "__typename"
    assert config.type_resolution_fallback == TypeResolutionFallback.ERROR
    assert config.warn_on_root_field_override is True
    assert config.validate_schema is True


def test_no_path_means_no_config() -> None:
    assert load_factory_config(None) is None


def test_load_sample_config() -> None:
    config = load_factory_config(TSD.SAMPLE_CONFIG)

    assert config is not None
    assert config.typename_key == "kind"
    assert config.type_resolution_fallback == TypeResolutionFallback.ERROR


@pytest.mark.parametrize("content", ["", "{}\n", "# nothing here\n"])
def test_empty_config_means_defaults(tmp_path: Path, content: str) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(content)

    assert load_factory_config(path) == FactoryConfig()


def test_fallback_is_read_from_its_alias(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("typeResolutionFallback: default-member\nvalidateSchema: false\n")

    config = load_factory_config(path)

    assert config is not None
    assert config.type_resolution_fallback == TypeResolutionFallback.DEFAULT_MEMBER
    assert config.validate_schema is False


def test_non_mapping_root_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("- typenameKey\n- kind\n")

    with pytest.raises(TypeError, match="must be a mapping"):
        load_factory_config(path)


def test_unknown_keys_are_rejected(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("typenameKey: kind\ncolour: blue\n")

    with pytest.raises(ValidationError):
        load_factory_config(path)


@pytest.mark.parametrize("value", ["''", "'   '"])
def test_blank_typename_key_is_rejected(tmp_path: Path, value: str) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(f"typenameKey: {value}\n")

    with pytest.raises(ValidationError, match="typenameKey cannot be empty"):
        load_factory_config(path)


def test_unknown_fallback_is_rejected() -> None:
    with pytest.raises(ValidationError):
        FactoryConfig.model_validate({"typeResolutionFallback": "first"})


def test_config_is_immutable() -> None:
    config = FactoryConfig()

    with pytest.raises(ValidationError):
        config.typename_key = "kind"  # type: ignore[misc]


def test_malformed_yaml_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("typenameKey: [unclosed\n")

    with pytest.raises(yaml.YAMLError):
        load_factory_config(path)
