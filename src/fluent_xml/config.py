"""
Configuration management using Pydantic Settings.

Provides the defaults used whenever a caller does not pass an explicit
`OutputFormat` or `ParserOptions`. Values are resolved in this order
(highest priority first):

1. Keyword arguments passed to `Settings(...)`
2. Environment variables prefixed with FLUENT_XML_ (also read from .env),
   nested fields separated by '__' (e.g. FLUENT_XML_OUTPUT__INDENT_WIDTH=4)
3. The YAML file named by `config_file` / FLUENT_XML_CONFIG_FILE
4. Model defaults (pretty output, safe parser)
"""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fluent_xml.models import OutputFormat, ParserOptions


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge `override` into a copy of `base`."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, BaseModel):
            value = value.model_dump()
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _merge(current, value)
        else:
            merged[key] = value
    return merged


class Settings(BaseSettings):
    """
    Library-wide defaults.

    Attributes:
        output: Default serializer options (pretty, 2-space indent, declaration on)
        parser: Default lxml parser options
        config_file: Optional YAML file with the same structure as this model

    Example YAML file:
        output:
          indent_width: 4
          omit_encoding: true
        parser:
          remove_blank_text: true

    Example:
        >>> settings = Settings(config_file='fluent-xml.yaml')
        >>> settings.output.indent_width
        4
    """

    output: OutputFormat = Field(
        default_factory=OutputFormat,
        description="Default output format for serialization"
    )

    parser: ParserOptions = Field(
        default_factory=ParserOptions,
        description="Default options for the lxml parser"
    )

    config_file: Optional[Path] = Field(
        default=None,
        description="YAML file providing defaults below environment variables"
    )

    model_config = SettingsConfigDict(
        env_prefix='FLUENT_XML_',
        env_nested_delimiter='__',
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore'
    )

    @model_validator(mode='before')
    @classmethod
    def load_yaml_config(cls, data: Any) -> Any:
        """
        Load `config_file` (if given) underneath the explicitly provided values.

        Runs before field validation, after pydantic-settings has collected
        init kwargs and environment variables into `data`.
        """
        if not isinstance(data, dict):
            return data

        config_file = data.get('config_file')
        if not config_file:
            return data

        config_path = Path(config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found at {config_path}.")

        with open(config_path, 'r', encoding='utf-8') as f:
            yaml_data = yaml.safe_load(f) or {}

        if not isinstance(yaml_data, dict):
            raise ValueError(f"Config file {config_path} must contain a mapping at top level")

        # Only the sections we know about
        known = {key: yaml_data[key] for key in ('output', 'parser') if key in yaml_data}
        return _merge(known, data)


# Singleton pattern - loaded once, cached until reset
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get global settings instance (lazy-loaded singleton).

    Returns:
        Singleton Settings instance

    Example:
        >>> settings = get_settings()
        >>> settings.output.indent_width
        2
        >>> settings is get_settings()
        True
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next `get_settings()` reloads them."""
    global _settings
    _settings = None
