"""
Unit tests for configuration management using Pydantic Settings.

Tests the Settings class: defaults, FLUENT_XML_ environment variables,
YAML config files and the get_settings() singleton.
"""

import pytest
from pydantic import ValidationError


class TestSettings:
    """Test suite for Settings pydantic-settings class."""

    def test_defaults(self):
        """Should default to pretty output and safe parser options."""
        from fluent_xml.config import Settings
        from fluent_xml.models import OutputFormat, ParserOptions

        settings = Settings()

        assert settings.output == OutputFormat.pretty()
        assert settings.parser == ParserOptions()
        assert settings.config_file is None

    def test_env_overrides_nested_fields(self, monkeypatch):
        """Should read nested fields from FLUENT_XML_ variables."""
        from fluent_xml.config import Settings

        monkeypatch.setenv('FLUENT_XML_OUTPUT__INDENT_WIDTH', '4')
        monkeypatch.setenv('FLUENT_XML_PARSER__RECOVER', 'true')

        settings = Settings()

        assert settings.output.indent_width == 4
        assert settings.output.indent is True
        assert settings.parser.recover is True

    def test_env_file_is_read(self, tmp_path):
        """Should read variables from .env in the working directory."""
        from fluent_xml.config import Settings

        (tmp_path / '.env').write_text('FLUENT_XML_OUTPUT__OMIT_DECLARATION=true\n')

        assert Settings().output.omit_declaration is True

    def test_yaml_config_file(self, tmp_path):
        """Should load output and parser sections from a YAML file."""
        from fluent_xml.config import Settings

        config = tmp_path / 'fluent-xml.yaml'
        config.write_text(
            "output:\n"
            "  indent_width: 4\n"
            "  omit_encoding: true\n"
            "parser:\n"
            "  remove_blank_text: true\n"
        )

        settings = Settings(config_file=config)

        assert settings.output.indent_width == 4
        assert settings.output.omit_encoding is True
        assert settings.parser.remove_blank_text is True

    def test_env_wins_over_yaml(self, tmp_path, monkeypatch):
        """Should let environment variables override YAML values."""
        from fluent_xml.config import Settings

        config = tmp_path / 'fluent-xml.yaml'
        config.write_text("output:\n  indent_width: 4\n")
        monkeypatch.setenv('FLUENT_XML_OUTPUT__INDENT_WIDTH', '8')

        settings = Settings(config_file=config)

        assert settings.output.indent_width == 8

    def test_config_file_from_env(self, tmp_path, monkeypatch):
        """Should find the YAML file through FLUENT_XML_CONFIG_FILE."""
        from fluent_xml.config import Settings

        config = tmp_path / 'fluent-xml.yaml'
        config.write_text("output:\n  encoding: ISO-8859-1\n")
        monkeypatch.setenv('FLUENT_XML_CONFIG_FILE', str(config))

        assert Settings().output.encoding == 'ISO-8859-1'

    def test_missing_config_file_raises(self, tmp_path):
        """Should fail loudly when the YAML file does not exist."""
        from fluent_xml.config import Settings

        with pytest.raises(FileNotFoundError, match="Config file not found"):
            Settings(config_file=tmp_path / 'missing.yaml')

    def test_non_mapping_yaml_rejected(self, tmp_path):
        """Should reject YAML files without a mapping at top level."""
        from fluent_xml.config import Settings

        config = tmp_path / 'fluent-xml.yaml'
        config.write_text("- just\n- a list\n")

        with pytest.raises(ValidationError, match="must contain a mapping"):
            Settings(config_file=config)

    def test_invalid_value_rejected(self, monkeypatch):
        """Should validate environment values with the model validators."""
        from fluent_xml.config import Settings

        monkeypatch.setenv('FLUENT_XML_OUTPUT__ENCODING', 'klingon')

        with pytest.raises(ValidationError):
            Settings()


class TestGetSettings:
    """Test suite for the get_settings() singleton."""

    def test_returns_same_instance(self):
        """Should cache the settings after the first call."""
        from fluent_xml.config import get_settings

        assert get_settings() is get_settings()

    def test_reset_reloads(self, monkeypatch):
        """Should pick up new environment values after reset_settings()."""
        from fluent_xml.config import get_settings, reset_settings

        first = get_settings()
        monkeypatch.setenv('FLUENT_XML_OUTPUT__INDENT_WIDTH', '3')
        reset_settings()

        assert get_settings() is not first
        assert get_settings().output.indent_width == 3
