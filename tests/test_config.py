"""Tests for the config module."""

from emmetbridge.config import (
    Settings,
    _parse_bool,
    _parse_indentation,
    _parse_newline,
    _parse_profile_overrides,
)


class TestParseHelpers:
    """Test environment parsing helpers."""

    def test_parse_bool(self, monkeypatch):
        monkeypatch.setenv("INSERT_FINAL_TABSTOP", "True")
        assert _parse_bool("INSERT_FINAL_TABSTOP") is True

        monkeypatch.setenv("INSERT_FINAL_TABSTOP", "no")
        assert _parse_bool("INSERT_FINAL_TABSTOP") is False

    def test_parse_bool_default(self, monkeypatch):
        monkeypatch.delenv("PRESERVE_INDENT", raising=False)
        assert _parse_bool("PRESERVE_INDENT", "true") is True

    def test_parse_newline(self, monkeypatch):
        monkeypatch.setenv("NEWLINE", "CRLF")
        assert _parse_newline() == "\r\n"

        monkeypatch.setenv("NEWLINE", "cr")
        assert _parse_newline() == "\r"

    def test_parse_newline_unknown_defaults_to_lf(self, monkeypatch):
        monkeypatch.setenv("NEWLINE", "weird")
        assert _parse_newline() == "\n"

    def test_parse_newline_without_value(self, monkeypatch):
        monkeypatch.delenv("NEWLINE", raising=False)
        assert _parse_newline() == "\n"

    def test_parse_indentation(self, monkeypatch):
        monkeypatch.setenv("INDENTATION", "4")
        assert _parse_indentation() == "    "

        monkeypatch.setenv("INDENTATION", "tab")
        assert _parse_indentation() == "\t"

    def test_parse_profile_overrides(self, monkeypatch):
        monkeypatch.setenv("PROFILE_OVERRIDES", "html:xhtml, xml : xml,broken")
        assert _parse_profile_overrides() == {"html": "xhtml", "xml": "xml"}

    def test_parse_profile_overrides_without_value(self, monkeypatch):
        monkeypatch.delenv("PROFILE_OVERRIDES", raising=False)
        assert _parse_profile_overrides() == {}


class TestSettings:
    """Test Settings configuration."""

    def test_settings_explicit_values(self):
        settings = Settings(
            insert_final_tabstop=True,
            anchor_exit_as_zero=True,
            linked_base=500,
            preserve_indent=False,
            newline="\r\n",
            indentation="  ",
            trim_trailing_whitespace=True,
            default_syntax="css",
            autodetect_xhtml=True,
            profile_overrides={"html": "xhtml"},
            log_level="DEBUG",
        )

        assert settings.insert_final_tabstop is True
        assert settings.anchor_exit_as_zero is True
        assert settings.linked_base == 500
        assert settings.preserve_indent is False
        assert settings.newline == "\r\n"
        assert settings.indentation == "  "
        assert settings.trim_trailing_whitespace is True
        assert settings.default_syntax == "css"
        assert settings.autodetect_xhtml is True
        assert settings.profile_overrides == {"html": "xhtml"}
        assert settings.log_level == "DEBUG"

    def test_settings_type_coercion(self):
        settings = Settings(linked_base="2000", insert_final_tabstop="true")

        assert settings.linked_base == 2000
        assert settings.insert_final_tabstop is True
