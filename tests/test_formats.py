"""Tests for the target format table."""

import pytest

from wordbatch.core import formats
from wordbatch.core.formats import TargetFormat, resolve_format


class TestResolveFormat:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("Default", (".docx", 16)),
            ("PDF", (".pdf", 17)),
            ("XPS", (".xps", 18)),
            ("HTML", (".html", 8)),
        ],
    )
    def test_supported_formats(self, name, expected):
        assert resolve_format(name) == expected

    def test_case_insensitive(self):
        assert resolve_format("pdf") == (".pdf", 17)
        assert resolve_format("  default ") == (".docx", 16)

    @pytest.mark.parametrize("name", ["RTF", "docx", "", "Text"])
    def test_unsupported_rejected(self, name):
        with pytest.raises(ValueError, match="不支援的格式"):
            resolve_format(name)


class TestTargetFormat:
    def test_closed_set(self):
        assert {fmt.value for fmt in TargetFormat} == {"Default", "PDF", "XPS", "HTML"}

    def test_from_string_returns_member(self):
        assert TargetFormat.from_string("xps") is TargetFormat.XPS

    def test_extension_includes_dot(self):
        assert all(fmt.extension.startswith(".") for fmt in TargetFormat)

    def test_display_name(self):
        assert "PDF" in TargetFormat.PDF.display_name


class TestWdSaveFormatConstants:
    def test_values_match_word_enumeration(self):
        assert formats.WD_FORMAT_DOCUMENT == 0
        assert formats.WD_FORMAT_TEMPLATE == 1
        assert formats.WD_FORMAT_TEXT == 2
        assert formats.WD_FORMAT_RTF == 6
        assert formats.WD_FORMAT_HTML == 8
        assert formats.WD_FORMAT_FILTERED_HTML == 10
        assert formats.WD_FORMAT_XML_DOCUMENT == 12
        assert formats.WD_FORMAT_DOCUMENT_DEFAULT == 16
        assert formats.WD_FORMAT_PDF == 17
        assert formats.WD_FORMAT_XPS == 18
        assert formats.WD_FORMAT_OPEN_DOCUMENT_TEXT == 23

    def test_selectable_formats_use_named_codes(self):
        assert TargetFormat.DEFAULT.format_code == formats.WD_FORMAT_DOCUMENT_DEFAULT
        assert TargetFormat.HTML.format_code == formats.WD_FORMAT_HTML
