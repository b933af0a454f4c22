"""
Test suite for jurisdiction code handling.

Covers filename validation, cleanup target normalization, reply parsing and
the model-backed extractor.

System role: Verification of jurisdiction detection and validation
"""

import json

import pytest

from legalchat.core.exceptions import ChatCompletionError, FilenameValidationError, ValidationError
from legalchat.core.jurisdiction.codes import (
    is_jurisdiction_code,
    jurisdiction_from_filename,
    normalize_cleanup_target,
)
from legalchat.core.jurisdiction.extractor import (
    JurisdictionExtractor,
    parse_jurisdiction_codes,
    strip_code_fence,
)


def _reply(*codes: str) -> str:
    return json.dumps([{"detected_phrase": f"phrase {c}", "code": c} for c in codes])


class TestFilenameValidation:
    """Test suite for XX.docx filenames."""

    @pytest.mark.parametrize("filename,expected", [("DE.docx", "DE"), ("CH.docx", "CH")])
    def test_valid_filename_should_yield_code(self, filename: str, expected: str) -> None:
        """Test a well-formed name yields its code."""
        assert jurisdiction_from_filename(filename) == expected

    @pytest.mark.parametrize(
        "filename",
        ["de.docx", "DEU.docx", "DE.pdf", "DE.DOCX", "D.docx", "DE .docx", "images/DE.docx", ""],
    )
    def test_invalid_filename_should_raise(self, filename: str) -> None:
        """Test anything other than exactly XX.docx is rejected."""
        with pytest.raises(FilenameValidationError) as exc_info:
            jurisdiction_from_filename(filename)

        assert "Expected: XX.docx" in exc_info.value.message

    def test_filename_error_should_be_validation_error(self) -> None:
        """Test filename errors map to client errors."""
        with pytest.raises(ValidationError):
            jurisdiction_from_filename("notes.txt")

    @pytest.mark.parametrize("value,expected", [("DE", True), ("de", False), ("DEU", False), (None, False)])
    def test_is_jurisdiction_code(self, value, expected: bool) -> None:
        """Test the two upper-case letters shape check."""
        assert is_jurisdiction_code(value) is expected


class TestCleanupTarget:
    """Test suite for cleanup target normalization."""

    def test_lowercase_code_should_be_uppercased(self) -> None:
        assert normalize_cleanup_target("de") == "DE"

    @pytest.mark.parametrize("value", ["ALL", "all", " All "])
    def test_all_should_mean_every_jurisdiction(self, value: str) -> None:
        """Test ALL (any case) maps to None."""
        assert normalize_cleanup_target(value) is None

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_missing_code_should_raise(self, value) -> None:
        with pytest.raises(ValidationError, match="iso_code is required"):
            normalize_cleanup_target(value)

    @pytest.mark.parametrize("value", ["DEU", "D", "1A"])
    def test_malformed_code_should_raise(self, value: str) -> None:
        with pytest.raises(ValidationError, match="2-letter country code"):
            normalize_cleanup_target(value)


class TestParseJurisdictionCodes:
    """Test suite for detection reply parsing."""

    def test_plain_json_should_parse_in_order(self) -> None:
        assert parse_jurisdiction_codes(_reply("CH", "DE")) == ["CH", "DE"]

    def test_code_fence_should_be_stripped(self) -> None:
        """Test ```json fenced replies parse like plain JSON."""
        raw = f"```json\n{_reply('AT')}\n```"

        assert strip_code_fence(raw) == _reply("AT")
        assert parse_jurisdiction_codes(raw) == ["AT"]

    def test_bare_fence_should_be_stripped(self) -> None:
        assert parse_jurisdiction_codes(f"```\n{_reply('FR')}\n```") == ["FR"]

    @pytest.mark.parametrize("tag", ["JSON", "Json", "jsonc"])
    def test_any_fence_language_tag_should_be_stripped(self, tag: str) -> None:
        """Test the language tag after the opening fence is ignored regardless of case."""
        raw = f"```{tag}\n{_reply('DE', 'CH')}\n```"

        assert parse_jurisdiction_codes(raw) == ["DE", "CH"]

    def test_duplicates_should_keep_first_occurrence(self) -> None:
        """Test de-duplication preserves first-detected order."""
        assert parse_jurisdiction_codes(_reply("DE", "CH", "DE", "ch")) == ["DE", "CH"]

    def test_lowercase_codes_should_be_uppercased(self) -> None:
        assert parse_jurisdiction_codes(_reply("de")) == ["DE"]

    def test_malformed_codes_should_be_dropped(self) -> None:
        """Test codes not shaped like alpha-2 are discarded."""
        raw = json.dumps([{"code": "DEU"}, {"code": ""}, {"code": None}, {"code": "IT"}])

        assert parse_jurisdiction_codes(raw) == ["IT"]

    def test_extra_keys_should_be_ignored(self) -> None:
        raw = json.dumps([{"detected_phrase": "Swiss", "code": "CH", "confidence": 0.9}])

        assert parse_jurisdiction_codes(raw) == ["CH"]

    def test_empty_array_should_yield_no_codes(self) -> None:
        assert parse_jurisdiction_codes("[]") == []

    @pytest.mark.parametrize("raw", ["not json", '{"code": "DE"}', "[1, 2]", ""])
    def test_unparseable_reply_should_yield_no_codes(self, raw: str) -> None:
        """Test malformed output degrades to no jurisdiction."""
        assert parse_jurisdiction_codes(raw) == []


class TestJurisdictionExtractor:
    """Test suite for the model-backed extractor."""

    @pytest.mark.asyncio
    async def test_extract_should_send_question_and_parse_reply(self, mock_chat_client) -> None:
        """Test the question reaches the model and the reply is parsed."""
        # Arrange
        mock_chat_client.complete.return_value = _reply("CH", "DE")
        extractor = JurisdictionExtractor(mock_chat_client)

        # Act
        codes = await extractor.extract("Compare smoking bans in Switzerland and Germany")

        # Assert
        assert codes == ["CH", "DE"]
        messages = mock_chat_client.complete.await_args.args[0]
        assert messages[0].type == "system"
        assert messages[-1].content == "Compare smoking bans in Switzerland and Germany"

    @pytest.mark.asyncio
    async def test_no_country_should_return_empty(self, mock_chat_client) -> None:
        mock_chat_client.complete.return_value = "[]"

        assert await JurisdictionExtractor(mock_chat_client).extract("What is the law?") == []

    @pytest.mark.asyncio
    async def test_model_failure_should_propagate(self, mock_chat_client) -> None:
        """Test a failed model call is an error, not an empty result."""
        mock_chat_client.complete.side_effect = ChatCompletionError("chat down")

        with pytest.raises(ChatCompletionError):
            await JurisdictionExtractor(mock_chat_client).extract("Germany?")
