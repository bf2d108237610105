"""Tests for the exception hierarchy."""

from notexfr.exceptions import (
    ContentExtractionError,
    EntityKindError,
    ErrorCode,
    LinkValuesError,
    NotexfrError,
    ParseError,
    StorageError,
)


class TestNotexfrError:
    """Tests for the base error."""

    def test_str_without_details(self):
        assert str(NotexfrError("boom")) == "[PARSE_FAILED] boom"

    def test_str_with_details(self):
        err = NotexfrError("boom", code=ErrorCode.CONFIG_MISSING, details={"flag": "--input"})
        assert str(err) == "[CONFIG_MISSING] boom (flag=--input)"

    def test_to_dict(self):
        err = ParseError("bad", path="a.json", value="x" * 200)
        data = err.to_dict()
        assert data["error"] == "ParseError"
        assert data["code"] == ErrorCode.PARSE_FAILED.value
        assert data["code_name"] == "PARSE_FAILED"
        assert data["details"]["path"] == "a.json"
        assert len(data["details"]["value"]) == 100


class TestSubclasses:
    """Tests for the specific error types."""

    def test_all_are_notexfr_errors(self):
        for err in (
            ParseError("x"),
            LinkValuesError("x"),
            EntityKindError(1),
            ContentExtractionError("html"),
            StorageError("x"),
        ):
            assert isinstance(err, NotexfrError)

    def test_link_values_details(self):
        err = LinkValuesError(
            "expected links length to be 3; got 2",
            service="evernote",
            entity_id="note-1",
            expected=3,
            actual=2,
        )
        assert err.code == ErrorCode.LINK_VALUES_LENGTH
        assert err.details == {
            "service": "evernote",
            "entity_id": "note-1",
            "expected": 3,
            "actual": 2,
        }

    def test_entity_kind(self):
        err = EntityKindError("a string", expected="Notebook")
        assert err.message == "unexpected entity kind"
        assert err.details == {"got": "str", "expected": "Notebook"}

    def test_content_extraction_parse_failure(self):
        cause = ValueError("broken")
        err = ContentExtractionError(
            "document", code=ErrorCode.CONTENT_PARSE_FAILED, original_error=cause
        )
        assert err.message == "could not parse content at: document"
        assert err.details["original_error"] == "broken"

    def test_storage_error(self):
        err = StorageError(
            "could not write file",
            operation="write",
            path="/x",
            code=ErrorCode.STORAGE_WRITE_FAILED,
            original_error=OSError("denied"),
        )
        assert err.details == {
            "operation": "write",
            "path": "/x",
            "original_error": "denied",
        }
