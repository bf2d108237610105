"""Tests for the entity models of each service."""

import datetime

import pytest

from helpers import make_sn_note, utc
from notexfr.exceptions import ErrorCode, ParseError
from notexfr.models import edam, enex
from notexfr.models.entity import (
    ZERO_TIME,
    Entity,
    LinkID,
    ServiceID,
    format_link_time,
    truncate_to_second,
)
from notexfr.models.sn import (
    AppData,
    ContentType,
    CrossReference,
    ItemContent,
    Note,
    Reference,
    Tag,
    new_tag,
    parse_item,
)


class TestFormatLinkTime:
    """Tests for link value timestamps."""

    def test_utc_uses_z_suffix(self):
        assert format_link_time(utc(2019, 3, 1, 9, 0, 0)) == "2019-03-01T09:00:00Z"

    def test_sub_second_precision_dropped(self):
        value = utc(2019, 3, 1, 9, 0, 0, 999999)
        assert format_link_time(value) == "2019-03-01T09:00:00Z"

    def test_naive_treated_as_utc(self):
        assert format_link_time(datetime.datetime(2019, 3, 1)) == "2019-03-01T00:00:00Z"

    def test_offset_kept(self):
        tz = datetime.timezone(datetime.timedelta(hours=2))
        value = datetime.datetime(2019, 3, 1, 9, 0, tzinfo=tz)
        assert format_link_time(value) == "2019-03-01T09:00:00+02:00"

    def test_zero_time_is_padded(self):
        assert format_link_time(ZERO_TIME) == "0001-01-01T00:00:00Z"

    def test_truncate_to_second(self):
        assert truncate_to_second(utc(2019, 1, 1, 0, 0, 0, 500)) == utc(2019, 1, 1)


class TestEdamModels:
    """Tests for entities saved from the Evernote API."""

    def test_note_from_saved_json(self):
        """Saved keys map onto fields and null lists become empty."""
        note = edam.Note.model_validate(
            {
                "ID": "note-1",
                "Title": "Plan",
                "NotebookID": "nb-1",
                "TagIDs": None,
                "Tags": None,
                "CreatedAt": "2019-03-01T09:00:00Z",
                "UpdatedAt": "2019-03-02T09:00:00Z",
                "Attributes": {"SourceURL": "https://example.com"},
                "Deleted": None,
            }
        )
        assert note.get_id() == "note-1"
        assert note.notebook_id == "nb-1"
        assert note.tag_ids == []
        assert note.tags == []
        assert note.attributes.source_url == "https://example.com"

    def test_note_link_values(self):
        note = edam.Note(
            id="n", title="Plan", created_at=utc(2019, 3, 1), updated_at=utc(2019, 3, 2)
        )
        assert note.link_values() == [
            "2019-03-01T00:00:00Z",
            "Plan",
            "2019-03-02T00:00:00Z",
        ]

    def test_notebook_and_tag_link_on_name(self):
        assert edam.Notebook(id="nb", name="Work").link_values() == ["Work"]
        assert edam.Tag(id="t", name="urgent").link_values() == ["urgent"]

    def test_null_stack_and_parent_become_empty(self):
        notebook = edam.Notebook.model_validate({"ID": "nb", "Name": "A", "Stack": None})
        tag = edam.Tag.model_validate({"ID": "t", "Name": "B", "ParentID": None})
        assert notebook.stack == ""
        assert tag.parent_id == ""

    def test_new_notebook_is_placeholder(self):
        notebook = edam.new_notebook("Projects")
        assert notebook.get_id() == ""
        assert notebook.created_at == ZERO_TIME
        assert notebook.updated_at == ZERO_TIME

    def test_set_id(self):
        tag = edam.Tag(id="t", name="x")
        tag.set_id("t2")
        assert tag.get_id() == "t2"

    def test_note_to_dict_uses_saved_keys(self):
        note = enex.Note(title="Plan", tags=["a"], created_at=utc(2019, 3, 1))
        data = note.to_dict()
        assert data["Title"] == "Plan"
        assert data["Tags"] == ["a"]
        assert data["ID"] == ""
        assert "CreatedAt" in data

    def test_link_values_must_be_implemented(self):
        class Incomplete(Entity):
            pass

        with pytest.raises(TypeError):
            Incomplete(id="x")

    def test_entities_satisfy_link_protocol(self):
        assert isinstance(edam.Tag(), LinkID)
        assert isinstance(new_tag("x"), LinkID)


class TestContentType:
    """Tests for content type parsing."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("Note", ContentType.NOTE),
            ("note", ContentType.NOTE),
            ("Tag", ContentType.TAG),
            ("tag", ContentType.TAG),
        ],
    )
    def test_accepted_spellings(self, value, expected):
        assert ContentType.parse(value) is expected

    @pytest.mark.parametrize("value", ["NOTE", "Notebook", "", None])
    def test_rejected_spellings(self, value):
        with pytest.raises(ParseError) as exc_info:
            ContentType.parse(value)
        assert exc_info.value.code == ErrorCode.CONTENT_TYPE_INVALID


class TestParseItem:
    """Tests for decoding StandardNotes items."""

    def test_note_times_truncated(self):
        item = parse_item(
            {
                "created_at": "2019-03-05T09:00:00.123Z",
                "updated_at": "2019-03-06T09:00:00.987Z",
                "content_type": "note",
                "uuid": "sn-1",
                "content": {"title": "Pancakes", "references": None},
            }
        )
        assert isinstance(item, Note)
        assert item.created_at == utc(2019, 3, 5, 9)
        assert item.updated_at == utc(2019, 3, 6, 9)
        assert item.references == []

    def test_tag_variant(self):
        item = parse_item(
            {
                "created_at": "2019-04-01T00:00:00Z",
                "updated_at": "2019-04-01T00:00:00Z",
                "content_type": "Tag",
                "uuid": "sn-tag",
                "content": {
                    "title": "urgent",
                    "references": [{"uuid": "sn-1", "content_type": "Note"}],
                },
            }
        )
        assert isinstance(item, Tag)
        assert item.link_values() == ["urgent"]
        assert item.references[0].content_type is ContentType.NOTE

    def test_unknown_content_type(self):
        with pytest.raises(ParseError):
            parse_item({"content_type": "SN|Component", "uuid": "x"})

    def test_invalid_fields(self):
        with pytest.raises(ParseError) as exc_info:
            parse_item({"content_type": "Note", "uuid": "x", "created_at": "yesterday"})
        assert exc_info.value.code == ErrorCode.PARSE_FAILED

    def test_not_an_object(self):
        with pytest.raises(ParseError):
            parse_item(["Note"])

    def test_app_data_unknown_keys_kept(self):
        item = parse_item(
            {
                "created_at": "2019-04-01T00:00:00Z",
                "updated_at": "2019-04-01T00:00:00Z",
                "content_type": "Note",
                "uuid": "sn-1",
                "content": {
                    "title": "t",
                    "appData": {"org.standardnotes.sn": {"pinned": True}},
                },
            }
        )
        assert item.to_dict()["content"]["appData"] == {
            "org.standardnotes.sn": {"pinned": True}
        }


class TestItemSerialization:
    """Tests for the JSON shape of StandardNotes items."""

    def test_note_to_dict(self):
        note = make_sn_note(
            "sn-1", "Plan", utc(2019, 3, 1), utc(2019, 3, 2), tag_ids=["t1"]
        )
        assert note.to_dict() == {
            "created_at": "2019-03-01T00:00:00Z",
            "updated_at": "2019-03-02T00:00:00Z",
            "content_type": "Note",
            "uuid": "sn-1",
            "content": {
                "title": "Plan",
                "references": [{"uuid": "t1", "content_type": "Tag"}],
            },
        }

    def test_empty_text_and_app_data_omitted(self):
        content = ItemContent(title="x").to_dict()
        assert "text" not in content
        assert "appData" not in content

    def test_app_data_empty_values_omitted(self):
        assert AppData(parent_id="", original_content_type="").to_dict() == {}
        assert AppData(parent_id="tag-1").to_dict() == {"parent_id": "tag-1"}

    def test_cross_reference_to_dict(self):
        tag = new_tag("urgent", utc(2019, 1, 1), utc(2019, 1, 1), uuid="sn-t")
        ref = CrossReference(item=tag, evernote_id=ServiceID(value="tag-2"))
        data = ref.to_dict()
        assert data["evernote_id"] == "tag-2"
        assert data["item"]["uuid"] == "sn-t"
        assert ref.get_id() == "sn-t"
        assert ref.link_values() == ["urgent"]


class TestAppendTags:
    """Tests for adding tag references to a note."""

    def test_appends_new_ids(self):
        note = make_sn_note("sn-1", "x", utc(2019, 1, 1), utc(2019, 1, 1))
        assert note.append_tags("nb-1") == 1
        assert note.references == [Reference(uuid="nb-1", content_type=ContentType.TAG)]

    def test_idempotent(self):
        note = make_sn_note(
            "sn-1", "x", utc(2019, 1, 1), utc(2019, 1, 1), tag_ids=["t1"]
        )
        note.append_tags("nb-1")
        assert note.append_tags("nb-1", "t1") == 2
        assert [ref.uuid for ref in note.references] == ["t1", "nb-1"]

    def test_duplicates_in_one_call(self):
        note = make_sn_note("sn-1", "x", utc(2019, 1, 1), utc(2019, 1, 1))
        assert note.append_tags("a", "a", "b") == 2
