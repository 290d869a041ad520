"""Tests for path-based copy-on-write editing of event drafts."""

import copy

import pytest

from services import NestedFormEditor


@pytest.fixture
def editor():
    return NestedFormEditor()


@pytest.fixture
def event():
    return {
        "id": 7,
        "name": "Cheer Dance",
        "judges": ["Judge A", "Judge B"],
        "details": [
            {"title": "Wave 1", "criteria": [
                {"name": "Energy", "description": "Projection", "points": 30},
                {"name": "Unity", "description": "Coordination", "points": 20},
            ]},
            {"title": "Wave 2", "criteria": [
                {"name": "Precision", "description": "Timing", "points": 50},
            ]},
        ],
    }


class TestSetField:
    def test_sets_nested_criterion_field(self, editor, event):
        result = editor.set_field(event, ("details", 0, "criteria", 1, "points"), 25)
        assert result["details"][0]["criteria"][1]["points"] == 25

    def test_copies_path_and_shares_siblings(self, editor, event):
        result = editor.set_field(event, ("details", 0, "criteria", 1, "name"), "Harmony")

        assert result is not event
        assert result["details"] is not event["details"]
        assert result["details"][0] is not event["details"][0]
        assert result["details"][0]["criteria"] is not event["details"][0]["criteria"]
        assert result["details"][0]["criteria"][1] is not event["details"][0]["criteria"][1]

        assert result["judges"] is event["judges"]
        assert result["details"][1] is event["details"][1]
        assert result["details"][0]["criteria"][0] is event["details"][0]["criteria"][0]

    def test_never_mutates_input(self, editor, event):
        pristine = copy.deepcopy(event)
        editor.set_field(event, ("details", 1, "criteria", 0, "points"), 99)
        editor.set_field(event, ("judges", 0), "Judge Z")
        editor.set_field(event, ("name",), "Renamed")
        assert event == pristine

    def test_sets_flat_judge(self, editor, event):
        result = editor.set_field(event, ("judges", 1), "Judge C")
        assert result["judges"] == ["Judge A", "Judge C"]
        assert result["details"] is event["details"]

    def test_adds_missing_leaf_key(self, editor, event):
        result = editor.set_field(event, ("description",), "New text")
        assert result["description"] == "New text"
        assert "description" not in event

    def test_always_returns_new_root(self, editor, event):
        result = editor.set_field(event, ("name",), event["name"])
        assert result is not event
        assert result == event

    def test_rejects_empty_path(self, editor, event):
        with pytest.raises(KeyError):
            editor.set_field(event, (), "value")

    def test_bad_index_raises(self, editor, event):
        with pytest.raises(IndexError):
            editor.set_field(event, ("details", 5, "title"), "Nope")

    def test_missing_intermediate_key_raises(self, editor, event):
        with pytest.raises(KeyError):
            editor.set_field(event, ("rubric", 0, "title"), "Nope")


class TestAppendItem:
    def test_appends_blank_criterion(self, editor, event):
        result = editor.append_item(event, ("details", 1, "criteria"))

        assert result["details"][1]["criteria"][-1] == {"name": "", "description": "", "points": 0}
        assert len(event["details"][1]["criteria"]) == 1
        assert result["details"][0] is event["details"][0]

    def test_appends_blank_judge(self, editor, event):
        result = editor.append_item(event, ("judges",))
        assert result["judges"] == ["Judge A", "Judge B", ""]
        assert event["judges"] == ["Judge A", "Judge B"]

    def test_creates_missing_list(self, editor):
        result = editor.append_item({"name": "Chess"}, ("judges",))
        assert result["judges"] == [""]

    def test_blank_items_are_independent(self, editor, event):
        result = editor.append_item(event, ("details", 1, "criteria"))
        result = editor.append_item(result, ("details", 1, "criteria"))
        first, second = result["details"][1]["criteria"][-2:]
        assert first == second
        assert first is not second

    def test_unknown_list_raises(self, editor, event):
        with pytest.raises(KeyError):
            editor.append_item(event, ("sponsors",))


class TestRemoveItem:
    def test_removes_criterion(self, editor, event):
        result = editor.remove_item(event, ("details", 0, "criteria"), 0)

        assert [c["name"] for c in result["details"][0]["criteria"]] == ["Unity"]
        assert [c["name"] for c in event["details"][0]["criteria"]] == ["Energy", "Unity"]
        assert result["details"][0]["criteria"][0] is event["details"][0]["criteria"][1]

    def test_removes_judge(self, editor, event):
        result = editor.remove_item(event, ("judges",), 1)
        assert result["judges"] == ["Judge A"]
        assert result["details"] is event["details"]

    def test_out_of_range_raises(self, editor, event):
        with pytest.raises(IndexError):
            editor.remove_item(event, ("judges",), 2)


class TestGetValue:
    def test_reads_nested_value(self, editor, event):
        assert editor.get_value(event, ("details", 1, "criteria", 0, "points")) == 50

    def test_missing_path_returns_default(self, editor, event):
        assert editor.get_value(event, ("details", 9, "title"), "n/a") == "n/a"
        assert editor.get_value(event, ("description",), "") == ""
