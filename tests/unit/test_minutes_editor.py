"""
Unit Tests for MinutesEditor

Tests collection mutations, scalar setters, committed/working snapshots
and the recipient list.
"""

import pytest

from models.minutes import ActionItem
from services.errors import IndexOutOfRangeError
from services.minutes_editor import MinutesEditor


@pytest.fixture
def editor(sample_document):
    return MinutesEditor(sample_document)


class TestStringCollections:

    @pytest.mark.parametrize("collection", ["attendees", "agenda", "decisions"])
    def test_append_adds_blank_at_end(self, editor, collection):
        before = getattr(editor.working, collection)

        item = editor.append(collection)

        after = getattr(editor.working, collection)
        assert item == ""
        assert after == before + [""]

    def test_append_with_value(self, editor):
        editor.append("attendees", "Alex Rodriguez (Marketing Lead)")

        assert editor.working.attendees[-1] == "Alex Rodriguez (Marketing Lead)"

    def test_duplicates_are_allowed(self, editor):
        editor.append("attendees", "Mike Chen (Lead Developer)")

        assert editor.working.attendees.count("Mike Chen (Lead Developer)") == 2

    def test_update_at_replaces_element(self, editor):
        editor.update_at("agenda", 1, "Infrastructure costs")

        assert editor.working.agenda == [
            "Project progress review",
            "Infrastructure costs",
            "Marketing launch timeline",
        ]

    def test_remove_at_shifts_later_elements(self, editor):
        removed = editor.remove_at("attendees", 0)

        assert removed == "Sarah Johnson (Product Manager)"
        assert editor.working.attendees == [
            "Mike Chen (Lead Developer)",
            "Emma Wilson (UX Designer)",
        ]

    @pytest.mark.parametrize("index", [-1, 3, 100])
    def test_out_of_range_update_raises(self, editor, index):
        with pytest.raises(IndexOutOfRangeError):
            editor.update_at("agenda", index, "x")

    @pytest.mark.parametrize("index", [-1, 2])
    def test_out_of_range_remove_raises(self, editor, index):
        before = editor.working

        with pytest.raises(IndexOutOfRangeError):
            editor.remove_at("decisions", index)

        assert editor.working == before, "Failed removal must not modify the document"

    def test_field_on_string_collection_rejected(self, editor):
        with pytest.raises(ValueError):
            editor.update_at("decisions", 0, "x", field="task")

    def test_unknown_collection_rejected(self, editor):
        with pytest.raises(ValueError, match="Unknown collection"):
            editor.append("risks")


class TestActionItems:

    def test_append_creates_blank_item_with_fresh_id(self, editor):
        item = editor.append("action_items")

        assert isinstance(item, ActionItem)
        assert (item.task, item.owner, item.deadline) == ("", "", "")
        ids = [i.id for i in editor.working.action_items]
        assert len(ids) == len(set(ids)) == 3

    def test_rapid_appends_get_distinct_ids(self, editor):
        created = [editor.append("action_items").id for _ in range(50)]

        assert len(set(created)) == 50
        assert [int(i) for i in created] == sorted(int(i) for i in created)

    def test_append_avoids_existing_id(self, sample_document, monkeypatch):
        sample_document.action_items[0].id = "5000"
        editor = MinutesEditor(sample_document)
        monkeypatch.setattr("services.minutes_editor.time.time", lambda: 5.0)

        item = editor.append("action_items")

        assert item.id == "5001"

    def test_update_single_field(self, editor):
        editor.update_at("action_items", 1, "Emma Wilson", field="owner")

        item = editor.working.action_items[1]
        assert item.owner == "Emma Wilson"
        assert item.task == "Finalize marketing assets"
        assert item.id == "2"

    @pytest.mark.parametrize("field", ["id", "priority", None])
    def test_invalid_field_rejected(self, editor, field):
        with pytest.raises(ValueError):
            editor.update_at("action_items", 0, "x", field=field)

    def test_remove_action_item(self, editor):
        editor.remove_at("action_items", 0)

        assert [i.id for i in editor.working.action_items] == ["2"]


class TestScalars:

    def test_setters_replace_values(self, editor):
        editor.set_meeting_title("Sprint Review")
        editor.set_meeting_date("2024-03-09")
        editor.set_summary("")

        working = editor.working
        assert working.meeting_title == "Sprint Review"
        assert working.meeting_date == "2024-03-09"
        assert working.summary == ""

    def test_none_rejected(self, editor):
        with pytest.raises(ValueError):
            editor.set_summary(None)


class TestSnapshots:

    def test_edits_do_not_touch_committed(self, editor, sample_document):
        editor.append("decisions", "Hire a contractor")
        editor.set_meeting_title("Changed")

        assert editor.committed == sample_document
        assert editor.is_dirty

    def test_commit_then_discard_keeps_committed_value(self, editor):
        editor.update_at("agenda", 0, "Budget")
        committed = editor.commit()

        working = editor.discard_edits()

        assert working == committed
        assert editor.committed == committed
        assert not editor.is_dirty

    def test_discard_restores_last_commit(self, editor, sample_document):
        editor.remove_at("attendees", 2)
        editor.update_at("action_items", 0, "2024-04-01", field="deadline")

        restored = editor.discard_edits()

        assert restored == sample_document

    def test_returned_snapshots_are_copies(self, editor):
        snapshot = editor.working
        snapshot.attendees.append("Intruder")

        assert "Intruder" not in editor.working.attendees

    def test_editor_does_not_alias_input_document(self, sample_document):
        editor = MinutesEditor(sample_document)
        editor.append("agenda", "New topic")

        assert "New topic" not in sample_document.agenda


class TestRecipients:

    def test_add_deduplicates(self, editor):
        assert editor.add_recipient("sarah@example.com")
        assert not editor.add_recipient("sarah@example.com")
        assert not editor.add_recipient("  ")

        assert editor.recipients == ["sarah@example.com"]

    def test_remove(self, editor):
        editor.add_recipient("sarah@example.com")
        editor.add_recipient("mike@example.com")

        assert editor.remove_recipient("sarah@example.com")
        assert not editor.remove_recipient("unknown@example.com")
        assert editor.recipients == ["mike@example.com"]
