"""
Unit tests for the memory merge helpers.
"""

from voice_agent.memory.merge import (
    append_note,
    apply_profile_fields,
    deep_merge,
    describe_memory,
    shallow_merge,
    split_csv,
    trim_notes,
)


class TestShallowMerge:
    def test_replaces_top_level_keys(self):
        current = {"name": "Sam", "prefs": {"music": "jazz", "food": "pasta"}}
        merged = shallow_merge(current, {"prefs": {"music": "rock"}})
        assert merged == {"name": "Sam", "prefs": {"music": "rock"}}

    def test_does_not_mutate_inputs(self):
        current = {"prefs": {"music": "jazz"}}
        patch = {"tone": "calm"}
        shallow_merge(current, patch)
        assert current == {"prefs": {"music": "jazz"}}
        assert patch == {"tone": "calm"}


class TestDeepMerge:
    def test_merges_nested_dicts(self):
        current = {"prefs": {"music": "jazz", "food": "pasta"}}
        merged = deep_merge(current, {"prefs": {"music": "rock"}})
        assert merged == {"prefs": {"music": "rock", "food": "pasta"}}

    def test_none_removes_key(self):
        current = {"name": "Sam", "prefs": {"music": "jazz", "food": "pasta"}}
        merged = deep_merge(current, {"name": None, "prefs": {"food": None}})
        assert merged == {"prefs": {"music": "jazz"}}

    def test_lists_are_replaced(self):
        merged = deep_merge({"kids": ["Ada"]}, {"kids": ["Leo"]})
        assert merged == {"kids": ["Leo"]}

    def test_dict_replaces_scalar(self):
        merged = deep_merge({"prefs": "none"}, {"prefs": {"music": "jazz"}})
        assert merged == {"prefs": {"music": "jazz"}}

    def test_does_not_mutate_current(self):
        current = {"prefs": {"music": "jazz"}}
        deep_merge(current, {"prefs": {"music": "rock"}})
        assert current == {"prefs": {"music": "jazz"}}


class TestNotes:
    def test_split_csv_trims_and_drops_empty(self):
        assert split_csv(" Ada, Leo ,, ") == ["Ada", "Leo"]
        assert split_csv("") == []

    def test_append_creates_list(self):
        assert append_note({}, "likes dinosaurs", 5) == {"notes": ["likes dinosaurs"]}

    def test_append_replaces_non_list_notes(self):
        assert append_note({"notes": "oops"}, "first", 5) == {"notes": ["first"]}

    def test_append_keeps_last_n(self):
        memory = {"notes": ["a", "b", "c"]}
        assert append_note(memory, "d", 3) == {"notes": ["b", "c", "d"]}
        assert memory == {"notes": ["a", "b", "c"]}

    def test_trim_with_non_positive_limit_keeps_all(self):
        memory = {"notes": ["a", "b", "c"]}
        assert trim_notes(memory, 0) == memory


class TestApplyProfileFields:
    def test_sets_only_given_fields(self):
        current = {"name": "Sam", "tone": "calm"}
        updated = apply_profile_fields(current, persona="pirate", kids="Ada, Leo")
        assert updated == {
            "name": "Sam",
            "tone": "calm",
            "persona": "pirate",
            "kids": ["Ada", "Leo"],
        }

    def test_empty_strings_are_ignored(self):
        current = {"name": "Sam"}
        assert apply_profile_fields(current, name="", tone="", note="") == {"name": "Sam"}

    def test_note_is_appended_and_bounded(self):
        current = {"notes": ["a", "b"]}
        updated = apply_profile_fields(current, note="c", max_notes=2)
        assert updated["notes"] == ["b", "c"]


class TestDescribeMemory:
    def test_empty_memory_gives_empty_text(self):
        assert describe_memory({}) == ""

    def test_mentions_profile_and_notes(self):
        text = describe_memory(
            {"name": "Sam", "kids": ["Ada"], "tone": "calm", "notes": ["bedtime 8pm"]}
        )
        assert "Sam" in text
        assert "Ada" in text
        assert "calm" in text
        assert "- bedtime 8pm" in text
