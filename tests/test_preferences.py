"""
Local preference store: JSON values by key in SQLite.

Run:
    pytest tests/test_preferences.py -v
"""


class TestPreferenceStore:
    def test_missing_key_returns_default(self, preferences):
        assert preferences.get("absent") is None
        assert preferences.get("absent", []) == []

    def test_set_then_get(self, preferences):
        preferences.set("key", {"a": [1, 2, 3]})
        assert preferences.get("key") == {"a": [1, 2, 3]}

    def test_set_overwrites(self, preferences):
        preferences.set("key", "one")
        preferences.set("key", "two")
        assert preferences.get("key") == "two"

    def test_get_string_only_returns_strings(self, preferences):
        preferences.set("text", "https://example.com")
        preferences.set("number", 42)
        assert preferences.get_string("text") == "https://example.com"
        assert preferences.get_string("number") is None
        assert preferences.get_string("absent") is None

    def test_remove(self, preferences):
        preferences.set("key", "value")
        preferences.remove("key")
        assert preferences.get("key") is None

    def test_remove_missing_key_is_noop(self, preferences):
        preferences.remove("never-set")

    def test_lists_of_records(self, preferences):
        rows = [{"id": "1", "name": "plate"}, {"id": "2", "name": "coil"}]
        preferences.set("part_items", rows)
        assert preferences.get("part_items") == rows
