"""
Notes API: NoteStore Unit Tests
================================

What:  Id assignment, snapshots, replacement, removal and thread safety of
       the in-memory store.
"""

from concurrent.futures import ThreadPoolExecutor

from notes_api.store import NoteStore, utc_now


class TestNoteStoreAdd:

    def test_ids_start_at_one_and_increase(self, store):
        first = store.add("A", None)
        second = store.add("B", None)

        assert first.id == 1
        assert second.id == 2

    def test_created_at_comes_from_clock(self, store, clock):
        expected = clock.current
        note = store.add("A", None)
        assert note.created_at == expected

    def test_ids_are_not_reused_after_remove(self, store):
        first = store.add("A", None)
        store.remove(first.id)

        second = store.add("B", None)

        assert second.id == 2
        assert store.get(1) is None

    def test_default_clock_is_utc(self):
        assert NoteStore().add("A", None).created_at.utcoffset().total_seconds() == 0
        assert utc_now().tzinfo is not None


class TestNoteStoreReadWrite:

    def test_get_missing_returns_none(self, store):
        assert store.get(42) is None

    def test_all_returns_snapshot(self, store):
        store.add("A", None)
        snapshot = store.all()

        store.add("B", None)

        assert [note.title for note in snapshot] == ["A"]
        assert len(store) == 2

    def test_replace_keeps_id_and_created_at(self, store):
        original = store.add("A", "old")

        updated = store.replace(original.id, title="A2", content=None)

        assert updated.id == original.id
        assert updated.created_at == original.created_at
        assert updated.title == "A2"
        assert updated.content is None
        assert store.get(original.id) == updated

    def test_replace_missing_returns_none(self, store):
        assert store.replace(7, title="X", content=None) is None
        assert len(store) == 0

    def test_remove(self, store):
        note = store.add("A", None)

        assert store.remove(note.id) is True
        assert store.remove(note.id) is False
        assert len(store) == 0


class TestNoteStoreConcurrency:

    def test_concurrent_adds_get_unique_ids(self):
        store = NoteStore()

        with ThreadPoolExecutor(max_workers=8) as pool:
            notes = list(pool.map(lambda i: store.add(f"note {i}", None), range(500)))

        ids = [note.id for note in notes]
        assert len(set(ids)) == 500
        assert sorted(ids) == list(range(1, 501))
        assert len(store) == 500

    def test_concurrent_add_and_remove(self):
        store = NoteStore()
        seeded = [store.add(f"seed {i}", None) for i in range(200)]

        def churn(i):
            store.remove(seeded[i].id)
            store.add(f"new {i}", None)
            return len(store.all())

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(churn, range(200)))

        remaining = store.all()
        assert len(remaining) == 200
        assert all(note.title.startswith("new") for note in remaining)
        assert max(note.id for note in remaining) == 400
