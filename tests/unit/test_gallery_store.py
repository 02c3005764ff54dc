"""Unit tests for the gallery store and its storage media."""

import json
import random

import pytest

from artisan.core.errors import PersistenceWriteError
from artisan.services.gallery_store import GalleryStore, parse_gallery, serialize_gallery
from artisan.services.storage import JsonFileStorage, MemoryStorage


class FailingStorage(MemoryStorage):
    """Storage whose writes always fail."""

    def write(self, key: str, value: str) -> None:
        raise OSError("disk full")


# ============================================================================
# load Tests
# ============================================================================


class TestLoad:
    def test_missing_value_loads_empty(self, gallery_store):
        assert gallery_store.load() == ()

    @pytest.mark.parametrize(
        "raw",
        [
            "not json at all",
            '{"id": "A"}',
            '[{"id": "A"}]',
            "[1, 2, 3]",
            '[{"id": "A", "originalImage": 1}]',
        ],
    )
    def test_malformed_value_loads_empty(self, raw):
        storage = MemoryStorage({"artisan_gallery_v2": raw})
        store = GalleryStore(storage)

        assert store.load() == ()

    def test_malformed_value_is_discarded(self):
        storage = MemoryStorage({"artisan_gallery_v2": "{broken"})
        GalleryStore(storage).load()
        assert "artisan_gallery_v2" not in storage.values

    def test_malformed_value_logs_warning(self, caplog):
        storage = MemoryStorage({"artisan_gallery_v2": "{broken"})
        with caplog.at_level("WARNING"):
            GalleryStore(storage).load()
        assert "unreadable" in caplog.text

    def test_duplicate_ids_keep_first(self, make_item):
        raw = serialize_gallery([make_item("A", timestamp=2), make_item("A", timestamp=1)])
        items = parse_gallery(raw)
        assert [item.timestamp for item in items] == [2]

    def test_uses_configured_key(self, make_item):
        storage = MemoryStorage({"gallery_v3": serialize_gallery([make_item("A")])})
        assert GalleryStore(storage, key="gallery_v3").load()[0].id == "A"
        assert GalleryStore(storage).load() == ()


# ============================================================================
# add / remove Tests
# ============================================================================


class TestMutations:
    def test_add_prepends(self, gallery_store, make_item):
        gallery_store.add(make_item("A"))
        gallery_store.add(make_item("B"))

        assert [item.id for item in gallery_store.all()] == ["B", "A"]

    def test_add_persists_full_collection(self, gallery_store, storage, make_item):
        gallery_store.add(make_item("A"))
        gallery_store.add(make_item("B"))

        records = json.loads(storage.values["artisan_gallery_v2"])
        assert [record["id"] for record in records] == ["B", "A"]
        assert records[0]["processedImage"] == "data:image/png;base64,Bproc"

    def test_add_rejects_duplicate_id(self, gallery_store, make_item):
        gallery_store.add(make_item("A"))
        with pytest.raises(ValueError):
            gallery_store.add(make_item("A"))
        assert len(gallery_store) == 1

    def test_add_keeps_item_when_write_fails(self, make_item):
        store = GalleryStore(FailingStorage())

        with pytest.raises(PersistenceWriteError):
            store.add(make_item("A"))

        assert [item.id for item in store.all()] == ["A"]

    def test_remove(self, gallery_store, storage, make_item):
        gallery_store.add(make_item("A"))
        gallery_store.add(make_item("B"))

        assert gallery_store.remove("B") is True
        assert [item.id for item in gallery_store.all()] == ["A"]
        assert [r["id"] for r in json.loads(storage.values["artisan_gallery_v2"])] == ["A"]

    def test_remove_unknown_id_is_noop(self, gallery_store, storage, make_item):
        gallery_store.add(make_item("A"))
        before = storage.values["artisan_gallery_v2"]

        assert gallery_store.remove("missing") is False
        assert storage.values["artisan_gallery_v2"] == before

    def test_get(self, gallery_store, make_item):
        gallery_store.add(make_item("A"))
        assert gallery_store.get("A").id == "A"
        assert gallery_store.get("B") is None

    def test_all_is_a_snapshot(self, gallery_store, make_item):
        gallery_store.add(make_item("A"))
        snapshot = gallery_store.all()
        gallery_store.add(make_item("B"))

        assert isinstance(snapshot, tuple)
        assert [item.id for item in snapshot] == ["A"]

    def test_random_sequences_keep_order_and_unique_ids(self, gallery_store, make_item):
        rng = random.Random(7)
        expected: list[str] = []

        for step in range(200):
            if expected and rng.random() < 0.4:
                victim = rng.choice(expected)
                gallery_store.remove(victim)
                expected.remove(victim)
            else:
                item_id = f"item-{step}"
                gallery_store.add(make_item(item_id, timestamp=step))
                expected.insert(0, item_id)

            items = gallery_store.all()
            ids = [item.id for item in items]
            timestamps = [item.timestamp for item in items]
            assert ids == expected
            assert len(set(ids)) == len(ids)
            assert timestamps == sorted(timestamps, reverse=True)


# ============================================================================
# Persistence round trip
# ============================================================================


class TestRoundTrip:
    def test_file_round_trip(self, temp_dir, make_item):
        storage = JsonFileStorage(temp_dir / "data")
        store = GalleryStore(storage)
        for index, item_id in enumerate(["A", "B", "C"]):
            store.add(make_item(item_id, timestamp=index, style_id="charcoal"))

        reloaded = GalleryStore(JsonFileStorage(temp_dir / "data")).load()

        assert reloaded == store.all()

    def test_file_written_under_key(self, temp_dir, make_item):
        storage = JsonFileStorage(temp_dir)
        GalleryStore(storage).add(make_item("A"))

        assert (temp_dir / "artisan_gallery_v2.json").exists()
        assert not (temp_dir / "artisan_gallery_v2.json.tmp").exists()

    def test_unreadable_file_is_discarded(self, temp_dir):
        (temp_dir / "artisan_gallery_v2.json").write_text("[{]", encoding="utf-8")

        assert GalleryStore(JsonFileStorage(temp_dir)).load() == ()
        assert not (temp_dir / "artisan_gallery_v2.json").exists()
