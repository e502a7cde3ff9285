import json
import logging

from tracker.storage import JsonStore


def test_missing_collection_loads_empty(tmp_path):
    assert JsonStore(tmp_path).load_collection("transactions") == ()


def test_save_and_load(tmp_path):
    store = JsonStore(tmp_path / "data")
    records = ({"id": "b1", "category": "food", "amount": 100.0, "period": "weekly"},)

    assert store.save_collection("budgets", records) is True
    assert store.path_for("budgets").exists()
    assert store.load_collection("budgets") == records


def test_save_replaces_whole_collection(tmp_path):
    store = JsonStore(tmp_path)
    store.save_collection("goals", [{"id": "g1"}, {"id": "g2"}])
    store.save_collection("goals", [{"id": "g2"}])
    assert store.load_collection("goals") == ({"id": "g2"},)


def test_corrupt_file_loads_empty(tmp_path, caplog):
    store = JsonStore(tmp_path)
    store.path_for("transactions").write_text("{not json", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="tracker.storage"):
        assert store.load_collection("transactions") == ()
    assert "transactions.json" in caplog.text


def test_non_list_payload_is_ignored(tmp_path):
    store = JsonStore(tmp_path)
    store.path_for("budgets").write_text(json.dumps({"id": "b1"}), encoding="utf-8")
    assert store.load_collection("budgets") == ()


def test_write_failure_returns_false(tmp_path, caplog):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = JsonStore(blocker / "data")

    with caplog.at_level(logging.ERROR, logger="tracker.storage"):
        assert store.save_collection("goals", [{"id": "g1"}]) is False
    assert "Failed to save" in caplog.text
