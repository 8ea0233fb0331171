from smartspend.db import local_store


def test_storage_keys():
    assert local_store.storage_key("guest") == "smartspend_expenses"
    assert local_store.storage_key("abc") == "smartspend_expenses_abc"


def test_add_and_delete(tmp_path):
    base = str(tmp_path)
    assert local_store.get_expenses("guest", base) == []

    local_store.add_expenses("guest", [{"id": "1", "amount": 5.0}], base)
    local_store.add_expenses("guest", [{"id": "2", "amount": 7.0}], base)
    assert [e["id"] for e in local_store.get_expenses("guest", base)] == ["1", "2"]

    assert local_store.delete_expense("guest", "1", base) is True
    assert local_store.delete_expense("guest", "missing", base) is False
    assert [e["id"] for e in local_store.get_expenses("guest", base)] == ["2"]


def test_corrupt_file_reads_as_empty(tmp_path):
    (tmp_path / "smartspend_expenses.json").write_text("{not json")
    assert local_store.get_expenses("guest", str(tmp_path)) == []
