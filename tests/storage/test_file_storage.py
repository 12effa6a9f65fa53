import pytest

from saferoute.core.exceptions import PersistenceError, ValidationError
from saferoute.storage.factory import create_storage
from saferoute.storage.file_storage import FileKeyValueStorage
from saferoute.storage.memory_storage import InMemoryKeyValueStorage


@pytest.mark.asyncio
async def test_missing_key_reads_as_none(tmp_path):
    storage = FileKeyValueStorage(tmp_path / "store")
    assert await storage.get_item("saferoute360_db") is None


@pytest.mark.asyncio
async def test_set_then_get_returns_text_and_leaves_no_temp_files(tmp_path):
    storage = FileKeyValueStorage(tmp_path)
    await storage.set_item("saferoute360_db", '{"drivers": ["Đà Lạt"]}')
    await storage.set_item("saferoute360_db", '{"drivers": []}')

    assert await storage.get_item("saferoute360_db") == '{"drivers": []}'
    assert sorted(p.name for p in tmp_path.iterdir()) == ["saferoute360_db.json"]


@pytest.mark.asyncio
async def test_failed_write_keeps_previous_document(tmp_path, monkeypatch):
    storage = FileKeyValueStorage(tmp_path)
    await storage.set_item("k", "old")

    def broken_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr("saferoute.storage.file_storage.os.replace", broken_replace)

    with pytest.raises(PersistenceError):
        await storage.set_item("k", "new")

    assert await storage.get_item("k") == "old"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["k.json"]


@pytest.mark.asyncio
async def test_unreadable_document_raises_persistence_error(tmp_path):
    (tmp_path / "k.json").write_bytes(b"\xff\xfe\xfa")
    storage = FileKeyValueStorage(tmp_path)

    with pytest.raises(PersistenceError):
        await storage.get_item("k")


@pytest.mark.asyncio
async def test_remove_item_is_idempotent(tmp_path):
    storage = FileKeyValueStorage(tmp_path)
    await storage.set_item("k", "v")
    await storage.remove_item("k")
    await storage.remove_item("k")
    assert await storage.get_item("k") is None


def test_factory_picks_backend(tmp_path):
    assert isinstance(create_storage({"backend": "memory"}), InMemoryKeyValueStorage)

    file_storage = create_storage({"backend": "file", "path": str(tmp_path)})
    assert isinstance(file_storage, FileKeyValueStorage)
    assert file_storage.root == tmp_path

    with pytest.raises(ValidationError):
        create_storage({"backend": "mysql"})
