"""
Key-Value Store Unit Tests
Tests for sparse_merkle/storage
"""
import pytest

from fixtures.reference import leaf_value

from sparse_merkle.config import TreeConfig, set_default_config
from sparse_merkle.merkle import open_tree
from sparse_merkle.schemas.errors import (
    ConfigurationException,
    StoreReadException,
    StoreWriteException,
)
from sparse_merkle.storage import FileStore, InMemoryStore, KeyValueStore


class TestInMemoryStore:

    def test_missing_key_is_none(self, run):
        assert run(InMemoryStore().get("absent")) is None

    def test_put_then_get(self, run):
        store = InMemoryStore()
        run(store.put("t", "{}"))

        assert run(store.get("t")) == "{}"
        assert len(store) == 1

    def test_initial_contents(self, run):
        store = InMemoryStore({"b": "2", "a": "1"})

        assert store.keys() == ["a", "b"]
        assert run(store.get("a")) == "1"

    def test_is_key_value_store(self):
        assert isinstance(InMemoryStore(), KeyValueStore)


class TestFileStore:

    def test_creates_root(self, tmp_path):
        root = tmp_path / "nested" / "trees"
        FileStore(root)

        assert root.is_dir()

    def test_missing_key_is_none(self, tmp_path, run):
        assert run(FileStore(tmp_path).get("absent")) is None

    def test_from_config_uses_store_path(self, tmp_path, run):
        root = tmp_path / "configured"
        store = FileStore.from_config(TreeConfig(store_path=str(root)))
        run(store.put("t", "{}"))

        assert store.root == root
        assert (root / "t.json").is_file()

    def test_from_config_defaults_to_global_config(self, tmp_path):
        set_default_config(TreeConfig(store_path=str(tmp_path / "global")))

        assert FileStore.from_config().root == tmp_path / "global"

    def test_from_config_reads_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SPARSE_MERKLE_STORE_PATH", str(tmp_path / "env"))
        set_default_config(None)

        assert FileStore.from_config().root == tmp_path / "env"

    def test_put_then_get(self, tmp_path, run):
        store = FileStore(tmp_path)
        run(store.put("tree-1", '{"0":{},"1":{}}'))

        assert run(store.get("tree-1")) == '{"0":{},"1":{}}'
        assert (tmp_path / "tree-1.json").read_text(encoding="utf-8") == '{"0":{},"1":{}}'

    def test_overwrite_leaves_no_temp_files(self, tmp_path, run):
        store = FileStore(tmp_path)
        run(store.put("t", "first"))
        run(store.put("t", "second"))

        assert run(store.get("t")) == "second"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["t.json"]

    @pytest.mark.parametrize("key", ["", "../escape", "a/b", ".hidden", "a..b", "sp ace"])
    def test_unsafe_keys_rejected(self, tmp_path, run, key):
        with pytest.raises(ConfigurationException):
            run(FileStore(tmp_path).get(key))

    def test_unreadable_blob_is_read_error(self, tmp_path, run):
        (tmp_path / "t.json").mkdir()

        with pytest.raises(StoreReadException) as exc_info:
            run(FileStore(tmp_path).get("t"))

        assert exc_info.value.retryable
        assert exc_info.value.details["key"] == "t"

    def test_invalid_utf8_is_read_error(self, tmp_path, run):
        (tmp_path / "t.json").write_bytes(b"\xff\xfe\xfa")

        with pytest.raises(StoreReadException):
            run(FileStore(tmp_path).get("t"))

    def test_write_failure_is_write_error(self, tmp_path, run):
        store = FileStore(tmp_path)
        (tmp_path / "t.json").mkdir()

        with pytest.raises(StoreWriteException):
            run(store.put("t", "{}"))

        assert [p.name for p in tmp_path.iterdir()] == ["t.json"]

    def test_tree_survives_reopen(self, tmp_path, run):
        tree = run(open_tree(FileStore(tmp_path), "durable", 8))
        run(tree.update_element(200, leaf_value(200)))

        reopened = run(open_tree(FileStore(tmp_path), "durable", 8))

        assert reopened.get_root() == tree.get_root()
        assert run(reopened.get_hash_path(200)) == run(tree.get_hash_path(200))
