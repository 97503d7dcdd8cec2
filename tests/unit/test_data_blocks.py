"""
Data Block Store Unit Tests
Tests for sparse_merkle/merkle/data_blocks.py
"""
import pytest

from fixtures.reference import leaf_value

from sparse_merkle.merkle.data_blocks import DataBlockStore
from sparse_merkle.schemas.errors import LeafValueException


class TestDataBlockStore:

    def test_empty(self):
        assert list(DataBlockStore().items()) == []

    def test_set_then_items(self):
        blocks = DataBlockStore()
        blocks.set(7, leaf_value(7))
        blocks.set(2, leaf_value(2))

        assert dict(blocks.items()) == {7: leaf_value(7), 2: leaf_value(2)}

    def test_overwrite_keeps_one_entry(self):
        blocks = DataBlockStore()
        blocks.set(1, leaf_value(1))
        blocks.set(1, leaf_value(2))

        assert list(blocks.items()) == [(1, leaf_value(2))]

    def test_buffer_types_stored_as_bytes(self):
        blocks = DataBlockStore()
        blocks.set(0, bytearray(leaf_value(0)))
        blocks.set(1, memoryview(leaf_value(1)))

        assert all(type(value) is bytes for _, value in blocks.items())

    def test_wrong_length_records_length(self):
        blocks = DataBlockStore()

        with pytest.raises(LeafValueException) as exc_info:
            blocks.set(3, bytes(32))

        assert exc_info.value.details == {"length": 32, "index": 3}
        assert list(blocks.items()) == []

    def test_wrong_type(self):
        with pytest.raises(LeafValueException, match="must be bytes"):
            DataBlockStore().set(0, list(range(64)))
