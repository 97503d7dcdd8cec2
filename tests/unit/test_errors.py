"""
Error Taxonomy Unit Tests
Tests for sparse_merkle/schemas/errors.py
"""
import pytest
from pydantic import ValidationError

from sparse_merkle.schemas.errors import (
    CanonicalizationException,
    ConfigurationException,
    ErrorCodes,
    IndexOutOfRangeException,
    LeafValueException,
    PersistenceException,
    RestoreException,
    SparseMerkleError,
    SparseMerkleException,
    StoreReadException,
    StoreWriteException,
)


class TestExceptionCodes:

    @pytest.mark.parametrize(
        "exc, code, retryable",
        [
            (ConfigurationException("bad"), ErrorCodes.CONFIGURATION_ERROR, False),
            (LeafValueException("bad"), ErrorCodes.LEAF_VALUE_INVALID, False),
            (IndexOutOfRangeException("bad"), ErrorCodes.INDEX_OUT_OF_RANGE, False),
            (StoreReadException("bad"), ErrorCodes.STORE_READ_FAILED, True),
            (StoreWriteException("bad"), ErrorCodes.STORE_WRITE_FAILED, True),
            (PersistenceException("bad"), ErrorCodes.PERSISTENCE_FAILED, True),
            (RestoreException("bad"), ErrorCodes.RESTORE_FAILED, False),
            (CanonicalizationException("bad"), ErrorCodes.CANONICALIZATION_ERROR, False),
        ],
    )
    def test_code_and_retryable(self, exc, code, retryable):
        assert isinstance(exc, SparseMerkleException)
        assert exc.code == code
        assert exc.retryable is retryable
        assert str(exc) == "bad"

    def test_details_merge_named_fields(self):
        exc = IndexOutOfRangeException("oob", index=9, depth=3, details={"op": "get"})

        assert exc.details == {"op": "get", "index": 9, "depth": 3}

    def test_index_zero_is_recorded(self):
        assert LeafValueException("bad", index=0).details == {"index": 0}

    def test_persistence_carries_tree_name(self):
        exc = PersistenceException("failed", tree_name="t", details={"root": "0x00"})

        assert exc.details == {"root": "0x00", "tree_name": "t"}

    def test_repr(self):
        assert repr(RestoreException("broken")) == (
            "RestoreException(code='RESTORE_FAILED', message='broken')"
        )


class TestErrorModel:

    def test_exception_to_model(self):
        model = StoreReadException("disk", key="t").to_error_model()

        assert model.code == ErrorCodes.STORE_READ_FAILED
        assert model.details == {"key": "t"}
        assert model.retryable is True

    def test_model_to_exception(self):
        model = SparseMerkleError(code=ErrorCodes.RESTORE_FAILED, message="broken")
        exc = model.to_exception()

        assert isinstance(exc, SparseMerkleException)
        assert exc.code == ErrorCodes.RESTORE_FAILED
        assert exc.retryable is False

    def test_model_forbids_extra_fields(self):
        with pytest.raises(ValidationError):
            SparseMerkleError(code="X", message="m", unexpected=1)

    def test_model_json_round_trip(self):
        model = PersistenceException("failed", tree_name="t").to_error_model()

        assert SparseMerkleError.model_validate_json(model.model_dump_json()) == model
