"""
Zero Hash Table Unit Tests
Tests for sparse_merkle/merkle/zero_hashes.py
"""
import pytest

from fixtures.reference import ref_zero_hashes

from sparse_merkle.constants import MAX_DEPTH
from sparse_merkle.crypto.hashing import Sha256Hasher
from sparse_merkle.merkle.zero_hashes import build_zero_hashes, validate_depth
from sparse_merkle.schemas.errors import ConfigurationException, ErrorCodes


class TestBuildZeroHashes:

    def test_length_is_depth_plus_one(self):
        assert len(build_zero_hashes(5, Sha256Hasher())) == 6

    def test_matches_reference_recurrence_at_max_depth(self):
        assert list(build_zero_hashes(MAX_DEPTH, Sha256Hasher())) == ref_zero_hashes(MAX_DEPTH)

    def test_shallower_table_is_prefix(self):
        """Z[i] depends only on i, not on the tree depth."""
        deep = build_zero_hashes(10, Sha256Hasher())
        shallow = build_zero_hashes(3, Sha256Hasher())

        assert deep[:4] == shallow

    def test_levels_all_distinct(self):
        zeros = build_zero_hashes(8, Sha256Hasher())

        assert len(set(zeros)) == len(zeros)


class TestValidateDepth:

    @pytest.mark.parametrize("depth", [1, 16, 32])
    def test_valid_depths(self, depth):
        assert validate_depth(depth) == depth

    @pytest.mark.parametrize("depth", [0, -1, 33, 64])
    def test_out_of_range(self, depth):
        with pytest.raises(ConfigurationException) as exc_info:
            validate_depth(depth)

        assert exc_info.value.code == ErrorCodes.CONFIGURATION_ERROR
        assert exc_info.value.details["field_path"] == "depth"

    @pytest.mark.parametrize("depth", ["4", 4.0, True, None])
    def test_non_integer(self, depth):
        with pytest.raises(ConfigurationException, match="integer"):
            validate_depth(depth)
