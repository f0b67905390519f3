"""
Tests for the observation protocol.

Validates numobs/getobs defaults for arrays, DataFrames and sequences,
the override hooks, and index validation.
"""

import numpy as np
import pandas as pd
import pytest

from dataviews.observation import (
    ObsContainer,
    getobs,
    is_container,
    normalize_index,
    numobs,
)


# =============================================================================
# Fixtures
# =============================================================================

class Squares:
    """Custom container implementing the override hooks."""

    def __init__(self, n: int) -> None:
        self.n = n
        self.received = []

    def __numobs__(self) -> int:
        return self.n

    def __getobs__(self, idx):
        self.received.append(idx)
        if isinstance(idx, int):
            return idx * idx
        return [int(i) * int(i) for i in idx]


@pytest.fixture
def matrix() -> np.ndarray:
    """3 features x 4 observations."""
    return np.arange(12).reshape(3, 4)


@pytest.fixture
def frame() -> pd.DataFrame:
    return pd.DataFrame({'a': [1, 2, 3], 'b': [4, 5, 6]})


# =============================================================================
# numobs
# =============================================================================

class TestNumobs:
    """Test observation counting."""

    def test_array_last_axis(self, matrix: np.ndarray) -> None:
        """Arrays count observations along the last axis."""
        assert numobs(matrix) == 4
        assert numobs(np.zeros((2, 3, 7))) == 7
        assert numobs(np.arange(5)) == 5

    def test_sequences(self) -> None:
        """Sequences use len()."""
        assert numobs([1, 2, 3]) == 3
        assert numobs((1, 2)) == 2
        assert numobs(range(10)) == 10
        assert numobs([]) == 0

    def test_pandas_rows(self, frame: pd.DataFrame) -> None:
        """DataFrames and Series count rows."""
        assert numobs(frame) == 3
        assert numobs(frame['a']) == 3

    def test_override_hook(self) -> None:
        """__numobs__ takes precedence."""
        assert numobs(Squares(6)) == 6

    @pytest.mark.parametrize("data", [5, 2.5, {'a': 1}, np.array(3.0), None])
    def test_unsupported_container(self, data) -> None:
        """Unsupported objects raise TypeError instead of guessing."""
        with pytest.raises(TypeError, match="observation protocol"):
            numobs(data)

    def test_is_container(self, matrix: np.ndarray) -> None:
        """is_container mirrors what numobs accepts."""
        assert is_container(matrix)
        assert is_container([1, 2])
        assert is_container(Squares(1))
        assert isinstance(Squares(1), ObsContainer)
        assert not is_container(np.array(1.0))
        assert not is_container(42)


# =============================================================================
# getobs
# =============================================================================

class TestGetobsArrays:
    """Test getobs on numpy arrays."""

    def test_scalar_removes_observation_axis(self, matrix: np.ndarray) -> None:
        """Scalar retrieval returns one column."""
        np.testing.assert_array_equal(getobs(matrix, 1), [1, 5, 9])

    def test_vector_keeps_observation_axis(self, matrix: np.ndarray) -> None:
        """Vector retrieval keeps the last axis, in index order."""
        batch = getobs(matrix, [3, 0])
        assert batch.shape == (3, 2)
        np.testing.assert_array_equal(batch, matrix[:, [3, 0]])

    def test_scalar_vector_consistency(self, matrix: np.ndarray) -> None:
        """getobs(x, [i]) is getobs(x, i) with a trailing axis of size 1."""
        np.testing.assert_array_equal(getobs(matrix, [2])[..., 0], getobs(matrix, 2))

    def test_one_dimensional(self) -> None:
        """1-d arrays yield scalars and 1-d batches."""
        x = np.array([10, 20, 30])
        assert getobs(x, 2) == 30
        np.testing.assert_array_equal(getobs(x, [1, 0]), [20, 10])

    def test_materialize_all(self, matrix: np.ndarray) -> None:
        """Omitting the index returns a copy of every observation."""
        result = getobs(matrix)
        np.testing.assert_array_equal(result, matrix)
        assert result is not matrix

    def test_numpy_integer_index(self, matrix: np.ndarray) -> None:
        """numpy integer scalars are accepted."""
        np.testing.assert_array_equal(getobs(matrix, np.int64(0)), [0, 4, 8])

    def test_empty_vector(self, matrix: np.ndarray) -> None:
        """An empty vector index returns an empty batch."""
        assert getobs(matrix, []).shape == (3, 0)


class TestGetobsSequences:
    """Test getobs on sequences and pandas containers."""

    def test_list_scalar_and_vector(self) -> None:
        """Lists index positionally and collate vectors."""
        data = [10, 20, 30]
        assert getobs(data, 1) == 20
        assert getobs(data, [2, 0]) == [30, 10]

    def test_list_of_tuples_is_unzipped(self) -> None:
        """Vector retrieval of tuple observations returns one batch per position."""
        data = [(1, 'a'), (2, 'b'), (3, 'c')]
        assert getobs(data, 0) == (1, 'a')
        assert getobs(data, [2, 0]) == ([3, 1], ['c', 'a'])

    def test_materialize_sequence(self) -> None:
        """Omitting the index collects every element."""
        assert getobs(range(4)) == [0, 1, 2, 3]
        assert getobs([]) == []

    def test_slice_index(self) -> None:
        """Slices resolve against numobs."""
        assert getobs([1, 2, 3, 4], slice(1, 3)) == [2, 3]

    def test_dataframe(self, frame: pd.DataFrame) -> None:
        """DataFrames return rows and sub-frames."""
        row = getobs(frame, 1)
        assert row['a'] == 2 and row['b'] == 5
        pd.testing.assert_frame_equal(getobs(frame, [2, 0]), frame.iloc[[2, 0]])

    def test_series(self, frame: pd.DataFrame) -> None:
        """Series return values and sub-series."""
        assert getobs(frame['b'], 2) == 6
        pd.testing.assert_series_equal(getobs(frame['b'], [1]), frame['b'].iloc[[1]])

    def test_override_receives_validated_index(self) -> None:
        """Custom containers receive an int or an intp array."""
        data = Squares(5)
        assert getobs(data, 3) == 9
        assert getobs(data, [4, 1]) == [16, 1]
        assert isinstance(data.received[0], int)
        assert data.received[1].dtype == np.intp


# =============================================================================
# Index validation
# =============================================================================

class TestIndexValidation:
    """Test out-of-range and malformed indices."""

    @pytest.mark.parametrize("idx", [3, -1, [0, 5], [-1]])
    def test_out_of_range(self, idx) -> None:
        """Indices outside [0, n) raise IndexError, without wrap-around."""
        with pytest.raises(IndexError, match="out of range"):
            getobs([1, 2, 3], idx)

    def test_out_of_range_array(self, matrix: np.ndarray) -> None:
        """Arrays do not accept negative indices either."""
        with pytest.raises(IndexError):
            getobs(matrix, -1)

    def test_duplicates(self) -> None:
        """Duplicate positions in a vector index are rejected."""
        with pytest.raises(ValueError, match="Duplicate"):
            getobs([1, 2, 3], [0, 0])

    def test_non_integer(self) -> None:
        """Float and boolean indices are rejected."""
        with pytest.raises(TypeError):
            getobs([1, 2, 3], [0.5])
        with pytest.raises(TypeError):
            getobs([1, 2, 3], True)
        with pytest.raises(TypeError):
            getobs([1, 2, 3], "0")

    def test_multidimensional(self) -> None:
        """Vector indices must be 1-d."""
        with pytest.raises(ValueError, match="1-dimensional"):
            getobs([1, 2, 3], [[0, 1]])

    def test_empty_container(self) -> None:
        """Any scalar index into an empty container is out of range."""
        with pytest.raises(IndexError):
            getobs([], 0)
        with pytest.raises(IndexError):
            getobs(np.zeros((2, 0)), 0)

    def test_normalize_index_forms(self) -> None:
        """normalize_index returns int or intp array."""
        assert normalize_index(np.int32(2), 3) == 2
        assert isinstance(normalize_index(np.int32(2), 3), int)
        out = normalize_index(range(3), 3)
        assert out.dtype == np.intp
        np.testing.assert_array_equal(out, [0, 1, 2])
