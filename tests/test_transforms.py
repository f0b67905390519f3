"""
Tests for the array helpers.
"""

import numpy as np
import pytest

from dataviews.transforms import (
    denormalize,
    normalize,
    onehot,
    ones_like,
    putobs,
    rmobs,
    zeros_like,
)


class TestNormalize:
    """Test normalize / denormalize."""

    def test_values(self) -> None:
        """Each row is standardized with its own statistics."""
        x = np.array([[1.0, 3.0], [10.0, 30.0]])
        np.testing.assert_allclose(
            normalize(x, [2.0, 20.0], [1.0, 10.0]),
            [[-1.0, 1.0], [-1.0, 1.0]],
        )

    def test_other_dimension(self) -> None:
        """Statistics can be indexed by any dimension."""
        x = np.arange(6, dtype=float).reshape(2, 3)
        out = normalize(x, [0.0, 1.0, 2.0], [1.0, 1.0, 1.0], dim=1)
        np.testing.assert_allclose(out, [[0.0, 0.0, 0.0], [3.0, 3.0, 3.0]])

    def test_round_trip(self) -> None:
        """denormalize reverses normalize."""
        x = np.random.randn(4, 5, 6)
        mean, std = x.mean(axis=(1, 2)), x.std(axis=(1, 2))
        np.testing.assert_allclose(denormalize(normalize(x, mean, std), mean, std), x)

    def test_integer_input(self) -> None:
        """Integer arrays normalize to floats."""
        out = normalize(np.array([[2, 4]]), [3], [1])
        assert out.dtype.kind == 'f'

    def test_length_mismatch(self) -> None:
        """Statistics must match the size of dim."""
        with pytest.raises(ValueError, match="length 2"):
            normalize(np.zeros((2, 3)), [0.0, 0.0, 0.0], [1.0, 1.0])


class TestOnehot:
    """Test one-hot encoding."""

    def test_vector(self) -> None:
        """A vector gains a leading encoding axis."""
        out = onehot(np.array([1, 2, 3, 3, 1]), [1, 2, 3])
        assert out.dtype == bool
        np.testing.assert_array_equal(
            out.astype(int),
            [[1, 0, 0, 0, 1], [0, 1, 0, 0, 0], [0, 0, 1, 1, 0]],
        )

    def test_replaces_singleton_axis(self) -> None:
        """A size-1 axis at dim is replaced by the encoding."""
        x = np.random.randint(0, 2, size=(28, 28, 1, 4))
        out = onehot(x, [0, 1], dim=2)
        assert out.shape == (28, 28, 2, 4)
        np.testing.assert_array_equal(out[:, :, 1, :], x[:, :, 0, :] == 1)

    def test_unknown_value(self) -> None:
        """Values outside labels are rejected."""
        with pytest.raises(ValueError, match="not in labels"):
            onehot(np.array([0, 5]), [0, 1])


class TestObservationAxis:
    """Test constant arrays and observation axis helpers."""

    def test_like(self) -> None:
        """ones_like / zeros_like keep shape and dtype."""
        x = np.zeros((2, 3), dtype=np.float32)
        assert ones_like(x).dtype == np.float32
        assert ones_like(x).sum() == 6
        assert zeros_like(x).shape == (2, 3)

    def test_putobs_rmobs(self) -> None:
        """putobs adds a trailing size-1 axis and rmobs removes it."""
        x = np.random.randn(2, 3)
        assert putobs(x).shape == (2, 3, 1)
        np.testing.assert_array_equal(rmobs(putobs(x)), x)

    def test_rmobs_requires_singleton(self) -> None:
        """Only a size-1 observation axis can be removed."""
        with pytest.raises(ValueError, match="size 1"):
            rmobs(np.zeros((2, 3)))
        with pytest.raises(ValueError):
            rmobs(np.array(1.0))
