"""Unit tests for the history buffer of Anderson acceleration."""

import numpy as np
import pytest

import andersonmix


def _vector(value: float, dimension: int = 3) -> np.ndarray:
    return value * np.ones(dimension)


def test_scratch_space():

    # Picard mode - no least-squares scratch space
    cache = andersonmix.AndersonCache(4, andersonmix.Anderson(m=0))
    assert cache.residuals is None
    assert cache.alphas is None
    assert cache.capacity == 1

    # Accelerated mode
    cache = andersonmix.AndersonCache(4, andersonmix.Anderson(m=3))
    assert cache.residuals.shape == (4, 3)
    assert cache.alphas.shape == (3,)
    assert cache.fx.shape == (4,)
    assert cache.capacity == 4


def test_invalid_construction():
    with pytest.raises(ValueError):
        andersonmix.AndersonCache(0, andersonmix.Anderson(m=2))
    with pytest.raises(ValueError):
        andersonmix.Anderson(m=-1)


def test_initialize():
    cache = andersonmix.AndersonCache(3, andersonmix.Anderson(m=2))
    cache.initialize(_vector(1.0))
    assert np.allclose(cache.iterate(0), 1.0)
    assert np.allclose(cache.previous_iterate, 1.0)
    assert np.allclose(cache.iterate(1), 0.0)
    assert np.allclose(cache.iterate(2), 0.0)


def test_advance_newest_first():
    cache = andersonmix.AndersonCache(3, andersonmix.Anderson(m=2))
    cache.initialize(_vector(0.0))

    # Push iterates 1, 2, 3, 4 with mapped values 10 * x of the superseded iterate
    for value in range(1, 5):
        cache.advance(_vector(value), _vector(10.0 * (value - 1)))

    # Newest first: 4, 3, 2. Iterates 0 and 1 are evicted.
    assert np.allclose(cache.iterate(0), 4.0)
    assert np.allclose(cache.iterate(1), 3.0)
    assert np.allclose(cache.iterate(2), 2.0)
    assert np.allclose(cache.mapped(1), 30.0)
    assert np.allclose(cache.mapped(2), 20.0)

    # Mapped values stay paired with their iterates
    assert np.allclose(cache.iterate_history(2), [[3.0, 2.0]] * 3)
    assert np.allclose(cache.mapped_history(2), [[30.0, 20.0]] * 3)


def test_ring_buffer_bound():
    depth = 3
    cache = andersonmix.AndersonCache(2, andersonmix.Anderson(m=depth))
    cache.initialize(_vector(0.0, 2))
    for value in range(1, 20):
        cache.advance(_vector(value, 2), _vector(-value, 2))

    # Storage does not grow, and only the last depth + 1 iterates are referenced
    assert cache._xs.shape == (2, depth + 1)
    stored = sorted(set(cache._xs[0]))
    assert np.allclose(stored, [16.0, 17.0, 18.0, 19.0])
    assert np.allclose(
        [cache.iterate(slot)[0] for slot in range(depth + 1)], [19, 18, 17, 16]
    )


def test_previous_iterate_picard():
    cache = andersonmix.AndersonCache(3, andersonmix.Anderson(m=0))
    cache.initialize(_vector(1.0))
    cache.advance(_vector(2.0), _vector(2.0))
    assert np.allclose(cache.previous_iterate, 1.0)
    assert np.allclose(cache.iterate(0), 2.0)
    cache.advance(_vector(3.0), _vector(3.0))
    assert np.allclose(cache.previous_iterate, 2.0)


def test_previous_iterate_depth_one():
    # Depth one: the previous iterate is the entry about to be overwritten
    cache = andersonmix.AndersonCache(3, andersonmix.Anderson(m=1))
    cache.initialize(_vector(1.0))
    cache.advance(_vector(2.0), _vector(2.0))
    assert np.allclose(cache.previous_iterate, 0.0)
    cache.advance(_vector(3.0), _vector(3.0))
    assert np.allclose(cache.previous_iterate, 1.0)
    cache.advance(_vector(4.0), _vector(4.0))
    assert np.allclose(cache.previous_iterate, 2.0)


def test_previous_iterate_deep():
    # Depth larger than one: the previous iterate is the last newest iterate
    cache = andersonmix.AndersonCache(3, andersonmix.Anderson(m=3))
    cache.initialize(_vector(1.0))
    cache.advance(_vector(2.0), _vector(2.0))
    assert np.allclose(cache.previous_iterate, 1.0)
    cache.advance(_vector(3.0), _vector(3.0))
    assert np.allclose(cache.previous_iterate, 2.0)


def test_reinitialize():
    cache = andersonmix.AndersonCache(2, andersonmix.Anderson(m=2))
    cache.initialize(_vector(1.0, 2))
    cache.advance(_vector(2.0, 2), _vector(2.0, 2))
    cache.advance(_vector(3.0, 2), _vector(3.0, 2))

    cache.initialize(_vector(5.0, 2))
    assert np.allclose(cache.iterate(0), 5.0)
    assert np.allclose(cache.iterate(1), 0.0)
    assert np.allclose(cache.mapped_history(2), 0.0)
    assert np.allclose(cache.previous_iterate, 5.0)
