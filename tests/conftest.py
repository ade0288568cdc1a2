import numpy as np
import pytest


@pytest.fixture
def two_triples():
    """Two vertical triples 10 units apart, no equal distances inside a triple"""
    return np.array([
        [0.0, 0.0], [0.0, 1.0], [0.0, 3.0],
        [10.0, 0.0], [10.0, 1.0], [10.0, 3.0],
    ])


@pytest.fixture
def tight_cluster_59():
    rng = np.random.default_rng(7)
    return rng.normal(loc=0.0, scale=1.0, size=(59, 2))


@pytest.fixture
def split_59_and_6():
    """59 points near the origin and 6 far away, shuffled together"""
    rng = np.random.default_rng(11)
    big = rng.normal(loc=0.0, scale=1.0, size=(59, 2))
    small = rng.normal(loc=(1000.0, 0.0), scale=1.0, size=(6, 2))
    points = np.vstack([big, small])
    order = rng.permutation(len(points))
    # Indices (in shuffled order) of the far-away six
    far = sorted(int(i) for i in np.where(order >= 59)[0])
    return points[order], far


@pytest.fixture
def groups_4_4_3():
    """Eleven points in natural groups of 4, 4 and 3"""
    return np.array([
        [0.0, 0.0], [0.0, 1.0], [1.5, 0.0], [1.2, 1.7],
        [100.0, 0.0], [100.0, 1.1], [101.3, 0.0], [101.6, 1.4],
        [0.0, 100.0], [0.9, 100.0], [0.0, 101.8],
    ])


@pytest.fixture
def random_points():
    def make(seed, n=300):
        rng = np.random.default_rng(seed)
        return rng.uniform(0.0, 50.0, size=(n, 2))
    return make
