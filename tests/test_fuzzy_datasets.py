import numpy as np

from fuzzy_datasets import bimodal_gaussian, gaussian_circle, two_disks, uniform_circle


def test_uniform_circle_stays_in_disk():
    points = uniform_circle(500, 3.0, -2.0, 5.0, random_state=1)
    assert points.shape == (500, 2)
    assert np.all(np.hypot(points[:, 0] - 3.0, points[:, 1] + 2.0) <= 5.0 + 1e-9)


def test_gaussian_circle_stays_in_disk():
    points = gaussian_circle(300, 0.0, 0.0, 10.0, random_state=1)
    assert points.shape == (300, 2)
    assert np.all(np.hypot(points[:, 0], points[:, 1]) <= 10.0)


def test_generators_are_seeded():
    np.testing.assert_array_equal(uniform_circle(50, 0, 0, 1, 7), uniform_circle(50, 0, 0, 1, 7))
    np.testing.assert_array_equal(bimodal_gaussian(random_state=3), bimodal_gaussian(random_state=3))


def test_two_disks_layout():
    X, y = two_disks(n=40, r=10.0, distance=50.0)
    assert X.shape == (80, 2)
    assert list(np.bincount(y)) == [40, 40]
    assert X[y == 0, 0].max() <= 10.0
    assert X[y == 1, 0].min() >= 40.0
