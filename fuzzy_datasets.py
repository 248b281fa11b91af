"""
Deterministyczne (seed) syntetyczne zbiory punktów dla dema, benchmarku i testów.
Wszystkie generatory zwracają tablicę numpy o kształcie (n, 2).
"""
import numpy as np

BASE_N = 100     # liczba punktów w jednym dysku
BASE_R = 10.0    # promień dysku


def _rng(random_state):
    # przekazany generator używamy dalej, żeby kolejne dyski różniły się od siebie
    if isinstance(random_state, np.random.RandomState):
        return random_state
    return np.random.RandomState(random_state)


def uniform_circle(n, cx, cy, r, random_state=0):
    """Punkty rozłożone jednostajnie na dysku o promieniu r."""
    rng = _rng(random_state)
    t = 2.0 * np.pi * rng.uniform(size=n)  # kąt
    # suma dwóch rozkładów jednostajnych złożona w 1 daje rozkład promienia dysku jednostajnego
    u = rng.uniform(size=n) + rng.uniform(size=n)
    u = np.where(u > 1.0, 2.0 - u, u)
    return np.column_stack([cx + r * u * np.cos(t), cy + r * u * np.sin(t)])


def gaussian_circle(n, cx, cy, r, random_state=0):
    """
    Rozkład normalny wokół (cx, cy) z sigma = r / 3,
    próbki spoza dysku o promieniu r są odrzucane.
    """
    rng = _rng(random_state)
    sigma = r / 3.0
    points = []
    while len(points) < n:
        x, y = rng.normal(cx, sigma), rng.normal(cy, sigma)
        # odrzucanie próbek spoza dysku
        if np.hypot(x - cx, y - cy) <= r:
            points.append((x, y))
    return np.array(points)


def unimodal_gaussian(n=BASE_N, r=BASE_R, random_state=0):
    return gaussian_circle(n, 0.0, 0.0, r, random_state)


def bimodal_gaussian(n=BASE_N, r=BASE_R, random_state=0):
    """Dwa gaussowskie dyski stykające się brzegami - punkty brzegowe leżą w "dolinie" między nimi."""
    rng = _rng(random_state)
    return np.vstack([
        gaussian_circle(n, 0.0, 0.0, r, rng),
        gaussian_circle(n, r * 2.0, 0.0, r, rng),
    ])


def two_disks(n=BASE_N, r=BASE_R, distance=50.0, random_state=0):
    """Dwa jednostajne dyski o środkach odległych o `distance` oraz prawdziwe etykiety."""
    rng = _rng(random_state)
    X = np.vstack([
        uniform_circle(n, 0.0, 0.0, r, rng),
        uniform_circle(n, distance, 0.0, r, rng),
    ])
    y = np.repeat([0, 1], n)   # etykieta 0 / 1
    return X, y
