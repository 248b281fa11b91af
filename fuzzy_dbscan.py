"""
FuzzyDBSCAN - DBSCAN z rozmytym promieniem sąsiedztwa i rozmytą gęstością punktów rdzeniowych.

Ostre parametry DBSCAN zamieniamy na przedziały:
- eps_min..eps_max   - rozmycie brzegu (jak silnie dwa punkty są połączone)
- pts_min..pts_max   - rozmycie rdzenia (jak silnie punkt jest punktem rdzeniowym)

Każdy punkt dostaje kategorię Core / Border / Noise oraz miękką etykietę z [0, 1].
Dla eps_min == eps_max i pts_min == pts_max algorytm redukuje się do klasycznego DBSCAN.

Kontrakt wywołującego: granice przedziałów muszą być niemalejące.
Parametry nie są walidowane, a etykiety nie są przycinane do [0, 1].
"""
import sys
from collections import deque
from dataclasses import dataclass
from enum import Enum

import numpy as np


def euclidean_distance(a, b):
    """Odległość euklidesowa pomiędzy dwoma wektorami współrzędnych."""
    return float(np.linalg.norm(np.asarray(a, dtype=float) - np.asarray(b, dtype=float)))


def metric_distance(a, b):
    """Odległość dla typów punktów, które same implementują metodę ``distance(other)``."""
    return a.distance(b)


class Category(Enum):
    CORE = "core"
    BORDER = "border"
    NOISE = "noise"


@dataclass
class Assignment:
    """Element klastra: indeks punktu, miękka etykieta i kategoria."""

    index: int
    label: float
    category: Category

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "label": self.label,
            "category": self.category.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Assignment":
        try:
            category = Category(data["category"])
        except ValueError:
            raise ValueError(f"unknown category: {data['category']!r}") from None
        return cls(
            index=int(data["index"]),
            label=float(data["label"]),
            category=category,
        )


def clusters_to_dict(clusters):
    """Zamienia wynik klasteryzacji na listy/słowniki (do serializacji JSON)."""
    return {"clusters": [[a.to_dict() for a in cluster] for cluster in clusters]}


def clusters_from_dict(data):
    return [[Assignment.from_dict(a) for a in cluster] for cluster in data.get("clusters", [])]


def hard_labels(clusters, n):
    """
    Sprowadza rozmyty wynik do jednej etykiety całkowitej na punkt (-1 = szum).

    Punkt brzegowy należący do kilku klastrów trafia do tego, w którym ma najwyższą
    etykietę; przypisanie rdzeniowe zawsze wygrywa z brzegowym.
    Pozwala liczyć metryki scikit-learn względem prawdziwych etykiet.
    """
    labels = -np.ones(n, dtype=int)  # na początku każdy punkt jest szumem
    best = {}                        # indeks -> (czy_rdzeń, etykieta)

    for cluster_id, cluster in enumerate(clusters):
        for a in cluster:
            # klaster szumu nie nadpisuje -1
            if a.category == Category.NOISE:
                continue
            key = (a.category == Category.CORE, a.label)
            if a.index not in best or key > best[a.index]:
                best[a.index] = key
                labels[a.index] = cluster_id

    return labels


class FuzzyDBSCAN:
    def __init__(self, eps_min=0.5, eps_max=0.5, pts_min=5.0, pts_max=5.0,
                 distance_fn=euclidean_distance, verbose=False):
        """
        eps_min      – promień, do którego dwa punkty są w pełni połączone
        eps_max      – promień, powyżej którego punkty nie są połączone wcale
        pts_min      – gęstość, przy której (i poniżej której) punkt nie jest rdzeniowy
        pts_max      – gęstość, od której punkt jest w pełni rdzeniowy
                       (gęstość liczy też sam punkt, jak min_pts w klasycznym DBSCAN)
        distance_fn  – distance(a, b) -> float dla typu punktów wywołującego
        verbose      – wyświetlanie informacji o przebiegu
        """
        self.eps_min = eps_min          # dolna granica rozmytego promienia
        self.eps_max = eps_max          # górna granica rozmytego promienia
        self.pts_min = pts_min          # dolna granica rozmytej gęstości
        self.pts_max = pts_max          # górna granica rozmytej gęstości
        self.distance_fn = distance_fn  # metryka odległości
        self.verbose = verbose          # tryb debug

        # Pola wyniku
        self.clusters_ = None
        self.labels_ = None

    def distance(self, a, b):
        return self.distance_fn(a, b)

    def mu_distance(self, a, b):
        """Rozmyta siła połączenia dwóch punktów."""
        d = self.distance(a, b)
        if d <= self.eps_min:
            return 1.0
        if d > self.eps_max:
            return 0.0
        # liniowe opadanie pomiędzy eps_min a eps_max
        return (self.eps_max - d) / (self.eps_max - self.eps_min)

    def mu_min_p(self, n):
        """Rozmyta przynależność do rdzenia dla gęstości n."""
        if n >= self.pts_max:
            return 1.0
        # gęstość równa pts_min to jeszcze nie rdzeń
        if n <= self.pts_min:
            return 0.0
        return (n - self.pts_min) / (self.pts_max - self.pts_min)

    def region_query(self, points, point_idx):
        """
        Zwraca zbiór indeksów punktów (bez samego point_idx) w odległości <= eps_max.
        Pełne przeszukanie wszystkich punktów.
        """
        center = points[point_idx]
        return {
            i for i in range(len(points))
            if i != point_idx and self.distance(points[i], center) <= self.eps_max
        }

    def density(self, point_idx, neighbors, points):
        # 1.0 - sam punkt liczy się do swojego sąsiedztwa
        center = points[point_idx]
        return 1.0 + sum(self.mu_distance(center, points[i]) for i in neighbors)

    def point_label(self, points, point_idx):
        """Przeszukanie sąsiedztwa plus etykieta rdzenia pojedynczego punktu."""
        neighbors = self.region_query(points, point_idx)
        return self.mu_min_p(self.density(point_idx, neighbors, points)), neighbors

    def expand_cluster_fuzzy(self, point_label, point_idx, neighbors, points, visited):
        """
        Rozszerza jeden klaster z rozmytego punktu rdzeniowego (seed).

        Kroki:
        1. Seed trafia do klastra jako Core ze swoją etykietą.
        2. Kolejka (BFS) zaczyna się od sąsiadów seeda.
        3. Punkt z kolejki z etykietą > 0 jest rdzeniem - dokładamy jego sąsiadów.
           W przeciwnym razie odkładamy go jako kandydata na punkt brzegowy.
        4. Po opróżnieniu kolejki etykieta punktu brzegowego = najsłabsze ogniwo
           min(mu_distance, etykieta rdzenia) po wszystkich rdzeniach klastra.
        """
        cluster = [Assignment(point_idx, point_label, Category.CORE)]
        border_points = []

        # Lokalny znacznik odwiedzin - osobny od globalnego visited:
        # punkt trafia do kolejki tego rozszerzenia najwyżej raz
        neighbor_visited = [False] * len(points)
        neighbor_visited[point_idx] = True
        for idx in neighbors:
            neighbor_visited[idx] = True
        queue = deque(neighbors)

        while queue:
            idx = queue.popleft()
            visited[idx] = True

            # Sprawdzamy sąsiedztwo kandydata
            label, new_neighbors = self.point_label(points, idx)

            # Punkt rdzeniowy – dokładamy jego sąsiadów do kolejki (rozszerzamy klaster)
            if label > 0.0:
                for n_idx in new_neighbors:
                    if not neighbor_visited[n_idx]:
                        neighbor_visited[n_idx] = True
                        queue.append(n_idx)
                cluster.append(Assignment(idx, label, Category.CORE))
            else:
                # etykieta ustalana dopiero po zebraniu wszystkich rdzeni
                border_points.append(Assignment(idx, sys.float_info.max, Category.BORDER))

        # Punkty brzegowe: minimum po rdzeniach, które faktycznie je łączą (mu > 0)
        for border in border_points:
            for core in cluster:
                mu = self.mu_distance(points[border.index], points[core.index])
                if mu > 0.0:
                    border.label = min(border.label, mu, core.label)

        cluster.extend(border_points)

        if self.verbose:
            print(f"[expand_cluster_fuzzy] seed={point_idx}, core={len(cluster) - len(border_points)}, "
                  f"border={len(border_points)}")
        return cluster

    def cluster(self, points):
        """
        Główna implementacja FuzzyDBSCAN.

        Kroki:
        1. Iterujemy po punktach, pomijając już odwiedzone.
        2. Dla każdego punktu liczymy sąsiedztwo, gęstość i etykietę rdzenia.
        3. Etykieta == 0 → szum (z etykietą 1.0).
        4. W przeciwnym razie rozszerzamy nowy klaster (expand_cluster_fuzzy).
        5. Szum, jeśli jest, dokładamy jako ostatni klaster.

        Zwraca:
        listę klastrów (list Assignment)
        """
        n = len(points)
        clusters = []
        noise = []
        visited = [False] * n   # globalny znacznik odwiedzin

        for i in range(n):
            # Punkt już sprawdzony → pomiń
            if visited[i]:
                continue
            visited[i] = True

            label, neighbors = self.point_label(points, i)

            # Jeśli punkt nie jest rdzeniowy → szum (na razie)
            if label == 0.0:
                noise.append(i)
                continue

            clusters.append(self.expand_cluster_fuzzy(label, i, neighbors, points, visited))

        # punkt oznaczony jako szum, a później osiągnięty przez klaster, zostaje tylko brzegowym
        claimed = {a.index for cluster in clusters for a in cluster}
        noise_cluster = [Assignment(i, 1.0, Category.NOISE) for i in noise if i not in claimed]
        if noise_cluster:
            clusters.append(noise_cluster)

        if self.verbose:
            print(f"[cluster] n={n}, clusters={len(clusters) - (1 if noise_cluster else 0)}, "
                  f"noise={len(noise_cluster)}")
        return clusters

    def fit_predict(self, points):
        """
        Uruchamia cluster() i zwraca twarde etykiety (-1 = szum), po jednej na punkt.
        Pełny rozmyty wynik zostaje w clusters_.
        """
        self.clusters_ = self.cluster(points)
        self.labels_ = hard_labels(self.clusters_, len(points))
        return self.labels_
