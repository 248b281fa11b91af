"""
Skrypt demonstracyjny dla FuzzyDBSCAN
Uruchamia jeden ze scenariuszy referencyjnych, porównuje wynik z klasycznym DBSCAN,
opcjonalnie rysuje, eksportuje lub mierzy czas klasteryzacji
"""

import argparse
import json
import time

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.colors import to_rgba
from sklearn.cluster import DBSCAN as SKDBSCAN
from sklearn.metrics import adjusted_rand_score
from sklearn.metrics import normalized_mutual_info_score

from fuzzy_datasets import BASE_N, BASE_R, bimodal_gaussian, two_disks, unimodal_gaussian
from fuzzy_dbscan import Category, FuzzyDBSCAN, clusters_to_dict, hard_labels


# nazwa -> (generator danych, eps_min, eps_max, pts_min, pts_max)
SCENARIOS = {
    "reduce_to_dbscan": (unimodal_gaussian, BASE_R, BASE_R, 1.0, 1.0),
    "fuzzy_core": (unimodal_gaussian, BASE_R, BASE_R, 1.0, float(BASE_N)),
    "fuzzy_border": (unimodal_gaussian, 1.0, BASE_R, BASE_N / 2, BASE_N / 2),
    "full_fuzzy": (bimodal_gaussian, 1.0, BASE_R, BASE_N / 2, float(BASE_N)),
    "noise": (unimodal_gaussian, BASE_R * 2.0, BASE_R * 4.0, BASE_N * 2.0, BASE_N * 4.0),
    "two_disks": (lambda: two_disks()[0], 20.0, 20.0, 50.0, 50.0),
}

# czarny dla szumu, dalej ColorBrewer Set1
COLORS = ["#000000", "#e41a1c", "#377eb8", "#4daf4a", "#984ea3", "#ff7f00", "#a65628", "#f781bf"]


def evaluate_clustering(y_true, y_pred):
    """Oblicza metryki ewaluacyjne dla twardych etykiet (-1 = szum)"""
    y_true = np.asarray(y_true)
    y_pred = np.asarray(y_pred)
    # Usuwanie punktów szumu (-1) dla NMI / ARI
    mask = y_pred != -1
    if np.sum(mask) == 0:
        return {"nmi": 0.0, "ari": 0.0, "noise_ratio": 1.0, "n_clusters": 0}

    nmi = normalized_mutual_info_score(y_true[mask], y_pred[mask])
    ari = adjusted_rand_score(y_true[mask], y_pred[mask])
    noise_ratio = np.sum(y_pred == -1) / len(y_pred)
    n_clusters = len(set(y_pred)) - (1 if -1 in y_pred else 0)

    return {
        "nmi": nmi,
        "ari": ari,
        "noise_ratio": noise_ratio,
        "n_clusters": n_clusters
    }


def summarize(clusters):
    """Liczy przypisania w każdej kategorii oraz etykiety ułamkowe"""
    summary = {"clusters": 0, "core": 0, "border": 0, "noise": 0,
               "fuzzy_core": 0, "fuzzy_border": 0}
    for cluster in clusters:
        if cluster and cluster[0].category != Category.NOISE:
            summary["clusters"] += 1
        for a in cluster:
            summary[a.category.value] += 1
            if a.category != Category.NOISE and a.label != 1.0:
                summary["fuzzy_" + a.category.value] += 1
    return summary


def plot_clusters(points, clusters, ax=None, title="FuzzyDBSCAN"):
    """Rysuje rozmyty wynik: przezroczystość wg etykiety, rdzenie z obwódką"""
    points = np.asarray(points)
    if ax is None:
        _, ax = plt.subplots(figsize=(7, 7))

    # jedno scatter na klaster, alpha każdego punktu w tablicy RGBA
    for cluster_index, cluster in enumerate(clusters):
        if not cluster:
            continue
        if cluster[0].category == Category.NOISE:
            color = COLORS[0]
        else:
            color = COLORS[1 + cluster_index % (len(COLORS) - 1)]

        indices = np.array([a.index for a in cluster])
        labels = np.array([a.label for a in cluster], dtype=float)
        face = np.tile(to_rgba(color), (len(cluster), 1))
        face[:, 3] = np.clip(labels, 0.0, 1.0) * 0.9 + 0.1
        edge = np.zeros_like(face)
        edge[:, 3] = [face[i, 3] if a.category == Category.CORE else 0.0 for i, a in enumerate(cluster)]

        ax.scatter(points[indices, 0], points[indices, 1], c=face, edgecolors=edge,
                   linewidths=0.5, s=25)

    ax.set_title(title)
    ax.set_xlabel("Feature 1")
    ax.set_ylabel("Feature 2")
    ax.set_aspect("equal")
    ax.grid(True, alpha=0.3)
    return ax


def compare_with_dbscan(points, fuzzy):
    """
    Uruchamia DBSCAN ze scikit-learn z ostrymi granicami konfiguracji rozmytej
    (eps = eps_max, min_samples = pts_max) i zwraca oba twarde etykietowania.
    """
    points = np.asarray(points)
    fuzzy_labels = fuzzy.fit_predict(points)
    model = SKDBSCAN(eps=fuzzy.eps_max, min_samples=max(1, int(np.ceil(fuzzy.pts_max))))
    dbscan_labels = model.fit_predict(points)
    return fuzzy_labels, dbscan_labels


def benchmark(points, fuzzy, repeat=10):
    """Średni czas jednego wywołania cluster(), w sekundach"""
    times = []
    for _ in range(repeat):
        start_time = time.perf_counter()
        fuzzy.cluster(points)
        times.append(time.perf_counter() - start_time)
    return float(np.mean(times))


def save_clusters(path, clusters):
    with open(path, "w") as f:
        json.dump(clusters_to_dict(clusters), f, indent=2)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="FuzzyDBSCAN demo")
    parser.add_argument("--scenario", choices=sorted(SCENARIOS), default="full_fuzzy")
    parser.add_argument("--eps-min", type=float, default=None)
    parser.add_argument("--eps-max", type=float, default=None)
    parser.add_argument("--pts-min", type=float, default=None)
    parser.add_argument("--pts-max", type=float, default=None)
    parser.add_argument("--output", default=None, help="write clusters as JSON")
    parser.add_argument("--plot", default=None, help="write a PNG scatter plot")
    parser.add_argument("--benchmark", type=int, default=0, metavar="N",
                        help="time N clustering runs")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    factory, eps_min, eps_max, pts_min, pts_max = SCENARIOS[args.scenario]

    fuzzy = FuzzyDBSCAN(
        eps_min=eps_min if args.eps_min is None else args.eps_min,
        eps_max=eps_max if args.eps_max is None else args.eps_max,
        pts_min=pts_min if args.pts_min is None else args.pts_min,
        pts_max=pts_max if args.pts_max is None else args.pts_max,
        verbose=args.verbose,
    )
    points = factory()

    print("=" * 60)
    print(f"FuzzyDBSCAN - scenario {args.scenario}")
    print("=" * 60)
    print(f"Points: {len(points)}")
    print(f"eps: {fuzzy.eps_min}..{fuzzy.eps_max}, pts: {fuzzy.pts_min}..{fuzzy.pts_max}")

    fuzzy_labels, dbscan_labels = compare_with_dbscan(points, fuzzy)
    clusters = fuzzy.clusters_

    summary = summarize(clusters)
    print("\n--- FuzzyDBSCAN ---")
    print(f"  Clusters: {summary['clusters']}")
    print(f"  Core: {summary['core']} ({summary['fuzzy_core']} fuzzy)")
    print(f"  Border: {summary['border']} ({summary['fuzzy_border']} fuzzy)")
    print(f"  Noise: {summary['noise']}")

    # klasyczny DBSCAN jako punkt odniesienia dla twardych etykiet
    agreement = evaluate_clustering(dbscan_labels, fuzzy_labels)
    print("\n--- DBSCAN (eps_max, pts_max) ---")
    print(f"  Clusters: {len(set(dbscan_labels)) - (1 if -1 in dbscan_labels else 0)}")
    print(f"  Noise ratio: {np.mean(dbscan_labels == -1):.2%}")
    print(f"  NMI vs FuzzyDBSCAN: {agreement['nmi']:.4f}")
    print(f"  ARI vs FuzzyDBSCAN: {agreement['ari']:.4f}")

    if args.scenario == "two_disks":
        _, y_true = two_disks()
        result = evaluate_clustering(y_true, hard_labels(clusters, len(points)))
        print(f"\n  NMI vs ground truth: {result['nmi']:.4f}")

    if args.benchmark > 0:
        avg = benchmark(points, FuzzyDBSCAN(fuzzy.eps_min, fuzzy.eps_max, fuzzy.pts_min, fuzzy.pts_max),
                        repeat=args.benchmark)
        print(f"\nBenchmark: {avg * 1000:.2f} ms per run ({args.benchmark} runs)")

    if args.output:
        save_clusters(args.output, clusters)
        print(f"\nSaved clusters: {args.output}")

    if args.plot:
        # tylko zapis do pliku, bez okna
        plt.switch_backend("Agg")
        ax = plot_clusters(points, clusters, title=f"FuzzyDBSCAN - {args.scenario}")
        ax.figure.savefig(args.plot, dpi=150, bbox_inches="tight")
        plt.close(ax.figure)
        print(f"\nSaved plot: {args.plot}")

    return clusters


if __name__ == "__main__":
    main()
