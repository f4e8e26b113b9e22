"""Reporting utilities for evaluation results."""

from __future__ import annotations

from typing import Any, Dict, List

from .evaluation import EvaluationResult, cluster_label


def _best_k(curve: Dict[int, float]) -> int | None:
    if not curve:
        return None
    return max(curve, key=lambda k: curve[k])


def summarize(result: EvaluationResult, skipped: int = 0) -> Dict[str, Any]:
    """Create a JSON-ready summary of an evaluation run."""
    sizes: Dict[str, int] = {}
    for cluster in result.solution_assignment.values():
        label = cluster_label(cluster)
        sizes[label] = sizes.get(label, 0) + 1

    centroids: List[List[float]] = []
    if result.solution_centroids is not None:
        centroids = result.solution_centroids.tolist()

    return {
        "columns": result.columns,
        "wcss": {str(k): v for k, v in result.wcss.items()},
        "silhouette": {str(k): v for k, v in result.silhouette.items()},
        "best_silhouette_k": _best_k(result.silhouette),
        "solution": {
            "k": result.solution_k,
            "assigned_rows": len(result.solution_assignment),
            "skipped_rows": skipped,
            "cluster_sizes": dict(sorted(sizes.items())),
            "centroids": centroids,
        },
    }


def format_curves(result: EvaluationResult) -> str:
    """Plain-text dump of the WCSS and silhouette maps."""
    lines = ["k\tWCSS\tAvg_Silhouette"]
    for k in result.wcss:
        lines.append(f"{k}\t{result.wcss[k]:.6f}\t{result.silhouette.get(k, 0.0):.6f}")
    return "\n".join(lines) + "\n"
