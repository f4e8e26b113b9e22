"""Chart helpers for elbow and silhouette curves."""
from __future__ import annotations

from pathlib import Path
from typing import Dict, List

import pandas as pd
import plotly.express as px
from plotly.graph_objects import Figure

from .clustering import project_2d
from .evaluation import EvaluationResult
from .extractor import ObservationSet

WCSS_COLOR = "rgb(0, 102, 204)"
SILHOUETTE_COLOR = "rgb(0, 153, 51)"


def _curve_figure(
    curve: Dict[int, float],
    name: str,
    title: str,
    y_label: str,
    color: str,
) -> Figure:
    """Line chart with markers over k."""
    frame = pd.DataFrame({"k": list(curve), name: list(curve.values())})
    fig = px.line(frame, x="k", y=name, title=title, markers=True)
    fig.update_traces(line_color=color, line_width=2, name=name, showlegend=True)
    fig.update_layout(
        xaxis_title="Number of Clusters (k)",
        yaxis_title=y_label,
        plot_bgcolor="white",
        paper_bgcolor="white",
    )
    fig.update_xaxes(dtick=1, gridcolor="lightgray")
    fig.update_yaxes(gridcolor="lightgray")
    return fig


def elbow_figure(wcss: Dict[int, float]) -> Figure:
    return _curve_figure(
        wcss,
        "WCSS",
        "Elbow Method - WCSS",
        "Within-Cluster Sum of Squares",
        WCSS_COLOR,
    )


def silhouette_figure(silhouette: Dict[int, float]) -> Figure:
    return _curve_figure(
        silhouette,
        "Silhouette",
        "Silhouette Score",
        "Average Silhouette Coefficient",
        SILHOUETTE_COLOR,
    )


def solution_figure(observations: ObservationSet, result: EvaluationResult) -> Figure:
    """Scatter of observations projected to 2D, colored by solution cluster."""
    coords = project_2d(observations.features)
    frame = pd.DataFrame(
        {
            "pc1": coords[:, 0],
            "pc2": coords[:, 1],
            "cluster": [result.label_for(row_id) for row_id in observations.row_ids],
        }
    )
    return px.scatter(
        frame,
        x="pc1",
        y="pc2",
        color="cluster",
        title=f"Solution clusters (k={result.solution_k})",
    )


def write_charts(
    result: EvaluationResult,
    output_dir: Path,
    observations: ObservationSet | None = None,
) -> List[Path]:
    """Write the charts as standalone HTML files."""
    output_dir.mkdir(parents=True, exist_ok=True)
    figures = {
        "elbow.html": elbow_figure(result.wcss),
        "silhouette.html": silhouette_figure(result.silhouette),
    }
    if observations is not None and result.solution_assignment:
        figures["solution.html"] = solution_figure(observations, result)

    written: List[Path] = []
    for name, fig in figures.items():
        path = output_dir / name
        fig.write_html(str(path), include_plotlyjs="cdn")
        written.append(path)
    return written
