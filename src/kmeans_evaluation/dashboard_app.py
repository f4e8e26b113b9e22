"""Streamlit dashboard for k-means evaluation results."""
from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Dict

import pandas as pd
import streamlit as st

from kmeans_evaluation.visuals import elbow_figure, silhouette_figure


def _load_json(path: Path) -> Dict[str, Any]:
    """Load JSON if it exists."""
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def _load_csv(path: Path) -> pd.DataFrame:
    """Load a CSV written by the CLI, or an empty frame."""
    if not path.exists():
        return pd.DataFrame()
    return pd.read_csv(path, index_col=0)


def _curve(payload: Dict[str, Any]) -> Dict[int, float]:
    """JSON object keys come back as strings; restore k as int."""
    return {int(k): float(v) for k, v in payload.items()}


def _parse_args() -> argparse.Namespace:
    """Parse optional CLI args passed after `--` in streamlit."""
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument(
        "--output-dir",
        default="outputs/kmeans_evaluation",
        help="Evaluation output directory.",
    )
    args, _ = parser.parse_known_args()
    return args


def main() -> None:
    """Entry point for Streamlit app."""
    st.set_page_config(page_title="K-Means Evaluation", layout="wide")
    st.title("K-Means Evaluation")

    args = _parse_args()
    output_dir = Path(
        st.sidebar.text_input(
            "Evaluation output directory",
            args.output_dir,
        )
    ).resolve()

    summary = _load_json(output_dir / "summary.json")
    if not summary:
        st.warning("Evaluation output not found. Run the evaluate CLI first.")
        return

    solution = summary.get("solution", {})
    cols = st.columns(4)
    cols[0].metric("Solution k", solution.get("k", 0))
    cols[1].metric("Assigned rows", solution.get("assigned_rows", 0))
    cols[2].metric("Skipped rows", solution.get("skipped_rows", 0))
    cols[3].metric("Best silhouette k", summary.get("best_silhouette_k") or "-")

    elbow_tab, silhouette_tab = st.tabs(["Elbow (WCSS)", "Silhouette Score"])
    with elbow_tab:
        st.plotly_chart(
            elbow_figure(_curve(summary.get("wcss", {}))), use_container_width=True
        )
    with silhouette_tab:
        st.plotly_chart(
            silhouette_figure(_curve(summary.get("silhouette", {}))),
            use_container_width=True,
        )

    st.subheader("Cluster Centers")
    centers = _load_csv(output_dir / "centers.csv")
    if centers.empty:
        st.info("No cluster centers available.")
    else:
        k_values = sorted(centers["k"].unique().tolist())
        k = st.selectbox("k", options=k_values, index=0)
        st.dataframe(centers[centers["k"] == k], use_container_width=True)

    st.subheader("Solution Assignment")
    sizes = solution.get("cluster_sizes", {})
    if sizes:
        st.bar_chart(pd.Series(sizes, name="rows"))
    labeled = _load_csv(output_dir / "labeled.csv")
    if not labeled.empty:
        st.dataframe(labeled, use_container_width=True)


if __name__ == "__main__":
    main()
