"""Streamlit front end: upload point clouds for PCA, or review a saved result."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import streamlit as st

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from data import (
    format_file_size,
    load_result_json,
    result_to_json,
    uploads_to_selected_files,
)
from analysis_result import AnalysisResult
from file_selection import XYZ_SUFFIX, select_files
from pca_client import AnalysisApiError, ApiConfig, PcaApiClient
from result_charts import render_result, summarize

RESULT_KEY = "pca_result"
ERROR_PREFIX = "An error occurred: "


# ---------------------------------------------------------------------------
# Result rendering
# ---------------------------------------------------------------------------


def _render_result(result: AnalysisResult, key: str) -> None:
    stats = summarize(result)
    cols = st.columns(4)
    for col, (value, caption) in zip(cols, stats.cards()):
        col.metric(caption, value)

    charts = render_result(result)
    st.subheader("PCA Projection (PC1 vs PC2)")
    st.plotly_chart(charts.scatter, use_container_width=True, key=f"{key}-scatter")

    left, right = st.columns(2)
    with left:
        st.subheader("Explained Variance by Component")
        st.plotly_chart(
            charts.contribution, use_container_width=True, key=f"{key}-contribution"
        )
    with right:
        st.subheader("Cumulative Explained Variance")
        st.plotly_chart(
            charts.cumulative, use_container_width=True, key=f"{key}-cumulative"
        )

    st.download_button(
        "Download JSON",
        data=result_to_json(result),
        file_name="pca_result.json",
        mime="application/json",
        key=f"{key}-download",
    )


# ---------------------------------------------------------------------------
# Tabs
# ---------------------------------------------------------------------------


def _render_analyze(client: PcaApiClient) -> None:
    uploads = st.file_uploader(
        f"Drop {XYZ_SUFFIX} files here or browse",
        accept_multiple_files=True,
        key="xyz-uploads",
    )
    selection = select_files(uploads_to_selected_files(uploads))

    if selection.rejected:
        st.warning(
            f"Ignored {len(selection.rejected)} file(s) without {XYZ_SUFFIX}: "
            + ", ".join(selection.rejected)
        )
    for f in selection.files:
        st.markdown(f"- `{f.name}` ({format_file_size(f.size)})")

    if st.button("Run PCA Analysis", type="primary", disabled=not selection):
        st.session_state.pop(RESULT_KEY, None)
        try:
            with st.spinner("Analyzing…"):
                st.session_state[RESULT_KEY] = client.analyze(list(selection.files))
        except AnalysisApiError as exc:
            st.error(ERROR_PREFIX + str(exc))

    result: Optional[AnalysisResult] = st.session_state.get(RESULT_KEY)
    if result is not None:
        _render_result(result, key="analyze")


def _render_review() -> None:
    saved = st.file_uploader("Saved result (.json)", type=["json"], key="result-json")
    if saved is None:
        st.info("Open a result downloaded from a previous analysis.")
        return
    try:
        result = load_result_json(saved.getvalue())
    except ValueError as exc:
        st.error(f"Could not read {saved.name}: {exc}")
        return
    _render_result(result, key="review")


def main() -> None:
    st.set_page_config(page_title="PCA Point-Cloud Viewer", layout="wide")
    st.title("PCA Point-Cloud Viewer")

    default = ApiConfig.from_env()
    api_url = st.text_input("Analysis API URL", value=default.api_url)
    client = PcaApiClient(
        ApiConfig(api_url=api_url.strip(), timeout_seconds=default.timeout_seconds)
    )

    tab_analyze, tab_review = st.tabs(["Analyze", "Review Saved Result"])
    with tab_analyze:
        _render_analyze(client)
    with tab_review:
        _render_review()


if __name__ == "__main__":
    main()
