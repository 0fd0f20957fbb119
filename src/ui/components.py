"""
Reusable UI builder functions for the NiceGUI web interface.

Each builder renders from plain values; callers clear the container and call
again to re-render.
"""

from nicegui import ui

from analysis_result import AnalysisResult
from file_selection import FileSelection
from result_charts import render_result, summarize

CHART_HEIGHT = "h-96"


def build_file_list(selection: FileSelection) -> None:
    """List the accepted file names."""
    if not selection:
        ui.label("No .xyz files selected.").classes("text-gray-400 italic text-sm")
        return

    for name in selection.names:
        with ui.row().classes(
            "w-full items-center bg-gray-100 p-3 rounded-lg mb-2 text-sm"
        ):
            ui.icon("scatter_plot", size="xs").classes("text-gray-500")
            ui.label(name).classes("font-medium text-gray-700 truncate")


def build_error_panel(error: str) -> None:
    with ui.column().classes("w-full"):
        ui.label("Analysis Failed").classes("text-sm font-bold text-red-600")
        ui.label(error).classes(
            "text-xs text-red-500 whitespace-pre-wrap"
        ).style("font-family: monospace; word-break: break-all;")


def build_results(result: AnalysisResult) -> None:
    """Summary cards followed by the three charts."""
    stats = summarize(result)
    with ui.row().classes("w-full gap-4 flex-wrap justify-center"):
        for value, caption in stats.cards():
            _metric(caption, value)

    charts = render_result(result)
    _chart("PCA Projection (PC1 vs PC2)", charts.scatter)
    with ui.row().classes("w-full gap-4 no-wrap"):
        with ui.column().classes("flex-1 min-w-0"):
            _chart("Explained Variance by Component", charts.contribution)
        with ui.column().classes("flex-1 min-w-0"):
            _chart("Cumulative Explained Variance", charts.cumulative)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _metric(label: str, value: str) -> None:
    with ui.card().classes("items-center gap-0 p-4 min-w-40"):
        ui.label(value).classes("text-2xl font-bold text-blue-600")
        ui.label(label).classes("text-xs text-gray-500")


def _chart(title: str, fig) -> None:
    ui.label(title).classes("text-sm font-bold mt-4")
    ui.plotly(fig).classes(f"w-full {CHART_HEIGHT}")
