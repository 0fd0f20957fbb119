"""
Summary statistics and Plotly figures for a PCA analysis result.

Every call builds complete new figures from the immutable result; front ends
replace whatever they showed before instead of patching it.
"""
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

import numpy as np
import plotly.graph_objects as go

from analysis_result import AnalysisResult

SCATTER_COLORSCALE = "Viridis"
BAR_COLOR = "#3b82f6"
LINE_COLOR = "#16a34a"
CUMULATIVE_Y_RANGE = (0.0, 1.1)
PLOT_MARGIN = dict(l=60, r=30, b=50, t=30)


@dataclass(frozen=True)
class SummaryStats:
    """Display strings for the four summary cards."""
    n_points: str
    pc1_variance: str
    pc2_variance: str
    cumulative_pc1_pc2: str

    def cards(self):
        """(value, caption) pairs in display order."""
        return [
            (self.n_points, "Data Points"),
            (self.pc1_variance, "PC1 Variance"),
            (self.pc2_variance, "PC2 Variance"),
            (self.cumulative_pc1_pc2, "PC1+PC2 Cum. Var."),
        ]


@dataclass(frozen=True)
class ResultCharts:
    scatter: go.Figure
    contribution: go.Figure
    cumulative: go.Figure


def format_percent(ratio: float, digits: int = 1) -> str:
    """Percentage with ties rounded up, matching JS toFixed on the exact value."""
    exact = Decimal(ratio * 100)
    rounded = exact.quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP)
    return f"{rounded}%"


def summarize(result: AnalysisResult) -> SummaryStats:
    """Point count, PC1/PC2 variance and their cumulative variance.

    PC2 falls back to 0 when the analysis has a single component, and the
    cumulative figure then uses the only component available.
    """
    cumulative = result.cumulative_variance_ratio
    cum_two = cumulative[min(1, len(cumulative) - 1)]
    return SummaryStats(
        n_points=str(result.n_points),
        pc1_variance=format_percent(result.explained(0)),
        pc2_variance=format_percent(result.explained(1)),
        cumulative_pc1_pc2=format_percent(cum_two),
    )


def build_scatter_figure(result: AnalysisResult) -> go.Figure:
    """2D PCA scatter, coloured by sample order."""
    xs = np.array([p.x for p in result.points], dtype=float)
    ys = np.array([p.y for p in result.points], dtype=float)
    order = np.arange(result.n_points)

    fig = go.Figure(
        go.Scatter(
            x=xs,
            y=ys,
            mode="markers",
            text=[p.label for p in result.points],
            marker=dict(
                size=12,
                color=order,
                colorscale=SCATTER_COLORSCALE,
                showscale=True,
                colorbar=dict(title=dict(text="Timestep Index")),
            ),
            hovertemplate=(
                "<b>%{text}</b><br>PC1: %{x:.3f}<br>PC2: %{y:.3f}<extra></extra>"
            ),
        )
    )
    fig.update_layout(
        xaxis_title=f"PC1 ({format_percent(result.explained(0), 2)})",
        yaxis_title=f"PC2 ({format_percent(result.explained(1), 2)})",
        hovermode="closest",
        margin=PLOT_MARGIN,
    )
    return fig


def build_contribution_figure(result: AnalysisResult) -> go.Figure:
    """Explained variance ratio per component."""
    fig = go.Figure(
        go.Bar(
            x=result.component_labels,
            y=list(result.explained_variance_ratio),
            marker=dict(color=BAR_COLOR),
        )
    )
    fig.update_layout(
        xaxis_title="Principal Component",
        yaxis_title="Explained Variance Ratio",
        margin=PLOT_MARGIN,
    )
    return fig


def build_cumulative_figure(result: AnalysisResult) -> go.Figure:
    """Cumulative variance ratio across components."""
    fig = go.Figure(
        go.Scatter(
            x=result.component_labels,
            y=list(result.cumulative_variance_ratio),
            mode="lines+markers",
            marker=dict(color=LINE_COLOR, size=8),
            line=dict(color=LINE_COLOR, width=3),
        )
    )
    fig.update_layout(
        xaxis_title="Principal Component",
        yaxis=dict(title="Cumulative Variance Ratio", range=list(CUMULATIVE_Y_RANGE)),
        margin=PLOT_MARGIN,
    )
    return fig


def render_result(result: AnalysisResult) -> ResultCharts:
    return ResultCharts(
        scatter=build_scatter_figure(result),
        contribution=build_contribution_figure(result),
        cumulative=build_cumulative_figure(result),
    )
