"""
Dash front end for the comparison.

Two layouts:
  split    -> one pie per distribution (defendants, county population)
  combined -> a single grouped bar chart with both distributions

All graphs feed one callback, so both figures and the summary line are
produced by the same comparator call.
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

import plotly.graph_objects as go
from dash import Dash, Input, Output, State, ctx, dcc, html, no_update

from defendant_census import settings
from defendant_census.comparator import (
    COMBINED, REFERENCE, SAMPLE, ChartSpec, InteractiveComparator, PointerCallback, emphasis_colors,
)
from defendant_census.errors import ComparisonError
from defendant_census.service import Comparison, ComparisonContext, load_comparison
from defendant_census.setup_logging import setup_logging

log = logging.getLogger(__name__)

SUMMARY_ID = "summary-box"
HOVER_STORE_ID = "hover-index"
SERIES_NAMES = {SAMPLE: "Defendants", REFERENCE: "County population"}


def hovered_index(hover_data) -> Optional[int]:
    """Plotly hoverData -> point index, None when the pointer left the chart."""
    if not hover_data or not hover_data.get("points"):
        return None
    point = hover_data["points"][0]
    idx = point.get("pointNumber", point.get("pointIndex"))
    return idx if isinstance(idx, int) else None


class PlotlySurface:
    """A dcc.Graph worth of state: the figure spec plus the current emphasis."""

    def __init__(self, graph_id: str, series: str):
        self.graph_id = graph_id
        self.series = series
        self.spec: Optional[ChartSpec] = None
        self.emphasis: Optional[int] = None
        self._callback: Optional[PointerCallback] = None

    def render(self, spec: ChartSpec) -> None:
        self.spec = spec
        self.emphasis = None

    def on_pointer_move(self, callback: PointerCallback) -> None:
        self._callback = callback

    def set_emphasis(self, index: Optional[int]) -> None:
        self.emphasis = index

    def pointer_moved(self, hover_data) -> None:
        if self._callback is not None:
            self._callback(hovered_index(hover_data))

    def figure(self) -> go.Figure:
        if self.spec is None:
            raise RuntimeError(f"surface {self.graph_id} was never rendered")
        colors = emphasis_colors(self.spec.colors, self.emphasis)
        if self.series == COMBINED:
            fig = go.Figure()
            for name, values in self.spec.series.items():
                fig.add_trace(go.Bar(
                    name=SERIES_NAMES[name],
                    x=list(self.spec.categories),
                    y=list(values),
                    marker=dict(
                        color=colors,
                        pattern=dict(shape="/" if name == REFERENCE else ""),
                    ),
                    hoverinfo="none",
                ))
            fig.update_layout(barmode="group", yaxis_title="% of group")
        else:
            (values,) = self.spec.series.values()
            pull = [0.08 if i == self.emphasis else 0 for i in range(len(values))]
            fig = go.Figure(go.Pie(
                labels=list(self.spec.categories),
                values=list(values),
                marker=dict(colors=colors),
                sort=False,
                direction="clockwise",
                pull=pull,
                textinfo="percent",
                hoverinfo="none",
            ))
        fig.update_layout(title=self.spec.title, margin=dict(l=20, r=20, t=50, b=20), showlegend=True)
        return fig


class SummaryRegion:
    def __init__(self):
        self.text = ""
        self.color: Optional[str] = None

    def show(self, text: str, color: Optional[str] = None) -> None:
        self.text = text
        self.color = color

    def clear(self) -> None:
        self.text = ""
        self.color = None

    def style(self) -> Dict[str, str]:
        s = {"fontWeight": "bold", "minHeight": "1.5em", "textAlign": "center"}
        if self.color:
            s["color"] = self.color
        return s


class ComparisonDashboard:
    """
    The comparison is fixed per load; hover state is not. Each browser
    session keeps its hovered index in a dcc.Store, and every callback
    builds its own comparator seeded from that index.
    """
    def __init__(self, comparison: Comparison, colors, layout: str = "split"):
        if layout not in ("split", "combined"):
            raise ValueError(f"unknown layout {layout!r} (expected split or combined)")
        self.comparison = comparison
        self.colors = colors
        self.layout_name = layout
        self.graph_ids = [s.graph_id for s in self._surfaces()]

    def _surfaces(self) -> List[PlotlySurface]:
        if self.layout_name == "split":
            return [PlotlySurface("def-chart", SAMPLE), PlotlySurface("pop-chart", REFERENCE)]
        return [PlotlySurface("cmp-chart", COMBINED)]

    def view(self, shown: Optional[int] = None):
        """Fresh surfaces, summary and bound comparator showing `shown`."""
        surfaces = self._surfaces()
        summary = SummaryRegion()
        comparator = InteractiveComparator.from_aggregation(
            self.comparison.aggregation, self.colors, surfaces, summary
        )
        comparator.bind()
        comparator.handle_pointer(shown)
        return surfaces, summary, comparator

    def on_hover(
        self, triggered_id: Optional[str], hover_data: Dict[str, Optional[dict]], shown: Optional[int] = None
    ) -> List:
        """
        Outputs for one hover event of one session: every figure, the
        summary text and style, then the new index for the session store.
        """
        unchanged = [no_update] * (len(self.graph_ids) + 3)
        surfaces, summary, comparator = self.view(shown)
        by_id = {s.graph_id: s for s in surfaces}
        surface = by_id.get(triggered_id)
        if surface is None:
            return unchanged
        surface.pointer_moved(hover_data.get(triggered_id))
        if comparator.hover.index == comparator.resolve_index(shown):
            return unchanged
        return [s.figure() for s in surfaces] + [summary.text, summary.style(), comparator.hover.index]

    def header(self) -> str:
        c = self.comparison
        year = f" {c.year}" if c.year else ""
        return f"Defendants{year}: {c.aggregation.total} classified, {c.skipped} skipped"

    def layout(self):
        surfaces, summary, _ = self.view()
        width = f"{100 // len(surfaces)}%"
        graphs = [
            html.Div(
                dcc.Graph(id=s.graph_id, figure=s.figure(), clear_on_unhover=True),
                style={"width": width, "display": "inline-block"},
            )
            for s in surfaces
        ]
        return html.Div([
            html.H3(self.header()),
            dcc.Store(id=HOVER_STORE_ID, storage_type="memory", data=None),
            html.Div(graphs),
            html.Div(summary.text, id=SUMMARY_ID, style=summary.style()),
        ])

    def build_app(self, **dash_kwargs) -> Dash:
        app = Dash(__name__, title="Defendants vs county population", **dash_kwargs)
        app.layout = self.layout()
        ids = self.graph_ids

        @app.callback(
            [Output(i, "figure") for i in ids]
            + [Output(SUMMARY_ID, "children"), Output(SUMMARY_ID, "style"), Output(HOVER_STORE_ID, "data")],
            [Input(i, "hoverData") for i in ids],
            State(HOVER_STORE_ID, "data"),
            prevent_initial_call=True,
        )
        def _hover(*args):
            *hover_data, shown = args
            return self.on_hover(ctx.triggered_id, dict(zip(ids, hover_data)), shown)

        return app




def run(argv=None) -> int:
    setup_logging(settings.LOG_LEVEL)
    p = argparse.ArgumentParser(description="Serve the defendants vs census comparison dashboard")
    p.add_argument("--year", type=int, default=None, help="Year of the defendants file (default: current)")
    p.add_argument("--data-dir", type=Path, default=settings.DATA_DIR)
    p.add_argument("--lookback", type=int, default=settings.LOOKBACK_YEARS)
    p.add_argument("--layout", choices=["split", "combined"], default=settings.DASHBOARD_LAYOUT)
    p.add_argument("--port", type=int, default=settings.DASHBOARD_PORT)
    args = p.parse_args(argv)

    context = ComparisonContext(data_dir=args.data_dir, lookback=args.lookback)
    try:
        comparison = load_comparison(context, args.year)
        dash_app = ComparisonDashboard(comparison, context.colors, args.layout).build_app()
    except ComparisonError as e:
        log.error("load failed: %s", e.message)
        print(f"Could not build the comparison: {e.message}", file=sys.stderr)
        return 1

    dash_app.run(host="127.0.0.1", port=args.port, debug=False)
    return 0


def main():
    sys.exit(run())


if __name__ == "__main__":
    main()
