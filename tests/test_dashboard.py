import pytest
from dash import no_update

from conftest import YEAR, write_xlsx
from defendant_census.dashboard import ComparisonDashboard, hovered_index, run
from defendant_census.service import ComparisonContext, build_comparison

ROWS = [{"Ethnicity": v} for v in ["Hispanic", "HISPANIC", "white ", "Asian", "Unknown"]]


def _hover(i):
    return {"points": [{"curveNumber": 0, "pointNumber": i, "label": "x"}]}


@pytest.fixture
def split():
    ctx = ComparisonContext()
    return ComparisonDashboard(build_comparison(ROWS, ctx), ctx.colors, "split")


def test_hovered_index():
    assert hovered_index(_hover(3)) == 3
    assert hovered_index({"points": [{"pointIndex": 1}]}) == 1
    assert hovered_index(None) is None
    assert hovered_index({"points": []}) is None


def test_hover_updates_both_pies_and_summary(split):
    def_fig, pop_fig, text, style, shown = split.on_hover("def-chart", {"def-chart": _hover(2), "pop-chart": None})

    for fig in (def_fig, pop_fig):
        colors = fig.data[0].marker.colors
        assert colors[2] == "#ff9800"                 # Asian keeps its color
        assert all(c.startswith("rgba(") for i, c in enumerate(colors) if i != 2)
        assert fig.data[0].pull[2] > 0
    assert text.startswith("Asian: 25.00% of defendants vs ")
    assert style["color"] == "#ff9800"
    assert shown == 2


def test_unhover_clears(split):
    def_fig, pop_fig, text, style, shown = split.on_hover("pop-chart", {"def-chart": None, "pop-chart": None}, shown=0)
    assert text == ""
    assert "color" not in style
    assert shown is None
    assert list(def_fig.data[0].marker.colors) == list(pop_fig.data[0].marker.colors)
    assert not any(c.startswith("rgba(") for c in def_fig.data[0].marker.colors)


def test_same_target_twice_in_one_session_sends_no_update(split):
    *_, shown = split.on_hover("def-chart", {"def-chart": _hover(1), "pop-chart": None})
    out = split.on_hover("pop-chart", {"def-chart": _hover(1), "pop-chart": _hover(1)}, shown=shown)
    assert out == [no_update] * 5


def test_sessions_do_not_share_hover_state(split):
    first = split.on_hover("def-chart", {"def-chart": _hover(2), "pop-chart": None}, shown=None)
    second = split.on_hover("def-chart", {"def-chart": _hover(2), "pop-chart": None}, shown=None)
    assert second[2] == first[2]
    assert second[2].startswith("Asian: ")
    assert second[4] == 2

    # a third viewer on another category is unaffected by the first two
    third = split.on_hover("pop-chart", {"def-chart": None, "pop-chart": _hover(0)}, shown=None)
    assert third[2].startswith("White: ")


def test_unknown_trigger_is_ignored(split):
    assert split.on_hover(None, {}) == [no_update] * 5


def test_combined_layout_is_one_grouped_bar():
    ctx = ComparisonContext()
    dash_view = ComparisonDashboard(build_comparison(ROWS, ctx), ctx.colors, "combined")
    fig, text, _, shown = dash_view.on_hover("cmp-chart", {"cmp-chart": _hover(3)})
    assert [t.name for t in fig.data] == ["Defendants", "County population"]
    assert fig.data[0].y[3] == pytest.approx(50.0)
    assert fig.data[1].marker.color[3] == "#f44336"
    assert text.startswith("Hispanic or Latino: 50.00%")
    assert shown == 3


def test_unknown_layout():
    ctx = ComparisonContext()
    with pytest.raises(ValueError):
        ComparisonDashboard(build_comparison(ROWS, ctx), ctx.colors, "stacked")


def test_build_app(split):
    app = split.build_app()
    assert app.layout is not None
    assert "Defendants: 4 classified, 1 skipped" in split.header()


def test_run_reports_missing_file(tmp_path, capsys):
    assert run(["--year", str(YEAR), "--data-dir", str(tmp_path)]) == 1
    assert "No defendants file found" in capsys.readouterr().err


def test_run_reports_empty_classifiable_set(tmp_path, capsys):
    write_xlsx(tmp_path / f"defendants_{YEAR}.xlsx", [{"Ethnicity": "Unknown"}, {"Ethnicity": "Two or More Races"}])
    assert run(["--year", str(YEAR), "--data-dir", str(tmp_path)]) == 1
    assert "none of its 2 row(s)" in capsys.readouterr().err
