"""
Interactive comparison of the defendant and census distributions.

The comparator owns the hover state and knows nothing about pixels:
chart surfaces and the summary region are handed in as small protocol
objects (see dashboard.py for the Dash/Plotly ones). Every surface
reports pointer moves to the same `handle_pointer`, which updates the
summary and the emphasis of every surface before returning.
"""
import logging
from dataclasses import dataclass
from typing import Callable, List, Mapping, Optional, Protocol, Sequence, Tuple, Union

from defendant_census.errors import RenderTargetMissing
from defendant_census.normalizers import EthnicityCategory

log = logging.getLogger(__name__)

SAMPLE = "sample"
REFERENCE = "reference"
COMBINED = "combined"

TITLES = {
    SAMPLE: "Defendants",
    REFERENCE: "County population",
    COMBINED: "Defendants vs county population",
}

PointerCallback = Callable[[Optional[int]], None]


@dataclass(frozen=True)
class ChartSpec:
    title: str
    categories: Tuple[str, ...]
    colors: Tuple[str, ...]
    series: Mapping[str, Tuple[float, ...]]


class Surface(Protocol):
    series: str  # SAMPLE | REFERENCE | COMBINED

    def render(self, spec: ChartSpec) -> None: ...

    def on_pointer_move(self, callback: PointerCallback) -> None:
        """Register the callback; the surface calls it with a category index or None."""
        ...

    def set_emphasis(self, index: Optional[int]) -> None: ...


class TextRegion(Protocol):
    def show(self, text: str, color: Optional[str] = None) -> None: ...

    def clear(self) -> None: ...


@dataclass
class HoverState:
    index: Optional[int] = None


def format_summary(label: str, sample_pct: float, reference_pct: float) -> str:
    return f"{label}: {sample_pct:.2f}% of defendants vs {reference_pct:.2f}% of county population"


def hex_to_rgba(color: str, alpha: float) -> str:
    h = color.lstrip("#")
    if len(h) == 3:
        h = "".join(ch * 2 for ch in h)
    r, g, b = (int(h[i:i + 2], 16) for i in (0, 2, 4))
    return f"rgba({r},{g},{b},{alpha})"


def emphasis_colors(colors: Sequence[str], index: Optional[int], dim_alpha: float = 0.3) -> List[str]:
    """Keep the hovered color, fade the rest. index=None -> colors unchanged."""
    if index is None:
        return list(colors)
    return [c if i == index else hex_to_rgba(c, dim_alpha) for i, c in enumerate(colors)]


def _label(c) -> str:
    return c.value if isinstance(c, EthnicityCategory) else str(c)


def _positional(values: Union[Mapping, Sequence], categories: Sequence, what: str) -> Tuple:
    if isinstance(values, Mapping):
        out = tuple(values[c] for c in categories)
    else:
        out = tuple(values)
    if len(out) != len(categories):
        raise ValueError(f"{what}: expected {len(categories)} values, got {len(out)}")
    return out


class InteractiveComparator:
    def __init__(
        self,
        categories: Sequence,
        sample: Union[Mapping, Sequence[float]],
        reference: Union[Mapping, Sequence[float]],
        colors: Union[Mapping, Sequence[str]],
        surfaces: Optional[Sequence[Surface]],
        text_region: Optional[TextRegion],
    ):
        self.categories = tuple(categories)
        self.labels = tuple(_label(c) for c in self.categories)
        self.sample = tuple(float(v) for v in _positional(sample, self.categories, "sample"))
        self.reference = tuple(float(v) for v in _positional(reference, self.categories, "reference"))
        self.colors = tuple(_positional(colors, self.categories, "colors"))
        self.surfaces = list(surfaces or [])
        self.text_region = text_region
        self.hover = HoverState()
        self._bound = False

    @classmethod
    def from_aggregation(cls, aggregation, colors, surfaces, text_region) -> "InteractiveComparator":
        return cls(
            aggregation.categories,
            aggregation.sample_distribution,
            aggregation.reference_distribution,
            colors,
            surfaces,
            text_region,
        )

    def spec_for(self, series: str) -> ChartSpec:
        if series == SAMPLE:
            values = {SAMPLE: self.sample}
        elif series == REFERENCE:
            values = {REFERENCE: self.reference}
        elif series == COMBINED:
            values = {SAMPLE: self.sample, REFERENCE: self.reference}
        else:
            raise ValueError(f"unknown surface series {series!r}")
        return ChartSpec(TITLES[series], self.labels, self.colors, values)

    def bind(self) -> None:
        """
        Render every surface and hook up the shared pointer handler.
        Raises RenderTargetMissing before touching anything when a target is absent.
        """
        if self._bound:
            return
        if not self.surfaces:
            raise RenderTargetMissing("No chart surface to render the comparison on")
        if any(s is None for s in self.surfaces):
            raise RenderTargetMissing("A chart surface is missing")
        if self.text_region is None:
            raise RenderTargetMissing("The summary text region is missing")

        specs = [self.spec_for(getattr(s, "series", COMBINED)) for s in self.surfaces]
        for surface, spec in zip(self.surfaces, specs):
            surface.render(spec)
            surface.on_pointer_move(self.handle_pointer)
        self._bound = True
        log.info("comparator bound to %d surface(s)", len(self.surfaces))

    def resolve_index(self, index) -> Optional[int]:
        """Category index under the pointer, or None for empty space."""
        if isinstance(index, bool) or not isinstance(index, int):
            return None
        if 0 <= index < len(self.categories):
            return index
        return None

    def summary_for(self, index: Optional[int]) -> Optional[str]:
        i = self.resolve_index(index)
        if i is None:
            return None
        return format_summary(self.labels[i], self.sample[i], self.reference[i])

    def handle_pointer(self, index) -> bool:
        """
        Shared hover handler for all surfaces.
        Empty space clears the summary and the emphasis everywhere.
        Returns False when the hover target did not change.
        """
        if not self._bound:
            raise RuntimeError("comparator is not bound")
        i = self.resolve_index(index)
        if i == self.hover.index:
            return False

        self.hover.index = i
        if i is None:
            self.text_region.clear()
        else:
            self.text_region.show(self.summary_for(i), self.colors[i])
        for surface in self.surfaces:
            surface.set_emphasis(i)
        return True
