"""Interactive plots of a cohort's results."""

import typing

import bokeh.io
import bokeh.models
import bokeh.plotting
import numpy as np

from . import scales as _scales
from ._util import in_jupyter_notebook as _in_jupyter_notebook
from .scales import Band
from .statistics import CohortStatistics, Population, outcomes as _outcomes
from .strategies import WeightedAverage


def _show(fig, show: bool):
    if not show:
        return
    if _in_jupyter_notebook():
        bokeh.io.output_notebook()
    bokeh.plotting.show(fig)  # pyright: ignore


# band_distribution --------------------------------------------------------------------


def band_distribution(stats: CohortStatistics, *, show: bool = True) -> bokeh.plotting.figure:
    """Plot the number of students in each band as a bar chart.

    Hovering over a bar shows the count and the percentage of graded students.

    Parameters
    ----------
    stats : CohortStatistics
    show : bool
        Whether to display the figure. Default: True.

    Returns
    -------
    bokeh.plotting.figure

    """
    labels = [str(label) for label in stats.counts.index]
    percentages = stats.percentage_labels()

    source = bokeh.models.ColumnDataSource(
        {
            "band": labels,
            "count": stats.counts.to_numpy(),
            "percentage": (
                ["-"] * len(labels) if percentages is None else percentages.to_list()
            ),
        }
    )

    fig = bokeh.plotting.figure(
        title="Band Distribution",
        x_range=labels,
        min_width=600,
        min_height=400,
        tools="hover,save,reset",
        y_axis_label="Students",
    )
    fig.vbar(x="band", top="count", width=0.8, source=source, fill_alpha=0.7)
    fig.hover.tooltips = [
        ("band", "@band"),
        ("students", "@count"),
        ("percentage", "@percentage"),
    ]
    fig.grid.visible = False

    _show(fig, show)
    return fig


# average_distribution -----------------------------------------------------------------


def average_distribution(
    population: Population,
    *,
    scale: typing.Optional[typing.Sequence[Band]] = None,
    bin_width: float = 0.5,
    show: bool = True,
) -> bokeh.plotting.figure:
    """Plot a histogram of weighted averages with the band thresholds marked.

    Students without grades are left out. Each band's lower bound is drawn as
    a dashed line and labeled with the band and its number of students.

    Parameters
    ----------
    population
        See :func:`studentgrades.statistics.cohort_statistics`.
    scale : Sequence[Band]
        Default: :attr:`studentgrades.scales.DEFAULT_SCALE`.
    bin_width : float
        How wide each bin should be. Default: 0.5.
    show : bool
        Whether to display the figure. Default: True.

    Returns
    -------
    bokeh.plotting.figure

    """
    if scale is None:
        scale = _scales.DEFAULT_SCALE

    table = _outcomes(population, scale=scale)
    table = table[table["grades"] > 0]
    averages = table[WeightedAverage.name].astype(float).to_numpy()

    y_hist, x_hist = np.histogram(averages, bins=np.arange(0, 10 + bin_width, bin_width))
    y_max = max(y_hist.max(initial=0), 1) * 1.1

    fig = bokeh.plotting.figure(
        title="Average Distribution",
        min_width=800,
        min_height=400,
        x_range=[0, 10],
        y_range=[0, y_max],
        tools="pan,box_zoom,save,reset,help",
        y_axis_label="Count",
    )
    fig.quad(top=y_hist, bottom=0, left=x_hist[:-1], right=x_hist[1:], fill_alpha=0.7)

    counts = _scales.map_scores_to_bands(table[WeightedAverage.name].astype(float), scale)
    counts = counts.value_counts()

    overrides = {}
    for band in scale:
        fig.line([band.lower_bound] * 2, [0, y_max], line_dash="dashed", color="black")
        count = int(counts.get(band.label, 0))
        overrides[band.lower_bound] = f"{band.lower_bound}\n{band.letter}\n({count})"

    fig.xaxis.ticker = [band.lower_bound for band in scale]
    fig.xaxis.major_label_overrides = overrides  # pyright: ignore
    fig.xaxis.major_label_text_font_size = "14px"
    fig.grid.visible = False

    _show(fig, show)
    return fig
