import html

from IPython.display import HTML as _HTML
from IPython.display import display as _display

from . import plot as _plot
from . import statistics as _statistics
from .calculator import GradeCalculator
from .core import Roster


def _item(desc, msg) -> str:
    """Returns HTML for an item with a description and a message."""
    return f"<p><b>{html.escape(str(desc))}:</b> {html.escape(str(msg))}"


def _display_html(html: str):
    """Display HTML in a Jupyter notebook."""
    _display(_HTML(html))


def _cohort_overview(roster: Roster):
    stats = _statistics.cohort_statistics(roster)

    _display_html("<h1>Cohort Overview</h1>")
    _display_html(_item("Number of students", stats.total_students))
    _display_html(_item("Students with grades", stats.students_with_grades))

    _display_html("<h2>Band Distribution</h2>")
    table = stats.counts.to_frame()
    labels = stats.percentage_labels()
    if labels is not None:
        table["Percentage"] = labels
    _display_html(table.T.to_html())
    _plot.band_distribution(stats)

    _display_html("<h2>Individual Outcomes</h2>")
    _display_html(_statistics.outcomes(roster).to_html())


def _student_overview(roster: Roster, student_name: str):
    student = roster.find(student_name)
    grades = roster.grades_of(student)

    _display_html(f"<h1>Student Overview: {html.escape(repr(student))}</h1>")

    for name, result in GradeCalculator().compute_all(grades).items():
        _display_html(_item(name, result))

    _display_html("<h2>Grades</h2>")
    _display_html(grades.to_frame().to_html(index=False))


def overview(roster: Roster, student: str | None = None):
    """Display a nicely-formatted overview of a roster.

    Only available inside of a jupyter notebook. Can be accessed from the
    top-level, too, as ``studentgrades.overview()``.

    """
    if student is not None:
        _student_overview(roster, student)
    else:
        _cohort_overview(roster)
