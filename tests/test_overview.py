import pytest  # pyright: ignore

import studentgrades.overview
from studentgrades import Grade, Roster, Student


@pytest.fixture
def displayed(monkeypatch):
    """Capture the HTML that would be shown in the notebook."""
    shown = []
    monkeypatch.setattr(studentgrades.overview, "_display_html", shown.append)
    monkeypatch.setattr(
        studentgrades.overview._plot, "band_distribution", lambda stats: None
    )
    return shown


@pytest.fixture
def roster():
    roster = Roster([Student("SV001", "Nguyễn Văn An"), Student("SV002", "Trần Thị Bình")])
    roster.add_grade("SV001", Grade("Toán", 9.0, 1.0, "HK1", 2024))
    return roster


def test_cohort_overview(displayed, roster):
    # when
    studentgrades.overview.overview(roster)

    # then
    html = "\n".join(displayed)
    assert "<h1>Cohort Overview</h1>" in html
    assert "<p><b>Number of students:</b> 2" in html
    assert "<p><b>Students with grades:</b> 1" in html
    assert "100.0%" in html


def test_student_overview(displayed, roster):
    # when
    studentgrades.overview.overview(roster, student="bình")

    # then
    html = "\n".join(displayed)
    assert "Student Overview: &lt;Trần Thị Bình&gt;" in html
    assert "<p><b>Xếp Loại:</b> Không xếp loại" in html
