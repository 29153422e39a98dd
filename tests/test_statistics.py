import logging
import math

import pandas as pd
import pytest  # pyright: ignore

import studentgrades
from studentgrades import Grade, Roster, Student
from studentgrades.scales import Band
from studentgrades.statistics import (
    band_distribution,
    cohort_statistics,
    combine_statistics,
    outcomes,
)


def grades(*scores):
    return [Grade(f"Môn {i}", s, 1.0, "HK1", 2024) for i, s in enumerate(scores)]


@pytest.fixture
def population():
    return {
        "SV001": grades(9.0, 9.0),
        "SV002": grades(5.0, 7.0),
        "SV003": [],
    }


# cohort_statistics --------------------------------------------------------------------


def test_cohort_statistics_on_example(population):
    # when
    stats = cohort_statistics(population)

    # then
    assert stats.total_students == 3
    assert stats.students_with_grades == 2
    assert stats.counts.to_dict() == {
        "Xuất sắc": 1,
        "Giỏi": 0,
        "Khá": 1,
        "Trung bình": 0,
        "Yếu": 0,
    }
    assert stats.percentages["Xuất sắc"] == 50.0
    assert stats.percentages["Khá"] == 50.0
    assert stats.percentages["Giỏi"] == 0.0


def test_counts_sum_to_students_with_grades(population):
    stats = cohort_statistics(population)
    assert stats.counts.sum() == stats.students_with_grades


def test_counts_are_in_band_order(population):
    stats = cohort_statistics(population)
    assert list(stats.counts.index) == ["Xuất sắc", "Giỏi", "Khá", "Trung bình", "Yếu"]


def test_percentages_are_absent_when_nobody_has_grades():
    # when
    stats = cohort_statistics({"SV001": [], "SV002": []})

    # then
    assert stats.total_students == 2
    assert stats.students_with_grades == 0
    assert stats.percentages is None
    assert stats.percentage_labels() is None
    assert stats.counts.sum() == 0


def test_empty_population():
    stats = cohort_statistics([])

    assert stats.total_students == 0
    assert stats.percentages is None
    assert stats.mean_score is None


def test_percentage_labels_have_one_decimal_and_percent_sign():
    # given
    population = {"A": grades(9.0), "B": grades(6.0), "C": grades(6.0)}

    # when
    labels = cohort_statistics(population).percentage_labels()

    # then
    assert labels["Xuất sắc"] == "33.3%"
    assert labels["Khá"] == "66.7%"
    assert labels["Yếu"] == "0.0%"


def test_student_on_boundary_is_in_higher_band():
    stats = cohort_statistics({"A": grades(8.5)})
    assert stats.counts["Xuất sắc"] == 1


def test_grade_totals_and_mean_score(population):
    # when
    stats = cohort_statistics(population)

    # then
    assert stats.total_grades == 4
    assert math.isclose(stats.mean_score, (9 + 9 + 5 + 7) / 4)


def test_accepts_pairs_and_rosters():
    # given
    roster = Roster([Student("SV001", "An"), Student("SV002", "Bình")])
    roster.add_grade("SV001", Grade("Toán", 7.5, 2.0, "HK1", 2024))

    # when
    from_roster = cohort_statistics(roster)
    from_pairs = cohort_statistics(list(roster.population()))

    # then
    assert from_roster == from_pairs
    assert from_roster.total_students == 2
    assert from_roster.counts["Giỏi"] == 1


def test_malformed_average_is_skipped_with_warning(caplog):
    # given
    population = {
        "SV001": grades(9.0),
        "SV002": grades(float("nan")),
        "SV003": grades(6.0),
    }

    # when
    with caplog.at_level(logging.WARNING, logger="studentgrades.statistics"):
        stats = cohort_statistics(population)

    # then
    assert stats.total_students == 3
    assert stats.students_with_grades == 2
    assert stats.counts.sum() == 2
    assert "SV002" in caplog.text


def test_parallel_aggregation_matches_serial():
    # given
    population = {
        f"SV{i:03}": grades(*[(i * 37 % 101) / 10.0] * (i % 4)) for i in range(50)
    }

    # when
    serial = cohort_statistics(population)
    parallel = cohort_statistics(population, max_workers=4)

    # then
    assert parallel.total_students == serial.total_students
    assert parallel.students_with_grades == serial.students_with_grades
    assert (parallel.counts == serial.counts).all()
    assert parallel.total_grades == serial.total_grades
    assert math.isclose(parallel.score_total, serial.score_total)


def test_custom_scale():
    # given
    scale = (Band(5.0, "Đạt", "P", 4.0), Band(0.0, "Không đạt", "F", 0.0))

    # when
    stats = cohort_statistics({"A": grades(5.0), "B": grades(4.0)}, scale=scale)

    # then
    assert stats.counts.to_dict() == {"Đạt": 1, "Không đạt": 1}


def test_invalid_scale_raises():
    with pytest.raises(ValueError):
        cohort_statistics({}, scale=(Band(4.0, "a", "A", 4.0), Band(5.0, "b", "B", 0.0)))


# combine_statistics -------------------------------------------------------------------


def test_combine_statistics_adds_counts():
    # given
    first = cohort_statistics({"A": grades(9.0), "B": []})
    second = cohort_statistics({"C": grades(9.5), "D": grades(2.0)})

    # when
    combined = combine_statistics(first, second)

    # then
    assert combined.total_students == 4
    assert combined.students_with_grades == 3
    assert combined.counts["Xuất sắc"] == 2
    assert combined.counts["Yếu"] == 1
    assert combined.total_grades == 3


def test_combine_statistics_requires_same_scale():
    scale = (Band(5.0, "Đạt", "P", 4.0), Band(0.0, "Không đạt", "F", 0.0))
    with pytest.raises(ValueError):
        combine_statistics(cohort_statistics({}), cohort_statistics({}, scale=scale))


def test_combine_statistics_requires_arguments():
    with pytest.raises(ValueError):
        combine_statistics()


# band_distribution --------------------------------------------------------------------


def test_band_distribution():
    # given
    labels = pd.Series(["Giỏi", "Khá", "Giỏi", "Không xếp loại", "Yếu"])

    # when
    distribution = band_distribution(labels)

    # then
    expected = pd.Series(
        {"Xuất sắc": 0, "Giỏi": 2, "Khá": 1, "Trung bình": 0, "Yếu": 1}
    )
    assert (distribution == expected).all()


def test_band_distribution_of_mapped_scores():
    scores = pd.Series([9.0, 8.5, 3.0])
    labels = studentgrades.scales.map_scores_to_bands(scores)

    distribution = band_distribution(labels)

    assert distribution["Xuất sắc"] == 2
    assert distribution["Yếu"] == 1


# outcomes -----------------------------------------------------------------------------


def test_outcomes(population):
    # when
    table = outcomes(population)

    # then
    assert list(table.index) == ["SV001", "SV002", "SV003"]
    assert table.loc["SV001", "Điểm Trung Bình"] == "9.00"
    assert table.loc["SV002", "Xếp Loại"] == "Khá"
    assert table.loc["SV003", "Xếp Loại"] == "Không xếp loại"
    assert table.loc["SV002", "grades"] == 2
    assert list(table["rank"]) == [1, 2, 3]


def test_outcomes_are_sorted_by_rank():
    table = outcomes({"A": grades(5.0), "B": grades(9.0)})
    assert list(table.index) == ["B", "A"]


def test_outcomes_rejects_repeated_students():
    # given
    pairs = [("SV001", grades(9.0)), ("SV002", grades(6.0)), ("SV001", grades(5.0))]

    # when/then
    with pytest.raises(ValueError):
        outcomes(pairs)
