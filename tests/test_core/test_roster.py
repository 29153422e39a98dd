import pytest  # pyright: ignore

from studentgrades import Grade, InvalidGradeError, Roster, Student


@pytest.fixture
def roster():
    roster = Roster(
        [
            Student("SV001", "Nguyễn Văn An", major="Công Nghệ Thông Tin"),
            Student("SV002", "Trần Thị Bình"),
        ]
    )
    roster.add_grade("SV001", Grade("Toán", 8.0, 2.0, "HK1", 2024))
    roster.add_grade("SV001", Grade("Văn", 6.5, 1.0, "HK1", 2024))
    return roster


def test_students_in_insertion_order(roster):
    assert [s.pid for s in roster.students] == ["SV001", "SV002"]
    assert len(roster) == 2


def test_grades_of_by_pid_or_student(roster):
    assert len(roster.grades_of("SV001")) == 2
    assert roster.grades_of(Student("SV001")) == roster.grades_of("SV001")
    assert len(roster.grades_of("SV002")) == 0


def test_grades_of_unknown_student_raises(roster):
    with pytest.raises(KeyError):
        roster.grades_of("SV999")


def test_add_grade_validates(roster):
    with pytest.raises(InvalidGradeError):
        roster.add_grade("SV002", Grade("Toán", 11.0, 1.0, "HK1", 2024))

    assert len(roster.grades_of("SV002")) == 0


def test_add_grade_for_unknown_student_raises(roster):
    with pytest.raises(KeyError):
        roster.add_grade("SV999", Grade("Toán", 5.0))


@pytest.mark.parametrize(
    "student",
    [Student("", "An"), Student("  ", "An"), Student("SV003", ""), Student("SV003")],
)
def test_add_student_rejects_blank_fields(roster, student):
    with pytest.raises(ValueError):
        roster.add_student(student)


def test_add_student_rejects_duplicate_pid(roster):
    with pytest.raises(ValueError):
        roster.add_student(Student("SV001", "Someone Else"))


def test_remove_student(roster):
    # when
    roster.remove_student("SV001")

    # then
    assert "SV001" not in roster
    with pytest.raises(KeyError):
        roster.grades_of("SV001")


def test_population_yields_every_student(roster):
    pairs = dict(roster.population())

    assert set(pairs) == {"SV001", "SV002"}
    assert len(pairs["SV001"]) == 2
    assert len(pairs["SV002"]) == 0


def test_find(roster):
    assert roster.find("bình").pid == "SV002"
