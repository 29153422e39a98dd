"""Plain-text reports: transcripts, cohort summaries and cohort statistics."""

import datetime
import pathlib
import typing

from ._util import format_fixed as _format_fixed
from .calculator import GradeCalculator
from .core import Grade, Roster, Student
from .scales import Band, DEFAULT_SCALE
from .statistics import CohortStatistics
from .strategies import WeightedAverage

WIDE_RULE = "=" * 80
NARROW_RULE = "-" * 80


def _na(value) -> str:
    return "N/A" if value is None else str(value)


def _timestamp(parts: typing.List[str], generated_at: typing.Optional[datetime.datetime]):
    if generated_at is not None:
        parts.append(f"Thời gian tạo: {generated_at:%d/%m/%Y %H:%M:%S}")
        parts.append("")


def _title(parts: typing.List[str], title: str, rule: str = WIDE_RULE):
    parts.append(rule)
    parts.append(title.center(len(rule)).rstrip())
    parts.append(rule)
    parts.append("")


def transcript(
    student: Student,
    grades: typing.Iterable[Grade],
    *,
    calculator: typing.Optional[GradeCalculator] = None,
    generated_at: typing.Optional[datetime.datetime] = None,
) -> str:
    """A transcript listing a student's grades and every metric computed from them.

    Parameters
    ----------
    student : Student
    grades : Iterable[Grade]
    calculator : Optional[GradeCalculator]
        Supplies the strategies whose results are listed at the end.
        Default: a new :class:`GradeCalculator`.
    generated_at : Optional[datetime.datetime]
        If given, the time is printed below the title.

    Returns
    -------
    str

    """
    if calculator is None:
        calculator = GradeCalculator()

    grades = list(grades)
    parts = []

    _title(parts, "BẢNG ĐIỂM SINH VIÊN")
    _timestamp(parts, generated_at)

    parts.append("THÔNG TIN SINH VIÊN:")
    parts.append(f"- Mã sinh viên: {student.pid}")
    parts.append(f"- Họ tên: {_na(student.name)}")
    parts.append(f"- Email: {_na(student.email)}")
    parts.append(f"- Số điện thoại: {_na(student.phone)}")
    parts.append(f"- Ngành học: {_na(student.major)}")
    parts.append("")

    if not grades:
        parts.append("Chưa có điểm nào được ghi nhận.")
    else:
        parts.append("CHI TIẾT ĐIỂM:")
        parts.append(NARROW_RULE)
        parts.append(f"{'Môn học':<25} {'Điểm':<8} {'Hệ số':<8} {'Học kỳ':<12} {'Năm':<8}")
        parts.append(NARROW_RULE)
        for g in grades:
            parts.append(
                f"{g.subject:<25} {_format_fixed(g.score, 2):<8} "
                f"{_format_fixed(g.coefficient, 1):<8} {g.semester:<12} {g.year:<8}"
            )
        parts.append(NARROW_RULE)
        parts.append(f"Tổng số môn: {len(grades)}")
        parts.append("")

        parts.append("KẾT QUẢ TÍNH ĐIỂM:")
        for name, result in calculator.compute_all(grades).items():
            parts.append(f"- {name}: {result}")

    parts.append("")
    parts.append(WIDE_RULE)
    return "\n".join(parts) + "\n"


def summary(
    roster: Roster, *, generated_at: typing.Optional[datetime.datetime] = None
) -> str:
    """A table with one line per student: pid, name, major, number of grades and average.

    Parameters
    ----------
    roster : Roster
    generated_at : Optional[datetime.datetime]
        If given, the time is printed below the title.

    Returns
    -------
    str

    """
    rule = "-" * 100
    parts = []

    _title(parts, "BÁO CÁO TỔNG QUAN SINH VIÊN", "=" * 100)
    _timestamp(parts, generated_at)
    parts.append(f"Tổng số sinh viên: {len(roster)}")
    parts.append("")

    if len(roster):
        parts.append(
            f"{'STT':<6} {'Mã SV':<12} {'Họ tên':<25} {'Ngành':<20} {'Số môn':<8} {'Điểm TB':<8}"
        )
        parts.append(rule)

        average = WeightedAverage()
        for i, (student, grades) in enumerate(roster.population(), start=1):
            parts.append(
                f"{i:<6} {student.pid:<12} {_na(student.name):<25} "
                f"{_na(student.major):<20} {len(grades):<8} {average.compute(grades):<8}"
            )
        parts.append(rule)

    return "\n".join(parts) + "\n"


def statistics_report(
    stats: CohortStatistics,
    *,
    scale: typing.Optional[typing.Sequence[Band]] = None,
    generated_at: typing.Optional[datetime.datetime] = None,
) -> str:
    """A report of how a cohort is spread across the classification bands.

    The percentage section is only present if at least one student has
    grades.

    Parameters
    ----------
    stats : CohortStatistics
        As computed by :func:`studentgrades.statistics.cohort_statistics`.
    scale : Sequence[Band]
        The scale used to compute `stats`; its lower bounds are printed next
        to each band. Default: :attr:`studentgrades.scales.DEFAULT_SCALE`.
    generated_at : Optional[datetime.datetime]
        If given, the time is printed below the title.

    Returns
    -------
    str

    """
    if scale is None:
        scale = DEFAULT_SCALE

    parts = []

    _title(parts, "BÁO CÁO THỐNG KÊ ĐIỂM")
    _timestamp(parts, generated_at)

    parts.append("THỐNG KÊ TỔNG QUAN:")
    parts.append(f"- Tổng số sinh viên: {stats.total_students}")
    parts.append(f"- Sinh viên có điểm: {stats.students_with_grades}")
    parts.append(f"- Tổng số bài kiểm tra: {stats.total_grades}")
    if stats.mean_score is not None:
        parts.append(f"- Điểm trung bình chung: {_format_fixed(stats.mean_score, 2)}")
    parts.append("")

    parts.append("THỐNG KÊ THEO XẾP LOẠI:")
    for i, band in enumerate(scale):
        if i == len(scale) - 1 and i > 0:
            bound = f"< {scale[i - 1].lower_bound}"
        else:
            bound = f"≥ {band.lower_bound}"
        parts.append(f"- {band.label} ({bound}): {stats.counts[band.label]} sinh viên")

    percentages = stats.percentage_labels()
    if percentages is not None:
        parts.append("")
        parts.append("TỶ LỆ PHẦN TRĂM:")
        for label, pct in percentages.items():
            parts.append(f"- {label}: {pct}")

    return "\n".join(parts) + "\n"


def write(path: typing.Union[str, pathlib.Path], report: str, *, append: bool = False):
    """Save a report as UTF-8 text.

    Parameters
    ----------
    path : Union[str, pathlib.Path]
        Where to write the report. Parent directories must exist.
    report : str
        The text of the report.
    append : bool
        Whether to add to the end of an existing file rather than replacing
        it. Useful for collecting several transcripts in one file.
        Default: False.

    """
    path = pathlib.Path(path)
    with path.open("a" if append else "w", encoding="utf-8") as fileobj:
        fileobj.write(report)
