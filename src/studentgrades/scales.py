"""Mapping averages on the 10-point scale to performance bands."""

import typing

import pandas as pd


class Band(typing.NamedTuple):
    """One row of a classification scale.

    Attributes
    ----------
    lower_bound : float
        The smallest average (inclusive) that falls in this band.
    label : str
        The canonical classification label.
    letter : str
        The letter grade.
    gpa_point : float
        The grade point on the 4.0 scale.

    """

    lower_bound: float
    label: str
    letter: str
    gpa_point: float


# common scales ========================================================================

DEFAULT_SCALE = (
    Band(8.5, "Xuất sắc", "A", 4.0),
    Band(7.0, "Giỏi", "B", 3.0),
    Band(5.5, "Khá", "C", 2.0),
    Band(4.0, "Trung bình", "D", 1.0),
    Band(0.0, "Yếu", "F", 0.0),
)
"""The default classification scale, highest band first."""

#: the label given to a student who has no grades yet
UNCLASSIFIED = "Không xếp loại"


# public functions =====================================================================


def check_scale(scale: typing.Sequence[Band]):
    """Make sure that a scale is usable.

    Parameters
    ----------
    scale : Sequence[Band]
        The scale to check.

    Raises
    ------
    ValueError
        If the scale is empty, its lower bounds are not strictly decreasing,
        its last band does not have a lower bound of zero, or two bands share
        a label.

    """
    if not scale:
        raise ValueError("Scale must contain at least one band.")

    prev = float("inf")
    for band in scale:
        if band.lower_bound >= prev:
            raise ValueError("Scale is not monotonically decreasing.")
        prev = band.lower_bound

    if scale[-1].lower_bound != 0:
        raise ValueError("The last band of a scale must have a lower bound of 0.")

    if len({band.label for band in scale}) != len(scale):
        raise ValueError("Band labels must be unique.")


def find_band(score: float, scale: typing.Optional[typing.Sequence[Band]] = None) -> Band:
    """Find the band that a score on the 10-point scale belongs to.

    Bands are checked from the highest to the lowest. Lower bounds are
    inclusive, so a score of exactly 8.5 is in the highest default band. The
    last band catches everything else.

    Parameters
    ----------
    score : float
        The score or average to classify.
    scale : Sequence[Band]
        Default: :attr:`DEFAULT_SCALE`.

    Returns
    -------
    Band

    """
    if scale is None:
        scale = DEFAULT_SCALE

    for band in scale:
        if score >= band.lower_bound:
            return band
    else:
        return scale[-1]


def map_scores_to_bands(
    scores: pd.Series, scale: typing.Optional[typing.Sequence[Band]] = None
) -> pd.Series:
    """Map each score to the label of its band.

    Parameters
    ----------
    scores : pandas.Series
        A series containing averages on the 10-point scale.
    scale : Sequence[Band]
        Default: :attr:`DEFAULT_SCALE`.

    Returns
    -------
    pandas.Series
        A series of band labels with the same index as `scores`.

    Raises
    ------
    ValueError
        If the provided scale is invalid.

    """
    if scale is None:
        scale = DEFAULT_SCALE
    else:
        check_scale(scale)

    return scores.apply(lambda score: find_band(score, scale).label)


def labels(scale: typing.Optional[typing.Sequence[Band]] = None) -> typing.List[str]:
    """The band labels of a scale, highest first."""
    if scale is None:
        scale = DEFAULT_SCALE
    return [band.label for band in scale]
