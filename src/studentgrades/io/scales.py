"""Read and write classification scales.

A scale file is a simple CSV with no headers. Each row is one band: its lower
bound as a decimal number, its label, its letter grade and its grade point on
the 4.0 scale. The order of the rows matters! The highest band comes first.

"""

from typing import Sequence, Tuple, Union
import pathlib as _pathlib

from studentgrades.scales import Band, check_scale


def write(path: Union[str, _pathlib.Path], scale: Sequence[Band]):
    """Writes a classification scale to disk.

    Parameters
    ----------
    path : pathlib.Path or str
        The path where the scale will be written.
    scale : Sequence[Band]
        The bands, highest first.

    """
    path = _pathlib.Path(path)

    with path.open("w", encoding="utf-8") as fileobj:
        for band in scale:
            fileobj.write(f"{band.lower_bound},{band.label},{band.letter},{band.gpa_point}\n")


def read(path: Union[str, _pathlib.Path]) -> Tuple[Band, ...]:
    """Reads a classification scale from a file.

    Parameters
    ----------
    path : pathlib.Path or str
        The path where the scale is stored.

    Returns
    -------
    Tuple[Band, ...]
        The bands, in the order they appear in the file.

    Raises
    ------
    ValueError
        If a line is malformed, or if the scale read is not valid.

    """
    path = _pathlib.Path(path)

    with path.open(encoding="utf-8") as fileobj:
        lines = [line.strip() for line in fileobj if line.strip()]

    def parse_line(line):
        lower_bound, label, letter, gpa_point = line.split(",")
        return Band(float(lower_bound), label.strip(), letter.strip(), float(gpa_point))

    scale = tuple(map(parse_line, lines))
    check_scale(scale)
    return scale
