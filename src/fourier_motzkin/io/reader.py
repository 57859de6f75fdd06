"""
Parser for inequality system files.

File format:
    line 1: <num_constraints> <num_variables>
    line 2: objective vector (ignored)
    line 3: right-hand side b, one number per constraint
    then one line of coefficients per constraint

Missing lines 2 and 3 read as empty. Extra numbers at the end of a
coefficient row are ignored.
"""

from pathlib import Path
from typing import List, Tuple, Union
import numpy as np

from ..elimination.constraint import Constraint
from ..elimination.system import ConstraintSystem
from ..errors import InputFormatError


def _parse_numbers(line: str, line_number: int) -> np.ndarray:
    try:
        return np.array(line.split(), dtype=np.float64)
    except ValueError:
        raise InputFormatError(
            f"Line {line_number}: expected numbers, received {line.strip()!r}"
        ) from None


def _parse_header(line: str) -> Tuple[int, int]:
    tokens = line.split()
    if len(tokens) < 2:
        raise InputFormatError(
            f"Invalid file format: header must contain the number of constraints "
            f"and variables, received {line.strip()!r}"
        )
    try:
        rows, columns = int(tokens[0]), int(tokens[1])
    except ValueError:
        raise InputFormatError(
            f"Invalid file format: header counts must be integers, "
            f"received {line.strip()!r}"
        ) from None
    if rows < 0 or columns < 0:
        raise InputFormatError(
            f"Invalid file format: header counts must be non-negative, "
            f"received {rows} {columns}"
        )
    return rows, columns


def parse_system(text: str) -> ConstraintSystem:
    """
    Parse an inequality system from the contents of an input file.

    Raises
    ------
    InputFormatError
        On a malformed header, a right-hand side of the wrong length, a
        coefficient row with too few numbers, or a wrong number of rows.
    """
    lines = text.splitlines()
    if not lines:
        raise InputFormatError("Invalid file format: file is empty")

    num_constraints, num_vars = _parse_header(lines[0])

    b = _parse_numbers(lines[2], 3) if len(lines) > 2 else np.zeros(0)
    if b.size != num_constraints:
        raise InputFormatError(
            f"Vector b has wrong size in input. Expected {num_constraints}, "
            f"received {b.size}."
        )

    rows = lines[3:]
    if len(rows) > num_constraints:
        extra = rows[num_constraints:]
        if any(line.strip() for line in extra):
            raise InputFormatError(
                f"Expected {num_constraints} coefficient rows, "
                f"received {num_constraints + sum(1 for line in extra if line.strip())}."
            )
        rows = rows[:num_constraints]
    if len(rows) < num_constraints:
        if num_vars > 0:
            raise InputFormatError(
                f"Expected {num_constraints} coefficient rows, received {len(rows)}."
            )
        rows = rows + [""] * (num_constraints - len(rows))

    constraints: List[Constraint] = []
    for i, (line, rhs) in enumerate(zip(rows, b)):
        line_number = i + 4
        coeffs = _parse_numbers(line, line_number)
        if coeffs.size < num_vars:
            raise InputFormatError(
                f"Line {line_number}: not enough coefficients. Expected "
                f"{num_vars}, received {coeffs.size}."
            )
        constraints.append(Constraint(coeffs[:num_vars], rhs))

    return ConstraintSystem(num_vars, constraints, num_constraints=num_constraints)


def read_system(path: Union[str, Path]) -> ConstraintSystem:
    """Read and parse an input file."""
    return parse_system(Path(path).read_text())
