from typing import Tuple

from gemmcheck.runtime.errors import InvalidArgumentError


def is_transposed(flag: str) -> bool:
    # Only 'n' selects the identity; every other character means transpose.
    return flag != "n"


def stored_shape(flag: str, rows: int, cols: int) -> Tuple[int, int]:
    """Shape of the matrix as stored, for an operand whose op() is ``rows x cols``."""
    if is_transposed(flag):
        return cols, rows
    return rows, cols


def storage_extent(rows: int, cols: int, ld: int, batch: int = 1, stride: int = 0) -> int:
    """Number of elements spanned by ``batch`` column-major matrices ``stride`` elements apart."""
    if rows == 0 or cols == 0 or batch == 0:
        return 0
    return (batch - 1) * stride + ld * (cols - 1) + rows


def check_flag(name: str, flag: str) -> None:
    if not isinstance(flag, str) or len(flag) != 1:
        raise InvalidArgumentError(f"{name} must be a single character, got {flag!r}")


def check_leading_dimension(name: str, ld: int, rows: int) -> None:
    if ld < rows or ld < 0:
        raise InvalidArgumentError(f"{name}={ld} is smaller than the {rows} stored rows")


def check_extent(name: str, available: int, rows: int, cols: int, ld: int, batch: int = 1, stride: int = 0) -> None:
    required = storage_extent(rows, cols, ld, batch, stride)
    if required > available:
        raise InvalidArgumentError(
            f"Matrix {name} needs {required} elements (rows={rows}, cols={cols}, ld={ld}, batch={batch}, stride={stride}) "
            f"but only {available} are available"
        )
