"""Small vectors and matrices for rasterisation."""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Real
from typing import Iterable, Iterator, Sequence


@dataclass(frozen=True)
class Vec2:
    """A two-component vector."""

    x: float = 0
    y: float = 0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __getitem__(self, index: int) -> float:
        if index not in (0, 1):
            raise IndexError("Vec2 index out of range")
        return self.y if index else self.x

    def __add__(self, other: object) -> "Vec2":
        if not isinstance(other, Vec2):
            return NotImplemented
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: object) -> "Vec2":
        if not isinstance(other, Vec2):
            return NotImplemented
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, other: object):
        """Dot product with a vector, scaling with a number."""
        if isinstance(other, Vec2):
            return self.dot(other)
        if isinstance(other, Real):
            return Vec2(self.x * other, self.y * other)
        return NotImplemented

    def __rmul__(self, other: object) -> "Vec2":
        if isinstance(other, Real):
            return Vec2(self.x * other, self.y * other)
        return NotImplemented

    def __truediv__(self, scalar: float) -> "Vec2":
        return Vec2(self.x / scalar, self.y / scalar)

    def dot(self, other: "Vec2") -> float:
        return self.x * other.x + self.y * other.y

    def rounded(self) -> "Vec2":
        """Integer vector, adding one half and truncating each component."""
        return Vec2(int(self.x + 0.5), int(self.y + 0.5))

    def truncated(self) -> "Vec2":
        """Integer vector, truncating each component toward zero."""
        return Vec2(int(self.x), int(self.y))


@dataclass(frozen=True)
class Vec3:
    """A three-component vector."""

    x: float = 0
    y: float = 0
    z: float = 0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __getitem__(self, index: int) -> float:
        if index not in (0, 1, 2):
            raise IndexError("Vec3 index out of range")
        return (self.x, self.y, self.z)[index]

    def __add__(self, other: object) -> "Vec3":
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: object) -> "Vec3":
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, other: object):
        """Dot product with a vector, scaling with a number."""
        if isinstance(other, Vec3):
            return self.dot(other)
        if isinstance(other, Real):
            return Vec3(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    def __rmul__(self, other: object) -> "Vec3":
        if isinstance(other, Real):
            return Vec3(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    def __truediv__(self, scalar: float) -> "Vec3":
        return Vec3(self.x / scalar, self.y / scalar, self.z / scalar)

    def dot(self, other: "Vec3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vec3") -> "Vec3":
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def norm(self) -> float:
        return (self.x * self.x + self.y * self.y + self.z * self.z) ** 0.5

    def normalize(self, length: float = 1) -> "Vec3":
        """The vector scaled to have the given length."""
        return self * (length / self.norm())

    def rounded(self) -> "Vec3":
        """Integer vector, adding one half and truncating each component."""
        return Vec3(int(self.x + 0.5), int(self.y + 0.5), int(self.z + 0.5))

    def truncated(self) -> "Vec3":
        """Integer vector, truncating each component toward zero."""
        return Vec3(int(self.x), int(self.y), int(self.z))


def cross(a: Vec3, b: Vec3) -> Vec3:
    """Cross product of two 3-vectors."""
    return a.cross(b)


def embed(values: Iterable[float], length: int, fill: float = 1) -> tuple:
    """Extend ``values`` to ``length`` components, padding with ``fill``."""
    items = tuple(values)[:length]
    return items + (fill,) * (length - len(items))


def proj(values: Iterable[float], length: int) -> tuple:
    """The first ``length`` components of ``values``."""
    items = tuple(values)
    if length > len(items):
        raise ValueError("cannot project to more components than given")
    return items[:length]


class Matrix:
    """A dense matrix stored as a list of rows."""

    def __init__(self, rows: Iterable[Iterable[float]]) -> None:
        self.rows = [list(row) for row in rows]
        if len({len(row) for row in self.rows}) > 1:
            raise ValueError("all rows must have the same length")

    @property
    def nrows(self) -> int:
        return len(self.rows)

    @property
    def ncols(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    @classmethod
    def identity(cls, rows: int, cols: int | None = None) -> "Matrix":
        cols = rows if cols is None else cols
        return cls([[1 if i == j else 0 for j in range(cols)] for i in range(rows)])

    def __getitem__(self, index: int) -> list:
        return self.rows[index]

    def __len__(self) -> int:
        return self.nrows

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.rows == other.rows

    def __repr__(self) -> str:
        return f"Matrix({self.rows!r})"

    def col(self, index: int) -> list:
        if not 0 <= index < self.ncols:
            raise IndexError("column index out of range")
        return [row[index] for row in self.rows]

    def set_col(self, index: int, values: Iterable[float]) -> None:
        values = list(values)
        if not 0 <= index < self.ncols:
            raise IndexError("column index out of range")
        if len(values) != self.nrows:
            raise ValueError("column length does not match the matrix")
        for row, value in zip(self.rows, values):
            row[index] = value

    def det(self) -> float:
        """Determinant by cofactor expansion along the first row."""
        if self.nrows == 0 or self.nrows != self.ncols:
            raise ValueError("determinant needs a non-empty square matrix")
        if self.nrows == 1:
            return self.rows[0][0]
        return sum(value * self.cofactor(0, j) for j, value in enumerate(self.rows[0]))

    def get_minor(self, row: int, col: int) -> "Matrix":
        return Matrix(
            [v for j, v in enumerate(r) if j != col]
            for i, r in enumerate(self.rows)
            if i != row
        )

    def cofactor(self, row: int, col: int) -> float:
        sign = -1 if (row + col) % 2 else 1
        return self.get_minor(row, col).det() * sign

    def adjugate(self) -> "Matrix":
        """The matrix of cofactors."""
        return Matrix(
            [self.cofactor(i, j) for j in range(self.ncols)] for i in range(self.nrows)
        )

    def invert_transpose(self) -> "Matrix":
        adj = self.adjugate()
        determinant = sum(a * b for a, b in zip(adj.rows[0], self.rows[0]))
        if determinant == 0:
            raise ValueError("matrix is singular")
        return adj / determinant

    def invert(self) -> "Matrix":
        return self.invert_transpose().transpose()

    def transpose(self) -> "Matrix":
        return Matrix(self.col(j) for j in range(self.ncols))

    def __matmul__(self, other: object):
        if isinstance(other, Matrix):
            if self.ncols != other.nrows:
                raise ValueError("matrix dimensions do not match")
            columns = [other.col(j) for j in range(other.ncols)]
            return Matrix(
                [sum(a * b for a, b in zip(row, column)) for column in columns]
                for row in self.rows
            )
        if isinstance(other, (Sequence, Vec2, Vec3)):
            vector = list(other)
            if len(vector) != self.ncols:
                raise ValueError("vector length does not match the matrix")
            return [sum(a * b for a, b in zip(row, vector)) for row in self.rows]
        return NotImplemented

    def __truediv__(self, scalar: float) -> "Matrix":
        return Matrix([v / scalar for v in row] for row in self.rows)