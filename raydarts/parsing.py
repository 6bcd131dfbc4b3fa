"""Reading vectors, matrices and transforms from JSON scene descriptions."""

from __future__ import annotations

import json
import logging
import math
from typing import Any, Sequence

from raydarts.spherical import deg2rad

logger = logging.getLogger(__name__)

Vec = tuple[float, ...]
Row = tuple[float, float, float, float]
Matrix = tuple[Row, Row, Row, Row]

_IDENTITY: Matrix = (
    (1.0, 0.0, 0.0, 0.0),
    (0.0, 1.0, 0.0, 0.0),
    (0.0, 0.0, 1.0, 0.0),
    (0.0, 0.0, 0.0, 1.0),
)


class SceneError(ValueError):
    """A scene description could not be understood."""


def _dump(spec: Any) -> str:
    return json.dumps(spec, indent=4, default=str)


def _number(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SceneError(f"Expecting a number but got:\n{_dump(value)}")
    return float(value)


def parse_vec(value: Any, n: int) -> Vec:
    """Parse an ``n``-vector; a single number is repeated ``n`` times."""
    if isinstance(value, dict):
        raise SceneError(f"Can't parse a Vec{n}. Expecting a json array, but got a json object.")
    if isinstance(value, (list, tuple)):
        if len(value) == 1:
            x = _number(value[0])
            logger.info(
                "Incorrect array size when trying to parse a Vec%d. Expecting %d values but only "
                "found 1. Creating a Vec of all '%s's.", n, n, x,
            )
            return (x,) * n
        if len(value) != n:
            raise SceneError(
                f"Incorrect array size when trying to parse a Vec. Expecting {n} values "
                f"but found {len(value)} here:\n{_dump(value)}"
            )
        return tuple(_number(v) for v in value)
    return (_number(value),) * n


def _sub(a: Sequence[float], b: Sequence[float]) -> Vec:
    return tuple(x - y for x, y in zip(a, b))


def _cross(a: Sequence[float], b: Sequence[float]) -> Vec:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _normalize(v: Sequence[float]) -> Vec:
    length = math.sqrt(sum(c * c for c in v))
    if length == 0:
        raise SceneError("Degenerate look-at specification: zero-length direction.")
    return tuple(c / length for c in v)


def _from_columns(*columns: Sequence[float]) -> Matrix:
    return tuple(tuple(float(col[r]) for col in columns) for r in range(4))  # type: ignore[return-value]


def _matmul(a: Matrix, b: Matrix) -> Matrix:
    return tuple(
        tuple(sum(a[r][k] * b[k][c] for k in range(4)) for c in range(4)) for r in range(4)
    )  # type: ignore[return-value]


def _lookat(spec: dict) -> Matrix:
    origin = parse_vec(spec.get("from", (0.0, 0.0, 1.0)), 3)
    at = parse_vec(spec.get("at", (0.0, 0.0, 0.0)), 3)
    to = parse_vec(spec.get("to", (0.0, 0.0, 0.0)), 3)
    target = tuple(a + b for a, b in zip(at, to))
    up = parse_vec(spec.get("up", (0.0, 1.0, 0.0)), 3)

    direction = _normalize(_sub(origin, target))
    left = _normalize(_cross(up, direction))
    new_up = _normalize(_cross(direction, left))
    return _from_columns((*left, 0.0), (*new_up, 0.0), (*direction, 0.0), (*origin, 1.0))


def _rotation(axis: Sequence[float], angle: float) -> Matrix:
    s = math.sin(angle / 2)
    x, y, z = (c * s for c in axis)
    w = math.cos(angle / 2)
    xdir = (w * w + x * x - y * y - z * z, (x * y + z * w) * 2, (z * x - y * w) * 2, 0.0)
    ydir = ((x * y - z * w) * 2, w * w - x * x + y * y - z * z, (y * z + x * w) * 2, 0.0)
    zdir = ((z * x + y * w) * 2, (y * z - x * w) * 2, w * w - x * x - y * y + z * z, 0.0)
    return _from_columns(xdir, ydir, zdir, (0.0, 0.0, 0.0, 1.0))


def _explicit_matrix(jm: Any) -> Matrix:
    if not isinstance(jm, (list, tuple)) or len(jm) == 1:
        value = _number(jm[0] if isinstance(jm, (list, tuple)) else jm)
        logger.warning(
            "Incorrect array size when trying to parse a Matrix. Expecting 4 x 4 = 16 values but "
            "only found a single scalar. Creating a 4 x 4 scaling matrix with '%s's along the "
            "diagonal.", value,
        )
        return tuple(
            tuple(value if r == c else 0.0 for c in range(4)) for r in range(4)
        )  # type: ignore[return-value]
    if len(jm) != 16:
        raise SceneError(
            "Incorrect array size when trying to parse a Matrix. Expecting 4 x 4 = 16 values "
            f"but found {len(jm)}, here:\n{_dump(jm)}."
        )
    values = [_number(v) for v in jm]
    return tuple(tuple(values[r * 4 : r * 4 + 4]) for r in range(4))  # type: ignore[return-value]


def parse_matrix(spec: Any) -> Matrix:
    """Parse a single 4x4 transformation command into a row-major matrix."""
    if not isinstance(spec, dict):
        raise SceneError(f"Unrecognized 'transform' command:\n{_dump(spec)}.")
    if any(k in spec for k in ("from", "at", "to", "up")):
        return _lookat(spec)
    if any(k in spec for k in ("o", "x", "y", "z")):
        o = parse_vec(spec.get("o", (0.0, 0.0, 0.0)), 3)
        x = parse_vec(spec.get("x", (1.0, 0.0, 0.0)), 3)
        y = parse_vec(spec.get("y", (0.0, 1.0, 0.0)), 3)
        z = parse_vec(spec.get("z", (0.0, 0.0, 1.0)), 3)
        return _from_columns((*x, 0.0), (*y, 0.0), (*z, 0.0), (*o, 1.0))
    if "translate" in spec:
        t = parse_vec(spec["translate"], 3)
        return _from_columns(
            (1.0, 0.0, 0.0, 0.0), (0.0, 1.0, 0.0, 0.0), (0.0, 0.0, 1.0, 0.0), (*t, 1.0)
        )
    if "scale" in spec:
        sx, sy, sz = parse_vec(spec["scale"], 3)
        return _from_columns(
            (sx, 0.0, 0.0, 0.0), (0.0, sy, 0.0, 0.0), (0.0, 0.0, sz, 0.0), (0.0, 0.0, 0.0, 1.0)
        )
    if "rotate" in spec:
        angle, *axis = parse_vec(spec["rotate"], 4)
        return _rotation(axis, deg2rad(angle))
    if "matrix" in spec:
        return _explicit_matrix(spec["matrix"])
    raise SceneError(f"Unrecognized 'transform' command:\n{_dump(spec)}.")


def parse_transform(spec: Any) -> Matrix:
    """Parse a transform: one command, or a list of commands applied in order."""
    if isinstance(spec, list):
        m = _IDENTITY
        for element in spec:
            m = _matmul(parse_matrix(element), m)
        return m
    if isinstance(spec, dict):
        return parse_matrix(spec)
    raise SceneError(f"'transform' must be either an array or an object here:\n{_dump(spec)}")


def vec_to_json(v: Sequence[float]) -> list[float]:
    """Serialise a vector as a JSON array."""
    return [float(c) for c in v]


def matrix_to_json(m: Sequence[Sequence[float]]) -> dict[str, list[float]]:
    """Serialise a row-major 4x4 matrix as a ``matrix`` command."""
    return {"matrix": [float(v) for row in m for v in row]}