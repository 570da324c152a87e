"""Versioned encoding of vectors and matrices.

Payloads are plain dictionaries built on the ``to_list`` representation,
so they can be stored with any serializer.  :func:`dumps`/:func:`loads` and
:func:`save`/:func:`load` use YAML.

Vector payload::

    {"format": "lsisvd", "version": 1, "kind": "vector",
     "orientation": "row", "data": [1.0, 2.0]}

Matrix payload::

    {"format": "lsisvd", "version": 1, "kind": "matrix",
     "rows": 2, "cols": 2, "data": [[1.0, 2.0], [3.0, 4.0]]}
"""

from __future__ import annotations

from typing import Any, Mapping

import numpy as np
import yaml

from .errors import SerializationError
from .matrix import Matrix
from .vector import ORIENTATIONS, Vector

FORMAT = "lsisvd"
VERSION = 1


def encode(obj: Vector | Matrix) -> dict[str, Any]:
    """Encode a vector or matrix as a versioned payload."""
    if isinstance(obj, Vector):
        return {
            "format": FORMAT,
            "version": VERSION,
            "kind": "vector",
            "orientation": obj.orientation,
            "data": obj.to_list(),
        }
    if isinstance(obj, Matrix):
        return {
            "format": FORMAT,
            "version": VERSION,
            "kind": "matrix",
            "rows": obj.rows,
            "cols": obj.cols,
            "data": obj.to_list(),
        }
    raise TypeError(f"cannot encode {type(obj).__name__}")


def decode(payload: Mapping[str, Any]) -> Vector | Matrix:
    """Decode a payload produced by :func:`encode`.

    Raises
    ------
    SerializationError
        If the payload is not a mapping, has the wrong format marker, an
        unsupported version, an unknown kind or inconsistent data.
    """
    if not isinstance(payload, Mapping):
        raise SerializationError(f"payload must be a mapping, got {type(payload).__name__}")
    if payload.get("format") != FORMAT:
        raise SerializationError(f"unknown payload format {payload.get('format')!r}")
    version = payload.get("version")
    if version != VERSION:
        raise SerializationError(f"unsupported payload version {version!r}")

    kind = payload.get("kind")
    try:
        if kind == "vector":
            orientation = payload.get("orientation")
            if orientation not in ORIENTATIONS:
                raise SerializationError(f"invalid orientation {orientation!r}")
            return Vector(list(payload["data"]), orientation=orientation)
        if kind == "matrix":
            rows = int(payload["rows"])
            cols = int(payload["cols"])
            data = np.array(payload["data"], dtype=np.float64)
            if data.size != rows * cols:
                raise SerializationError(
                    f"matrix data has {data.size} entries, expected {rows}x{cols}")
            return Matrix._wrap(data.reshape(rows, cols))
    except (KeyError, TypeError, ValueError) as exc:
        if isinstance(exc, SerializationError):
            raise
        raise SerializationError(f"malformed {kind} payload: {exc}") from exc
    raise SerializationError(f"unknown payload kind {kind!r}")


def dumps(obj: Vector | Matrix) -> str:
    """Serialize a vector or matrix to a YAML document."""
    return yaml.safe_dump(encode(obj), sort_keys=False)


def loads(text: str) -> Vector | Matrix:
    """Deserialize a YAML document produced by :func:`dumps`."""
    try:
        payload = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise SerializationError(f"invalid YAML: {exc}") from exc
    return decode(payload)


def save(path: str, obj: Vector | Matrix) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(dumps(obj))


def load(path: str) -> Vector | Matrix:
    with open(path, "r", encoding="utf-8") as f:
        return loads(f.read())
