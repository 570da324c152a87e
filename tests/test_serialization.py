"""Tests for versioned vector and matrix payloads."""

from __future__ import annotations

import pytest

from lsisvd import serialization
from lsisvd.errors import SerializationError
from lsisvd.matrix import Matrix
from lsisvd.serialization import FORMAT, VERSION, decode, dumps, encode, load, loads, save
from lsisvd.vector import COLUMN, Vector


def test_vector_payload() -> None:
    payload = encode(Vector([1.0, 2.0], orientation=COLUMN))
    assert payload == {
        "format": FORMAT,
        "version": VERSION,
        "kind": "vector",
        "orientation": "column",
        "data": [1.0, 2.0],
    }


def test_vector_decode_restores_orientation() -> None:
    v = Vector([0.25, -1.5, 3.0], orientation=COLUMN)
    restored = decode(encode(v))
    assert isinstance(restored, Vector)
    assert restored == v
    assert restored.orientation == COLUMN


def test_matrix_decode() -> None:
    m = Matrix.from_rows([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])
    payload = encode(m)
    assert payload["rows"] == 2
    assert payload["cols"] == 3
    assert decode(payload) == m


def test_empty_matrix_keeps_shape() -> None:
    restored = decode(encode(Matrix(0, 3)))
    assert isinstance(restored, Matrix)
    assert restored.shape == (0, 3)


def test_yaml_text() -> None:
    m = Matrix.from_rows([[1.5, -2.0], [0.0, 4.0]])
    text = dumps(m)
    assert "kind: matrix" in text
    assert loads(text) == m


def test_save_and_load(tmp_path) -> None:
    path = tmp_path / "u.yaml"
    v = Vector([1.0, 2.0, 3.0])
    save(str(path), v)
    assert load(str(path)) == v


def test_encode_rejects_other_types() -> None:
    with pytest.raises(TypeError):
        encode([1.0, 2.0])


@pytest.mark.parametrize("changes", [
    {"format": "other"},
    {"version": 2},
    {"kind": "tensor"},
    {"orientation": "diagonal"},
    {"data": None},
])
def test_decode_rejects_bad_vector_payloads(changes: dict) -> None:
    payload = encode(Vector([1.0, 2.0]))
    payload.update(changes)
    with pytest.raises(SerializationError):
        decode(payload)


def test_decode_rejects_inconsistent_matrix_data() -> None:
    payload = encode(Matrix.identity(2))
    payload["rows"] = 3
    with pytest.raises(SerializationError):
        decode(payload)
    del payload["cols"]
    with pytest.raises(SerializationError):
        decode(payload)


def test_decode_rejects_non_mapping() -> None:
    with pytest.raises(SerializationError):
        decode([1, 2, 3])


def test_loads_rejects_invalid_yaml() -> None:
    with pytest.raises(SerializationError):
        loads("kind: [unclosed")


def test_serialization_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        serialization.decode({"format": FORMAT, "version": 99})
