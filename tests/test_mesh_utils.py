"""Tests for bounding boxes and vertex normal reconstruction."""

import math
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from rmesh import ComplexMesh, SimpleMesh, Vertex
from rmesh.mesh_utils import calculate_bounds, calculate_vertex_normals


def test_bounds_of_empty_input_are_inverted_infinities() -> None:
    assert calculate_bounds([]) == (
        (math.inf, math.inf, math.inf),
        (-math.inf, -math.inf, -math.inf),
    )


def test_bounds_of_single_vertex() -> None:
    assert calculate_bounds([(1.0, 2.0, 3.0)]) == ((1.0, 2.0, 3.0), (1.0, 2.0, 3.0))


def test_bounds_accept_vertex_records() -> None:
    """Vertex records and bare tuples give the same result."""
    mesh = ComplexMesh(vertices=[
        Vertex(position=(-1.0, 5.0, 0.5)),
        Vertex(position=(3.0, -2.0, 0.25)),
        Vertex(position=(0.0, 0.0, 9.0)),
    ])

    expected = ((-1.0, -2.0, 0.25), (3.0, 5.0, 9.0))
    assert calculate_bounds(mesh.vertices) == expected
    assert calculate_bounds(mesh.positions()) == expected


def test_single_triangle_normal() -> None:
    """A counter-clockwise triangle in the XY plane faces +Z."""
    normals = calculate_vertex_normals(
        [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0)],
        [(0, 1, 2)],
    )
    assert normals == [(0.0, 0.0, 1.0)] * 3


def test_unreferenced_vertex_keeps_zero_normal() -> None:
    normals = calculate_vertex_normals(
        [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (7.0, 7.0, 7.0)],
        [(0, 1, 2)],
    )
    assert normals[3] == (0.0, 0.0, 0.0)


def test_degenerate_triangle_gives_zero_not_nan() -> None:
    normals = calculate_vertex_normals(
        [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (2.0, 0.0, 0.0)],
        [(0, 1, 2)],
    )
    for normal in normals:
        assert normal == (0.0, 0.0, 0.0)
        assert not any(math.isnan(c) for c in normal)


def test_shared_edge_normals_are_averaged() -> None:
    """Vertices on the shared edge of two perpendicular faces get the bisector."""
    mesh = SimpleMesh(
        vertices=[
            (0.0, 0.0, 0.0),
            (1.0, 0.0, 0.0),
            (0.0, 1.0, 0.0),
            (0.0, 0.0, 1.0),
        ],
        # Face A in the XY plane (+Z), face B in the XZ plane (+Y)
        triangles=[(0, 1, 2), (0, 3, 1)],
    )

    normals = calculate_vertex_normals(mesh.positions(), mesh.triangles)

    s = 1.0 / math.sqrt(2.0)
    assert normals[0] == pytest.approx((0.0, s, s), abs=1e-6)
    assert normals[1] == pytest.approx((0.0, s, s), abs=1e-6)
    assert normals[2] == pytest.approx((0.0, 0.0, 1.0), abs=1e-6)
    assert normals[3] == pytest.approx((0.0, 1.0, 0.0), abs=1e-6)


def test_normals_from_vertex_records() -> None:
    vertices = [
        Vertex(position=(0.0, 0.0, 0.0)),
        Vertex(position=(0.0, 0.0, 2.0)),
        Vertex(position=(2.0, 0.0, 0.0)),
    ]
    normals = calculate_vertex_normals(vertices, [(0, 1, 2)])
    assert normals == [(0.0, 1.0, 0.0)] * 3


def test_out_of_range_index_raises() -> None:
    with pytest.raises(IndexError):
        calculate_vertex_normals([(0.0, 0.0, 0.0)], [(0, 1, 2)])


def test_negative_index_raises() -> None:
    """Negative indices do not wrap around to the end of the vertex list."""
    with pytest.raises(IndexError):
        calculate_vertex_normals(
            [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0)],
            [(-1, 0, 1)],
        )


def test_tiny_triangle_still_gets_unit_normals() -> None:
    """A very small but valid face is not mistaken for a degenerate one."""
    normals = calculate_vertex_normals(
        [(0.0, 0.0, 0.0), (1e-9, 0.0, 0.0), (0.0, 1e-9, 0.0)],
        [(0, 1, 2)],
    )
    for normal in normals:
        assert normal == pytest.approx((0.0, 0.0, 1.0), abs=1e-6)
