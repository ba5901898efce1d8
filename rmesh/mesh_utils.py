"""
Geometry derived from decoded meshes: bounding boxes and smooth vertex
normals. Accepts Vertex records or bare (x, y, z) positions.
"""

import math
from typing import Iterable, List, Sequence, Tuple

from mathutils import Vector

Vec3 = Tuple[float, float, float]


def _position(item) -> Vec3:
    return tuple(getattr(item, 'position', item))


def calculate_bounds(vertices: Iterable) -> Tuple[Vec3, Vec3]:
    """
    Return the axis-aligned bounding box (min_xyz, max_xyz) of the vertices.

    An empty input gives min = (+inf, +inf, +inf) and max = (-inf, -inf, -inf);
    callers that need "has geometry" should check the vertex count.
    """
    min_x = min_y = min_z = math.inf
    max_x = max_y = max_z = -math.inf
    for item in vertices:
        x, y, z = _position(item)
        min_x, min_y, min_z = min(min_x, x), min(min_y, y), min(min_z, z)
        max_x, max_y, max_z = max(max_x, x), max(max_y, y), max(max_z, z)
    return (min_x, min_y, min_z), (max_x, max_y, max_z)


def calculate_vertex_normals(
    vertices: Sequence,
    triangles: Iterable[Sequence[int]],
) -> List[Vec3]:
    """
    Compute smooth per-vertex normals.

    Each triangle's face normal (v1 - v0) x (v2 - v0) is added to its three
    vertices, then every sum is normalized. Face normals are added
    unnormalized, so larger faces weigh more. Vertices that no triangle uses
    keep a zero normal. Indices outside the vertex list raise IndexError.
    """
    positions = [Vector(_position(item)) for item in vertices]
    normals = [Vector((0.0, 0.0, 0.0)) for _ in positions]

    for i0, i1, i2 in triangles:
        if min(i0, i1, i2) < 0:
            raise IndexError(f"Negative vertex index in triangle {(i0, i1, i2)}")
        v0 = positions[i0]
        face_normal = (positions[i1] - v0).cross(positions[i2] - v0)
        normals[i0] += face_normal
        normals[i1] += face_normal
        normals[i2] += face_normal

    result = []
    for normal in normals:
        # Zero sums stay zero instead of becoming NaN; divide rather than
        # normalize(), which zero-fills very short vectors
        length = normal.length
        if length > 0.0:
            normal = normal / length
        result.append(tuple(normal))
    return result
