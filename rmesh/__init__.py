"""
rmesh - reader and writer for .rmesh room mesh files.

Decode with ``read_rmesh(data)`` or ``parse_rmesh(filepath)``, encode with
``write_rmesh(header)`` or ``save_rmesh(header, filepath)``. Bounding boxes
and vertex normals live in ``rmesh.mesh_utils``.
"""

__version__ = "1.1.0"

from .entities import (
    ENTITY_TYPES,
    Entity,
    EntityLight,
    EntityModel,
    EntityPlayerStart,
    EntityScreen,
    EntitySoundEmitter,
    EntitySpotlight,
    EntityWaypoint,
)
from .errors import (
    EncodeError,
    InvalidBlendTypeError,
    InvalidFormatTagError,
    InvalidNumericTripleError,
    InvalidTextError,
    RMeshError,
    TruncatedError,
    UnknownEntityTagError,
)
from .rmesh_parser import (
    ComplexMesh,
    Header,
    HeaderType,
    RMeshParser,
    SimpleMesh,
    Texture,
    TextureBlendType,
    TriggerBox,
    Vertex,
    parse_rmesh,
    read_rmesh,
)
from .rmesh_writer import RMeshWriter, save_rmesh, write_rmesh
