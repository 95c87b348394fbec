"""GPU buffer descriptions.

The geometry builders emit one interleaved float32 vertex buffer and one
index buffer per string, described by a ``VertexLayout`` so downstream
pipelines can bind attributes without knowing which builder produced them.
"""

from dataclasses import dataclass

import numpy as np

from glyphmesh.domain.layout import AtlasTextMetrics, TextMetrics

FLOAT32_BYTES = 4


@dataclass(frozen=True, slots=True)
class VertexAttribute:
    """A single interleaved vertex attribute.

    Attributes:
        semantic: Meaning of the attribute ("position", "normal", "uv", ...)
        components: Number of float components
        offset: Byte offset inside one vertex
    """

    semantic: str
    components: int
    offset: int


@dataclass(frozen=True, slots=True)
class VertexLayout:
    """Interleaved float32 vertex layout."""

    stride: int
    attributes: tuple[VertexAttribute, ...]

    @property
    def floats_per_vertex(self) -> int:
        return self.stride // FLOAT32_BYTES

    def attribute(self, semantic: str) -> VertexAttribute | None:
        """Find an attribute by semantic."""
        for attr in self.attributes:
            if attr.semantic == semantic:
                return attr
        return None


POSITION_NORMAL_UV = VertexLayout(
    stride=8 * FLOAT32_BYTES,
    attributes=(
        VertexAttribute("position", 3, 0),
        VertexAttribute("normal", 3, 3 * FLOAT32_BYTES),
        VertexAttribute("uv", 2, 6 * FLOAT32_BYTES),
    ),
)

POSITION_UV = VertexLayout(
    stride=5 * FLOAT32_BYTES,
    attributes=(
        VertexAttribute("position", 3, 0),
        VertexAttribute("uv", 2, 3 * FLOAT32_BYTES),
    ),
)


@dataclass(frozen=True, eq=False)
class MeshData:
    """Interleaved vertex buffer plus triangle index buffer.

    Attributes:
        vertices: Flat float32 array, ``layout.floats_per_vertex`` floats per vertex
        indices: Triangle list (uint16 or uint32)
        layout: Description of one vertex
        label: Debug label
    """

    vertices: np.ndarray
    indices: np.ndarray
    layout: VertexLayout
    label: str = "text"

    @property
    def vertex_count(self) -> int:
        return len(self.vertices) // self.layout.floats_per_vertex

    @property
    def triangle_count(self) -> int:
        return len(self.indices) // 3

    @property
    def index_format(self) -> str:
        """Index format name as GPU APIs spell it ("uint16" or "uint32")."""
        return "uint32" if self.indices.dtype == np.uint32 else "uint16"

    def positions(self) -> np.ndarray:
        """Return an ``(N, 3)`` view of the vertex positions."""
        per_vertex = self.layout.floats_per_vertex
        return self.vertices.reshape(-1, per_vertex)[:, 0:3]


@dataclass(frozen=True, eq=False)
class TextMesh:
    """Vector text mesh with the layout it was built from."""

    mesh: MeshData
    metrics: TextMetrics


@dataclass(frozen=True, eq=False)
class AtlasTextMesh:
    """Atlas text mesh with its metrics."""

    mesh: MeshData
    metrics: AtlasTextMetrics
