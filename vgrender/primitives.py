"""Non-owning view of a mesh's index stream and named vertex attribute streams."""

from __future__ import annotations

import struct
from typing import Sequence

_ATTRIBUTE_ORDER = ("POSITION", "NORMAL", "TEXCOORD_0", "TANGENT", "BITANGENT", "COLOR_0")
_FLOAT_BYTES = 4
_COMPONENT_COUNTS = (2, 3, 4)


def attribute_sort_key(name: str) -> tuple[int, str]:
    """Sort key placing well-known attributes first in a fixed order, others alphabetically after."""
    try:
        return (_ATTRIBUTE_ORDER.index(name), "")
    except ValueError:
        return (len(_ATTRIBUTE_ORDER), name)


class PrimitiveAssembly:
    """Index and vertex attribute streams of a single mesh.

    Vertex streams are sequences of 2, 3 or 4 component float vectors. The
    streams are referenced, not copied.
    """

    def __init__(self) -> None:
        self._index_stream: Sequence[int] = ()
        self._vertex_streams: dict[str, Sequence[Sequence[float]]] = {}

    @property
    def index_stream(self) -> Sequence[int]:
        return self._index_stream

    def add_index_stream(self, stream: Sequence[int]) -> None:
        self._index_stream = stream

    def add_vertex_stream(self, name: str, stream: Sequence[Sequence[float]]) -> None:
        """Register a vertex attribute stream under ``name``, replacing any previous one."""
        if not stream:
            raise ValueError(f"vertex stream '{name}' is empty")
        widths = {len(element) for element in stream}
        if len(widths) != 1 or next(iter(widths)) not in _COMPONENT_COUNTS:
            raise ValueError(
                f"vertex stream '{name}' must hold vectors of a single width of 2, 3 or 4"
            )
        self._vertex_streams[name] = stream

    def attribute_names(self) -> list[str]:
        """Names of the vertex attributes in canonical order."""
        return sorted(self._vertex_streams, key=attribute_sort_key)

    def _stream(self, name: str) -> Sequence[Sequence[float]]:
        try:
            return self._vertex_streams[name]
        except KeyError:
            raise KeyError(f"no vertex attribute named '{name}'") from None

    def attribute_size(self, name: str) -> int:
        """Size in bytes of one element of the named attribute."""
        return len(self._stream(name)[0]) * _FLOAT_BYTES

    def attribute_count(self, name: str) -> int:
        """Number of elements in the named attribute stream."""
        return len(self._stream(name))

    def attribute_data(self, name: str) -> bytes:
        """The named attribute stream packed as little-endian 32-bit floats."""
        stream = self._stream(name)
        flat = [component for element in stream for component in element]
        return struct.pack(f"<{len(flat)}f", *flat)