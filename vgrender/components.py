"""Scene components consumed by the renderer, and viewport rectangles."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any


@dataclass
class PrimitiveOffset:
    """Offsets into the index, position and extra-attribute streams."""

    index: int = 0
    position: int = 0
    extra: int = 0

    def __add__(self, other: "PrimitiveOffset") -> "PrimitiveOffset":
        if not isinstance(other, PrimitiveOffset):
            return NotImplemented
        return PrimitiveOffset(
            self.index + other.index,
            self.position + other.position,
            self.extra + other.extra,
        )


@dataclass
class Subset:
    """Part of a mesh drawn with a single material."""

    local_offset: PrimitiveOffset
    indices: int
    material_index: int
    bounding_sphere_radius: float


@dataclass
class MeshComponent:
    """Mesh made of subsets placed at an offset in the shared geometry buffers."""

    subsets: list[Subset] = field(default_factory=list)
    global_offset: PrimitiveOffset = field(default_factory=PrimitiveOffset)
    metadata: Any = None


@dataclass
class CameraComponent:
    """Perspective camera parameters; the field of view is in radians."""

    near_plane: float = 0.1
    far_plane: float = 10000.0
    field_of_view: float = 1.57079633


class LightType(enum.Enum):
    POINT = enum.auto()
    DIRECTIONAL = enum.auto()


@dataclass
class LightComponent:
    type: LightType
    color: tuple[float, float, float]


class TimeOfDayAnimation(enum.Enum):
    STATIC = enum.auto()
    CYCLE = enum.auto()
    OSCILLATE = enum.auto()


@dataclass
class TimeOfDayComponent:
    solar_zenith_angle: float
    speed: float
    animation: TimeOfDayAnimation


@dataclass
class Viewport:
    """Screen-space rectangle that rendering is mapped onto."""

    position_x: float
    position_y: float
    width: float
    height: float

    def as_d3d12(self) -> tuple[float, float, float, float, float, float]:
        """Return (top-left x, top-left y, width, height, min depth, max depth)."""
        return (self.position_x, self.position_y, self.width, self.height, 0.0, 1.0)