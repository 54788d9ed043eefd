"""Render graph resource identifiers, bind kinds and transient resource descriptions."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

from vgrender.formats import Format


class ResourceBind(enum.Enum):
    """How a pass binds a resource it reads or writes."""

    CBV = enum.auto()
    SRV = enum.auto()
    UAV = enum.auto()
    DSV = enum.auto()
    INDIRECT = enum.auto()
    COMMON = enum.auto()


class OutputBind(enum.Enum):
    """How a pass binds a resource it renders into."""

    RTV = enum.auto()
    DSV = enum.auto()


class ResourceFrequency(enum.Enum):
    """How often a resource's contents are updated from the CPU."""

    STATIC = enum.auto()
    DYNAMIC = enum.auto()


@dataclass(frozen=True, order=True)
class RenderResource:
    """Opaque identifier of a resource within a render graph."""

    id: int

    def __hash__(self) -> int:
        return hash(self.id)


@dataclass(kw_only=True)
class TransientBufferDescription:
    """Buffer created by a render graph pass. ``size`` counts elements of ``stride`` bytes."""

    size: int
    update_rate: ResourceFrequency = ResourceFrequency.DYNAMIC
    stride: int = 0
    uav_counter: bool = False
    format: Optional[Format] = None


@dataclass(kw_only=True)
class TransientTextureDescription:
    """Texture created by a render graph pass.

    A width or height of 0 follows the back buffer resolution, scaled by
    ``resolution_scale``; a depth of 6 denotes a texture cube.
    """

    width: int = 0
    height: int = 0
    depth: int = 1
    resolution_scale: float = 1.0
    format: Format = Format.UNKNOWN
    mip_mapping: bool = False