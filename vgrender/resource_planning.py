"""Allocation plans for GPU buffers and textures: validation, flags, heaps and initial states."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Optional

from vgrender.formats import Format, format_size_bits, to_typed_depth, to_typed_non_depth
from vgrender.mathutil import aligned_size
from vgrender.resources import ResourceFrequency

_log = logging.getLogger(__name__)

CONSTANT_BUFFER_DATA_PLACEMENT_ALIGNMENT = 256
MAX_CONSTANT_BUFFER_BYTES = 65536


class BindFlag(enum.IntFlag):
    """Pipeline stages a resource can be bound to."""

    NONE = 0
    CONSTANT_BUFFER = 1 << 0
    SHADER_RESOURCE = 1 << 1
    UNORDERED_ACCESS = 1 << 2
    RENDER_TARGET = 1 << 3
    DEPTH_STENCIL = 1 << 4
    VERTEX_BUFFER = 1 << 5
    INDEX_BUFFER = 1 << 6


class AccessFlag(enum.IntFlag):
    """Who may read or write a resource's contents."""

    NONE = 0
    CPU_READ = 1 << 0
    CPU_WRITE = 1 << 1
    GPU_WRITE = 1 << 2


class ResourceFlag(enum.IntFlag):
    """Creation flags of a GPU resource."""

    NONE = 0x0
    ALLOW_RENDER_TARGET = 0x1
    ALLOW_DEPTH_STENCIL = 0x2
    ALLOW_UNORDERED_ACCESS = 0x4
    DENY_SHADER_RESOURCE = 0x8


class HeapType(enum.IntEnum):
    DEFAULT = 1
    UPLOAD = 2
    READBACK = 3


class ResourceState(enum.IntEnum):
    COMMON = 0x0
    UNORDERED_ACCESS = 0x8
    DEPTH_WRITE = 0x20
    DEPTH_READ = 0x80
    COPY_DEST = 0x400
    GENERIC_READ = 0xAC3


class ResourceDimension(enum.IntEnum):
    BUFFER = 1
    TEXTURE1D = 2
    TEXTURE2D = 3
    TEXTURE3D = 4


class ResourceError(Exception):
    """A resource description cannot be created."""


@dataclass(kw_only=True)
class BufferDescription:
    """Buffer of ``size`` elements, each ``stride`` bytes or sized by ``format`` when stride is 0."""

    size: int
    update_rate: ResourceFrequency = ResourceFrequency.DYNAMIC
    bind_flags: BindFlag = BindFlag.NONE
    access_flags: AccessFlag = AccessFlag.NONE
    stride: int = 0
    uav_counter: bool = False
    format: Optional[Format] = None


@dataclass(kw_only=True)
class TextureDescription:
    """Texture; a height above 1 makes it 2D, and a depth above 1 makes it 3D unless ``array``."""

    width: int = 1
    height: int = 1
    depth: int = 1
    bind_flags: BindFlag = BindFlag.NONE
    access_flags: AccessFlag = AccessFlag.NONE
    format: Format = Format.UNKNOWN
    mip_mapping: bool = False
    array: bool = False


@dataclass(frozen=True)
class ClearValue:
    """Optimised clear value for a render target or depth stencil texture."""

    format: Format
    color: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)
    depth: float = 0.0
    stencil: int = 0


@dataclass(frozen=True)
class BufferPlan:
    """How a buffer is allocated and viewed.

    ``counter`` describes the companion UAV counter buffer, if one is needed.
    """

    width: int
    flags: ResourceFlag
    heap: HeapType
    initial_state: ResourceState
    structure_byte_stride: int
    raw: bool
    counter: Optional[BufferDescription]


@dataclass(frozen=True)
class TexturePlan:
    """How a texture is allocated."""

    dimension: ResourceDimension
    width: int
    height: int
    depth_or_array_size: int
    format: Format
    mip_levels: int
    flags: ResourceFlag
    heap: HeapType
    committed: bool
    initial_state: ResourceState
    clear_value: Optional[ClearValue]
    depth_view_format: Format
    shader_view_format: Format
    depth_view_read_only: bool


def buffer_width(description: BufferDescription) -> int:
    """Width of the buffer in bytes."""
    if description.stride > 0:
        return description.size * description.stride
    if description.format is None:
        raise ResourceError("buffer needs either a stride or a format to size its elements")
    return description.size * (format_size_bits(description.format) // 8)


def texture_dimension(description: TextureDescription) -> ResourceDimension:
    """Resource dimension implied by the texture's extent."""
    if description.height > 1:
        if description.depth > 1 and not description.array:
            return ResourceDimension.TEXTURE3D
        return ResourceDimension.TEXTURE2D
    return ResourceDimension.TEXTURE1D


def _counter_description() -> BufferDescription:
    return BufferDescription(
        update_rate=ResourceFrequency.STATIC,
        bind_flags=BindFlag.NONE,
        access_flags=AccessFlag.GPU_WRITE | AccessFlag.CPU_WRITE,
        size=1,
        stride=0,
        uav_counter=False,
        format=Format.R32_TYPELESS,
    )


def _is_counter(description: BufferDescription) -> bool:
    return (
        description.size == 1
        and description.stride == 0
        and description.format == Format.R32_TYPELESS
        and not description.uav_counter
    )


def plan_buffer(description: BufferDescription) -> BufferPlan:
    """Validate a buffer description and work out its allocation. Raises ResourceError."""
    if description.size <= 0:
        raise ResourceError("Failed to create buffer, must have non-zero size.")
    width = buffer_width(description)
    is_constant = bool(description.bind_flags & BindFlag.CONSTANT_BUFFER)
    if is_constant and width > MAX_CONSTANT_BUFFER_BYTES:
        raise ResourceError(
            f"Failed to create buffer, size of {width} exceeds maximum for a constant buffer."
        )
    has_uav = bool(description.bind_flags & BindFlag.UNORDERED_ACCESS)
    if description.uav_counter and not has_uav:
        raise ResourceError(
            "Buffer cannot have a UAV counter without also having the unordered access bind flag."
        )

    if is_constant:
        width = aligned_size(width, CONSTANT_BUFFER_DATA_PLACEMENT_ALIGNMENT)

    flags = ResourceFlag.NONE
    if has_uav or _is_counter(description):
        flags |= ResourceFlag.ALLOW_UNORDERED_ACCESS

    static = description.update_rate == ResourceFrequency.STATIC
    structured = description.format is None or description.format == Format.UNKNOWN
    return BufferPlan(
        width=width,
        flags=flags,
        heap=HeapType.DEFAULT if static else HeapType.UPLOAD,
        initial_state=ResourceState.COPY_DEST if static else ResourceState.GENERIC_READ,
        structure_byte_stride=description.stride if structured else 0,
        raw=description.format == Format.R32_TYPELESS,
        counter=_counter_description() if description.uav_counter else None,
    )


def plan_texture(description: TextureDescription) -> TexturePlan:
    """Validate a texture description and work out its allocation. Raises ResourceError."""
    if description.width <= 0 or description.height <= 0 or description.depth <= 0:
        raise ResourceError("Failed to create texture, must have non-zero dimensions.")

    binds = description.bind_flags
    gpu_write = bool(description.access_flags & AccessFlag.GPU_WRITE)

    flags = ResourceFlag.NONE
    if binds & BindFlag.RENDER_TARGET:
        flags |= ResourceFlag.ALLOW_RENDER_TARGET
    if binds & BindFlag.DEPTH_STENCIL:
        if description.depth > 1:
            _log.warning("3D textures cannot have depth stencil binding.")
        else:
            flags |= ResourceFlag.ALLOW_DEPTH_STENCIL
            if not binds & BindFlag.SHADER_RESOURCE:
                flags |= ResourceFlag.DENY_SHADER_RESOURCE
    if binds & BindFlag.UNORDERED_ACCESS or description.mip_mapping:
        flags |= ResourceFlag.ALLOW_UNORDERED_ACCESS

    if binds & BindFlag.DEPTH_STENCIL:
        state = ResourceState.DEPTH_WRITE if gpu_write else ResourceState.DEPTH_READ
    elif binds & BindFlag.UNORDERED_ACCESS:
        state = ResourceState.UNORDERED_ACCESS
    else:
        state = ResourceState.COPY_DEST

    clear: Optional[ClearValue] = None
    if binds & BindFlag.RENDER_TARGET:
        clear = ClearValue(format=description.format, color=(0.0, 0.0, 0.0, 1.0))
    elif binds & BindFlag.DEPTH_STENCIL:
        clear = ClearValue(format=to_typed_depth(description.format), depth=0.0, stencil=0)

    shader_format = (
        to_typed_non_depth(description.format)
        if binds & BindFlag.DEPTH_STENCIL
        else description.format
    )

    return TexturePlan(
        dimension=texture_dimension(description),
        width=description.width,
        height=description.height,
        depth_or_array_size=description.depth,
        format=description.format,
        mip_levels=0 if description.mip_mapping else 1,
        flags=flags,
        heap=HeapType.DEFAULT,
        committed=bool(binds & BindFlag.RENDER_TARGET),
        initial_state=state,
        clear_value=clear,
        depth_view_format=to_typed_depth(description.format),
        shader_view_format=shader_format,
        depth_view_read_only=not gpu_write,
    )