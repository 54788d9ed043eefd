"""Registry of GPU buffers and textures with handles, writes, frame-temporary resources and memory accounting."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field, replace
from typing import Optional, Union

from vgrender.formats import format_size_bits
from vgrender.resource_planning import (
    AccessFlag,
    BufferDescription,
    BufferPlan,
    ResourceError,
    ResourceState,
    TextureDescription,
    TexturePlan,
    plan_buffer,
    plan_texture,
)
from vgrender.resources import ResourceFrequency

UPLOAD_HEAP_SIZE = 1024 * 1024 * 512
UAV_COUNTER_NAME = "UAV counter buffer"


@dataclass
class GpuMemoryInfo:
    """Counts and byte totals of live buffers and textures."""

    buffer_count: int = 0
    texture_count: int = 0
    buffer_bytes: int = 0
    texture_bytes: int = 0


@dataclass(frozen=True, order=True)
class BufferHandle:
    """Identifies a buffer in a registry."""

    id: int


@dataclass(frozen=True, order=True)
class TextureHandle:
    """Identifies a texture in a registry."""

    id: int


Handle = Union[BufferHandle, TextureHandle]


@dataclass
class BufferRecord:
    """A live buffer: its description, allocation plan, name, state and contents."""

    description: BufferDescription
    plan: BufferPlan
    name: str
    state: ResourceState
    data: bytearray
    counter_buffer: Optional[BufferHandle] = None


@dataclass
class TextureRecord:
    """A live texture: its description, allocation plan, name and state."""

    description: TextureDescription
    plan: TexturePlan
    name: str
    state: ResourceState


def _texture_bytes(description: TextureDescription) -> int:
    bits = format_size_bits(description.format)
    return description.width * description.height * description.depth * bits // 8


@dataclass
class _Frame:
    upload_offset: int = 0
    buffers: list[BufferHandle] = field(default_factory=list)
    textures: list[TextureHandle] = field(default_factory=list)


class ResourceRegistry:
    """Owns buffers and textures across ``frame_count`` buffered frames.

    ``frame_index`` selects the frame whose upload heap static buffer writes use.
    """

    def __init__(self, frame_count: int) -> None:
        if frame_count <= 0:
            raise ValueError("frame count must be positive")
        self._frames = [_Frame() for _ in range(frame_count)]
        self._records: dict[int, Union[BufferRecord, TextureRecord]] = {}
        self._ids = itertools.count()
        self._memory = GpuMemoryInfo()
        self.frame_index = 0

    @property
    def frame_count(self) -> int:
        return len(self._frames)

    def create_buffer(self, description: BufferDescription, name: str) -> BufferHandle:
        """Create a buffer, and its UAV counter buffer when requested. Raises ResourceError."""
        plan = plan_buffer(description)
        handle = BufferHandle(next(self._ids))
        record = BufferRecord(
            description=description,
            plan=plan,
            name=name,
            state=plan.initial_state,
            data=bytearray(plan.width),
        )
        self._records[handle.id] = record
        if plan.counter is not None:
            record.counter_buffer = self.create_buffer(plan.counter, UAV_COUNTER_NAME)
        self._memory.buffer_count += 1
        self._memory.buffer_bytes += plan.width
        return handle

    def create_texture(self, description: TextureDescription, name: str) -> TextureHandle:
        """Create a texture. Raises ResourceError."""
        plan = plan_texture(description)
        handle = TextureHandle(next(self._ids))
        self._records[handle.id] = TextureRecord(
            description=description, plan=plan, name=name, state=plan.initial_state
        )
        self._memory.texture_count += 1
        self._memory.texture_bytes += _texture_bytes(description)
        return handle

    def valid(self, handle: Handle) -> bool:
        """Whether ``handle`` refers to a live resource of the matching kind."""
        record = self._records.get(handle.id)
        if isinstance(handle, BufferHandle):
            return isinstance(record, BufferRecord)
        if isinstance(handle, TextureHandle):
            return isinstance(record, TextureRecord)
        return False

    def get(self, handle: Handle) -> Union[BufferRecord, TextureRecord]:
        """Return the record of a live resource. Raises ResourceError for invalid handles."""
        if not self.valid(handle):
            kind = "buffer" if isinstance(handle, BufferHandle) else "texture"
            raise ResourceError(f"Fetching invalid {kind} handle.")
        return self._records[handle.id]

    def rename(self, handle: Handle, name: str) -> None:
        self.get(handle).name = name

    def destroy(self, handle: Handle) -> None:
        """Release a resource and any counter buffer it owns. Raises ResourceError."""
        if not self.valid(handle):
            kind = "buffer" if isinstance(handle, BufferHandle) else "texture"
            raise ResourceError(f"Destroying invalid {kind} handle.")
        record = self._records[handle.id]
        if isinstance(record, BufferRecord):
            self._memory.buffer_count -= 1
            self._memory.buffer_bytes -= record.plan.width
            if record.counter_buffer is not None and self.valid(record.counter_buffer):
                self.destroy(record.counter_buffer)
        else:
            self._memory.texture_count -= 1
            self._memory.texture_bytes -= _texture_bytes(record.description)
        del self._records[handle.id]

    def upload_offset(self, frame_index: int) -> int:
        """Bytes of the frame's upload heap used so far."""
        return self._frames[frame_index].upload_offset

    def write_buffer(self, handle: BufferHandle, data: bytes, offset: int = 0) -> None:
        """Copy ``data`` into the buffer at byte ``offset``. Raises ResourceError."""
        record = self.get(handle)
        if not isinstance(record, BufferRecord):
            raise ResourceError("Fetching invalid buffer handle.")
        payload = bytes(data)
        static = record.description.update_rate == ResourceFrequency.STATIC
        kind = "static" if static else "dynamic"

        if not static and record.state != ResourceState.GENERIC_READ:
            raise ResourceError("Dynamic buffers must always be in the generic read state.")
        if not record.description.access_flags & AccessFlag.CPU_WRITE:
            raise ResourceError(f"Failed to write to {kind} buffer, no CPU write access.")
        width = record.plan.width
        if offset < 0 or offset > width or width - offset < len(payload):
            raise ResourceError(
                f"Failed to write to {kind} buffer, source is larger than target. "
                f"Buffer width: {width}, source size: {len(payload)}, offset: {offset}"
            )

        if static:
            frame = self._frames[self.frame_index]
            if frame.upload_offset + len(payload) > UPLOAD_HEAP_SIZE:
                raise ResourceError("Failed to write to static buffer, exhausted frame upload heap.")
            record.state = ResourceState.COPY_DEST
            frame.upload_offset += len(payload)

        record.data[offset:offset + len(payload)] = payload

    def add_frame_resource(self, frame_index: int, handle: Handle) -> None:
        """Schedule a resource to be destroyed when ``frame_index`` is cleaned up."""
        frame = self._frames[frame_index]
        if isinstance(handle, BufferHandle):
            frame.buffers.append(handle)
        elif isinstance(handle, TextureHandle):
            frame.textures.append(handle)
        else:
            raise TypeError(f"not a resource handle: {handle!r}")

    def cleanup_frame_resources(self, frame: int) -> None:
        """Reset the frame's upload heap and destroy its frame-temporary resources."""
        slot = self._frames[frame % len(self._frames)]
        slot.upload_offset = 0
        for buffer in slot.buffers:
            self.destroy(buffer)
        slot.buffers.clear()
        for texture in slot.textures:
            self.destroy(texture)
        slot.textures.clear()

    def memory_info(self) -> GpuMemoryInfo:
        """A snapshot of the current memory accounting."""
        return replace(self._memory)