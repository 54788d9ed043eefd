"""Pipeline state descriptions, their hashing, and a fluent pipeline layout builder."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass, field, replace
from pathlib import PurePath
from typing import Any, Optional, Union

from vgrender.formats import Format
from vgrender.hashing import hash_combine, hash_value

SIMULTANEOUS_RENDER_TARGET_COUNT = 8
DEFAULT_STENCIL_READ_MASK = 0xFF
DEFAULT_STENCIL_WRITE_MASK = 0xFF
COLOR_WRITE_ENABLE_ALL = 0xF


class Blend(enum.IntEnum):
    ZERO = 1
    ONE = 2
    SRC_COLOR = 3
    INV_SRC_COLOR = 4
    SRC_ALPHA = 5
    INV_SRC_ALPHA = 6
    DEST_ALPHA = 7
    INV_DEST_ALPHA = 8
    DEST_COLOR = 9
    INV_DEST_COLOR = 10
    SRC_ALPHA_SAT = 11
    BLEND_FACTOR = 14
    INV_BLEND_FACTOR = 15
    SRC1_COLOR = 16
    INV_SRC1_COLOR = 17
    SRC1_ALPHA = 18
    INV_SRC1_ALPHA = 19


class BlendOp(enum.IntEnum):
    ADD = 1
    SUBTRACT = 2
    REV_SUBTRACT = 3
    MIN = 4
    MAX = 5


class LogicOp(enum.IntEnum):
    CLEAR = 0
    SET = 1
    COPY = 2
    COPY_INVERTED = 3
    NOOP = 4
    INVERT = 5
    AND = 6
    NAND = 7
    OR = 8
    NOR = 9
    XOR = 10
    EQUIV = 11
    AND_REVERSE = 12
    AND_INVERTED = 13
    OR_REVERSE = 14
    OR_INVERTED = 15


class FillMode(enum.IntEnum):
    WIREFRAME = 2
    SOLID = 3


class CullMode(enum.IntEnum):
    NONE = 1
    FRONT = 2
    BACK = 3


class ComparisonFunc(enum.IntEnum):
    NEVER = 1
    LESS = 2
    EQUAL = 3
    LESS_EQUAL = 4
    GREATER = 5
    NOT_EQUAL = 6
    GREATER_EQUAL = 7
    ALWAYS = 8


class DepthWriteMask(enum.IntEnum):
    ZERO = 0
    ALL = 1


class StencilOp(enum.IntEnum):
    KEEP = 1
    ZERO = 2
    REPLACE = 3
    INCR_SAT = 4
    DECR_SAT = 5
    INVERT = 6
    INCR = 7
    DECR = 8


class ConservativeRaster(enum.IntEnum):
    OFF = 0
    ON = 1


class PrimitiveTopology(enum.IntEnum):
    UNDEFINED = 0
    POINTLIST = 1
    LINELIST = 2
    LINESTRIP = 3
    TRIANGLELIST = 4
    TRIANGLESTRIP = 5


class DepthTestFunction(enum.Enum):
    """Depth comparisons available with an inverse depth buffer."""

    EQUAL = enum.auto()
    GREATER = enum.auto()
    GREATER_EQUAL = enum.auto()


_DEPTH_FUNCS = {
    DepthTestFunction.EQUAL: ComparisonFunc.EQUAL,
    DepthTestFunction.GREATER: ComparisonFunc.GREATER,
    DepthTestFunction.GREATER_EQUAL: ComparisonFunc.GREATER_EQUAL,
}


@dataclass
class BlendMode:
    """Colour and alpha blend factors and operations for a render target."""

    src_blend: Blend = Blend.ONE
    dest_blend: Blend = Blend.ZERO
    blend_op: BlendOp = BlendOp.ADD
    src_blend_alpha: Blend = Blend.ONE
    dest_blend_alpha: Blend = Blend.ZERO
    blend_op_alpha: BlendOp = BlendOp.ADD


@dataclass
class RenderTargetBlendDesc:
    blend_enable: bool = False
    logic_op_enable: bool = False
    src_blend: Blend = Blend.ONE
    dest_blend: Blend = Blend.ZERO
    blend_op: BlendOp = BlendOp.ADD
    src_blend_alpha: Blend = Blend.ONE
    dest_blend_alpha: Blend = Blend.ZERO
    blend_op_alpha: BlendOp = BlendOp.ADD
    logic_op: LogicOp = LogicOp.NOOP
    render_target_write_mask: int = COLOR_WRITE_ENABLE_ALL


def _render_targets() -> list[RenderTargetBlendDesc]:
    return [RenderTargetBlendDesc() for _ in range(SIMULTANEOUS_RENDER_TARGET_COUNT)]


@dataclass
class BlendDesc:
    alpha_to_coverage_enable: bool = False
    independent_blend_enable: bool = False
    render_target: list[RenderTargetBlendDesc] = field(default_factory=_render_targets)


@dataclass
class RasterizerDesc:
    fill_mode: FillMode = FillMode.SOLID
    cull_mode: CullMode = CullMode.BACK
    front_counter_clockwise: bool = False
    depth_bias: int = 0
    depth_bias_clamp: float = 0.0
    slope_scaled_depth_bias: float = 0.0
    depth_clip_enable: bool = True
    multisample_enable: bool = False
    antialiased_line_enable: bool = False
    forced_sample_count: int = 0
    conservative_raster: ConservativeRaster = ConservativeRaster.OFF


@dataclass
class DepthStencilOpDesc:
    stencil_fail_op: StencilOp = StencilOp.KEEP
    stencil_depth_fail_op: StencilOp = StencilOp.KEEP
    stencil_pass_op: StencilOp = StencilOp.KEEP
    stencil_func: ComparisonFunc = ComparisonFunc.ALWAYS


@dataclass
class DepthStencilDesc:
    depth_enable: bool = True
    depth_write_mask: DepthWriteMask = DepthWriteMask.ALL
    depth_func: ComparisonFunc = ComparisonFunc.LESS
    stencil_enable: bool = False
    stencil_read_mask: int = DEFAULT_STENCIL_READ_MASK
    stencil_write_mask: int = DEFAULT_STENCIL_WRITE_MASK
    front_face: DepthStencilOpDesc = field(default_factory=DepthStencilOpDesc)
    back_face: DepthStencilOpDesc = field(default_factory=DepthStencilOpDesc)


ShaderSource = tuple[PurePath, str]


def _no_shader() -> ShaderSource:
    return (PurePath(), "")


def _render_target_formats() -> list[Format]:
    return [Format.UNKNOWN] * SIMULTANEOUS_RENDER_TARGET_COUNT


@dataclass
class GraphicsPipelineStateDescription:
    vertex_shader: ShaderSource = field(default_factory=_no_shader)
    pixel_shader: ShaderSource = field(default_factory=_no_shader)
    blend_description: BlendDesc = field(default_factory=BlendDesc)
    rasterizer_description: RasterizerDesc = field(default_factory=RasterizerDesc)
    depth_stencil_description: DepthStencilDesc = field(default_factory=DepthStencilDesc)
    topology: PrimitiveTopology = PrimitiveTopology.TRIANGLELIST
    render_target_count: int = 0
    render_target_formats: list[Format] = field(default_factory=_render_target_formats)
    depth_stencil_format: Format = Format.UNKNOWN
    macros: list[Any] = field(default_factory=list)


@dataclass
class ComputePipelineStateDescription:
    shader: ShaderSource = field(default_factory=_no_shader)
    macros: list[Any] = field(default_factory=list)


def _hash_rt_blend(blend: RenderTargetBlendDesc) -> int:
    return hash_combine(
        0,
        blend.blend_enable,
        blend.logic_op_enable,
        blend.src_blend,
        blend.dest_blend,
        blend.blend_op,
        blend.src_blend_alpha,
        blend.dest_blend_alpha,
        blend.blend_op_alpha,
        blend.logic_op,
        blend.render_target_write_mask,
    )


def _hash_blend(desc: BlendDesc) -> int:
    return hash_combine(
        0,
        desc.alpha_to_coverage_enable,
        desc.independent_blend_enable,
        *(_hash_rt_blend(rt) for rt in desc.render_target),
    )


def _hash_rasterizer(desc: RasterizerDesc) -> int:
    return hash_combine(
        0,
        desc.fill_mode,
        desc.cull_mode,
        desc.front_counter_clockwise,
        desc.depth_bias,
        desc.depth_bias_clamp,
        desc.slope_scaled_depth_bias,
        desc.depth_clip_enable,
        desc.multisample_enable,
        desc.antialiased_line_enable,
        desc.forced_sample_count,
        desc.conservative_raster,
    )


def _hash_stencil_op(desc: DepthStencilOpDesc) -> int:
    return hash_combine(
        0,
        desc.stencil_fail_op,
        desc.stencil_depth_fail_op,
        desc.stencil_pass_op,
        desc.stencil_func,
    )


def _hash_depth_stencil(desc: DepthStencilDesc) -> int:
    return hash_combine(
        0,
        desc.depth_enable,
        desc.depth_write_mask,
        desc.depth_func,
        desc.stencil_enable,
        desc.stencil_read_mask,
        desc.stencil_write_mask,
        _hash_stencil_op(desc.front_face),
        _hash_stencil_op(desc.back_face),
    )


def pipeline_hash(
    description: Union[GraphicsPipelineStateDescription, ComputePipelineStateDescription],
) -> int:
    """Return a stable 64-bit hash of a graphics or compute pipeline description."""
    if isinstance(description, GraphicsPipelineStateDescription):
        seed = hash_combine(
            0,
            hash_value(description.vertex_shader[0]),
            description.vertex_shader[1],
            hash_value(description.pixel_shader[0]),
            description.pixel_shader[1],
            _hash_blend(description.blend_description),
            _hash_rasterizer(description.rasterizer_description),
            _hash_depth_stencil(description.depth_stencil_description),
            description.topology,
            description.render_target_count,
            *description.render_target_formats,
            description.depth_stencil_format,
        )
    elif isinstance(description, ComputePipelineStateDescription):
        seed = hash_combine(0, hash_value(description.shader[0]), description.shader[1])
    else:
        raise TypeError(f"cannot hash pipeline description of type {type(description).__name__}")
    for macro in description.macros:
        seed = hash_combine(seed, macro)
    return seed


def _shader_source(path: Union[str, os.PathLike], entry: str) -> ShaderSource:
    return (PurePath(path), entry)


class RenderPipelineLayout:
    """Fluent builder for a graphics or compute pipeline description.

    Setting any graphics state switches the layout to a graphics pipeline with
    default state; setting a compute shader switches it to a compute pipeline.
    """

    def __init__(self) -> None:
        self._description: Optional[
            Union[GraphicsPipelineStateDescription, ComputePipelineStateDescription]
        ] = None

    @property
    def description(
        self,
    ) -> Optional[Union[GraphicsPipelineStateDescription, ComputePipelineStateDescription]]:
        """The pipeline description built so far, or None if nothing was set."""
        return self._description

    def _graphics(self) -> GraphicsPipelineStateDescription:
        if not isinstance(self._description, GraphicsPipelineStateDescription):
            self._description = GraphicsPipelineStateDescription()
        return self._description

    def _compute(self) -> ComputePipelineStateDescription:
        if not isinstance(self._description, ComputePipelineStateDescription):
            self._description = ComputePipelineStateDescription()
        return self._description

    def vertex_shader(self, path: Union[str, os.PathLike], entry: str) -> "RenderPipelineLayout":
        self._graphics().vertex_shader = _shader_source(path, entry)
        return self

    def pixel_shader(self, path: Union[str, os.PathLike], entry: str) -> "RenderPipelineLayout":
        self._graphics().pixel_shader = _shader_source(path, entry)
        return self

    def compute_shader(self, path: Union[str, os.PathLike], entry: str) -> "RenderPipelineLayout":
        self._compute().shader = _shader_source(path, entry)
        return self

    def blend_mode(self, enabled: bool, mode: BlendMode) -> "RenderPipelineLayout":
        """Configure blending of the first render target."""
        targets = self._graphics().blend_description.render_target
        targets[0] = RenderTargetBlendDesc(
            blend_enable=enabled,
            logic_op_enable=False,
            src_blend=mode.src_blend,
            dest_blend=mode.dest_blend,
            blend_op=mode.blend_op,
            src_blend_alpha=mode.src_blend_alpha,
            dest_blend_alpha=mode.dest_blend_alpha,
            blend_op_alpha=mode.blend_op_alpha,
            logic_op=LogicOp.NOOP,
            render_target_write_mask=COLOR_WRITE_ENABLE_ALL,
        )
        return self

    def fill_mode(self, mode: FillMode) -> "RenderPipelineLayout":
        self._graphics().rasterizer_description.fill_mode = mode
        return self

    def cull_mode(self, mode: CullMode) -> "RenderPipelineLayout":
        self._graphics().rasterizer_description.cull_mode = mode
        return self

    def depth_enabled(
        self,
        value: bool,
        write: bool = False,
        function: DepthTestFunction = DepthTestFunction.GREATER,
    ) -> "RenderPipelineLayout":
        """Set the depth write mask and test; depth testing stays enabled whatever ``value`` is."""
        desc = self._graphics().depth_stencil_description
        desc.depth_enable = True
        desc.depth_write_mask = DepthWriteMask.ALL if write else DepthWriteMask.ZERO
        desc.depth_func = _DEPTH_FUNCS[function]
        return self

    def stencil_enabled(
        self, value: bool, write: bool, mask: int = DEFAULT_STENCIL_READ_MASK
    ) -> "RenderPipelineLayout":
        """Enable stencil use, applying ``mask`` to writes or to reads depending on ``write``."""
        desc = self._graphics().depth_stencil_description
        desc.stencil_enable = True
        desc.stencil_read_mask = 0 if write else mask
        desc.stencil_write_mask = mask if write else 0
        return self

    def topology(self, topology: PrimitiveTopology) -> "RenderPipelineLayout":
        self._graphics().topology = topology
        return self

    def macro(self, macro: Any) -> "RenderPipelineLayout":
        """Append a shader macro; a shader must already have been set."""
        if self._description is None:
            raise RuntimeError("Render pipeline layout macros must be added last.")
        self._description.macros.append(macro)
        return self

    def copy(self) -> "RenderPipelineLayout":
        """Return an independent copy of this layout."""
        other = RenderPipelineLayout()
        if self._description is not None:
            other._description = _deep_copy(self._description)
        return other

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RenderPipelineLayout):
            return NotImplemented
        return self._description == other._description

    def __hash__(self) -> int:
        if self._description is None:
            return 0
        return pipeline_hash(self._description)


def _deep_copy(
    description: Union[GraphicsPipelineStateDescription, ComputePipelineStateDescription],
) -> Union[GraphicsPipelineStateDescription, ComputePipelineStateDescription]:
    if isinstance(description, ComputePipelineStateDescription):
        return replace(description, macros=list(description.macros))
    blend = description.blend_description
    depth = description.depth_stencil_description
    return replace(
        description,
        blend_description=replace(
            blend, render_target=[replace(rt) for rt in blend.render_target]
        ),
        rasterizer_description=replace(description.rasterizer_description),
        depth_stencil_description=replace(
            depth, front_face=replace(depth.front_face), back_face=replace(depth.back_face)
        ),
        render_target_formats=list(description.render_target_formats),
        macros=list(description.macros),
    )