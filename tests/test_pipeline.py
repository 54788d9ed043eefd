from pathlib import PurePath

import pytest

from vgrender.pipeline import (
    Blend,
    BlendMode,
    BlendOp,
    ComparisonFunc,
    ComputePipelineStateDescription,
    CullMode,
    DepthTestFunction,
    DepthWriteMask,
    FillMode,
    GraphicsPipelineStateDescription,
    PrimitiveTopology,
    RenderPipelineLayout,
    pipeline_hash,
)


def _ui_layout():
    return (
        RenderPipelineLayout()
        .vertex_shader("UserInterface", "VSMain")
        .pixel_shader("UserInterface", "PSMain")
        .blend_mode(
            True,
            BlendMode(
                src_blend=Blend.SRC_ALPHA,
                dest_blend=Blend.INV_SRC_ALPHA,
                blend_op=BlendOp.ADD,
                src_blend_alpha=Blend.ONE,
                dest_blend_alpha=Blend.INV_SRC_ALPHA,
                blend_op_alpha=BlendOp.ADD,
            ),
        )
        .cull_mode(CullMode.NONE)
        .depth_enabled(False)
    )


def test_new_layout_has_no_description():
    assert RenderPipelineLayout().description is None


def test_vertex_shader_creates_default_graphics_state():
    layout = RenderPipelineLayout().vertex_shader("Forward", "VSMain")
    desc = layout.description
    assert isinstance(desc, GraphicsPipelineStateDescription)
    assert desc.vertex_shader == (PurePath("Forward"), "VSMain")
    assert desc.rasterizer_description.cull_mode is CullMode.BACK
    assert desc.rasterizer_description.fill_mode is FillMode.SOLID
    assert desc.depth_stencil_description.depth_func is ComparisonFunc.LESS
    assert desc.blend_description.render_target[0].render_target_write_mask == 0xF
    assert desc.depth_stencil_description.stencil_read_mask == 0xFF


def test_pixel_shader_keeps_vertex_shader():
    layout = RenderPipelineLayout().vertex_shader("A", "VS").pixel_shader("A", "PS")
    assert layout.description.vertex_shader == (PurePath("A"), "VS")
    assert layout.description.pixel_shader == (PurePath("A"), "PS")


def test_compute_shader_replaces_graphics_state():
    layout = RenderPipelineLayout().vertex_shader("A", "VS").compute_shader("Blur", "Main")
    assert isinstance(layout.description, ComputePipelineStateDescription)
    assert layout.description.shader == (PurePath("Blur"), "Main")


def test_blend_mode_sets_first_render_target():
    layout = _ui_layout()
    rt = layout.description.blend_description.render_target[0]
    assert rt.blend_enable is True
    assert rt.src_blend is Blend.SRC_ALPHA
    assert rt.dest_blend is Blend.INV_SRC_ALPHA
    assert rt.dest_blend_alpha is Blend.INV_SRC_ALPHA
    assert layout.description.blend_description.render_target[1].blend_enable is False


def test_depth_enabled_defaults_to_greater_without_write():
    desc = _ui_layout().description.depth_stencil_description
    assert desc.depth_enable is True
    assert desc.depth_write_mask is DepthWriteMask.ZERO
    assert desc.depth_func is ComparisonFunc.GREATER


def test_depth_enabled_with_write_and_equal():
    layout = RenderPipelineLayout().depth_enabled(True, True, DepthTestFunction.EQUAL)
    desc = layout.description.depth_stencil_description
    assert desc.depth_write_mask is DepthWriteMask.ALL
    assert desc.depth_func is ComparisonFunc.EQUAL


def test_stencil_enabled_write_mask():
    desc = RenderPipelineLayout().stencil_enabled(True, True, 0x0F).description
    ds = desc.depth_stencil_description
    assert ds.stencil_enable is True
    assert ds.stencil_read_mask == 0
    assert ds.stencil_write_mask == 0x0F


def test_stencil_enabled_read_mask_default():
    ds = RenderPipelineLayout().stencil_enabled(True, False).description.depth_stencil_description
    assert ds.stencil_read_mask == 0xFF
    assert ds.stencil_write_mask == 0


def test_fill_mode_and_topology():
    layout = RenderPipelineLayout().fill_mode(FillMode.WIREFRAME).topology(PrimitiveTopology.LINELIST)
    assert layout.description.rasterizer_description.fill_mode is FillMode.WIREFRAME
    assert layout.description.topology is PrimitiveTopology.LINELIST


def test_macro_before_shader_raises():
    with pytest.raises(RuntimeError):
        RenderPipelineLayout().macro("FOO=1")


def test_macro_appended():
    layout = RenderPipelineLayout().compute_shader("Blur", "Main").macro("A").macro("B")
    assert layout.description.macros == ["A", "B"]


def test_identical_layouts_hash_equal():
    first = pipeline_hash(_ui_layout().description)
    assert 0 <= first < 2 ** 64
    assert pipeline_hash(_ui_layout().description) == first
    assert hash(_ui_layout()) == hash(_ui_layout())
    assert _ui_layout() == _ui_layout()


def test_layouts_work_as_dict_keys():
    cache = {_ui_layout(): "ui"}
    assert cache[_ui_layout()] == "ui"


def test_state_change_changes_hash():
    base = _ui_layout()
    other = _ui_layout().cull_mode(CullMode.BACK)
    assert pipeline_hash(base.description) != pipeline_hash(other.description)
    assert base != other


def test_macro_order_affects_hash():
    a = RenderPipelineLayout().compute_shader("X", "Main").macro("A").macro("B")
    b = RenderPipelineLayout().compute_shader("X", "Main").macro("B").macro("A")
    assert pipeline_hash(a.description) != pipeline_hash(b.description)


def test_compute_entry_affects_hash():
    a = ComputePipelineStateDescription(shader=(PurePath("X"), "Main"))
    b = ComputePipelineStateDescription(shader=(PurePath("X"), "Other"))
    c = ComputePipelineStateDescription(shader=(PurePath("X"), "Main"))
    assert pipeline_hash(a) == pipeline_hash(c)
    assert pipeline_hash(a) != pipeline_hash(b)


def test_pipeline_hash_rejects_other_types():
    with pytest.raises(TypeError):
        pipeline_hash("not a description")


def test_copy_is_independent():
    original = _ui_layout()
    clone = original.copy()
    clone.cull_mode(CullMode.FRONT)
    assert original.description.rasterizer_description.cull_mode is CullMode.NONE
    assert clone.description.rasterizer_description.cull_mode is CullMode.FRONT