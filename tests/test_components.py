import math

import pytest

from vgrender.components import (
    CameraComponent,
    LightComponent,
    LightType,
    MeshComponent,
    PrimitiveOffset,
    Subset,
    TimeOfDayAnimation,
    TimeOfDayComponent,
    Viewport,
)


def test_offset_addition():
    total = PrimitiveOffset(1, 2, 3) + PrimitiveOffset(10, 20, 30)
    assert total == PrimitiveOffset(11, 22, 33)


def test_offset_zero_is_identity():
    value = PrimitiveOffset(4, 5, 6)
    assert value + PrimitiveOffset() == value
    assert PrimitiveOffset() + value == value


def test_offset_in_place_addition():
    running = PrimitiveOffset()
    step = PrimitiveOffset(2, 3, 4)
    for _ in range(3):
        running += step
    assert running == step + step + step


def test_offset_rejects_other_types():
    with pytest.raises(TypeError):
        PrimitiveOffset() + 1


def test_mesh_defaults_are_independent():
    a = MeshComponent()
    b = MeshComponent()
    a.subsets.append(Subset(PrimitiveOffset(), 3, 0, 1.0))
    assert b.subsets == []
    assert a.global_offset == PrimitiveOffset()


def test_camera_defaults():
    camera = CameraComponent()
    assert camera.near_plane == pytest.approx(0.1)
    assert camera.far_plane == pytest.approx(10000.0)
    assert camera.field_of_view == pytest.approx(math.pi / 2)


def test_light_and_time_of_day_fields():
    light = LightComponent(LightType.DIRECTIONAL, (1.0, 0.5, 0.25))
    assert light.type is LightType.DIRECTIONAL
    assert light.color == (1.0, 0.5, 0.25)
    tod = TimeOfDayComponent(0.3, 2.0, TimeOfDayAnimation.CYCLE)
    assert tod.animation is TimeOfDayAnimation.CYCLE
    assert len(TimeOfDayAnimation) == 3


def test_viewport_conversion():
    viewport = Viewport(10.0, 20.0, 640.0, 480.0)
    assert viewport.as_d3d12() == (10.0, 20.0, 640.0, 480.0, 0.0, 1.0)