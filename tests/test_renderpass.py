from types import SimpleNamespace

import pytest

from vgrender.renderpass import (
    ExecutionQueue,
    LoadType,
    PassValidationError,
    RenderPass,
)
from vgrender.resources import (
    OutputBind,
    RenderResource,
    ResourceBind,
    TransientBufferDescription,
    TransientTextureDescription,
)


class FakeManager:
    def __init__(self):
        self.added = []

    def add_resource(self, description, name):
        self.added.append((description, name))
        return RenderResource(len(self.added))


def _make(manager=None):
    return RenderPass(manager or FakeManager(), "Test", ExecutionQueue.GRAPHICS, True)


def _noop(list_, resources):
    pass


def test_constructor_fields():
    stage = RenderPass(FakeManager(), "Bloom", ExecutionQueue.COMPUTE, False)
    assert stage.stable_name == "Bloom"
    assert stage.queue is ExecutionQueue.COMPUTE
    assert stage.enabled is False


def test_create_registers_write():
    manager = FakeManager()
    stage = _make(manager)
    desc = TransientBufferDescription(size=4, stride=16)
    resource = stage.create(desc, "Buffer")
    assert manager.added == [(desc, "Buffer")]
    assert resource in stage.writes
    assert resource not in stage.reads


def test_read_with_default_view():
    stage = _make()
    resource = RenderResource(7)
    stage.read(resource, ResourceBind.SRV)
    assert stage.reads == {resource}
    assert stage.bind_info[resource] is ResourceBind.SRV
    assert stage.descriptor_info[resource] is None


def test_custom_view_uses_first_request_bind():
    stage = _make()
    resource = RenderResource(3)
    view = SimpleNamespace(
        descriptor_requests={
            "mip0": SimpleNamespace(bind=ResourceBind.UAV),
            "mip1": SimpleNamespace(bind=ResourceBind.SRV),
        }
    )
    stage.write(resource, view)
    assert stage.bind_info[resource] is ResourceBind.UAV
    assert stage.descriptor_info[resource] is view
    stage.write(resource, ResourceBind.UAV)
    assert stage.descriptor_info[resource] is view


def test_custom_view_without_requests_rejected():
    with pytest.raises(ValueError):
        _make().read(RenderResource(1), SimpleNamespace(descriptor_requests={}))


def test_output_records_bind_and_load():
    stage = _make()
    resource = stage.create(TransientTextureDescription(), "Color")
    stage.output(resource, OutputBind.RTV, LoadType.CLEAR)
    stage.bind(_noop)
    stage.validate()
    assert stage.output_bind_info[resource] == (OutputBind.RTV, LoadType.CLEAR)
    assert resource in stage.writes


def test_validate_requires_binding():
    with pytest.raises(PassValidationError, match="Test"):
        _make().validate()


def test_validate_rejects_read_and_write():
    stage = _make()
    resource = RenderResource(1)
    stage.read(resource, ResourceBind.SRV)
    stage.write(resource, ResourceBind.UAV)
    stage.bind(_noop)
    with pytest.raises(PassValidationError):
        stage.validate()


def test_validate_rejects_created_without_write_or_output():
    stage = _make()
    stage.create(TransientTextureDescription(), "Orphan")
    stage.bind(_noop)
    with pytest.raises(PassValidationError, match="must be outputs"):
        stage.validate()


def test_validate_rejects_created_written_and_output():
    stage = _make()
    resource = stage.create(TransientTextureDescription(), "Both")
    stage.write(resource, ResourceBind.UAV)
    stage.output(resource, OutputBind.RTV, LoadType.PRESERVE)
    stage.bind(_noop)
    with pytest.raises(PassValidationError, match="cannot be outputs"):
        stage.validate()


def test_validate_rejects_too_many_render_targets():
    stage = _make()
    for i in range(9):
        stage.output(RenderResource(i), OutputBind.RTV, LoadType.CLEAR)
    stage.bind(_noop)
    with pytest.raises(PassValidationError, match="render targets"):
        stage.validate()


def test_validate_rejects_two_depth_stencils():
    stage = _make()
    stage.output(RenderResource(1), OutputBind.DSV, LoadType.CLEAR)
    stage.output(RenderResource(2), OutputBind.DSV, LoadType.CLEAR)
    stage.bind(_noop)
    with pytest.raises(PassValidationError, match="depth stencil"):
        stage.validate()


def test_execute_calls_binding():
    calls = []
    stage = _make()
    stage.bind(lambda list_, resources: calls.append((list_, resources)))
    stage.execute("list", "resources")
    assert calls == [("list", "resources")]


def test_execute_without_binding_raises():
    with pytest.raises(PassValidationError):
        _make().execute("list", "resources")