"""Render graph passes: declared resource usage, validation and execution."""

from __future__ import annotations

import enum
from typing import Any, Callable, Optional, Protocol, Union

from vgrender.resources import (
    OutputBind,
    RenderResource,
    ResourceBind,
    TransientBufferDescription,
    TransientTextureDescription,
)

SIMULTANEOUS_RENDER_TARGET_COUNT = 8


class LoadType(enum.Enum):
    """What happens to an output's existing contents when a pass begins."""

    PRESERVE = enum.auto()
    CLEAR = enum.auto()


class ExecutionQueue(enum.Enum):
    GRAPHICS = enum.auto()
    COMPUTE = enum.auto()


class PassValidationError(Exception):
    """A render pass was set up inconsistently."""


class _ResourceManager(Protocol):
    def add_resource(
        self,
        description: Union[TransientBufferDescription, TransientTextureDescription],
        name: str,
    ) -> RenderResource: ...


def _first_view_bind(view: Any) -> ResourceBind:
    requests = view.descriptor_requests
    if not requests:
        raise ValueError("a custom resource view must request at least one descriptor")
    return next(iter(requests.values())).bind


class RenderPass:
    """A single pass of the render graph and the resources it touches.

    ``descriptor_info`` maps each bound resource to its custom view request,
    or to None for the default view.
    """

    def __init__(
        self,
        resource_manager: _ResourceManager,
        name: str,
        queue: ExecutionQueue,
        enabled: bool,
    ) -> None:
        self._resource_manager = resource_manager
        self.stable_name = name
        self.queue = queue
        self.enabled = enabled

        self.reads: set[RenderResource] = set()
        self.writes: set[RenderResource] = set()
        self.bind_info: dict[RenderResource, ResourceBind] = {}
        self.output_bind_info: dict[RenderResource, tuple[OutputBind, LoadType]] = {}
        self.descriptor_info: dict[RenderResource, Optional[Any]] = {}

        self._binding: Optional[Callable[[Any, Any], None]] = None
        self._creates: set[RenderResource] = set()
        self._outputs: set[RenderResource] = set()

    def create(
        self,
        description: Union[TransientBufferDescription, TransientTextureDescription],
        name: str,
    ) -> RenderResource:
        """Create a transient resource owned by this pass; it counts as written."""
        resource = self._resource_manager.add_resource(description, name)
        self.writes.add(resource)
        self._creates.add(resource)
        return resource

    def _bind(self, resource: RenderResource, bind: Union[ResourceBind, Any]) -> None:
        if isinstance(bind, ResourceBind):
            self.bind_info[resource] = bind
            self.descriptor_info.setdefault(resource, None)
        else:
            self.bind_info[resource] = _first_view_bind(bind)
            self.descriptor_info[resource] = bind

    def read(self, resource: RenderResource, bind: Union[ResourceBind, Any]) -> None:
        """Declare a read, with a bind kind for the default view or a custom view request."""
        self.reads.add(resource)
        self._bind(resource, bind)

    def write(self, resource: RenderResource, bind: Union[ResourceBind, Any]) -> None:
        """Declare a write, with a bind kind for the default view or a custom view request."""
        self.writes.add(resource)
        self._bind(resource, bind)

    def output(self, resource: RenderResource, bind: OutputBind, load: LoadType) -> None:
        """Declare a render target or depth stencil output."""
        self.writes.add(resource)
        self.output_bind_info[resource] = (bind, load)
        self._outputs.add(resource)

    def bind(self, function: Callable[[Any, Any], None]) -> None:
        """Set the function that records the pass's commands."""
        self._binding = function

    def _fail(self, message: str) -> PassValidationError:
        return PassValidationError(f"Pass validation failed in '{self.stable_name}': {message}")

    def validate(self) -> None:
        """Check the pass setup for consistency, raising PassValidationError on a problem."""
        if self._binding is None:
            raise self._fail("Render passes must have a bind() function set.")
        if self.reads & self.writes:
            raise self._fail("Cannot read and write to a single resource.")
        if self.reads & self._creates:
            raise self._fail("Cannot read resources created in the same pass.")

        for resource in sorted(self._creates):
            if resource in self.bind_info:
                if resource in self._outputs:
                    raise self._fail(
                        "Resources created and written in this pass cannot be outputs."
                    )
            elif resource not in self._outputs:
                raise self._fail("Resources created and not written in this pass must be outputs.")

        binds = [bind for bind, _ in self.output_bind_info.values()]
        if binds.count(OutputBind.RTV) > SIMULTANEOUS_RENDER_TARGET_COUNT:
            raise self._fail("Attempted to output to more render targets than supported.")
        if binds.count(OutputBind.DSV) > 1:
            raise self._fail("Cannot have more than one depth stencil output.")

    def execute(self, command_list: Any, resources: Any) -> None:
        """Record the pass by calling its bound function."""
        if self._binding is None:
            raise PassValidationError(
                f"Pass '{self.stable_name}' has no bound function to execute."
            )
        self._binding(command_list, resources)