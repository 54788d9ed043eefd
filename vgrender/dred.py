"""Readable reports of device-removed extended data: breadcrumbs and page faults."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Iterator, Optional, Sequence, Union

_log = logging.getLogger(__name__)


class BreadcrumbOp(enum.IntEnum):
    """GPU operations recorded as automatic breadcrumbs."""

    SETMARKER = 0
    BEGINEVENT = 1
    ENDEVENT = 2
    DRAWINSTANCED = 3
    DRAWINDEXEDINSTANCED = 4
    EXECUTEINDIRECT = 5
    DISPATCH = 6
    COPYBUFFERREGION = 7
    COPYTEXTUREREGION = 8
    COPYRESOURCE = 9
    COPYTILES = 10
    RESOLVESUBRESOURCE = 11
    CLEARRENDERTARGETVIEW = 12
    CLEARUNORDEREDACCESSVIEW = 13
    CLEARDEPTHSTENCILVIEW = 14
    RESOURCEBARRIER = 15
    EXECUTEBUNDLE = 16
    PRESENT = 17
    RESOLVEQUERYDATA = 18
    BEGINSUBMISSION = 19
    ENDSUBMISSION = 20
    DECODEFRAME = 21
    PROCESSFRAMES = 22
    ATOMICCOPYBUFFERUINT = 23
    ATOMICCOPYBUFFERUINT64 = 24
    RESOLVESUBRESOURCEREGION = 25
    WRITEBUFFERIMMEDIATE = 26
    DECODEFRAME1 = 27
    SETPROTECTEDRESOURCESESSION = 28
    DECODEFRAME2 = 29
    PROCESSFRAMES1 = 30
    BUILDRAYTRACINGACCELERATIONSTRUCTURE = 31
    EMITRAYTRACINGACCELERATIONSTRUCTUREPOSTBUILDINFO = 32
    COPYRAYTRACINGACCELERATIONSTRUCTURE = 33
    DISPATCHRAYS = 34
    INITIALIZEMETACOMMAND = 35
    EXECUTEMETACOMMAND = 36
    ESTIMATEMOTION = 37
    RESOLVEMOTIONVECTORHEAP = 38
    SETPIPELINESTATE1 = 39
    INITIALIZEEXTENSIONCOMMAND = 40
    EXECUTEEXTENSIONCOMMAND = 41
    DISPATCHMESH = 42


class AllocationType(enum.IntEnum):
    """Kinds of runtime objects reported alongside a page fault."""

    COMMAND_QUEUE = 19
    COMMAND_ALLOCATOR = 20
    PIPELINE_STATE = 21
    COMMAND_LIST = 22
    FENCE = 23
    DESCRIPTOR_HEAP = 24
    HEAP = 25
    QUERY_HEAP = 27
    COMMAND_SIGNATURE = 28
    PIPELINE_LIBRARY = 29
    VIDEO_DECODER = 30
    VIDEO_PROCESSOR = 32
    RESOURCE = 34
    PASS = 35
    CRYPTOSESSION = 36
    CRYPTOSESSIONPOLICY = 37
    PROTECTEDRESOURCESESSION = 38
    VIDEO_DECODER_HEAP = 39
    COMMAND_POOL = 40
    COMMAND_RECORDER = 41
    STATE_OBJECT = 42
    METACOMMAND = 43
    SCHEDULINGGROUP = 44
    VIDEO_MOTION_ESTIMATOR = 45
    VIDEO_MOTION_VECTOR_HEAP = 46
    INVALID = 0xFFFFFFFF


_OP_NAMES = {
    BreadcrumbOp.SETMARKER: "Set marker",
    BreadcrumbOp.BEGINEVENT: "Begin event",
    BreadcrumbOp.ENDEVENT: "End event",
    BreadcrumbOp.DRAWINSTANCED: "Draw instanced",
    BreadcrumbOp.DRAWINDEXEDINSTANCED: "Draw indexed instanced",
    BreadcrumbOp.EXECUTEINDIRECT: "Execute indirect",
    BreadcrumbOp.DISPATCH: "Dispatch",
    BreadcrumbOp.COPYBUFFERREGION: "Copy buffer region",
    BreadcrumbOp.COPYTEXTUREREGION: "Copy texture region",
    BreadcrumbOp.COPYRESOURCE: "Copy resource",
    BreadcrumbOp.COPYTILES: "Copy tiles",
    BreadcrumbOp.RESOLVESUBRESOURCE: "Resolve subresource",
    BreadcrumbOp.CLEARRENDERTARGETVIEW: "Clear render target view",
    BreadcrumbOp.CLEARUNORDEREDACCESSVIEW: "Clear unordered access view",
    BreadcrumbOp.CLEARDEPTHSTENCILVIEW: "Clear depth stencil view",
    BreadcrumbOp.RESOURCEBARRIER: "Resource barrier",
    BreadcrumbOp.EXECUTEBUNDLE: "Execute bundle",
    BreadcrumbOp.PRESENT: "Present",
    BreadcrumbOp.RESOLVEQUERYDATA: "Resolve query data",
    BreadcrumbOp.BEGINSUBMISSION: "Begin submission",
    BreadcrumbOp.ENDSUBMISSION: "End submission",
    BreadcrumbOp.DECODEFRAME: "Decode frame",
    BreadcrumbOp.PROCESSFRAMES: "Process frames",
    BreadcrumbOp.ATOMICCOPYBUFFERUINT: "Atomic copy buffer uint",
    BreadcrumbOp.ATOMICCOPYBUFFERUINT64: "Atomic copy buffer uint64",
    BreadcrumbOp.RESOLVESUBRESOURCEREGION: "Resolve subresource region",
    BreadcrumbOp.WRITEBUFFERIMMEDIATE: "Write buffer immediate",
    BreadcrumbOp.DECODEFRAME1: "Decode frame 1",
    BreadcrumbOp.SETPROTECTEDRESOURCESESSION: "Set protected resource session",
    BreadcrumbOp.DECODEFRAME2: "Decode frame 2",
    BreadcrumbOp.PROCESSFRAMES1: "Process frames 1",
    BreadcrumbOp.BUILDRAYTRACINGACCELERATIONSTRUCTURE: "Build raytracing acceleration structure",
    BreadcrumbOp.EMITRAYTRACINGACCELERATIONSTRUCTUREPOSTBUILDINFO: (
        "Emit raytracing acceleration structure post build info"
    ),
    BreadcrumbOp.COPYRAYTRACINGACCELERATIONSTRUCTURE: "Copy raytracing acceleration structure",
    BreadcrumbOp.DISPATCHRAYS: "Dispatch rays",
    BreadcrumbOp.INITIALIZEMETACOMMAND: "Initialize meta command",
    BreadcrumbOp.EXECUTEMETACOMMAND: "Execute meta command",
    BreadcrumbOp.ESTIMATEMOTION: "Estimate motion",
    BreadcrumbOp.RESOLVEMOTIONVECTORHEAP: "Resolve motion vector heap",
    BreadcrumbOp.SETPIPELINESTATE1: "Set pipeline state 1",
    BreadcrumbOp.INITIALIZEEXTENSIONCOMMAND: "Initialize extension command",
    BreadcrumbOp.EXECUTEEXTENSIONCOMMAND: "Execute extension command",
    BreadcrumbOp.DISPATCHMESH: "Dispatch mesh",
}

_ALLOCATION_NAMES = {
    AllocationType.COMMAND_QUEUE: "Command queue",
    AllocationType.COMMAND_ALLOCATOR: "Command allocator",
    AllocationType.PIPELINE_STATE: "Pipeline state",
    AllocationType.COMMAND_LIST: "Command list",
    AllocationType.FENCE: "Fence",
    AllocationType.DESCRIPTOR_HEAP: "Descriptor heap",
    AllocationType.HEAP: "Heap",
    AllocationType.QUERY_HEAP: "Query heap",
    AllocationType.COMMAND_SIGNATURE: "Command signature",
    AllocationType.PIPELINE_LIBRARY: "Pipeline library",
    AllocationType.VIDEO_DECODER: "Video decoder",
    AllocationType.VIDEO_PROCESSOR: "Video processor",
    AllocationType.RESOURCE: "Resource",
    AllocationType.PASS: "Pass",
    AllocationType.CRYPTOSESSION: "Crypto session",
    AllocationType.CRYPTOSESSIONPOLICY: "Crypto session policy",
    AllocationType.PROTECTEDRESOURCESESSION: "Protected resource session",
    AllocationType.VIDEO_DECODER_HEAP: "Video decoder heap",
    AllocationType.COMMAND_POOL: "Command pool",
    AllocationType.COMMAND_RECORDER: "Command recorder",
    AllocationType.STATE_OBJECT: "State object",
    AllocationType.METACOMMAND: "Meta command",
    AllocationType.SCHEDULINGGROUP: "Scheduling group",
    AllocationType.VIDEO_MOTION_ESTIMATOR: "Video motion estimator",
    AllocationType.VIDEO_MOTION_VECTOR_HEAP: "Video motion vector heap",
    AllocationType.INVALID: "Invalid",
}


def breadcrumb_op_name(op: Union[BreadcrumbOp, int]) -> str:
    """Human-readable name of a breadcrumb operation, or "Unknown"."""
    return _OP_NAMES.get(op, "Unknown")


def allocation_name(kind: Union[AllocationType, int]) -> str:
    """Human-readable name of an allocation type, or "Unknown"."""
    return _ALLOCATION_NAMES.get(kind, "Unknown")


@dataclass
class BreadcrumbContext:
    """Text attached to the breadcrumb at ``index``."""

    index: int
    text: str


@dataclass
class BreadcrumbNode:
    """Breadcrumb history of one command list execution.

    ``completed`` is the number of breadcrumbs the GPU finished.
    """

    command_list_name: Optional[str]
    command_queue_name: Optional[str]
    history: list[Union[BreadcrumbOp, int]] = field(default_factory=list)
    completed: int = 0
    contexts: list[BreadcrumbContext] = field(default_factory=list)

    def context_map(self) -> dict[int, str]:
        """Context texts by breadcrumb index; later entries win."""
        return {context.index: context.text for context in self.contexts}


@dataclass
class AllocationNode:
    """A runtime object that may relate to a page fault."""

    name: Optional[str]
    kind: Union[AllocationType, int]
    address: int = 0


@dataclass
class PageFaultOutput:
    """Page fault address and the objects near it."""

    virtual_address: int
    existing: list[AllocationNode] = field(default_factory=list)
    recently_freed: list[AllocationNode] = field(default_factory=list)


def _or_unknown(name: Optional[str]) -> str:
    return name if name else "Unknown"


def _index_pad(index: int) -> str:
    if index < 10:
        return "  "
    if index < 100:
        return " "
    return ""


def _allocation_line(node: AllocationNode, index: int) -> str:
    name = node.name if node.name else "Unnamed"
    return (
        f'{_index_pad(index)}\t[{index}]: "{name}": ({allocation_name(node.kind)}) '
        f"ptr: 0x{node.address:016X}\n"
    )


def _report(
    breadcrumbs: Optional[Sequence[BreadcrumbNode]],
    page_fault: Optional[PageFaultOutput],
) -> Iterator[tuple[int, str]]:
    info = logging.INFO
    bad_nodes: list[tuple[int, BreadcrumbNode]] = []

    if breadcrumbs is None:
        yield logging.WARNING, "Failed to get DRED breadcrumbs: no breadcrumb output available"
    else:
        yield info, "DRED breadcrumb node(s):" if breadcrumbs else "No DRED breadcrumbs available."
        for node_id, node in enumerate(breadcrumbs):
            count = len(node.history)
            if 0 < node.completed < count:
                bad_nodes.append((node_id, node))
            yield info, (
                f'\tNode {node_id} from list "{_or_unknown(node.command_list_name)}", '
                f'queue "{_or_unknown(node.command_queue_name)}" '
                f"executed {node.completed}/{count} breadcrumbs"
            )
            contexts = node.context_map()
            stack = 0
            for i, command in enumerate(node.history):
                if command == BreadcrumbOp.ENDEVENT:
                    stack -= 1
                line = f"\t\t[{i}]: {_index_pad(i)}{'  ' * max(stack, 0)}{breadcrumb_op_name(command)}"
                if i in contexts:
                    line += f': "{contexts[i]}"'
                if command == BreadcrumbOp.BEGINEVENT:
                    stack += 1
                yield info, line

    yield info, ""

    if page_fault is None:
        yield logging.WARNING, "Failed to get DRED page fault: no page fault output available"
    else:
        yield info, f"GPU page fault virtual address: {page_fault.virtual_address:#x}"
        yield info, "Relevant existing runtime objects:"
        if not page_fault.existing:
            yield info, "No DRED page fault existing objects available."
        for index, node in enumerate(page_fault.existing):
            yield info, _allocation_line(node, index)
        yield info, ""
        yield info, "Relevant recently freed runtime objects:"
        if not page_fault.recently_freed:
            yield info, "No DRED page fault recently freed objects available."
        for index, node in enumerate(page_fault.recently_freed):
            yield info, _allocation_line(node, index)

    yield info, ""
    yield info, "======== DRED SUMMARY ========"
    if bad_nodes:
        yield info, "Potential culprits:"
        for culprit, (node_id, node) in enumerate(bad_nodes):
            yield info, (
                f'\t[{culprit}] Node {node_id} from list "{_or_unknown(node.command_list_name)}", '
                f'queue "{_or_unknown(node.command_queue_name)}" did not finish the following '
                f"execution (completed {node.completed}/{len(node.history)}):"
            )
            bad_command = node.completed
            line = breadcrumb_op_name(node.history[bad_command])
            contexts = node.context_map()
            if bad_command in contexts:
                line += f': "{contexts[bad_command]}"'
            yield info, f"\t\t  {line}"
    else:
        yield info, (
            "Found no potential culprits. All nodes either ran to completion or did not run at all."
        )


def format_dred_report(
    breadcrumbs: Optional[Sequence[BreadcrumbNode]],
    page_fault: Optional[PageFaultOutput],
) -> list[str]:
    """Return the report lines. None for either input means it could not be retrieved."""
    return [line for _, line in _report(breadcrumbs, page_fault)]


def log_dred_info(
    breadcrumbs: Optional[Sequence[BreadcrumbNode]],
    page_fault: Optional[PageFaultOutput],
    logger: Optional[logging.Logger] = None,
) -> None:
    """Write the report to ``logger``; retrieval failures are logged as warnings."""
    target = logger if logger is not None else _log
    for level, line in _report(breadcrumbs, page_fault):
        target.log(level, "%s", line)