"""Shader types, reflection data and the shader compiler's command line."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Any, Iterable, Union


class ShaderType(enum.Enum):
    VERTEX = enum.auto()
    PIXEL = enum.auto()
    COMPUTE = enum.auto()


class ResourceBindType(enum.Enum):
    UNKNOWN = enum.auto()
    CONSTANT_BUFFER = enum.auto()
    SHADER_RESOURCE = enum.auto()
    UNORDERED_ACCESS = enum.auto()


class ShaderInputType(enum.IntEnum):
    """Resource kinds reported by shader reflection."""

    CBUFFER = 0
    TBUFFER = 1
    TEXTURE = 2
    SAMPLER = 3
    UAV_RWTYPED = 4
    STRUCTURED = 5
    UAV_RWSTRUCTURED = 6
    BYTEADDRESS = 7
    UAV_RWBYTEADDRESS = 8
    UAV_APPEND_STRUCTURED = 9
    UAV_CONSUME_STRUCTURED = 10
    UAV_RWSTRUCTURED_WITH_COUNTER = 11
    RTACCELERATIONSTRUCTURE = 12
    UAV_FEEDBACKTEXTURE = 13


class BuildConfiguration(enum.Enum):
    DEBUG = enum.auto()
    DEVELOPMENT = enum.auto()
    RELEASE = enum.auto()


@dataclass
class InputElement:
    semantic_name: str
    semantic_index: int


@dataclass
class ReflectedResource:
    name: str
    bind_point: int
    bind_count: int
    bind_space: int
    type: ResourceBindType


@dataclass
class ShaderReflection:
    input_elements: list[InputElement] = field(default_factory=list)
    resource_bindings: list[ReflectedResource] = field(default_factory=list)
    instruction_count: int = 0


@dataclass
class Shader:
    bytecode: bytes = b""
    reflection: ShaderReflection = field(default_factory=ShaderReflection)


_TARGETS = {
    ShaderType.VERTEX: "vs_6_6",
    ShaderType.PIXEL: "ps_6_6",
    ShaderType.COMPUTE: "cs_6_6",
}

_BIND_TYPES = {
    ShaderInputType.CBUFFER: ResourceBindType.CONSTANT_BUFFER,
    ShaderInputType.TBUFFER: ResourceBindType.SHADER_RESOURCE,
    ShaderInputType.TEXTURE: ResourceBindType.SHADER_RESOURCE,
    ShaderInputType.SAMPLER: ResourceBindType.UNKNOWN,
    ShaderInputType.UAV_RWTYPED: ResourceBindType.UNORDERED_ACCESS,
    ShaderInputType.STRUCTURED: ResourceBindType.SHADER_RESOURCE,
    ShaderInputType.UAV_RWSTRUCTURED: ResourceBindType.UNORDERED_ACCESS,
    ShaderInputType.UAV_RWSTRUCTURED_WITH_COUNTER: ResourceBindType.UNORDERED_ACCESS,
    ShaderInputType.BYTEADDRESS: ResourceBindType.SHADER_RESOURCE,
    ShaderInputType.UAV_RWBYTEADDRESS: ResourceBindType.UNORDERED_ACCESS,
}


def compile_target(shader_type: ShaderType) -> str:
    """Shader model profile used to compile the given shader stage."""
    return _TARGETS[shader_type]


def resolve_source_path(path: Union[str, os.PathLike]) -> PurePath:
    """Return the source file path, adding the ``.hlsl`` extension when none is given."""
    resolved = PurePath(path)
    if not resolved.suffix:
        resolved = resolved.with_suffix(".hlsl")
    return resolved


def _macro_text(macro: Any) -> str:
    return str(getattr(macro, "macro", macro))


def compile_arguments(
    path: Union[str, os.PathLike],
    shader_type: ShaderType,
    entry: str,
    macros: Iterable[Any] = (),
    include_path: Union[str, os.PathLike] = ".",
    build: BuildConfiguration = BuildConfiguration.DEVELOPMENT,
) -> list[str]:
    """Command-line arguments for compiling a shader.

    Macros may be strings or objects with a ``macro`` attribute.
    """
    arguments = [
        resolve_source_path(path).name,
        "-E",
        entry,
        "-T",
        compile_target(shader_type),
        "-I",
        PurePath(include_path).as_posix(),
        "-HV",
        "2021",
    ]
    if build in (BuildConfiguration.DEBUG, BuildConfiguration.DEVELOPMENT):
        arguments += ["-Zi", "-Qembed_debug"]
    arguments.append("-O3" if build is BuildConfiguration.RELEASE else "-Od")
    for macro in macros:
        arguments += ["-D", _macro_text(macro)]
    return arguments


def bind_type_for_input(input_type: Union[ShaderInputType, int]) -> ResourceBindType:
    """Map a reflected resource kind to its bind type; samplers map to UNKNOWN.

    Raises ValueError for resource kinds that are not supported.
    """
    kind = ShaderInputType(input_type)
    try:
        return _BIND_TYPES[kind]
    except KeyError:
        raise ValueError(f"Unknown resource bind type '{int(kind)}'.") from None