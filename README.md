# vgrender

Building blocks for a real-time renderer, written in plain Python with no
dependencies. Nothing here talks to a GPU. The package covers the parts of a
renderer whose logic can be used and checked on its own.

## Modules

- `vgrender.mathutil`: `aligned_size`, `is_power_of_2`, `next_power_of_2`,
  `previous_power_of_2`, `remap_range`, `remap_range_clamped` and
  `gaussian_kernel`. `gaussian_kernel` returns one-sided weights, from the
  centre outwards, normalised over the mirrored kernel. The power-of-two
  helpers work on 32-bit values.
- `vgrender.hashing`: `hash_value` gives a stable 64-bit hash of integers,
  floats, strings, bytes, paths, enums, sequences and dataclass instances.
  `hash_combine(seed, *args)` mixes the hashes of its arguments into a seed
  and returns the new seed.
- `vgrender.ringbuffer`: `RingBuffer(size)` has a fixed capacity and drops
  its oldest element when you push onto it while it is full. It provides
  `front()`, `back()`, `push_back()`, `pop_front()` and `len()`. Indexing
  (`rb[i]`) addresses the storage slots directly, not logical positions.
- `vgrender.sync`: `CriticalSection` is a non-recursive lock with `lock()`,
  `try_lock()` and `unlock()`. It also works as a context manager.
- `vgrender.rng`: each thread has its own generator. `seed(*ints)` reseeds
  it. `rand_int(low, high)` returns an integer in `[low, high]` and
  `rand_float(low, high)` returns a float in `[low, high)`.
- `vgrender.formats`: the `Format` enum, numbered as in DXGI. The module also
  has `format_size_bits`, `is_srgb`, `to_srgb`, `to_linear`,
  `to_typed_depth` and `to_typed_non_depth`.
- `vgrender.resources`: the `ResourceBind`, `OutputBind` and
  `ResourceFrequency` enums, the `RenderResource` identifier, and
  `TransientBufferDescription` and `TransientTextureDescription`.
- `vgrender.components`: scene components.
  - `PrimitiveOffset`, which supports `+`.
  - `Subset` and `MeshComponent`.
  - `CameraComponent`.
  - `LightComponent` and `TimeOfDayComponent`, with their enums.
  - `Viewport`, whose `as_d3d12()` returns a six-value viewport tuple.
- `vgrender.pipeline`:
  - Enums and dataclasses for blend, rasterizer and depth-stencil state.
  - `GraphicsPipelineStateDescription` and `ComputePipelineStateDescription`.
  - `pipeline_hash`.
  - `RenderPipelineLayout`, a fluent builder. Setting any graphics state
    switches the layout to a graphics pipeline with default state;
    `compute_shader()` switches it to a compute pipeline. `macro()` raises
    `RuntimeError` if no shader has been set yet. Layouts are hashable and can
    be compared with `==`.
- `vgrender.primitives`: `PrimitiveAssembly` holds an index stream and named
  vertex streams of 2-, 3- or 4-component float vectors.
  - `attribute_names()` lists the attributes in the order given by
    `attribute_sort_key`: `POSITION`, `NORMAL`, `TEXCOORD_0`, `TANGENT`,
    `BITANGENT`, `COLOR_0`, then any others alphabetically.
  - `attribute_data()` packs a stream as little-endian 32-bit floats.
- `vgrender.renderpass`: `RenderPass` records the reads, writes, creations
  and outputs of a pass. `validate()` raises `PassValidationError` when any of
  these holds:
  - no bind function is set;
  - a resource is both read and written;
  - a created resource is read;
  - a created resource is both written and an output;
  - a created resource is neither written nor an output;
  - there are more than 8 render target outputs;
  - there is more than one depth stencil output.

  `execute()` calls the bound function.
- `vgrender.dred`: breadcrumb and page-fault data types, and
  `breadcrumb_op_name` and `allocation_name`. `format_dred_report` returns the
  report as a list of lines. `log_dred_info` writes the same report to a
  `logging.Logger`. Passing `None` for the breadcrumbs or for the page fault
  means that data could not be retrieved. It is then reported as a warning.
- `vgrender.shader`: shader and reflection data types. The functions are:
  - `compile_target`, which returns the `*_6_6` profile for a stage;
  - `resolve_source_path`, which adds `.hlsl` when the path has no extension;
  - `compile_arguments`, which builds the shader compiler's argument list for
    a `BuildConfiguration`;
  - `bind_type_for_input`.
- `vgrender.resource_planning`: the `BindFlag`, `AccessFlag`, `ResourceFlag`,
  `HeapType`, `ResourceState` and `ResourceDimension` enums, and
  `BufferDescription` and `TextureDescription`.
  - `plan_buffer` and `plan_texture` validate a description and work out width,
    flags, heap, initial state, clear value and view formats. Invalid
    descriptions raise `ResourceError`.
  - Constant buffers are aligned to 256 bytes and may be at most 65536 bytes.
- `vgrender.resource_registry`: `ResourceRegistry(frame_count)` manages
  buffers and textures through typed handles.
  - Create resources with `create_buffer` and `create_texture`. Look them up
    with `valid` and `get`, and manage them with `rename` and `destroy`. A
    buffer that asks for a UAV counter also gets a counter buffer. Destroying
    the buffer destroys its counter buffer too.
  - `write_buffer` copies bytes into a buffer. It checks CPU write access and
    the bounds. Writes to static buffers use up the current frame's upload
    heap.
  - `add_frame_resource` and `cleanup_frame_resources` handle
    frame-temporary resources.
  - `memory_info()` returns a snapshot of buffer and texture counts and bytes.

## What it does not do

This package contains no GPU device, swap chain, window, input handling or
user-interface rendering.

- Shaders are not compiled. `compile_arguments` only builds the command line.
- Pipeline layouts are not turned into real pipeline state objects.
- Render passes are not scheduled as a graph. `RenderPass` only records and
  validates one pass.
- `ResourceRegistry` keeps buffer contents in memory and does not upload
  textures.

## Install

```
pip install .
```

## Example

```python
from vgrender.mathutil import aligned_size, next_power_of_2
from vgrender.ringbuffer import RingBuffer
from vgrender.pipeline import RenderPipelineLayout, CullMode
from vgrender.resource_planning import BindFlag, BufferDescription, plan_buffer

assert aligned_size(300, 256) == 512
assert next_power_of_2(33) == 64

history = RingBuffer(4)
for frame_time in (16.6, 16.7, 33.3):
    history.push_back(frame_time)
print(len(history), history.back())  # 3 33.3

layout = (
    RenderPipelineLayout()
    .vertex_shader("UserInterface", "VSMain")
    .pixel_shader("UserInterface", "PSMain")
    .cull_mode(CullMode.NONE)
)
print(hash(layout))

plan = plan_buffer(BufferDescription(size=10, stride=16, bind_flags=BindFlag.CONSTANT_BUFFER))
assert plan.width == 256
```

## Tests

```
pip install .[test]
pytest
```