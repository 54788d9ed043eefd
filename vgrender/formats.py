"""Texture and buffer element formats and conversions between their variants."""

from __future__ import annotations

import enum


class Format(enum.IntEnum):
    """Element formats, numbered as in the DXGI format enumeration."""

    UNKNOWN = 0
    R32G32B32A32_TYPELESS = 1
    R32G32B32A32_FLOAT = 2
    R32G32B32A32_UINT = 3
    R32G32B32A32_SINT = 4
    R32G32B32_TYPELESS = 5
    R32G32B32_FLOAT = 6
    R32G32B32_UINT = 7
    R32G32B32_SINT = 8
    R16G16B16A16_TYPELESS = 9
    R16G16B16A16_FLOAT = 10
    R16G16B16A16_UNORM = 11
    R16G16B16A16_UINT = 12
    R16G16B16A16_SNORM = 13
    R16G16B16A16_SINT = 14
    R32G32_TYPELESS = 15
    R32G32_FLOAT = 16
    R32G32_UINT = 17
    R32G32_SINT = 18
    R32G8X24_TYPELESS = 19
    D32_FLOAT_S8X24_UINT = 20
    R32_FLOAT_X8X24_TYPELESS = 21
    X32_TYPELESS_G8X24_UINT = 22
    R10G10B10A2_TYPELESS = 23
    R10G10B10A2_UNORM = 24
    R10G10B10A2_UINT = 25
    R11G11B10_FLOAT = 26
    R8G8B8A8_TYPELESS = 27
    R8G8B8A8_UNORM = 28
    R8G8B8A8_UNORM_SRGB = 29
    R8G8B8A8_UINT = 30
    R8G8B8A8_SNORM = 31
    R8G8B8A8_SINT = 32
    R16G16_TYPELESS = 33
    R16G16_FLOAT = 34
    R16G16_UNORM = 35
    R16G16_UINT = 36
    R16G16_SNORM = 37
    R16G16_SINT = 38
    R32_TYPELESS = 39
    D32_FLOAT = 40
    R32_FLOAT = 41
    R32_UINT = 42
    R32_SINT = 43
    R24G8_TYPELESS = 44
    D24_UNORM_S8_UINT = 45
    R24_UNORM_X8_TYPELESS = 46
    X24_TYPELESS_G8_UINT = 47
    R8G8_TYPELESS = 48
    R8G8_UNORM = 49
    R8G8_UINT = 50
    R8G8_SNORM = 51
    R8G8_SINT = 52
    R16_TYPELESS = 53
    R16_FLOAT = 54
    D16_UNORM = 55
    R16_UNORM = 56
    R16_UINT = 57
    R16_SNORM = 58
    R16_SINT = 59
    R8_TYPELESS = 60
    R8_UNORM = 61
    R8_UINT = 62
    R8_SNORM = 63
    R8_SINT = 64
    A8_UNORM = 65
    R1_UNORM = 66
    R9G9B9E5_SHAREDEXP = 67
    R8G8_B8G8_UNORM = 68
    G8R8_G8B8_UNORM = 69
    BC1_TYPELESS = 70
    BC1_UNORM = 71
    BC1_UNORM_SRGB = 72
    BC2_TYPELESS = 73
    BC2_UNORM = 74
    BC2_UNORM_SRGB = 75
    BC3_TYPELESS = 76
    BC3_UNORM = 77
    BC3_UNORM_SRGB = 78
    BC4_TYPELESS = 79
    BC4_UNORM = 80
    BC4_SNORM = 81
    BC5_TYPELESS = 82
    BC5_UNORM = 83
    BC5_SNORM = 84
    B5G6R5_UNORM = 85
    B5G5R5A1_UNORM = 86
    B8G8R8A8_UNORM = 87
    B8G8R8X8_UNORM = 88
    R10G10B10_XR_BIAS_A2_UNORM = 89
    B8G8R8A8_TYPELESS = 90
    B8G8R8A8_UNORM_SRGB = 91
    B8G8R8X8_TYPELESS = 92
    B8G8R8X8_UNORM_SRGB = 93
    BC6H_TYPELESS = 94
    BC6H_UF16 = 95
    BC6H_SF16 = 96
    BC7_TYPELESS = 97
    BC7_UNORM = 98
    BC7_UNORM_SRGB = 99


F = Format

_SIZE_GROUPS: tuple[tuple[int, tuple[Format, ...]], ...] = (
    (128, (F.R32G32B32A32_TYPELESS, F.R32G32B32A32_FLOAT, F.R32G32B32A32_UINT, F.R32G32B32A32_SINT)),
    (96, (F.R32G32B32_TYPELESS, F.R32G32B32_FLOAT, F.R32G32B32_UINT, F.R32G32B32_SINT)),
    (64, (
        F.R16G16B16A16_TYPELESS, F.R16G16B16A16_FLOAT, F.R16G16B16A16_UNORM,
        F.R16G16B16A16_UINT, F.R16G16B16A16_SNORM, F.R16G16B16A16_SINT,
        F.R32G32_TYPELESS, F.R32G32_FLOAT, F.R32G32_UINT, F.R32G32_SINT,
        F.R32G8X24_TYPELESS, F.D32_FLOAT_S8X24_UINT, F.R32_FLOAT_X8X24_TYPELESS,
        F.X32_TYPELESS_G8X24_UINT,
    )),
    (32, (
        F.R10G10B10A2_TYPELESS, F.R10G10B10A2_UNORM, F.R10G10B10A2_UINT, F.R11G11B10_FLOAT,
        F.R8G8B8A8_TYPELESS, F.R8G8B8A8_UNORM, F.R8G8B8A8_UNORM_SRGB, F.R8G8B8A8_UINT,
        F.R8G8B8A8_SNORM, F.R8G8B8A8_SINT,
        F.R16G16_TYPELESS, F.R16G16_FLOAT, F.R16G16_UNORM, F.R16G16_UINT,
        F.R16G16_SNORM, F.R16G16_SINT,
        F.R32_TYPELESS, F.D32_FLOAT, F.R32_FLOAT, F.R32_UINT, F.R32_SINT,
        F.R24G8_TYPELESS, F.D24_UNORM_S8_UINT, F.R24_UNORM_X8_TYPELESS, F.X24_TYPELESS_G8_UINT,
        F.R8G8_B8G8_UNORM, F.G8R8_G8B8_UNORM,
        F.B8G8R8A8_UNORM, F.B8G8R8X8_UNORM, F.B8G8R8A8_TYPELESS, F.B8G8R8A8_UNORM_SRGB,
        F.B8G8R8X8_TYPELESS, F.B8G8R8X8_UNORM_SRGB,
    )),
    (16, (
        F.R8G8_TYPELESS, F.R8G8_UNORM, F.R8G8_UINT, F.R8G8_SNORM, F.R8G8_SINT,
        F.R16_TYPELESS, F.R16_FLOAT, F.D16_UNORM, F.R16_UNORM, F.R16_UINT,
        F.R16_SNORM, F.R16_SINT,
    )),
    (8, (F.R8_TYPELESS, F.R8_UNORM, F.R8_UINT, F.R8_SNORM, F.R8_SINT, F.A8_UNORM)),
    (1, (F.R1_UNORM,)),
)

_SIZE_BITS: dict[Format, int] = {fmt: bits for bits, group in _SIZE_GROUPS for fmt in group}

_LINEAR_TO_SRGB: dict[Format, Format] = {
    F.R8G8B8A8_UNORM: F.R8G8B8A8_UNORM_SRGB,
    F.BC1_UNORM: F.BC1_UNORM_SRGB,
    F.BC2_UNORM: F.BC2_UNORM_SRGB,
    F.BC3_UNORM: F.BC3_UNORM_SRGB,
    F.B8G8R8A8_UNORM: F.B8G8R8A8_UNORM_SRGB,
    F.B8G8R8X8_UNORM: F.B8G8R8X8_UNORM_SRGB,
    F.BC7_UNORM: F.BC7_UNORM_SRGB,
}
_SRGB_TO_LINEAR: dict[Format, Format] = {srgb: linear for linear, srgb in _LINEAR_TO_SRGB.items()}

_TYPED_DEPTH = {F.R32_TYPELESS: F.D32_FLOAT, F.R24G8_TYPELESS: F.D24_UNORM_S8_UINT}
_TYPED_NON_DEPTH = {F.R32_TYPELESS: F.R32_FLOAT, F.R24G8_TYPELESS: F.R24_UNORM_X8_TYPELESS}


def format_size_bits(fmt: Format) -> int:
    """Return the size of one element in bits, or 0 for formats without a fixed size."""
    return _SIZE_BITS.get(fmt, 0)


def is_srgb(fmt: Format) -> bool:
    """Return True for sRGB-encoded formats."""
    return fmt in _SRGB_TO_LINEAR


def to_srgb(fmt: Format) -> Format:
    """Return the sRGB counterpart of a linear format, or UNKNOWN if there is none."""
    return _LINEAR_TO_SRGB.get(fmt, F.UNKNOWN)


def to_linear(fmt: Format) -> Format:
    """Return the linear counterpart of an sRGB format, or UNKNOWN if there is none."""
    return _SRGB_TO_LINEAR.get(fmt, F.UNKNOWN)


def to_typed_depth(fmt: Format) -> Format:
    """Map typeless depth formats to their depth view format; others pass through."""
    return _TYPED_DEPTH.get(fmt, fmt)


def to_typed_non_depth(fmt: Format) -> Format:
    """Map typeless depth formats to their shader-readable format; others pass through."""
    return _TYPED_NON_DEPTH.get(fmt, fmt)