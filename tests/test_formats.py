import pytest

from vgrender.formats import (
    Format,
    format_size_bits,
    is_srgb,
    to_linear,
    to_srgb,
    to_typed_depth,
    to_typed_non_depth,
)

_LINEAR = [
    Format.R8G8B8A8_UNORM,
    Format.BC1_UNORM,
    Format.BC2_UNORM,
    Format.BC3_UNORM,
    Format.B8G8R8A8_UNORM,
    Format.B8G8R8X8_UNORM,
    Format.BC7_UNORM,
]


@pytest.mark.parametrize(
    "fmt,bits",
    [
        (Format.R32G32B32A32_FLOAT, 128),
        (Format.R32G32B32_UINT, 96),
        (Format.R16G16B16A16_FLOAT, 64),
        (Format.D32_FLOAT_S8X24_UINT, 64),
        (Format.R8G8B8A8_UNORM_SRGB, 32),
        (Format.D24_UNORM_S8_UINT, 32),
        (Format.B8G8R8X8_UNORM_SRGB, 32),
        (Format.D16_UNORM, 16),
        (Format.A8_UNORM, 8),
        (Format.R1_UNORM, 1),
    ],
)
def test_format_sizes(fmt, bits):
    assert format_size_bits(fmt) == bits


@pytest.mark.parametrize("fmt", [Format.UNKNOWN, Format.BC1_UNORM, Format.R9G9B9E5_SHAREDEXP, Format.BC7_UNORM])
def test_unsized_formats(fmt):
    assert format_size_bits(fmt) == 0


@pytest.mark.parametrize("fmt", _LINEAR)
def test_srgb_round_trip(fmt):
    srgb = to_srgb(fmt)
    assert is_srgb(srgb)
    assert not is_srgb(fmt)
    assert to_linear(srgb) == fmt


def test_srgb_and_linear_sizes_match():
    for fmt in _LINEAR:
        assert format_size_bits(fmt) == format_size_bits(to_srgb(fmt))


def test_no_counterpart_is_unknown():
    assert to_srgb(Format.R32_FLOAT) == Format.UNKNOWN
    assert to_linear(Format.R8G8B8A8_UNORM) == Format.UNKNOWN


def test_is_srgb_count():
    assert sum(is_srgb(fmt) for fmt in Format) == len(_LINEAR)


def test_typed_depth_conversion():
    assert to_typed_depth(Format.R32_TYPELESS) == Format.D32_FLOAT
    assert to_typed_depth(Format.R24G8_TYPELESS) == Format.D24_UNORM_S8_UINT
    assert to_typed_depth(Format.R8G8B8A8_UNORM) == Format.R8G8B8A8_UNORM


def test_typed_non_depth_conversion():
    assert to_typed_non_depth(Format.R32_TYPELESS) == Format.R32_FLOAT
    assert to_typed_non_depth(Format.R24G8_TYPELESS) == Format.R24_UNORM_X8_TYPELESS
    assert to_typed_non_depth(Format.D32_FLOAT) == Format.D32_FLOAT


def test_dxgi_numbering():
    assert is_srgb(Format(29)) is True
    assert to_linear(Format(29)) == Format(28)
    assert format_size_bits(Format(0)) == 0