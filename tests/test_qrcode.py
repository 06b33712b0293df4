import pytest

from qrgen.ecc import Ecc
from qrgen.matrix import Mask
from qrgen.qrcode import (
    QrCode,
    encode_binary,
    encode_segments,
    encode_segments_advanced,
    encode_text,
)
from qrgen.segment import DataTooLongError, make_alphanumeric, make_bytes, make_numeric


def _format_copies(qr: QrCode) -> tuple[list[bool], list[bool]]:
    size = qr.size
    first = [qr.get_module(8, i) for i in range(6)]
    first += [qr.get_module(8, 7), qr.get_module(8, 8), qr.get_module(7, 8)]
    first += [qr.get_module(14 - i, 8) for i in range(9, 15)]
    second = [qr.get_module(size - 1 - i, 8) for i in range(8)]
    second += [qr.get_module(8, size - 15 + i) for i in range(8, 15)]
    return first, second


def test_size_matches_version():
    qr = encode_text("HELLO WORLD", Ecc.LOW)
    assert qr.size == qr.version * 4 + 17
    assert len(qr.modules) == qr.size
    assert all(len(row) == qr.size for row in qr.modules)


def test_smallest_version_is_one():
    qr = encode_text("1", Ecc.LOW)
    assert qr.version == 1
    assert qr.size == 21


def test_out_of_bounds_modules_are_light():
    qr = encode_text("ABC")
    assert qr.get_module(-1, 0) is False
    assert qr.get_module(0, qr.size) is False
    assert qr.get_module(qr.size, qr.size) is False


def test_finder_pattern_corners_and_dark_module():
    qr = encode_text("finder check")
    size = qr.size
    for x, y in ((0, 0), (6, 6), (size - 1, 0), (0, size - 1), (3, 3)):
        assert qr.get_module(x, y)
    assert not qr.get_module(1, 1)
    assert not qr.get_module(7, 7)
    assert qr.get_module(8, size - 8)


def test_timing_patterns_alternate():
    qr = encode_text("timing pattern")
    for i in range(8, qr.size - 8):
        assert qr.get_module(i, 6) == (i % 2 == 0)
        assert qr.get_module(6, i) == (i % 2 == 0)


@pytest.mark.parametrize("mask", [m for m in Mask if m is not Mask.AUTO])
def test_fixed_mask_is_kept_and_format_copies_agree(mask):
    qr = encode_text("Hello, world!", Ecc.MEDIUM, mask=mask, boost_ecl=False)
    assert qr.mask is mask
    assert qr.ecl is Ecc.MEDIUM
    first, second = _format_copies(qr)
    assert first == second


def test_auto_mask_picks_a_concrete_mask():
    qr = encode_text("automatic mask")
    assert qr.mask is not Mask.AUTO
    assert 0 <= qr.mask <= 7


def test_different_masks_give_different_grids():
    a = encode_text("mask", mask=Mask.MASK_0)
    b = encode_text("mask", mask=Mask.MASK_1)
    assert a.version == b.version
    assert a.modules != b.modules


def test_boost_ecl_raises_level_for_empty_text():
    qr = encode_text("", Ecc.LOW)
    assert qr.version == 1
    assert qr.ecl is Ecc.HIGH


def test_without_boost_level_is_unchanged():
    qr = encode_text("", Ecc.LOW, boost_ecl=False)
    assert qr.ecl is Ecc.LOW


def test_encode_text_picks_numeric_segment():
    text = "0123456789"
    assert encode_text(text, mask=Mask.MASK_2) == encode_segments_advanced(
        [make_numeric(text)], Ecc.LOW, 1, 40, Mask.MASK_2, True
    )


def test_encode_text_picks_alphanumeric_segment():
    text = "HELLO WORLD"
    assert encode_text(text, mask=Mask.MASK_3) == encode_segments_advanced(
        [make_alphanumeric(text)], Ecc.LOW, 1, 40, Mask.MASK_3, True
    )


def test_encode_text_uses_utf8_bytes():
    text = "Grüße, world"
    assert encode_text(text, mask=Mask.MASK_4) == encode_binary(
        text.encode("utf-8"), mask=Mask.MASK_4
    )


def test_encode_binary_matches_byte_segment():
    data = bytes(range(40))
    assert encode_binary(data, Ecc.QUARTILE) == encode_segments([make_bytes(data)], Ecc.QUARTILE)


def test_encode_segments_uses_defaults():
    segs = [make_alphanumeric("ABC"), make_numeric("123")]
    assert encode_segments(segs, Ecc.MEDIUM) == encode_segments_advanced(segs, Ecc.MEDIUM)


def test_longer_data_never_needs_smaller_version():
    versions = [encode_binary(b"x" * n, mask=Mask.MASK_0).version for n in (10, 50, 100, 200, 400)]
    assert versions == sorted(versions)
    assert versions[0] < versions[-1]


def test_min_version_is_respected():
    qr = encode_text("A", min_version=5, max_version=10)
    assert qr.version == 5


def test_data_too_long_for_max_version():
    with pytest.raises(DataTooLongError):
        encode_binary(b"x" * 200, Ecc.LOW, 1, 2)


def test_byte_capacity_limit():
    qr = encode_binary(b"a" * 2953, Ecc.LOW, 40, 40, Mask.MASK_0, False)
    assert qr.version == 40
    assert qr.size == 177
    with pytest.raises(DataTooLongError):
        encode_binary(b"a" * 2954, Ecc.LOW, 40, 40, Mask.MASK_0, False)


def test_numeric_and_alphanumeric_capacity_limits():
    assert encode_text("7" * 7089, Ecc.LOW, 40, 40, Mask.MASK_0).version == 40
    with pytest.raises(DataTooLongError):
        encode_text("7" * 7090, Ecc.LOW, 40, 40, Mask.MASK_0)
    assert encode_text("A" * 4296, Ecc.LOW, 40, 40, Mask.MASK_0).version == 40
    with pytest.raises(DataTooLongError):
        encode_text("A" * 4297, Ecc.LOW, 40, 40, Mask.MASK_0)


@pytest.mark.parametrize("min_version,max_version", [(0, 5), (5, 41), (10, 9)])
def test_invalid_version_range(min_version, max_version):
    with pytest.raises(ValueError):
        encode_text("abc", Ecc.LOW, min_version, max_version)


def test_nul_in_text_rejected():
    with pytest.raises(ValueError):
        encode_text("a\0b")


def test_qrcode_is_immutable():
    qr = encode_text("frozen", Ecc.LOW)
    original_version = qr.version
    assert original_version == 1
    with pytest.raises(AttributeError):
        qr.version = 3  # type: ignore[misc]
    assert qr.version == 1
    assert qr.size == 21