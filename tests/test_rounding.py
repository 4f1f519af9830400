import pytest

from cstorcsi.rounding import (
    GIB,
    byte_count,
    bytes_to_gib,
    gib_to_bytes,
    round_up_bytes,
    round_up_gib,
    round_up_size,
)


@pytest.mark.parametrize(
    "size_bytes, expected",
    [
        (1000 * 1024, 1),  # 1000Ki
        (1000 * 1000, 1),  # 1000k
        (1000 * 1024 * 1024, 1),  # 1000Mi
        (1000 * 1000 * 1000, 1),  # 1000M
        (1000 * 1000 * 1000 * 1000, 932),  # 1000G
        (1000 * 1024 * 1024 * 1024, 1000),  # 1000Gi
        (1500 * 1024 * 1024 * 1024, 1500),  # 1500Gi
    ],
)
def test_round_up_gib(size_bytes, expected):
    assert round_up_gib(size_bytes) == expected


def test_round_up_size_example():
    assert round_up_size(1500 * 1024 * 1024, 1024 * 1024 * 1024) == 2


def test_round_up_size_exact_multiple():
    assert round_up_size(4 * GIB, GIB) == 4


def test_round_up_zero():
    assert round_up_gib(0) == 0
    assert round_up_bytes(0) == 0


def test_round_up_bytes_is_multiple_of_gib():
    for size in (1, GIB - 1, GIB, GIB + 1, 7 * GIB + 3):
        rounded = round_up_bytes(size)
        assert rounded % GIB == 0
        assert rounded >= size
        assert rounded - size < GIB


def test_bytes_to_gib_truncates():
    assert bytes_to_gib(GIB - 1) == 0
    assert bytes_to_gib(3 * GIB + 5) == 3


def test_gib_round_trip():
    for gib in (0, 1, 5, 1024):
        assert bytes_to_gib(gib_to_bytes(gib)) == gib


@pytest.mark.parametrize(
    "value, expected",
    [
        (0, "0B"),
        (1023, "1023B"),
        (1024, "1Ki"),
        (1536, "1Ki"),
        (1024 * 1024, "1Mi"),
        (GIB, "1Gi"),
        (3 * GIB, "3Gi"),
    ],
)
def test_byte_count(value, expected):
    assert byte_count(value) == expected


def test_byte_count_rejects_negative():
    with pytest.raises(ValueError):
        byte_count(-1)