"""Tests for Protocol 2000 frame building."""

from kramer_switcher_mcp.protocol.framing import (
    build_frame,
    FRAME_SIZE,
    MSB,
    TERMINATOR,
)


def test_build_frame_size():
    """Every built frame must be exactly 5 bytes."""
    assert len(build_frame(1, 2)) == FRAME_SIZE


def test_build_frame_layout():
    """Verify the byte layout for switching to input 3.

    Structure: [instruction] [0x80|A] [0x80|B] [0x80|machine] [0x0A]
    """
    frame = build_frame(1, 3)
    assert frame[0] == 0x01  # instruction: switch video
    assert frame[1] == 0x83  # param A: input 3
    assert frame[2] == 0x80  # param B: unused
    assert frame[3] == 0x81  # machine number 1
    assert frame[4] == 0x0A  # terminator


def test_build_frame_is_bytes():
    """Frames are immutable bytes, not bytearrays."""
    assert isinstance(build_frame(30, 1), bytes)


def test_high_bit_set_on_parameter_bytes():
    """Bytes 1-3 always carry the MSB for every valid parameter."""
    for instruction, params in ((1, range(5)), (30, range(2))):
        for param in params:
            frame = build_frame(instruction, param)
            assert all(b >= MSB for b in frame[1:4])
            assert frame[4] == TERMINATOR


def test_string_arguments_parsed_as_decimal():
    """Host dropdown values arrive as decimal strings."""
    assert build_frame("30", "1") == bytes([30, 129, 128, 129, 10])
    assert build_frame("1", "04") == bytes([1, 132, 128, 129, 10])


def test_missing_param_defaults_to_zero():
    """A missing parameter behaves like 0."""
    assert build_frame(1, None) == build_frame(1, 0)
    assert build_frame(1) == build_frame(1, 0)
    assert build_frame(1, "") == build_frame(1, 0)


def test_unparseable_param_defaults_to_zero():
    """Garbage parameters degrade to 0 rather than raising."""
    assert build_frame(1, "abc") == build_frame(1, 0)
    assert build_frame(30, "on") == build_frame(30, 0)


def test_leading_digits_are_used():
    """Only the leading digits of a string parameter count."""
    assert build_frame(1, "2 ") == build_frame(1, 2)
    assert build_frame(1, "3x") == build_frame(1, 3)
