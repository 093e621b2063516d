"""Instruction codes and high-level command builders.

See the Kramer Protocol 2000 reference (rev 0.51) for the full instruction
table; only the instructions exposed as actions are listed here.
"""

from __future__ import annotations

from enum import IntEnum

from .framing import build_frame


class Instruction(IntEnum):
    """Protocol 2000 instruction codes."""

    SWITCH_VIDEO = 1
    FRONT_PANEL = 30


VIDEO_INPUTS = range(0, 5)  # 0 mutes the output


def encode(instruction: int | str, param_a: int | str | None = 0) -> bytes:
    """Encode an instruction and its parameter into a command frame."""
    return build_frame(instruction, param_a)


def build_switch_video(video_input: int | str) -> bytes:
    """Build a video switch command.

    Args:
        video_input: Input number 1-4, or 0 to mute.
    """
    return encode(Instruction.SWITCH_VIDEO, video_input)


def build_front_panel(locked: bool | int | str) -> bytes:
    """Build a front panel lock/unlock command."""
    if isinstance(locked, bool):
        locked = int(locked)
    return encode(Instruction.FRONT_PANEL, locked)
