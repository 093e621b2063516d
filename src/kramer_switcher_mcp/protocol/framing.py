"""Frame builder for Kramer Protocol 2000.

Frame layout::

    +-------------+-----------+-----------+-----------+------------+
    | Instruction | Param A   | Param B   | Machine # | Terminator |
    | 1 byte      | 0x80 | A  | 0x80 | 0  | 0x80 | 1  | 0x0A       |
    +-------------+-----------+-----------+-----------+------------+

- Instruction: decimal instruction code (1 = switch video, 30 = front panel)
- Bytes 1-3 always carry the most significant bit so the device can tell
  them apart from instruction and terminator bytes
- Param B and the machine number are unused by the switchers we drive
- Terminator: 0x0A, separates back-to-back commands
"""

from __future__ import annotations

import re

MSB = 0x80
TERMINATOR = 0x0A
FRAME_SIZE = 5
MACHINE_NUMBER = 1

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _to_int(value: int | str | None) -> int:
    """Parse a base-10 integer from the leading digits of ``value``.

    Missing or unparseable values become 0.
    """
    if isinstance(value, int):
        return int(value)
    if value is None:
        return 0
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else 0


def build_frame(instruction: int | str, param_a: int | str | None = 0) -> bytes:
    """Build a 5-byte Protocol 2000 frame.

    Args:
        instruction: Instruction code, as an int or decimal string.
        param_a: Parameter A, as an int or decimal string. Missing or
            unparseable values are treated as 0.

    Returns:
        An immutable 5-byte ``bytes`` object ready to write to the socket.
    """
    return bytes([
        _to_int(instruction) & 0xFF,
        (MSB + _to_int(param_a)) & 0xFF,
        MSB + 0,
        MSB + MACHINE_NUMBER,
        TERMINATOR,
    ])
