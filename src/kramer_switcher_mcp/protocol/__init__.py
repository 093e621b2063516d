"""Protocol layer: Protocol 2000 frame layout and command builders."""

from .framing import build_frame
from .commands import Instruction, encode
