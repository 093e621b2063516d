"""Host actions, decoded from the loosely-typed option payloads a host sends.

Each action kind is its own dataclass carrying validated fields, so the
command encoder only ever sees values from the closed sets below.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Union

from ..protocol.commands import VIDEO_INPUTS, build_front_panel, build_switch_video


def _option_int(options: dict[str, Any], key: str, default: int = 0) -> int:
    """Read an integer option; missing or unparseable values use ``default``."""
    value = options.get(key)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class SwitchVideo:
    """Route a video input to the output (input 0 mutes)."""

    NAME: ClassVar[str] = "switch_video"

    video_input: int = 0

    def __post_init__(self) -> None:
        if self.video_input not in VIDEO_INPUTS:
            raise ValueError(
                f"Video input must be {VIDEO_INPUTS.start}-{VIDEO_INPUTS.stop - 1}, "
                f"got {self.video_input}"
            )

    @classmethod
    def from_options(cls, options: dict[str, Any]) -> SwitchVideo:
        return cls(video_input=_option_int(options, "input"))

    def to_frame(self) -> bytes:
        return build_switch_video(self.video_input)


@dataclass(frozen=True)
class FrontPanel:
    """Lock or unlock the switcher's front panel buttons."""

    NAME: ClassVar[str] = "front_panel"

    locked: bool = False

    @classmethod
    def from_options(cls, options: dict[str, Any]) -> FrontPanel:
        status = _option_int(options, "status")
        if status not in (0, 1):
            raise ValueError(f"Front panel status must be 0 or 1, got {status}")
        return cls(locked=bool(status))

    def to_frame(self) -> bytes:
        return build_front_panel(self.locked)


Action = Union[SwitchVideo, FrontPanel]

ACTION_TYPES: dict[str, type] = {
    SwitchVideo.NAME: SwitchVideo,
    FrontPanel.NAME: FrontPanel,
}

# Labels and choices as presented to the user by the host
ACTIONS: dict[str, dict[str, Any]] = {
    SwitchVideo.NAME: {
        "label": "Switch Video",
        "options": [
            {
                "type": "dropdown",
                "label": "Input #",
                "id": "input",
                "default": "0",
                "choices": [
                    {"id": "0", "label": "Mute (Off)"},
                    {"id": "1", "label": "Input 1"},
                    {"id": "2", "label": "Input 2"},
                    {"id": "3", "label": "Input 3"},
                    {"id": "4", "label": "Input 4"},
                ],
            }
        ],
    },
    FrontPanel.NAME: {
        "label": "Front Panel",
        "options": [
            {
                "type": "dropdown",
                "label": "Status",
                "id": "status",
                "default": "0",
                "choices": [
                    {"id": "0", "label": "Panel Unlocked"},
                    {"id": "1", "label": "Panel Locked"},
                ],
            }
        ],
    },
}


def decode_action(name: str, options: dict[str, Any] | None = None) -> Action:
    """Decode a host action name and its options into a typed action.

    Raises:
        ValueError: If the action is unknown or an option is out of range.
    """
    if name not in ACTION_TYPES:
        raise ValueError(f"Unknown action '{name}'. Valid: {list(ACTION_TYPES)}")
    return ACTION_TYPES[name].from_options(options or {})
