"""Data models for connection status and host actions."""

from .status import ConnectionStatus, StatusReport
from .actions import Action, FrontPanel, SwitchVideo, decode_action
