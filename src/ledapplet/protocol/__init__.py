"""Protocol layer: opcodes, status taxonomy, and command encoding."""

from .command import Command, build_create_applet, build_update_bar, build_update_grid
from .taxonomy import (
    DEFAULT_REVISION,
    REVISION_V1,
    REVISION_V2,
    REVISIONS,
    Opcode,
    ProtocolRevision,
    SeparatorKind,
    StatusCode,
    decode_status,
    get_revision,
)

__all__ = [
    "DEFAULT_REVISION",
    "REVISIONS",
    "REVISION_V1",
    "REVISION_V2",
    "Command",
    "Opcode",
    "ProtocolRevision",
    "SeparatorKind",
    "StatusCode",
    "build_create_applet",
    "build_update_bar",
    "build_update_grid",
    "decode_status",
    "get_revision",
]
