"""Opcodes, separator kinds and the versioned status-byte taxonomy.

Every value that crosses the wire is defined here so that a firmware
revision change is a one-place edit::

    client                                   board
      │  {"opcode": "CreateApplet",            │
      │   "app_num": 1, "parameters": [3]}     │
      │ ─────────────────────────────────────► │
      │                               0x00     │
      │ ◄───────────────────────────────────── │

Status bytes have shifted between board revisions (32 and 33/34 in
particular), so the byte-to-meaning table lives on a ``ProtocolRevision``
rather than on ``StatusCode`` itself.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from types import MappingProxyType
from typing import Mapping, Optional


class Opcode(str, Enum):
    """Command opcodes, valued by their wire name."""

    CREATE_APPLET = "CreateApplet"
    UPDATE_GRID = "UpdateGrid"
    UPDATE_BAR = "UpdateBar"


class SeparatorKind(IntEnum):
    """Separator bar rendering, valued by the CreateApplet parameter byte."""

    EMPTY = 0
    SOLID = 1
    DOTTED = 2
    VARIABLE = 3  # Pixels supplied by the client via UpdateBar


class StatusCode(str, Enum):
    """Semantic outcome of a command, independent of its byte value."""

    SUCCESS = "success"
    READ_FAILED = "read_failed"
    INVALID_UTF8 = "invalid_utf8"
    INVALID_JSON = "invalid_json"
    APP_NUM_OUT_OF_RANGE = "app_num_out_of_range"
    APPLET_NOT_OWNED = "applet_not_owned"
    COMMAND_FAILED = "command_failed"
    PRIVILEGED_APPLET = "privileged_applet"
    APPLET_EXISTS = "applet_exists"
    INVALID_SEPARATOR = "invalid_separator"
    UNKNOWN = "unknown"

    @property
    def description(self) -> str:
        """Human-readable meaning."""
        return {
            StatusCode.SUCCESS: "success",
            StatusCode.READ_FAILED: "board failed to read stream",
            StatusCode.INVALID_UTF8: "stream not valid text",
            StatusCode.INVALID_JSON: "text not valid JSON",
            StatusCode.APP_NUM_OUT_OF_RANGE: "applet number out of range",
            StatusCode.APPLET_NOT_OWNED: "command targets an applet this connection did not create",
            StatusCode.COMMAND_FAILED: "command failed",
            StatusCode.PRIVILEGED_APPLET: "command rejected for this applet",
            StatusCode.APPLET_EXISTS: "applet already exists",
            StatusCode.INVALID_SEPARATOR: "invalid separator value",
            StatusCode.UNKNOWN: "unknown error",
        }[self]

    @property
    def category(self) -> str:
        """Error category used for reporting."""
        return {
            StatusCode.SUCCESS: "none",
            StatusCode.READ_FAILED: "transient I/O fault",
            StatusCode.INVALID_UTF8: "malformed request",
            StatusCode.INVALID_JSON: "malformed request",
            StatusCode.APP_NUM_OUT_OF_RANGE: "invalid input",
            StatusCode.APPLET_NOT_OWNED: "protocol violation",
            StatusCode.COMMAND_FAILED: "policy rejection",
            StatusCode.PRIVILEGED_APPLET: "policy rejection",
            StatusCode.APPLET_EXISTS: "conflict",
            StatusCode.INVALID_SEPARATOR: "invalid input",
            StatusCode.UNKNOWN: "opaque failure",
        }[self]


@dataclass(frozen=True)
class ProtocolRevision:
    """Dimensions and status table of one board firmware revision."""

    name: str
    max_app_num: int
    rows: int = 10
    columns: int = 9
    status_codes: Mapping[int, StatusCode] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        # Read-only view, revisions are shared module-level values
        object.__setattr__(self, "status_codes", MappingProxyType(dict(self.status_codes)))

    @property
    def grid_size(self) -> int:
        return self.rows * self.columns

    def is_valid_app_num(self, app_num: int) -> bool:
        return 0 <= app_num <= self.max_app_num

    def decode_status(self, code: int) -> StatusCode:
        """Map a status byte to its meaning; untabled bytes are UNKNOWN."""
        return self.status_codes.get(code, StatusCode.UNKNOWN)

    def code_for(self, status: StatusCode) -> Optional[int]:
        """Reverse lookup of the byte a status is sent as, if tabled."""
        for code, value in self.status_codes.items():
            if value is status:
                return code
        return None


_COMMON_CODES = {
    0: StatusCode.SUCCESS,
    10: StatusCode.READ_FAILED,
    20: StatusCode.INVALID_UTF8,
    21: StatusCode.INVALID_JSON,
    30: StatusCode.APP_NUM_OUT_OF_RANGE,
    31: StatusCode.APPLET_NOT_OWNED,
    40: StatusCode.INVALID_SEPARATOR,
}

REVISION_V1 = ProtocolRevision(
    name="v1",
    max_app_num=2,
    rows=11,
    status_codes={
        **_COMMON_CODES,
        32: StatusCode.COMMAND_FAILED,
        33: StatusCode.APPLET_EXISTS,
    },
)

REVISION_V2 = ProtocolRevision(
    name="v2",
    max_app_num=3,
    status_codes={
        **_COMMON_CODES,
        32: StatusCode.PRIVILEGED_APPLET,
        34: StatusCode.APPLET_EXISTS,
    },
)

REVISIONS: dict[str, ProtocolRevision] = {
    REVISION_V1.name: REVISION_V1,
    REVISION_V2.name: REVISION_V2,
}

DEFAULT_REVISION = REVISION_V2.name


def get_revision(revision: str | ProtocolRevision | None = None) -> ProtocolRevision:
    """Resolve a revision name (or pass through a revision object)."""
    if revision is None:
        return REVISIONS[DEFAULT_REVISION]
    if isinstance(revision, ProtocolRevision):
        return revision
    try:
        return REVISIONS[revision]
    except KeyError:
        raise ValueError(
            f"Unknown protocol revision '{revision}'. Valid: {list(REVISIONS)}"
        ) from None


def decode_status(code: int, revision: str | ProtocolRevision | None = None) -> StatusCode:
    """Decode a status byte through the given (or default) revision table."""
    return get_revision(revision).decode_status(code)
