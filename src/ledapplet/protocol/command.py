"""Wire command model and command builders.

A command is one compact JSON object, with no length prefix and no
delimiter::

    {"opcode":"UpdateBar","app_num":3,"parameters":[255,150,50,10,0,10,50,150,255]}
      │                    │          └─ opcode-specific bytes
      │                    └─ target applet (0-255)
      └─ "CreateApplet" | "UpdateGrid" | "UpdateBar"

Parameter shapes:

- **CreateApplet**: one byte, the SeparatorKind ordinal
- **UpdateGrid**: rows x columns bytes, row-major
- **UpdateBar**: columns bytes

The builders know nothing about sockets; the session layer sends what
they return.
"""

from typing import Annotated

import numpy as np
import numpy.typing as npt
from pydantic import BaseModel, ConfigDict, Field

from .taxonomy import Opcode, SeparatorKind

Byte = Annotated[int, Field(ge=0, le=255)]


class Command(BaseModel):
    """One client-to-board command."""

    model_config = ConfigDict(frozen=True)

    opcode: Opcode
    app_num: Byte
    parameters: list[Byte] = Field(default_factory=list)

    def encode(self) -> bytes:
        """Serialize to the wire form."""
        return self.model_dump_json().encode("utf-8")

    @classmethod
    def decode(cls, data: bytes | str) -> "Command":
        """Parse one wire message back into a Command."""
        return cls.model_validate_json(data)

    def __repr__(self) -> str:
        return (
            f"Command(opcode={self.opcode.value}, app_num={self.app_num}, "
            f"parameters=<{len(self.parameters)} bytes>)"
        )


def build_create_applet(app_num: int, separator: SeparatorKind) -> Command:
    """Build the CreateApplet handshake command.

    Args:
        app_num: Applet number to claim.
        separator: Separator rendering, fixed for the applet's lifetime.
    """
    return Command(
        opcode=Opcode.CREATE_APPLET,
        app_num=app_num,
        parameters=[int(SeparatorKind(separator))],
    )


def build_update_grid(app_num: int, grid: npt.NDArray[np.uint8]) -> Command:
    """Build an UpdateGrid command carrying the whole grid in row-major order."""
    return Command(
        opcode=Opcode.UPDATE_GRID,
        app_num=app_num,
        parameters=np.asarray(grid, dtype=np.uint8).ravel(order="C").tolist(),
    )


def build_update_bar(app_num: int, bar: npt.NDArray[np.uint8]) -> Command:
    """Build an UpdateBar command carrying the separator pixels."""
    return Command(
        opcode=Opcode.UPDATE_BAR,
        app_num=app_num,
        parameters=np.asarray(bar, dtype=np.uint8).tolist(),
    )
