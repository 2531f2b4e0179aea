"""Example: fill the panel applets with gradient patterns and a variable bar.

Applet 0 is the board's status row and refuses grid writes on v2 firmware,
so only the panel applets are drawn. The last panel gets a variable
separator. Requires the board-control process to be listening on the
configured port (see `ledapplet config show`).
"""

import logging
import sys

import numpy as np

from ledapplet import AppletSession, ClientConfig, SeparatorKind
from ledapplet.exceptions import LedAppletError, format_error_for_display

BAR = [255, 150, 50, 10, 0, 10, 50, 150, 255]
PATTERN_STARTS = [1, 100, 200]
FIXED_SEPARATORS = [SeparatorKind.SOLID, SeparatorKind.DOTTED]


def gradient(rows: int, columns: int, start: int) -> np.ndarray:
    """Row-major ramp beginning at `start`, clipped to 255."""
    values = np.arange(rows * columns).reshape(rows, columns) + start
    return np.minimum(values, 255).astype(np.uint8)


def main():
    """Claim every panel applet, draw a pattern on each, then release them."""
    logging.basicConfig(level=logging.INFO)
    config = ClientConfig.load_or_default()
    print(f"Board at {config.host}:{config.port} (revision {config.revision})")

    panels = list(range(1, config.protocol.max_app_num + 1))
    layout = [
        (
            app_num,
            SeparatorKind.VARIABLE if app_num == panels[-1] else FIXED_SEPARATORS[index],
            PATTERN_STARTS[index],
        )
        for index, app_num in enumerate(panels)
    ]

    sessions = []
    try:
        for app_num, separator, start in layout:
            session = AppletSession.from_config(config, app_num, separator)
            sessions.append(session)

            session.set_grid(gradient(session.rows, session.columns, start))
            session.write_grid()
            print(f"  Applet {app_num}: grid written ({separator.name})")

            if separator is SeparatorKind.VARIABLE:
                session.set_bar(BAR)
                session.write_bar()
                print(f"  Applet {app_num}: bar written")

        input("\nPress Enter to release the applets...")

    except LedAppletError as e:
        message, hint = format_error_for_display(e)
        print(f"Error: {message}")
        if hint:
            print(f"Hint: {hint}")
        sys.exit(1)

    finally:
        for session in sessions:
            session.close()


if __name__ == "__main__":
    main()
