"""benchgate CLI package."""

from __future__ import annotations

from ._app import app as app
from ._app import console as console
from ._app import err_console as err_console


def _register_commands() -> None:
    """Register command modules in help-panel order."""
    # isort: off
    from . import _gate  # noqa: F401
    from . import _resolve  # noqa: F401
    # isort: on


_register_commands()
