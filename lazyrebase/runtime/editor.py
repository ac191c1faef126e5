"""Run an external command while temporarily leaving raw/alternate-screen mode."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from typing import Callable

logger = logging.getLogger(__name__)


def run_external_command(
    program: str,
    args: Sequence[str],
    disable_tui_mode: Callable[[], None],
    enable_tui_mode: Callable[[], None],
) -> bool:
    """Run ``program`` in the foreground; ``False`` on spawn failure or non-zero exit."""
    disable_tui_mode()
    try:
        completed = subprocess.run([program, *args], check=False)
    except OSError:
        logger.exception("failed to launch %s", program)
        return False
    finally:
        enable_tui_mode()
    if completed.returncode != 0:
        logger.warning("%s exited with status %d", program, completed.returncode)
        return False
    return True


__all__ = ["run_external_command"]
