"""
mousequake - Mouse Engine
Injects relative pointer moves through pyautogui.

Trajectories produce continuous (float) deltas; rounding to whole device
pixels happens here, at the boundary.
"""

import math
from typing import Optional

from logging_utils import log_event


class InjectionError(Exception):
    """The platform input subsystem could not perform a move."""


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


class RelativeMoveQuantizer:
    """
    Converts float deltas into integer pixel moves.

    The fractional part left over by each rounding is carried into the next
    move, so the integer moves sum to the same path as the float deltas
    (a 0.5px linear wiggle still moves, and closed patterns stay closed).
    """

    def __init__(self):
        self._residual_x = 0.0
        self._residual_y = 0.0

    def quantize(self, dx: float, dy: float) -> tuple[int, int]:
        target_x = dx + self._residual_x
        target_y = dy + self._residual_y
        ix = _round_half_away(target_x)
        iy = _round_half_away(target_y)
        self._residual_x = target_x - ix
        self._residual_y = target_y - iy
        return ix, iy


class PyAutoGuiMouse:
    """
    Moves the real pointer with pyautogui.moveRel.
    Any backend failure (no display, fail-safe corner, ...) surfaces as InjectionError.
    """

    def __init__(self, quantizer: Optional[RelativeMoveQuantizer] = None):
        self.quantizer = quantizer if quantizer is not None else RelativeMoveQuantizer()
        try:
            # pyautogui connects to the display on import
            import pyautogui
        except Exception as e:
            raise InjectionError(f"Mouse backend unavailable: {e}") from e
        self._pyautogui = pyautogui
        log_event("INFO", "Mouse", "pyautogui backend ready")

    def move_relative(self, dx: float, dy: float) -> None:
        ix, iy = self.quantizer.quantize(dx, dy)
        if ix == 0 and iy == 0:
            return
        try:
            self._pyautogui.moveRel(ix, iy, _pause=False)
        except Exception as e:
            log_event("ERROR", "Mouse", "Move failed", dx=ix, dy=iy, error=e)
            raise InjectionError(f"Mouse move failed: {e}") from e


class DryRunMouse:
    """Logs moves instead of injecting them."""

    def __init__(self, quantizer: Optional[RelativeMoveQuantizer] = None):
        self.quantizer = quantizer if quantizer is not None else RelativeMoveQuantizer()

    def move_relative(self, dx: float, dy: float) -> None:
        ix, iy = self.quantizer.quantize(dx, dy)
        log_event("INFO", "Mouse", "Dry-run", dx=ix, dy=iy)


def make_mouse(dry_run: bool = False):
    """Pick the injection backend."""
    if dry_run:
        return DryRunMouse()
    return PyAutoGuiMouse()
