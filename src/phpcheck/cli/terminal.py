"""Terminal colour capability detection.

ColorSupport answers one question, "may ANSI colours be written to this
stream?", by trying a fixed list of probes and keeping the first conclusive
answer:

1. NO_COLOR / FORCE_COLOR environment hints
2. the Hyper terminal (TERM_PROGRAM=Hyper)
3. on Windows: VT100 console mode, ANSICON, ConEmuANSI=ON or TERM=xterm
4. stream.isatty()
5. fstat() of the stream's file descriptor being a character device

The answer is computed once per ColorSupport instance.
detect_color_support() keeps one instance for stdout for the whole process.
"""

from __future__ import annotations

import os
import stat
import sys
from collections.abc import Mapping
from functools import cached_property, lru_cache
from typing import TextIO

from rich.console import Console

from phpcheck.logging import get_logger

__all__ = ["ColorSupport", "detect_color_support", "make_console"]

logger = get_logger(__name__)


def _windows_vt100_support(stream: TextIO) -> bool | None:
    """Ask the Windows console whether virtual terminal processing is enabled."""
    try:
        import ctypes
        import msvcrt

        handle = msvcrt.get_osfhandle(stream.fileno())  # type: ignore[attr-defined]
        mode = ctypes.c_ulong()
        kernel32 = ctypes.windll.kernel32  # type: ignore[attr-defined]
        if not kernel32.GetConsoleMode(handle, ctypes.byref(mode)):
            return None
    except (ImportError, AttributeError, OSError, ValueError):
        return None
    enable_virtual_terminal_processing = 0x0004
    return bool(mode.value & enable_virtual_terminal_processing)


class ColorSupport:
    """Colour capability of an output stream.

    Args:
        stream: The stream output will be written to.
        environ: Environment variables to consult (defaults to os.environ).
        windows: Whether to apply the Windows probes (defaults to os.name).

    Example:
        >>> ColorSupport(io.StringIO(), environ={}).supported
        False
        >>> ColorSupport(io.StringIO(), environ={"FORCE_COLOR": "1"}).supported
        True
    """

    def __init__(
        self,
        stream: TextIO,
        environ: Mapping[str, str] | None = None,
        windows: bool | None = None,
    ) -> None:
        self._stream = stream
        self._environ = os.environ if environ is None else environ
        self._windows = os.name == "nt" if windows is None else windows

    @cached_property
    def supported(self) -> bool:
        probes = (
            self._from_environment,
            self._from_hyper,
            self._from_windows,
            self._from_isatty,
            self._from_fstat,
        )
        for probe in probes:
            answer = probe()
            if answer is not None:
                logger.debug(
                    "color_support_detected",
                    probe=probe.__name__,
                    supported=answer,
                )
                return answer
        return False

    def _from_environment(self) -> bool | None:
        if "NO_COLOR" in self._environ:
            return False
        force = self._environ.get("FORCE_COLOR", "")
        if force and force.lower() not in ("0", "false"):
            return True
        return None

    def _from_hyper(self) -> bool | None:
        return True if self._environ.get("TERM_PROGRAM") == "Hyper" else None

    def _from_windows(self) -> bool | None:
        if not self._windows:
            return None
        return (
            bool(_windows_vt100_support(self._stream))
            or "ANSICON" in self._environ
            or self._environ.get("ConEmuANSI") == "ON"
            or self._environ.get("TERM") == "xterm"
        )

    def _from_isatty(self) -> bool | None:
        isatty = getattr(self._stream, "isatty", None)
        if isatty is None:
            return None
        try:
            return bool(isatty())
        except (OSError, ValueError):
            return None

    def _from_fstat(self) -> bool | None:
        try:
            mode = os.fstat(self._stream.fileno()).st_mode
        except (AttributeError, OSError, ValueError):
            return None
        return stat.S_ISCHR(mode)


@lru_cache(maxsize=1)
def detect_color_support() -> ColorSupport:
    """Return the process-wide colour capability of standard output."""
    return ColorSupport(sys.stdout)


def make_console(stream: TextIO, color: bool) -> Console:
    """Create a Rich console writing to a stream with or without colours.

    Rich's own terminal detection is bypassed: the caller decides.
    """
    return Console(
        file=stream,
        force_terminal=color,
        no_color=not color,
        color_system="standard" if color else None,
        highlight=False,
        markup=False,
        emoji=False,
        soft_wrap=True,
        legacy_windows=False,
    )
