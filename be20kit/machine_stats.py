"""CPU and memory usage of the current process and the machine."""

from __future__ import annotations

import math
import os
import re
import subprocess
import sys
from typing import Iterable, Optional

_PAGE_SIZE = 4096
_MEMINFO_PATH = "/proc/meminfo"
_STATM_PATH = "/proc/self/statm"
_PS_LINE = re.compile(r"\s*[+-]?\d+\s+([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


def _parse_ps_output(text: str) -> float:
    """Read the CPU percentage from the second line of ``ps -O %cpu`` output."""
    lines = text.splitlines()
    if len(lines) < 2:
        return math.nan
    m = _PS_LINE.match(lines[1])
    return float(m.group(1)) if m else math.nan


def _parse_meminfo(lines: Iterable[str]) -> Optional[int]:
    """Return MemAvailable in bytes, or None if the line is absent."""
    for line in lines:
        if line[:13] == "MemAvailable:":
            m = _INT_PREFIX.match(line[14:])
            if m is None:
                raise ValueError(f"bad MemAvailable line: {line!r}")
            return int(m.group(1)) * 1024
    return None


def _parse_statm(text: str) -> Optional[tuple[int, int]]:
    """Return (size, resident) page counts from a statm line, or None."""
    fields = text.split()
    if len(fields) < 7:
        return None
    try:
        values = [int(f) for f in fields[:7]]
    except ValueError:
        return None
    return values[0], values[1]


def get_cpu_percentage() -> float:
    """CPU percentage (0-100) used by this process, as reported by ps; NaN if unreadable."""
    try:
        result = subprocess.run(
            f"ps -O %cpu {os.getpid()}",
            shell=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError as e:
        print(f"popen failed: {e}", file=sys.stderr)
        return 0.0
    return _parse_ps_output(result.stdout.decode("utf-8", errors="replace"))


def get_available_memory() -> int:
    """Available memory in bytes, or 0 if it cannot be determined."""
    try:
        with open(_MEMINFO_PATH, encoding="utf-8", errors="replace") as f:
            available = _parse_meminfo(f)
    except OSError:
        return 0
    return available if available is not None else 0


def get_memory() -> tuple[int, int]:
    """Return (virtual_size, resident_size) of this process in bytes, or zeros."""
    try:
        with open(_STATM_PATH, encoding="ascii", errors="replace") as f:
            parsed = _parse_statm(f.read())
    except OSError:
        return 0, 0
    if parsed is None:
        return 0, 0
    size, resident = parsed
    return size * _PAGE_SIZE, resident * _PAGE_SIZE