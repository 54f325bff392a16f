"""Small helpers for strings, files, dates, directories and shell commands."""

from __future__ import annotations

import os
import random
import re
import subprocess
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Sequence, Union

ONE_HUNDRED_NANO_SEC_TO_SECONDS = 10_000_000
SECONDS_BETWEEN_WIN32_EPOCH_AND_UNIX_EPOCH = 11_644_473_600

_UINT64_MASK = (1 << 64) - 1
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_TRUE_INITIALS = "1tTyY"
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

PathLike = Union[str, os.PathLike]


def _leading_int(s: str) -> int:
    """Parse the integer at the start of s, ignoring what follows it."""
    m = _INT_PREFIX.match(s)
    if m is None:
        raise ValueError(f"invalid integer: {s!r}")
    return int(m.group(1))


def getenv_debug(name: str) -> bool:
    """True if the environment variable is set to a value starting with 1, t or y."""
    value = os.environ.get(name)
    return bool(value) and value[0] in _TRUE_INITIALS


def starts_with(buf, prefix) -> bool:
    """True if buf begins with prefix and is strictly longer than it."""
    return len(buf) > len(prefix) and buf[: len(prefix)] == prefix


def ends_with(buf, suffix) -> bool:
    """True if buf ends with suffix and is strictly longer than it."""
    return len(buf) > len(suffix) and buf[len(buf) - len(suffix):] == suffix


def split(s: str, delim: str) -> list[str]:
    """Split on delim; a trailing delimiter does not produce a final empty field."""
    parts = s.split(delim)
    if parts and parts[-1] == "":
        parts.pop()
    return parts


def get_lines(path: PathLike) -> list[str]:
    """Return the non-empty lines of a file."""
    try:
        with open(path, encoding="utf-8", errors="surrogateescape", newline="") as f:
            text = f.read()
    except OSError as e:
        raise RuntimeError(f"get_lines: cannot open file: {path}") from e
    return [line for line in text.split("\n") if line]


def get_last(lines: Sequence[str]) -> str:
    """Return the last line, or an empty string if there are none."""
    return lines[-1] if lines else ""


def truncate_at(line: str, ch: str) -> str:
    """Return line cut off at the first occurrence of ch."""
    pos = line.find(ch)
    return line if pos < 0 else line[:pos]


def value_from_string(kind: type, value: str):
    """Convert a configuration string to int, bool or str."""
    if kind is bool:
        return bool(value) and value[0] in "YyTt1"
    if kind is str:
        return value
    if kind is int:
        return _leading_int(value)
    raise TypeError(f"unsupported kind: {kind!r}")


def ishexnumber(c: Union[int, str]) -> bool:
    """True if c is a hexadecimal digit character (or its code)."""
    if isinstance(c, int):
        if not 0 <= c <= 0x10FFFF:
            return False
        c = chr(c)
    return len(c) == 1 and c in _HEX_DIGITS


def _iso_from_unix(seconds: int) -> str:
    when = _EPOCH + timedelta(seconds=seconds)
    return f"{when.year:04d}-{when:%m-%dT%H:%M:%S}Z"


def microsoft_date_to_iso(time: int) -> str:
    """Convert a Windows FILETIME (100 ns ticks since 1601) to an ISO 8601 UTC string."""
    seconds = time // ONE_HUNDRED_NANO_SEC_TO_SECONDS - SECONDS_BETWEEN_WIN32_EPOCH_AND_UNIX_EPOCH
    return _iso_from_unix(seconds)


def unix_time_to_iso(t: int) -> str:
    """Convert a Unix timestamp to an ISO 8601 UTC string."""
    return _iso_from_unix(int(t))


def valid_ascii_name(name: Union[str, bytes]) -> bool:
    """True if every character is printable 7-bit ASCII."""
    codes = name if isinstance(name, (bytes, bytearray)) else (ord(c) for c in name)
    return all(0x20 <= ch < 0x7F for ch in codes)


def named_temporary_directory(max_tries: int = 1000) -> Path:
    """Create a fresh, uniquely named directory in the system temporary directory."""
    base = Path(tempfile.gettempdir())
    for _ in range(max_tries):
        path = base / f"be_tmp{random.getrandbits(64):x}"
        try:
            path.mkdir()
        except FileExistsError:
            continue
        return path
    raise RuntimeError("could not create NamedTemporaryDirectory")


def directory_empty(path: PathLike) -> bool:
    """True unless path is a directory that holds at least one entry."""
    path = Path(path)
    if path.is_dir():
        with os.scandir(path) as it:
            return next(it, None) is None
    return True


def scaled_stoi64(s: str) -> int:
    """Parse a number with an optional k, m, g or t suffix scaling by powers of 1024."""
    m = _INT_PREFIX.match(s)
    val = int(m.group(1)) if m else 0
    if "k" in s or "K" in s:
        val *= 1024
    if "m" in s:
        val *= 1024 ** 2
    if "g" in s:
        val *= 1024 ** 3
    if "t" in s or "T" in s:
        val *= 1024 ** 4
    return val & _UINT64_MASK


def subprocess_call(cmd: str) -> str:
    """Run a shell command and return its standard output."""
    try:
        result = subprocess.run(cmd, shell=True, stdout=subprocess.PIPE, check=False)
    except OSError as e:
        raise RuntimeError("popen() failed!") from e
    return result.stdout.decode("utf-8", errors="replace")