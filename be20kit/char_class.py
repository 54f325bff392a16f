"""Counting characters by class, to guess at hex or base64 encodings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Union


@dataclass
class CharClass:
    """Tallies of digits, hex letters and other letters seen in a block of text."""

    range_0_9: int = 0
    range_A_Fi: int = 0
    range_g_z: int = 0
    range_G_Z: int = 0

    def _add_one(self, ch: int) -> None:
        if ord("a") <= ch <= ord("f") or ord("A") <= ch <= ord("F"):
            self.range_A_Fi += 1
        if ord("g") <= ch <= ord("z"):
            self.range_g_z += 1
        if ord("G") <= ch <= ord("Z"):
            self.range_G_Z += 1
        if ord("0") <= ch <= ord("9"):
            self.range_0_9 += 1

    def add(self, data: Union[int, str, bytes, bytearray, Iterable[int]]) -> None:
        """Count a single byte value, or every byte or character of a sequence."""
        if isinstance(data, int):
            self._add_one(data)
        elif isinstance(data, str):
            for ch in data:
                self._add_one(ord(ch))
        else:
            for ch in data:
                self._add_one(ch)