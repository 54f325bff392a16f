"""Stop lists and alert lists: features with optional context, plus regular expressions."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from os import PathLike
from typing import Optional, TextIO, Union

_METACHARS = frozenset(".*+?[](){}|^$\\")


def has_metachars(s: str) -> bool:
    """True if s holds any regular-expression metacharacter."""
    return any(ch in _METACHARS for ch in s)


def extract_before_after(feature: str, ctx: str) -> tuple[str, str]:
    """Split ctx around the first occurrence of feature; ``("", "")`` if it is not found.

    The search slides over every start position except the last, so a feature
    that only occurs at the very end of ctx is not found.
    """
    if len(feature) <= len(ctx):
        for i in range(len(ctx) - len(feature)):
            if ctx[i : i + len(feature)] == feature:
                return ctx[:i], ctx[i + len(feature) :]
    return "", ""


def rstrcmp(a: str, b: str) -> int:
    """Compare a and b right-aligned, over the length of the shorter one.

    Returns -1, 0 or 1 like strcmp.
    """
    n = min(len(a), len(b))
    tail_a = a[len(a) - n :]
    tail_b = b[len(b) - n :]
    for ca, cb in zip(tail_a, tail_b):
        if ca < cb:
            return -1
        if ca > cb:
            return 1
    return 0


@dataclass(frozen=True)
class Context:
    """A feature together with the text seen before and after it."""

    feature: str
    before: str = ""
    after: str = ""

    @classmethod
    def from_context(cls, feature: str, ctx: str) -> "Context":
        """Build a Context by locating feature inside the surrounding text ctx."""
        before, after = extract_before_after(feature, ctx)
        return cls(feature, before, after)

    def __str__(self) -> str:
        return f"context[{self.before}|{self.feature}|{self.after}]"


class WordAndContextList:
    """Features, optionally with context, and regular expressions to match probes against.

    Building the list is not thread-safe; checking it is, once it is built.
    """

    def __init__(self) -> None:
        self._fcmap: dict[str, list[Context]] = {}
        self._context_set: set[str] = set()
        self._patterns: list[re.Pattern[str]] = []

    def __len__(self) -> int:
        return sum(len(v) for v in self._fcmap.values()) + len(self._patterns)

    def _insert(self, ctx: Context) -> None:
        self._fcmap.setdefault(ctx.feature, []).append(ctx)

    def add_regex(self, pat: str) -> None:
        """Add a regular expression to the list."""
        self._patterns.append(re.compile(pat))

    def add_fc(self, f: str, c: str) -> bool:
        """Add a feature with its context unless that context was already seen.

        Returns True if the entry was added.
        """
        if c and c in self._context_set:
            return False
        self._context_set.add(c)
        self._insert(Context.from_context(f, c))
        return True

    def readfile(self, path: Union[str, PathLike], stream: Optional[TextIO] = None) -> None:
        """Load entries from a stop-list or feature file, reporting statistics to stream.

        Raises OSError if the file cannot be opened.
        """
        out = stream if stream is not None else sys.stdout
        with open(path, encoding="utf-8", errors="surrogateescape") as f:
            out.write(f'Reading context stop list "{path}"\n')
            total_context = 0
            line_counter = 0
            features_read = 0
            for raw in f:
                line_counter += 1
                line = raw.rstrip("\n")
                if not line or line.startswith("#"):
                    continue
                line = line.rstrip("\r")
                if not line:
                    continue
                features_read += 1

                if "\t" in line:
                    fields = line.split("\t")
                    if len(fields) >= 3:
                        if self.add_fc(fields[1], fields[2]):
                            total_context += 1
                    else:
                        self.add_fc(fields[1], "")
                    continue

                if has_metachars(line):
                    self.add_regex(line)
                else:
                    self._insert(Context(line))

        list_size = sum(len(v) for v in self._fcmap.values())
        out.write("Stop list read.\n")
        out.write(f"  Total features read: {features_read} in {line_counter} lines.\n")
        out.write(f"  List Size: {list_size}\n")
        out.write(f"  Context Strings: {total_context}\n")
        out.write(f"  Regular Expressions: {len(self._patterns)}\n")

    def check(self, probe: str, before: str, after: str) -> bool:
        """True if probe with the given context is listed, or matches a regular expression."""
        for ctx in self._fcmap.get(probe, ()):
            if (
                rstrcmp(ctx.before, before) == 0
                and rstrcmp(ctx.after, after) == 0
                and ctx.feature == probe
            ):
                return True
        return any(p.search(probe) for p in self._patterns)

    def check_feature_context(self, probe: str, context: str) -> bool:
        """Like check(), taking the surrounding text instead of before and after."""
        before, after = extract_before_after(probe, context)
        return self.check(probe, before, after)

    def dump(self, stream: Optional[TextIO] = None) -> None:
        """Write every entry and every regular expression to stream."""
        out = stream if stream is not None else sys.stdout
        out.write("dump context list:\n")
        for feature, contexts in self._fcmap.items():
            for ctx in contexts:
                out.write(f"{feature} = {ctx}\n")
        out.write("dump RE list:\n")
        for p in self._patterns:
            out.write(f"{p.pattern}\n")