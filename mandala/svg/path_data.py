"""Path data — SVG ``d`` attribute to an Outline of svgpathtools segments.

svgpathtools builds the segments (relative commands, H/V, S/T reflection, arc
center parameterization). Before that, the path data is checked against the
command grammar so that malformed input fails with the offending offset
instead of being skipped, and is rewritten into a canonical
whitespace-separated form.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field

from svgpathtools import Path, parse_path

from mandala.errors import PathGrammarError

# Numbers: "1.5.5" is two numbers, "-1-2" is two numbers, exponents allowed.
_NUMBER_RE = re.compile(r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?")
_SEPARATOR_RE = re.compile(r"[\s,]*")

# Arguments per repetition of each command
_ARITY = {"M": 2, "L": 2, "H": 1, "V": 1, "C": 6, "S": 4, "Q": 4, "T": 2, "A": 7, "Z": 0}

# Positions of the large-arc and sweep flags within one arc argument group
_ARC_FLAGS = (3, 4)


@dataclass(frozen=True)
class Outline:
    """A parsed petal outline: subpaths plus the path data they came from.

    Each subpath is a continuous svgpathtools ``Path``.
    """

    subpaths: tuple[Path, ...]
    d: str = field(default="", compare=False)

    @property
    def segments(self) -> list:
        return [seg for sp in self.subpaths for seg in sp]

    @property
    def is_empty(self) -> bool:
        return not self.subpaths

    def __len__(self) -> int:
        return sum(len(sp) for sp in self.subpaths)


def canonical_path_data(d: str) -> str:
    """Check ``d`` against the path grammar and return it whitespace-separated.

    Arc flags written without separators ("0110") are split apart.
    """
    tokens: list[str] = []
    command: str | None = None
    count = 0
    pos = 0

    def finish_group(at: int) -> None:
        arity = _ARITY[command.upper()]
        if arity and (count == 0 or count % arity):
            raise PathGrammarError(f"Missing arguments for {command!r}", at)

    while True:
        pos = _SEPARATOR_RE.match(d, pos).end()
        if pos >= len(d):
            break
        ch = d[pos]

        if ch.upper() in _ARITY:
            if command is None and ch not in "Mm":
                raise PathGrammarError("Path data must begin with a moveto command", pos)
            if command is not None:
                finish_group(pos)
            command, count = ch, 0
            tokens.append(ch)
            pos += 1
            continue

        if command is None:
            raise PathGrammarError("Path data must begin with a moveto command", pos)
        if _ARITY[command.upper()] == 0:
            raise PathGrammarError(f"Unexpected argument after {command!r}", pos)

        if command in "Aa" and count % 7 in _ARC_FLAGS:
            if ch not in "01":
                raise PathGrammarError(f"Arc flag must be 0 or 1 in {command!r}", pos)
            tokens.append(ch)
            pos += 1
        else:
            m = _NUMBER_RE.match(d, pos)
            if m is None:
                raise PathGrammarError(f"Unexpected character {ch!r} in path data", pos)
            value = float(m.group(0))
            if not math.isfinite(value):
                raise PathGrammarError(f"Number out of range: {m.group(0)}", pos)
            tokens.append(repr(value))
            pos = m.end()
        count += 1

    if command is None:
        raise PathGrammarError("Empty path data")
    finish_group(pos)
    return " ".join(tokens)


def split_subpaths(path: Path) -> list[Path]:
    """Split a compound path at moveto discontinuities and after each closed run."""
    subpaths = []
    current: list = []
    for seg in path:
        if current and (abs(seg.start - current[-1].end) > 1e-6 or current[-1].end == current[0].start):
            subpaths.append(Path(*current))
            current = []
        current.append(seg)
    if current:
        subpaths.append(Path(*current))
    return subpaths


def parse_path_data(d: str) -> Outline:
    """Parse a raw path-data string into an Outline.

    Raises PathGrammarError on empty input, data before the first moveto,
    unknown characters, and missing or malformed arguments.
    """
    canonical = canonical_path_data(d)
    try:
        path = parse_path(canonical)
    except (ValueError, AssertionError) as e:
        # Arc asserts on coincident endpoints
        raise PathGrammarError(f"Invalid path data: {e}") from e
    return Outline(tuple(split_subpaths(path)), d=d)
