"""SVG parser — path ingestion for petal outlines.

Finds the first element carrying a ``d`` attribute (document order) and parses
its path data into an Outline. Multi-frame petals come from a plain text file
with one raw path-data string per line.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import Path

from mandala.errors import PathGrammarError, PathSourceError
from mandala.svg.path_data import Outline, parse_path_data

logger = logging.getLogger(__name__)


def _strip_ns(tag: str) -> str:
    return tag.split("}")[-1] if "}" in tag else tag


def extract_path_data(svg_text: str) -> str:
    """Return the first ``d`` attribute in the document."""
    try:
        root = ET.fromstring(svg_text)
    except ET.ParseError as e:
        raise PathGrammarError(f"Malformed SVG document: {e}") from e

    for element in root.iter():
        d = element.get("d")
        if d is not None:
            logger.debug("Using path data from <%s>", _strip_ns(element.tag))
            return d

    raise PathGrammarError("No path data attribute found in SVG document")


def parse(source: str) -> Outline:
    """Parse an SVG document, or a raw path-data string, into an Outline."""
    source = source.lstrip("\ufeff")
    if source.lstrip().startswith("<"):
        return parse_path_data(extract_path_data(source))
    return parse_path_data(source)


def _read_text(path: str | Path) -> str:
    try:
        return Path(path).read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as e:
        raise PathSourceError(f"{path}: not valid UTF-8 ({e.reason})") from e
    except OSError as e:
        raise PathSourceError(f"Can not open SVG file '{path}': {e.strerror or e}") from e


def load_svg(path: str | Path) -> Outline:
    """Read and parse a petal SVG file."""
    outline = parse(_read_text(path))
    logger.info("Loaded petal %s: %d subpaths, %d segments", path, len(outline.subpaths), len(outline))
    return outline


class FrameList:
    """Indexed petal animation frames, one raw path-data string per entry.

    Frames are parsed on first access and cached by index.
    """

    def __init__(self, frames: list[str], source: str = "<memory>") -> None:
        self.source = source
        self._raw = frames
        self._parsed: dict[int, Outline] = {}

    def __len__(self) -> int:
        return len(self._raw)

    def raw(self, index: int) -> str:
        return self._raw[self._check(index)]

    def outline(self, index: int) -> Outline:
        index = self._check(index)
        outline = self._parsed.get(index)
        if outline is None:
            try:
                outline = parse_path_data(self._raw[index])
            except PathGrammarError as e:
                raise PathGrammarError(f"{self.source} frame {index}: {e}") from e
            self._parsed[index] = outline
        return outline

    def validate(self) -> None:
        """Parse every frame now, so grammar errors surface before rendering."""
        for index in range(len(self._raw)):
            self.outline(index)

    def _check(self, index: int) -> int:
        if not 0 <= index < len(self._raw):
            raise IndexError(f"frame index {index} out of range (0..{len(self._raw) - 1})")
        return index


def load_frames(path: str | Path, eager: bool = False) -> FrameList:
    """Read a multi-frame petal file. Blank lines are skipped."""
    lines = [line.strip() for line in _read_text(path).splitlines()]
    frames = FrameList([line for line in lines if line], source=str(path))
    if not len(frames):
        raise PathGrammarError(f"{path}: no path data lines")
    if eager:
        frames.validate()
    logger.info("Loaded %d petal frames from %s", len(frames), path)
    return frames
