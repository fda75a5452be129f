"""Petal sources — where the Mandala gets its petal outline for each frame."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from mandala.svg.parser import FrameList, load_frames, load_svg, parse
from mandala.svg.path_data import Outline


@runtime_checkable
class PetalSource(Protocol):
    @property
    def frame_count(self) -> int: ...

    def outline(self, frame_index: int | None = None) -> Outline: ...


class StaticPetal:
    """A single petal shape; the frame index is ignored."""

    frame_count = 1

    def __init__(self, outline: Outline) -> None:
        self._outline = outline

    @classmethod
    def from_svg(cls, path: str | Path) -> StaticPetal:
        return cls(load_svg(path))

    @classmethod
    def from_string(cls, source: str) -> StaticPetal:
        """From SVG document text or a raw path-data string."""
        return cls(parse(source))

    def outline(self, frame_index: int | None = None) -> Outline:
        return self._outline


class FramePetals:
    """Morphing petal: one outline per animation frame, looked up by index."""

    def __init__(self, frames: FrameList, default_index: int = 0) -> None:
        self.frames = frames
        self.default_index = default_index
        # Fail at construction rather than at the first draw
        frames.outline(default_index)

    @classmethod
    def from_file(cls, path: str | Path, default_index: int = 0, eager: bool = False) -> FramePetals:
        return cls(load_frames(path, eager=eager), default_index=default_index)

    @classmethod
    def from_strings(cls, frames: list[str], default_index: int = 0) -> FramePetals:
        return cls(FrameList(frames), default_index=default_index)

    @property
    def frame_count(self) -> int:
        return len(self.frames)

    def outline(self, frame_index: int | None = None) -> Outline:
        return self.frames.outline(self.default_index if frame_index is None else frame_index)
