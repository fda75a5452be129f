"""Petal outline ingestion: SVG documents, raw path data and frame files."""

from mandala.svg.parser import FrameList, load_frames, load_svg, parse
from mandala.svg.path_data import Outline, parse_path_data

__all__ = [
    "FrameList",
    "Outline",
    "load_frames",
    "load_svg",
    "parse",
    "parse_path_data",
]
