"""Command-line preview: render an animated mandala to a sequence of PNG frames.

    mandala-render samples/petal.svg --out frames --targets 1,0,0.5 --seconds 3

Openness targets are fed through a SampleFeed at evenly spaced times, exactly
as a live sensor would deliver them, and each frame is drawn from the virtual
clock ``frame / fps``.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from mandala.config import settings
from mandala.engine.config import MandalaConfig
from mandala.engine.mandala import Mandala
from mandala.engine.mesh import Mesh
from mandala.engine.petal_source import FramePetals, PetalSource, StaticPetal
from mandala.errors import MandalaError
from mandala.feed import SampleFeed
from mandala.models.preset import MandalaPreset
from mandala.preview import render_png

logger = logging.getLogger("mandala.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render mandala open/close transitions to PNG frames")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("petal", nargs="?", help="SVG file holding the petal path")
    source.add_argument("--frames-file", help="Text file with one petal path-data string per line")
    parser.add_argument("-o", "--out", default="frames", help="Output folder for PNG frames")
    parser.add_argument("--preset", help="JSON preset with layout and open/closed states")
    parser.add_argument("--petals", type=int, help="Petal count (overrides the preset)")
    parser.add_argument("--duration", type=float, help="Smoothing duration per sample [sec]")
    parser.add_argument("--fps", type=float, help="Frames per second of virtual time")
    parser.add_argument("--seconds", type=float, default=3.0, help="Length of the rendered sequence")
    parser.add_argument("--targets", default="1,0", help="Comma-separated openness samples")
    parser.add_argument("--canvas", type=float, nargs=2, default=(1024.0, 1024.0), metavar=("W", "H"))
    return parser


def _parse_targets(text: str) -> list[float]:
    try:
        return [float(v) for v in text.split(",") if v.strip()]
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"--targets: {e}") from e


def _frame_for(value: float, petals: PetalSource) -> int | None:
    """Frame files are ordered closed → open; pick the frame matching the openness."""
    if petals.frame_count <= 1:
        return None
    clamped = min(1.0, max(0.0, value))
    return round(clamped * (petals.frame_count - 1))


def run(args: argparse.Namespace, targets: list[float]) -> int:
    config = MandalaConfig.from_settings(settings)
    fps = args.fps or settings.mandala_fps
    duration = args.duration if args.duration is not None else settings.mandala_smoothing_duration

    try:
        preset = MandalaPreset.load(args.preset) if args.preset else MandalaPreset(petal_count=settings.mandala_petal_count)
        if args.frames_file:
            petals: PetalSource = FramePetals.from_file(args.frames_file, eager=True)
        else:
            petals = StaticPetal.from_svg(args.petal)
        open_state, closed_state = preset.to_states()
        mandala = Mandala(
            petals,
            position=preset.position,
            center_scale=preset.center_scale,
            petal_count=args.petals if args.petals is not None else preset.petal_count,
            open_state=open_state,
            closed_state=closed_state,
            initial_value=preset.initial_value,
            config=config,
        )
    except (MandalaError, ValueError) as e:
        logger.error("%s", e)
        return 1

    out_dir = Path(args.out)
    out_dir.mkdir(parents=True, exist_ok=True)

    feed = SampleFeed(smoothing_duration=duration)
    frame_total = max(1, int(args.seconds * fps))
    interval = args.seconds / len(targets) if targets else 0.0
    next_sample = 0

    for frame in range(frame_total):
        now = frame / fps
        while next_sample < len(targets) and next_sample * interval <= now:
            feed.publish(next_sample * interval, targets[next_sample])
            next_sample += 1
        feed.drain(mandala, now)

        mesh = Mesh()
        mandala.draw(now, mesh, _frame_for(mandala.current_value(now), mandala.petals))
        render_png(mesh, out_dir / f"frame_{frame:04d}.png", canvas=tuple(args.canvas))

    logger.info("Rendered %d frames (%d samples) to %s", frame_total, feed.received, out_dir)
    return 0


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    logging.basicConfig(
        level=getattr(logging, settings.mandala_log_level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        targets = _parse_targets(args.targets)
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))
    return run(args, targets)


if __name__ == "__main__":
    sys.exit(main())
