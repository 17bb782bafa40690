"""
CLI entry point for the expression painter.

Usage:
    emotion-painter [options]
    python -m emotion_painter [options]
"""

import argparse
import logging
import sys

from emotion_painter.config import PainterConfig
from emotion_painter.io.detector import DETECTORS, create_detector


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="emotion-painter",
        description="Live generative painting driven by facial expression",
    )

    # Window
    parser.add_argument("--width", type=int, default=1330, help="Canvas width (default: 1330)")
    parser.add_argument("--height", type=int, default=770, help="Canvas height (default: 770)")
    parser.add_argument("-f", "--fps", type=int, default=60, help="Frames per second (default: 60)")
    parser.add_argument("--fullscreen", action="store_true", help="Open a fullscreen window")

    # Camera
    parser.add_argument("-c", "--camera", type=int, default=0, help="Camera index (default: 0)")
    parser.add_argument("--capture-width", type=int, default=640, help="Capture width (default: 640)")
    parser.add_argument("--capture-height", type=int, default=480, help="Capture height (default: 480)")

    # Expression
    parser.add_argument(
        "-d", "--detector", type=str, default="deepface",
        choices=sorted(DETECTORS),
        help="Expression detector (default: deepface)",
    )
    parser.add_argument(
        "--refresh-ms", type=int, default=50,
        help="Expression sampling period in ms (default: 50)",
    )

    # Painting
    parser.add_argument(
        "--intro-ms", type=int, default=12000,
        help="Intro quotation duration in ms (default: 12000)",
    )
    parser.add_argument(
        "--clamp-blend", action="store_true",
        help="Clamp the palette blend factor to [0, 1]",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible strokes")

    parser.add_argument("-v", "--verbose", action="store_true", help="Log expression diagnostics")
    return parser


def config_from_args(args: argparse.Namespace) -> PainterConfig:
    intro = max(0, args.intro_ms)
    return PainterConfig(
        width=args.width,
        height=args.height,
        fps=args.fps,
        camera_index=args.camera,
        capture_width=args.capture_width,
        capture_height=args.capture_height,
        refresh_delay_ms=args.refresh_ms,
        intro_duration_ms=intro,
        # Keep the fade proportional when the intro is shortened
        fade_start_ms=int(intro * 5 / 12),
        fade_end_ms=int(intro * 10 / 12),
        clamp_blend=args.clamp_blend,
    )


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.refresh_ms <= 0:
        print("Error: --refresh-ms must be positive", file=sys.stderr)
        sys.exit(1)

    config = config_from_args(args)

    print(f"Loading expression detector: {args.detector}")
    try:
        detector = create_detector(args.detector)
    except ImportError as e:
        print(
            f"Error: detector {args.detector!r} is not installed ({e}). "
            "Install the 'detect' extra.",
            file=sys.stderr,
        )
        sys.exit(1)

    from emotion_painter.app import PaintingSession
    from emotion_painter.io.camera import CameraCapture

    camera = CameraCapture(args.camera, config.capture_width, config.capture_height)
    session = PaintingSession(config, camera, detector, seed=args.seed)

    print(f"Painting at {config.width}x{config.height} @ {config.fps}fps (q or Esc to quit)")
    session.run(fullscreen=args.fullscreen)


if __name__ == "__main__":
    main()
