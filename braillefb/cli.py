#!/usr/bin/env python3
# braillefb/cli.py
"""
Entry point for the braillefb command.
Prints images or built-in patterns as Braille text.

    braillefb image photo.png --width 60
    braillefb image https://example.org/logo.png --invert
    braillefb demo mandelbrot
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from braillefb.config import Config
from braillefb.fetch import ImageFetchError, load_image
from braillefb.framebuffer import Framebuffer
from braillefb.logging_conf import setup_logging
from braillefb.rendering.image import render_image
from braillefb.rendering.patterns import PATTERNS
from braillefb.version import version_info

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="braillefb",
        description="Render pixel grids and images as Unicode Braille text.",
    )
    parser.add_argument("--config", metavar="PATH", help="Config file (default: per-user braillefb.json)")
    parser.add_argument("--log-level", metavar="LEVEL", help="Override logging level (DEBUG, INFO, ...)")
    parser.add_argument("--version", action="version", version=version_info())
    sub = parser.add_subparsers(dest="command", required=True)

    img = sub.add_parser("image", help="Render an image file or http(s) URL")
    img.add_argument("source", help="Image path or URL")
    img.add_argument("--width", type=int, metavar="CHARS", help="Output width in Braille characters")
    img.add_argument("--threshold", type=float, help="Luminance cutoff in [0, 1]; darker pixels set dots")
    img.add_argument("--invert", action="store_true", default=None, help="Set dots for bright pixels instead")

    demo = sub.add_parser("demo", help="Render a built-in pattern")
    demo.add_argument("pattern", choices=sorted(PATTERNS))
    return parser


def _render_image(args: argparse.Namespace, cfg: Config) -> Framebuffer:
    render_cfg = cfg["render"]
    net = cfg["network"]
    img = load_image(
        args.source,
        user_agent=net["user_agent"],
        connect_timeout=net["connect_timeout_s"],
        read_timeout=net["read_timeout_s"],
        retries=net["retries"],
    )
    width = args.width if args.width is not None else render_cfg["width_chars"]
    threshold = args.threshold if args.threshold is not None else render_cfg["threshold"]
    invert = args.invert if args.invert is not None else render_cfg["invert"]
    log.info("Rendering %s (%dx%d) at %d chars wide", args.source, img.width, img.height, width)
    return render_image(img, width_chars=width, threshold=threshold, invert=invert)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    cfg = Config.load(args.config, create_if_missing=False)
    setup_logging(cfg, args.log_level)

    try:
        if args.command == "image":
            fb = _render_image(args, cfg)
        else:
            fb = Framebuffer.from_array(PATTERNS[args.pattern]())
    except (ImageFetchError, OSError, ValueError) as e:
        log.debug("Render failed", exc_info=True)
        print(f"braillefb: {e}", file=sys.stderr)
        return 1

    sys.stdout.write(str(fb))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
