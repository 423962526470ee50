"""
printhis: demo command line for common printing tasks.

Usage:
    printhis [-a HOST[:PORT] | -d DEVICE] text [FILE] [-t WIDTH]
    printhis [-a ...] tabs [-t WIDTH]
    printhis [-a ...] image FILE [--double] [--eight-dot] [--no-pacing]
    printhis [-a ...] cut
    printhis [-a ...] feed AMOUNT [--lines]

Without -a or -d the printer from hoinprint.json (or 192.168.1.23:9100)
is used.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from PIL import Image, UnidentifiedImageError

from hoinprint import get_logger

from .escpos.commands import Density, DotMode
from .exceptions import PrinterError
from .printer import Printer, open_printer

__all__ = [
    "build_parser",
    "run",
    "main",
]

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="printhis",
        description="printhis is a demo utility for some basic printing use cases.",
    )
    target = parser.add_mutually_exclusive_group()
    target.add_argument("-a", "--addr", help="IP address and port of the printer")
    target.add_argument("-d", "--dev", help="Device path of a USB printer")
    parser.add_argument("--config", type=Path, help="Path to hoinprint.json")

    sub = parser.add_subparsers(dest="command", required=True)

    text = sub.add_parser("text", help="Print text")
    text.add_argument("input", nargs="?", default="-", help="File to print; STDIN if omitted or '-'")
    text.add_argument("-t", "--tab-width", type=int, default=4, help="Width of the tab stop in spaces")

    tabs = sub.add_parser("tabs", help="Print the tab stop locations")
    tabs.add_argument("-t", "--tab-width", type=int, default=4, help="Width of the tab stop in spaces")

    image = sub.add_parser("image", help="Print an image")
    image.add_argument("input", help="Image file to print (any format Pillow can open)")
    image.add_argument("--double", action="store_true", help="Double horizontal density (180 DPI)")
    image.add_argument("--eight-dot", action="store_true", help="Use 8-dot strips instead of 24-dot")
    image.add_argument("--no-pacing", action="store_true", help="Do not wait for the buffer between strips")

    sub.add_parser("cut", help="Cut the paper")

    feed = sub.add_parser("feed", help="Feed the paper")
    feed.add_argument("amount", type=int, help="Motion units to feed, or lines with --lines")
    feed.add_argument("-l", "--lines", action="store_true", help="Use the line height as the unit")

    return parser


def run(args: argparse.Namespace, printer: Printer) -> None:
    """Execute one parsed subcommand against an open printer."""
    if args.command == "feed":
        if args.lines:
            printer.feed_lines(args.amount)
        else:
            printer.feed(args.amount)

    elif args.command == "cut":
        printer.cut()

    elif args.command == "text":
        if args.input == "-":
            raw = sys.stdin.read()
        else:
            raw = Path(args.input).read_text(encoding="utf-8")
        printer.set_tab_width(args.tab_width)
        printer.print_text(raw)

    elif args.command == "tabs":
        printer.set_tab_width(args.tab_width)
        printer.println("\t".join(str(i) for i in range(33)))
        printer.transmit_error_status()

    elif args.command == "image":
        with Image.open(args.input) as img:
            img.load()
            printer.print_image(
                img,
                density=Density.DOUBLE if args.double else Density.SINGLE,
                dot_mode=DotMode.DOTS_8 if args.eight_dot else DotMode.DOTS_24,
                wait=False if args.no_pacing else None,
            )

    else:
        raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        with open_printer(address=args.addr, device=args.dev, config_path=args.config) as printer:
            run(args, printer)
    except (PrinterError, OSError, UnidentifiedImageError) as e:
        logger.error("printhis %s failed: %s", args.command, e)
        print(f"error: {e}", file=sys.stderr)
        return 1

    return 0
