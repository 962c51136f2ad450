"""
Main entry point for miniprinter.

Fetches today's mini crossword, renders the board and clues, and sends
the receipt to the configured printer. One run prints one receipt.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from miniprinter.config.settings import Settings, get_settings
from miniprinter.errors import MiniPrinterError
from miniprinter.graphics.rasterizer import Bitmap, render_board
from miniprinter.hardware.printer import create_printer
from miniprinter.printing.receipt import ReceiptComposer, print_receipt
from miniprinter.puzzle.fetch import fetch_puzzle, load_puzzle
from miniprinter.puzzle.models import PuzzleDocument

logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False) -> None:
    """Configure logging on stderr (stdout may carry printer bytes)."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="miniprinter",
        description="Print the daily mini crossword on a thermal receipt printer",
    )
    parser.add_argument("--url", help="Puzzle endpoint to fetch")
    parser.add_argument("--file", type=Path, help="Print a puzzle JSON file instead of fetching")
    output = parser.add_mutually_exclusive_group()
    output.add_argument("--preview", action="store_true", help="Print a text preview to stdout")
    output.add_argument("--serial", metavar="PORT", help="Send to a printer on a serial port")
    output.add_argument("--output", type=Path, help="Write ESC/POS bytes to a file or device")
    parser.add_argument("--save-board", type=Path, metavar="PATH", help="Also save the board PNG")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    return parser


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Layer command line flags over environment settings."""
    printer = {}
    if args.preview:
        printer["transport"] = "preview"
    elif args.serial:
        printer["transport"] = "serial"
        printer["port"] = args.serial
    elif args.output:
        printer["transport"] = "console"
        printer["output"] = args.output

    fetch = {"url": args.url} if args.url else {}

    return settings.model_copy(update={
        "debug": settings.debug or args.debug,
        "printer": settings.printer.model_copy(update=printer),
        "fetch": settings.fetch.model_copy(update=fetch),
    })


def load_document(settings: Settings, puzzle_file: Optional[Path] = None) -> PuzzleDocument:
    """Get the puzzle from disk or from the network."""
    if puzzle_file is not None:
        return load_puzzle(puzzle_file)
    return asyncio.run(fetch_puzzle(
        url=settings.fetch.url,
        user_agent=settings.fetch.user_agent,
        timeout=settings.fetch.timeout,
    ))


def run(
    settings: Settings,
    puzzle_file: Optional[Path] = None,
    save_board: Optional[Path] = None,
) -> int:
    """Fetch, compose and print one receipt.

    Returns:
        Number of directives sent to the printer
    """
    document = load_document(settings, puzzle_file)

    def rasterize(markup: str, target_width: int, dpi: float) -> Bitmap:
        bitmap = render_board(markup, target_width, dpi)
        if save_board is not None:
            bitmap.save(save_board)
            logger.info(f"Saved board to {save_board}")
        return bitmap

    cfg = settings.printer
    composer = ReceiptComposer(
        chars_per_line=cfg.chars_per_line,
        pixels_per_char=cfg.pixels_per_char,
        dpi=cfg.dpi,
        rasterizer=rasterize,
    )
    directives = composer.compose(document)

    with create_printer(cfg) as printer:
        return print_receipt(directives, printer)


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point."""
    from dotenv import load_dotenv

    # Load environment variables
    load_dotenv()

    args = build_parser().parse_args(argv)
    settings = apply_overrides(get_settings(), args)

    setup_logging(settings.debug)

    try:
        run(settings, puzzle_file=args.file, save_board=args.save_board)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(130)
    except MiniPrinterError as e:
        logger.error(f"{type(e).__name__}: {e}")
        sys.exit(1)
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
