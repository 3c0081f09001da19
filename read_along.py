#!/usr/bin/env python3
"""
readalong: CLI entry point.

Analyses a PDF's structure and narrates it sentence by sentence into an
MP3 (or WAV) file with Kokoro neural TTS, following the reading cursor
across pages.

Usage::

    python read_along.py input.pdf output.mp3
    python read_along.py book.pdf ch3.mp3 --from-page 41 --rate 1.0
    python read_along.py input.pdf out.mp3 --voice bf_emma --lang b
    python read_along.py report.pdf --outline
    python read_along.py thesis.pdf --search "öğrenci"

Verbosity levels::

    -v 0   Quiet: warnings and errors only.
    -v 1   Normal: phase summaries and progress bars (default).
    -v 2   Debug: per-sentence narration and every heading decision.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from tqdm import tqdm

from readalong.playback.models import NarrationSettings
from readalong.session import ReaderConfig, ReaderSession
from readalong.structure.models import Language
from readalong.structure.outline import build_outline, render_outline

logger = logging.getLogger("readalong")

# Mapping from --verbose integer to logging level
_VERBOSITY_MAP = {
    0: logging.WARNING,
    1: logging.INFO,
    2: logging.DEBUG,
}


# ------------------------------------------------------------------
# Argument parsing
# ------------------------------------------------------------------


def _positive_float(value: str) -> float:
    try:
        f = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Not a number: '{value}'")
    if f <= 0:
        raise argparse.ArgumentTypeError(f"Must be > 0, got {value}")
    return f


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        description="Read a PDF aloud sentence by sentence, following its structure.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "examples:\n"
            "  python read_along.py paper.pdf paper.mp3\n"
            "  python read_along.py book.pdf ch3.mp3 --from-page 41\n"
            "  python read_along.py report.pdf --outline\n"
            '  python read_along.py thesis.pdf --search "öğrenci"\n'
        ),
    )

    # -- Positional --------------------------------------------------------
    p.add_argument("input", nargs="?", help="Path to the input PDF file")
    p.add_argument(
        "output",
        nargs="?",
        default=None,
        help="Output audio file (.mp3 or .wav). Default: input name with .mp3.",
    )

    # -- Inspection --------------------------------------------------------
    inspect = p.add_argument_group("inspection")
    inspect.add_argument(
        "--outline",
        action="store_true",
        help="Print the detected contents, chapters and previews, then exit",
    )
    inspect.add_argument(
        "--search",
        default=None,
        metavar="QUERY",
        help="Print every sentence matching QUERY (accent-insensitive), then exit",
    )

    # -- Narration ---------------------------------------------------------
    narration = p.add_argument_group("narration")
    narration.add_argument(
        "--from-page",
        type=int,
        default=1,
        metavar="N",
        help="Start narrating at page N, 1-based (default: 1)",
    )
    narration.add_argument(
        "--voice",
        default="af_heart",
        help="Kokoro voice ID (default: af_heart). Use --list-voices to see all.",
    )
    narration.add_argument(
        "--lang",
        default="a",
        choices=["a", "b"],
        help="Language code: 'a' American English, 'b' British English (default: a)",
    )
    narration.add_argument(
        "--rate",
        type=_positive_float,
        default=0.8,
        metavar="FLOAT",
        help="Speech rate (default: 0.8)",
    )
    narration.add_argument(
        "--list-voices",
        action="store_true",
        help="List available Kokoro voices, then exit",
    )

    # -- Audio -------------------------------------------------------------
    audio = p.add_argument_group("audio")
    audio.add_argument(
        "--output-wav",
        action="store_true",
        help="Export as WAV instead of MP3",
    )
    audio.add_argument(
        "--bitrate",
        default="192k",
        help="MP3 bitrate (default: 192k)",
    )

    # -- Output control ----------------------------------------------------
    out = p.add_argument_group("output control")
    out.add_argument(
        "-v",
        "--verbose",
        type=int,
        choices=[0, 1, 2],
        default=1,
        help="Verbosity: 0=quiet, 1=normal (default), 2=debug",
    )
    out.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable tqdm progress bars",
    )

    return p


# ------------------------------------------------------------------
# Logging setup
# ------------------------------------------------------------------


def _configure_logging(verbosity: int) -> None:
    """
    Set up the ``readalong`` and ``core`` loggers.

    At verbosity 0 (WARNING), uses a minimal format.  At DEBUG, includes
    the time and module name for traceability.
    """
    level = _VERBOSITY_MAP.get(verbosity, logging.INFO)

    if level <= logging.DEBUG:
        fmt = "%(asctime)s %(name)s %(levelname)s: %(message)s"
        datefmt = "%H:%M:%S"
    elif level <= logging.INFO:
        fmt = "%(message)s"
        datefmt = None
    else:
        fmt = "%(levelname)s: %(message)s"
        datefmt = None

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    for name in ("readalong", "core"):
        root = logging.getLogger(name)
        root.setLevel(level)
        root.handlers.clear()
        root.addHandler(handler)

    # Suppress noisy third-party loggers regardless of verbosity
    for name in ("kokoro", "urllib3", "phonemizer"):
        logging.getLogger(name).setLevel(logging.WARNING)


# ------------------------------------------------------------------
# Sub-commands
# ------------------------------------------------------------------


def _cmd_list_voices() -> None:
    """Print available Kokoro voices."""
    from readalong.tts.kokoro_engine import KOKORO_VOICES

    logger.info("Available Kokoro voices (auto-download on first use):")
    logger.info("")
    logger.info("  %-15s %-10s %-8s %s", "ID", "ACCENT", "GENDER", "NAME")
    logger.info("  %-15s %-10s %-8s %s", "-" * 15, "-" * 10, "-" * 8, "-" * 10)
    for voice_id, info in KOKORO_VOICES.items():
        logger.info(
            "  %-15s %-10s %-8s %s",
            voice_id,
            info["accent"],
            info["gender"],
            info["name"],
        )
    logger.info("")
    logger.info("Use --voice ID to select. Default: af_heart")
    logger.info("Use --lang a/b for American/British accent.")


def _cmd_outline(session: ReaderSession) -> None:
    print(session.structure.summary())
    print()
    print(render_outline(build_outline(session.structure)))


def _cmd_search(session: ReaderSession, query: str) -> int:
    results = session.search(query)
    for r in results.results:
        print(f"p.{r.page:<4} {r.sentence}")
    logger.info("%d matches for '%s'", len(results), query)
    return 0 if results else 1


def _cmd_narrate(
    session: ReaderSession,
    args: argparse.Namespace,
    output_path: str,
    disable_tqdm: bool,
) -> int:
    """Narrate from the chosen page to the end and export the audio."""
    if not session.queue_page(args.from_page):
        logger.error(
            "--from-page %d is outside 1..%d", args.from_page, session.total_pages
        )
        return 2

    if session.structure.metadata.language is Language.TURKISH:
        logger.warning("Document looks Turkish; Kokoro voices speak English")

    logger.info("Phase: narration from page %d", args.from_page)
    with tqdm(desc="Narrating", unit="sentence", disable=disable_tqdm) as pbar:
        session.narrator.progress = pbar
        session.play()
        rendered = session.narrator.run_until_idle()

    narrator = session.narrator
    logger.info(
        "Narration complete: %d sentences rendered, %d failed, %.1fs of audio",
        rendered - narrator.failed,
        narrator.failed,
        narrator.total_duration,
    )

    path = narrator.export(output_path, bitrate=args.bitrate)
    if path is None:
        logger.warning("No spoken content was produced")
        return 1
    return 0


# ------------------------------------------------------------------
# Output path resolution
# ------------------------------------------------------------------


def _resolve_output_path(args: argparse.Namespace) -> str:
    if args.output:
        path = args.output
    else:
        ext = ".wav" if args.output_wav else ".mp3"
        path = str(Path(args.input).with_suffix(ext))

    if args.output_wav and not path.lower().endswith(".wav"):
        path = str(Path(path).with_suffix(".wav"))
    return path


# ------------------------------------------------------------------
# Entry point
# ------------------------------------------------------------------


def main(argv: Optional[list] = None) -> int:
    """Parse arguments, configure logging, and run the chosen mode."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    # Logging must be configured before any logger calls
    _configure_logging(args.verbose)
    disable_tqdm = args.no_progress or args.verbose == 0

    if args.list_voices:
        _cmd_list_voices()
        return 0

    if not args.input:
        parser.error("the input PDF is required")
    input_path = Path(args.input)
    if not input_path.exists():
        parser.error(f"Input file not found: {input_path}")
    if input_path.suffix.lower() != ".pdf":
        parser.error(f"Input must be a PDF file: {input_path}")

    inspect_only = args.outline or args.search is not None
    config = ReaderConfig(disable_tqdm=disable_tqdm)

    narrator = None
    if not inspect_only:
        from readalong.tts.kokoro_engine import LANG_CODE_TAGS
        from readalong.tts.render_service import KokoroNarrationService

        config.narration = NarrationSettings(
            selected_voice=args.voice,
            default_language_prefix="en",
            default_language_tag=LANG_CODE_TAGS[args.lang],
            rate=args.rate,
        )
        try:
            narrator = KokoroNarrationService(voice=args.voice, lang_code=args.lang)
        except ImportError as e:
            logger.error("%s", e)
            return 1

    logger.info("readalong")
    logger.info("  Input:  %s", input_path)

    session = ReaderSession(narrator, config)
    try:
        session.load_pdf(str(input_path))
    except RuntimeError as e:
        logger.error("%s", e)
        return 1

    if args.outline:
        _cmd_outline(session)
        return 0
    if args.search is not None:
        return _cmd_search(session, args.search)

    output_path = _resolve_output_path(args)
    logger.info("  Output: %s", output_path)
    logger.info("  Voice:  %s (lang=%s, rate=%.2f)", args.voice, args.lang, args.rate)
    return _cmd_narrate(session, args, output_path, disable_tqdm)


if __name__ == "__main__":
    sys.exit(main())
