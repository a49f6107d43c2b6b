#!/usr/bin/env python3
"""
scripts/compile_slide.py — Compile .sil documents and render them.

Each input file becomes one slide of the output deck.

Usage:
    python scripts/compile_slide.py slides/intro.sil slides/agenda.sil

Options:
    --output-dir DIR   Where to write the .pptx (default: ./output)
    --title TITLE      Deck title / file name (default: "Untitled Slides")
    --dump             Print each slide's layers as JSON
    --no-render        Skip writing the .pptx
    --hide-garbage     Do not draw unparsable input on the slides
    --watch            Keep running; recompile and re-render on change
    --interval SECS    Poll interval for --watch (default: 0.5)
    --verbose          Show debug logging
"""

import argparse
import logging
import sys
import time
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sil.renderer.pptx_renderer import render  # noqa: E402
from sil.services.pipeline import PipelineConfig, SlideRecompiler  # noqa: E402
from sil.slide.layers import SlideLayers  # noqa: E402

logger = logging.getLogger("compile_slide")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description="Compile .sil slide documents.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    ap.add_argument("files", nargs="+", help=".sil files, one per slide")
    ap.add_argument("--output-dir", default="./output", help="Output directory (default: ./output)")
    ap.add_argument("--title", default="Untitled Slides", help="Deck title")
    ap.add_argument("--dump", action="store_true", help="Print layers as JSON")
    ap.add_argument("--no-render", action="store_true", help="Do not write a .pptx")
    ap.add_argument("--hide-garbage", action="store_true", help="Hide unparsable input")
    ap.add_argument("--watch", action="store_true", help="Recompile when files change")
    ap.add_argument("--interval", type=float, default=0.5, help="Watch poll interval (seconds)")
    ap.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return ap


def compile_all(
    paths: list[Path],
    recompilers: dict[Path, SlideRecompiler],
    config: PipelineConfig,
    dump: bool,
    render_deck: bool,
) -> bool:
    """Feed every file through its recompiler. Returns True if anything changed."""
    changed = False
    for path in paths:
        recompiler = recompilers[path]
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as e:
            logger.warning("Could not read %s: %s", path, e)
            continue
        if not recompiler.is_dirty(content):
            continue
        changed = True
        recompiler.update(content)

        compiled = recompiler.compiled
        print(f"{path}: {len(compiled.layers)} layers, {compiled.diagnostic_count} diagnostics")
        if dump:
            print(SlideLayers(layers=compiled.layers).model_dump_json(indent=2))

    if changed and render_deck:
        render(
            [recompilers[p].layers for p in paths],
            Path(config.output_dir),
            title=config.deck_title,
            show_garbage=config.show_garbage,
        )
    return changed


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    paths = [Path(f) for f in args.files]
    missing = [p for p in paths if not p.is_file()]
    if missing:
        for p in missing:
            print(f"ERROR: no such file: {p}", file=sys.stderr)
        return 1

    config = PipelineConfig(
        output_dir=args.output_dir,
        show_garbage=not args.hide_garbage,
        deck_title=args.title,
    )
    recompilers = {p: SlideRecompiler(config) for p in paths}

    compile_all(paths, recompilers, config, args.dump, not args.no_render)
    if not args.watch:
        return 0

    logger.info("Watching %d file(s), Ctrl-C to stop", len(paths))
    try:
        while True:
            time.sleep(args.interval)
            compile_all(paths, recompilers, config, args.dump, not args.no_render)
    except KeyboardInterrupt:
        return 0


if __name__ == "__main__":
    sys.exit(main())
