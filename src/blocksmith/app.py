# src/blocksmith/app.py
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from blocksmith.core.controllers.convert_controller import ConvertController
from blocksmith.core.managers.config_manager import config_manager
from blocksmith.core.services.json_service import to_json
from blocksmith.core.utils.configure_logging import configure_logger
from blocksmith.core.utils.path_utils import PathUtils
from blocksmith.model import summarize

logger = logging.getLogger(__name__)


def _read_text(path: Optional[str]) -> Optional[str]:
    return Path(path).read_text(encoding="utf-8") if path else None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blocksmith",
        description="Convert page IR documents into block theme files.",
    )
    parser.add_argument("--log-level", default=None, help="Override debug.level from settings.json.")
    subs = parser.add_subparsers(dest="command", help="Sub-command help")

    p_convert = subs.add_parser("convert", help="Convert a single IR document.")
    p_convert.add_argument("ir", help="Path to the IR JSON document.")
    p_convert.add_argument("--html", help="Original markup, used to recover class names.")
    p_convert.add_argument("--css", help="Extracted stylesheet (defaults to the IR's customCSS).")
    p_convert.add_argument("-o", "--out", default=None,
                           help="Output root directory (default: ./blocksmith_output).")
    p_convert.add_argument("--no-reconcile", action="store_true", help="Skip class name recovery.")

    p_batch = subs.add_parser("batch", help="Convert every *.json IR document in a directory.")
    p_batch.add_argument("directory", help="Directory containing IR JSON files (+ optional .html/.css siblings).")
    p_batch.add_argument("-o", "--out", default=None, help="Output root directory.")
    p_batch.add_argument("--workers", type=int, default=None, help="Number of parallel processes.")
    p_batch.add_argument("--summary", default=None, help="Write a CSV summary to this path.")
    p_batch.add_argument("--no-progress", action="store_true", help="Hide the progress bar.")

    p_summary = subs.add_parser("summary", help="Print the analysis summary of an IR document.")
    p_summary.add_argument("ir", help="Path to the IR JSON document.")

    return parser


def _run_convert(pargs: argparse.Namespace, controller: ConvertController) -> int:
    if pargs.no_reconcile:
        config_manager.set_nested("reconciler.enabled", False)

    document = controller.load_document(Path(pargs.ir))
    bundle = controller.convert(document, raw_html=_read_text(pargs.html), css=_read_text(pargs.css))
    out_root = Path(pargs.out) if pargs.out else PathUtils.get_default_output_root()
    theme_dir = controller.write_bundle(bundle, out_root)

    print(f"Theme '{bundle.slug}' written to {theme_dir} ({len(bundle.files)} files).")
    return 0


def _run_batch(pargs: argparse.Namespace, controller: ConvertController) -> int:
    directory = Path(pargs.directory)
    if not directory.is_dir():
        print(f"Not a directory: {directory}")
        return 1

    ir_paths = sorted(directory.glob("*.json"))
    if not ir_paths:
        print(f"No IR documents found in {directory}.")
        return 0

    out_root = Path(pargs.out) if pargs.out else PathUtils.get_default_output_root()
    stats = controller.convert_batch(
        ir_paths, out_root, workers=pargs.workers, show_progress=not pargs.no_progress
    )
    if pargs.summary:
        controller.export_summary(stats["rows"], Path(pargs.summary))

    print(
        f"Converted {stats['documents_success']}/{stats['documents_total']} documents "
        f"in {stats['duration_s']}s ({stats['documents_failed']} failed)."
    )
    return 0 if stats["documents_failed"] == 0 else 1


def _run_summary(pargs: argparse.Namespace, controller: ConvertController) -> int:
    document = controller.load_document(Path(pargs.ir))
    print(to_json(summarize(document).model_dump(by_alias=True)))
    return 0


COMMANDS = {
    "convert": _run_convert,
    "batch": _run_batch,
    "summary": _run_summary,
}


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    pargs = parser.parse_args(argv)

    configure_logger(
        pargs.log_level or config_manager.get_nested("debug.level", "WARNING"),
        module_specific_levels=config_manager.get_nested("debug.module_levels", {}),
        silenced_loggers=config_manager.get_nested("debug.silenced", {}),
    )

    if not pargs.command:
        parser.print_help()
        return 0

    try:
        return COMMANDS[pargs.command](pargs, ConvertController())
    except ValidationError as e:
        logger.error("IR document does not match the expected schema: %s", e)
        print(f"Invalid IR document: {e.error_count()} validation error(s).")
        return 1
    except OSError as e:
        logger.error("File error: %s", e, exc_info=True)
        print(f"File error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
