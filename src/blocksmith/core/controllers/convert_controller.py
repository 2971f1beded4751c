# src/blocksmith/core/controllers/convert_controller.py
from __future__ import annotations

import json
import logging
import os
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd
from pydantic import ValidationError
from tqdm.auto import tqdm

from blocksmith.core.managers.config_manager import config_manager
from blocksmith.core.utils.path_utils import PathUtils
from blocksmith.model import IRDocument, ThemeBundle, summarize
from reconciler.controllers.reconcile_controller import reconcile_class_names
from renderer.template_assembler import render_document
from renderer.theme_files import (
    generate_custom_css,
    generate_functions_php,
    generate_style_css,
    generate_theme_json,
    theme_slug,
)

logger = logging.getLogger(__name__)


def _read_optional(path: Path) -> Optional[str]:
    return path.read_text(encoding="utf-8") if path.is_file() else None


def convert_file_worker(ir_path: str, out_root: str) -> str:
    """
    Worker converting a single IR file in a separate process.
    Returns a JSON summary row; failures are reported in the row, never raised.
    """
    path = Path(ir_path)
    row: Dict[str, Any] = {"source": str(path), "status": "failed"}
    try:
        controller = ConvertController()
        document = controller.load_document(path)
        bundle = controller.convert(
            document,
            raw_html=_read_optional(PathUtils.sibling_with_suffix(path, ".html")),
            css=_read_optional(PathUtils.sibling_with_suffix(path, ".css")),
        )
        theme_dir = controller.write_bundle(bundle, Path(out_root))
        row.update(bundle.summary.model_dump(exclude={"design_tokens"}))
        row.update({"status": "ok", "slug": bundle.slug, "output": str(theme_dir)})
    except (OSError, ValidationError, ValueError) as e:
        logger.error("WORKER ERROR converting %s: %s", path, e, exc_info=True)
        row["error"] = str(e)
    return json.dumps(row, ensure_ascii=False, default=str)


class ConvertController:
    """
    Orchestrates one conversion: reconcile class names, render templates,
    generate the theme support files.
    """

    def __init__(self, *, default_workers: Optional[int] = None) -> None:
        configured = config_manager.get_nested("batch.workers", 0)
        self.default_workers = default_workers or configured or (os.cpu_count() or 4)

    @staticmethod
    def load_document(path: Path) -> IRDocument:
        """Reads an IR JSON file. Raises ValidationError for documents that do not fit the model."""
        return IRDocument.model_validate_json(Path(path).read_text(encoding="utf-8"))

    def convert(
            self,
            document: IRDocument,
            raw_html: Optional[str] = None,
            css: Optional[str] = None,
    ) -> ThemeBundle:
        if config_manager.get_nested("reconciler.enabled", True):
            document = reconcile_class_names(document, raw_html, css)
        else:
            logger.info("Class name reconciliation disabled in settings.")

        templates = render_document(document)
        files = {
            "style.css": generate_style_css(document),
            "theme.json": generate_theme_json(document),
            "functions.php": generate_functions_php(document),
            "assets/css/custom.css": generate_custom_css(css if css is not None else document.custom_css),
            "templates/index.html": templates.index,
        }
        if templates.header is not None:
            files["parts/header.html"] = templates.header
        if templates.footer is not None:
            files["parts/footer.html"] = templates.footer

        slug = theme_slug(document)
        logger.info("Converted '%s' (%d sections) into %d files.", slug, len(document.sections), len(files))
        return ThemeBundle(slug=slug, files=files, summary=summarize(document))

    @staticmethod
    def write_bundle(bundle: ThemeBundle, out_root: Path) -> Path:
        """Writes every bundle file below <out_root>/<slug>/ and returns that directory."""
        theme_dir = PathUtils.get_theme_dir(bundle.slug, Path(out_root))
        for rel_path, content in bundle.files.items():
            target = theme_dir / rel_path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return theme_dir

    def convert_batch(
            self,
            ir_paths: Sequence[Path],
            out_root: Path,
            *,
            workers: Optional[int] = None,
            show_progress: bool = True,
    ) -> Dict[str, Any]:
        """
        Converts many IR files in parallel processes.
        Returns run statistics plus one summary row per document.
        """
        if not ir_paths:
            return self._empty_stats()

        n_workers = int(workers or self.default_workers)
        start = time.perf_counter()
        rows: List[Dict[str, Any]] = []

        with ProcessPoolExecutor(max_workers=n_workers) as pool:
            futures = {pool.submit(convert_file_worker, str(p), str(out_root)): p for p in ir_paths}
            iterator = as_completed(futures)
            if show_progress:
                iterator = tqdm(iterator, total=len(futures), desc="Converting", unit=" doc")

            for fut in iterator:
                source = futures[fut]
                try:
                    rows.append(json.loads(fut.result()))
                except Exception as e:
                    logger.error("Failed to collect result for %s: %s", source, e, exc_info=True)
                    rows.append({"source": str(source), "status": "failed", "error": str(e)})

        rows.sort(key=lambda r: r["source"])
        ok = sum(1 for r in rows if r.get("status") == "ok")
        dur = time.perf_counter() - start
        return {
            "documents_total": len(ir_paths),
            "documents_success": ok,
            "documents_failed": len(rows) - ok,
            "duration_s": round(dur, 3),
            "rows": rows,
        }

    @staticmethod
    def export_summary(rows: List[Dict[str, Any]], path: Path) -> Path:
        """Writes summary rows to CSV."""
        df = pd.DataFrame(rows)
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(path, index=False)
        logger.info("Summary of %d documents written to %s", len(df), path)
        return path

    @staticmethod
    def _empty_stats() -> Dict[str, Any]:
        return {
            "documents_total": 0, "documents_success": 0, "documents_failed": 0,
            "duration_s": 0.0, "rows": [],
        }
