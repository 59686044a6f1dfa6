from __future__ import annotations

"""
quakedash report generator
--------------------------
This module renders the dashboard views into a DOCX report.

Layout (top to bottom):
- value boxes: total earthquakes, strongest magnitude, strong-or-worse count,
  average focal depth ("No data" where a statistic is undefined)
- map: the spatial sample plotted as longitude/latitude, coloured by category
- distributions: magnitude histogram, depth histogram, category counts
- tables: top-N strongest earthquakes, per-category statistics, a preview of
  the first cleaned records

Design goals:
- The report only *reads* views; every number comes from `QuakeEngine`.
- Keep quakedash usable without the report dependencies (lazy imports).
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple
import os
import tempfile
import math

from .engine import DashboardViews, QuakeEngine
from .errors import EmptyDatasetError
from .models import Category, Quake

NO_DATA = "No data"

# Category colours, weakest to strongest
CATEGORY_COLORS = {
    Category.MINOR: "#2E86AB",
    Category.MODERATE: "#F6AE2D",
    Category.STRONG: "#F26419",
    Category.MAJOR: "#C0392B",
}


# -----------------------------
# Configuration types
# -----------------------------

@dataclass
class DataSource:
    """Where the data came from, printed in the report."""
    description: str = "Earthquake catalogue snapshot (CSV)"
    file_name: Optional[str] = None
    file_note: Optional[str] = "Rows missing latitude, longitude or magnitude are excluded."


@dataclass
class ReportConfig:
    """High-level knobs to control how the report is written."""
    title: str = "Earthquake Dashboard"
    subtitle: str = "Magnitude, depth and location summary"
    dataset_name: str = "Earthquake CSV snapshot"
    source: DataSource = field(default_factory=DataSource)

    # Marker size on the map is scaled by magnitude
    map_marker_base: float = 4.0
    map_marker_per_magnitude: float = 6.0

    # How many cleaned records to show in the preview table
    max_rows_preview: int = 10


# -----------------------------
# Formatting helpers
# -----------------------------

def format_count(n: int) -> str:
    """Value-box format for a record count: 1234 -> '1.2K', 999 -> '999'."""
    if n >= 1000:
        return f"{n / 1000:.1f}K"
    return f"{n:,}"


def _fmt(v: Optional[float], decimals: int = 1) -> str:
    if v is None:
        return NO_DATA
    return f"{v:.{decimals}f}"


def _cell(v: Optional[float], decimals: int = 1) -> str:
    return "" if v is None else f"{v:.{decimals}f}"


def _safe_floats(values: Sequence[Optional[float]]) -> List[float]:
    """Drop Nones and NaN/inf."""
    return [float(v) for v in values if v is not None and math.isfinite(v)]


def _choose_bins(n: int) -> int:
    """Simple bin heuristic (keeps charts readable for small samples)."""
    if n <= 20:
        return 10
    if n <= 100:
        return 15
    return 30


# -----------------------------
# Main entry point used by CLI
# -----------------------------

def generate_docx_report(
    engine: QuakeEngine,
    out_path: str,
    *,
    views: Optional[DashboardViews] = None,
    config: Optional[ReportConfig] = None,
) -> str:
    """
    Render the dashboard views of `engine` into a DOCX file at `out_path`.

    `views` may be passed in when they were already built (the CLI builds
    them once and reuses them for every output).
    """
    config = config or ReportConfig()

    # Lazy imports: only required when a report is written.
    try:
        from docx import Document
        from docx.shared import Pt, Inches
        from docx.enum.text import WD_ALIGN_PARAGRAPH
    except ImportError as e:
        raise ImportError(
            "Missing dependency: python-docx.\n"
            "Install it with: python -m pip install python-docx"
        ) from e

    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        import numpy as np
    except ImportError as e:
        raise ImportError(
            "Missing dependency: matplotlib (and numpy).\n"
            "Install with: python -m pip install matplotlib numpy"
        ) from e

    quakes = engine.quakes
    if not quakes:
        raise EmptyDatasetError("No earthquakes to report on (cleaned record set is empty).")

    views = views or engine.build()
    summary = views.summary

    # -----------------------------
    # 1) Charts
    # -----------------------------
    with tempfile.TemporaryDirectory(prefix="quakedash_report_") as tmpdir:
        # Each chart is: (title, file_path, caption)
        chart_paths: List[Tuple[str, str, str]] = []

        def _save(filename: str) -> str:
            path = os.path.join(tmpdir, filename)
            plt.tight_layout()
            plt.savefig(path, dpi=200)
            plt.close()
            return path

        def _map(title: str, sample: Sequence[Quake], filename: str) -> None:
            plt.figure(figsize=(10, 5))
            for cat in Category:
                pts = [q for q in sample if q.category is cat]
                if not pts:
                    continue
                plt.scatter(
                    [q.longitude for q in pts],
                    [q.latitude for q in pts],
                    s=[config.map_marker_base + config.map_marker_per_magnitude * max(q.magnitude - 4.0, 0.0) for q in pts],
                    c=CATEGORY_COLORS[cat],
                    alpha=0.6,
                    edgecolors="black",
                    linewidths=0.3,
                    label=cat.value,
                )
            plt.xlim(-180, 180)
            plt.ylim(-90, 90)
            plt.grid(True, linewidth=0.3)
            plt.xlabel("Longitude")
            plt.ylabel("Latitude")
            plt.title(title)
            plt.legend(title="Category", loc="lower left")
            chart_paths.append((
                title,
                _save(filename),
                f"Random sample of up to {views.config.sample_size} earthquakes with magnitude "
                f">= {views.config.sample_floor} (seed {views.config.sample_seed}). Marker size grows with magnitude."
            ))

        def _hist(title: str, data: List[float], xlabel: str, caption: str, filename: str) -> None:
            if not data:
                return
            plt.figure()
            plt.hist(np.array(data), bins=_choose_bins(len(data)), edgecolor="black", linewidth=0.8)
            plt.title(title)
            plt.xlabel(xlabel)
            plt.ylabel("Count")
            chart_paths.append((title, _save(filename), caption))

        def _bar(title: str, labels: List[str], values: List[int], colors: List[str], caption: str, filename: str) -> None:
            plt.figure()
            plt.bar(labels, values, color=colors, edgecolor="black", linewidth=0.8)
            plt.title(title)
            plt.ylabel("Count")
            chart_paths.append((title, _save(filename), caption))

        if views.spatial_sample:
            _map("Earthquake locations", views.spatial_sample, "map.png")

        _hist(
            "Magnitude distribution",
            _safe_floats([q.magnitude for q in quakes]),
            "Magnitude (Richter)",
            "All cleaned records.",
            "hist_magnitude.png",
        )
        _hist(
            "Focal depth distribution",
            _safe_floats([q.focal_depth for q in quakes]),
            "Focal depth (km)",
            "Records with a recorded focal depth.",
            "hist_depth.png",
        )

        counts = views.category_counts
        _bar(
            "Earthquakes by magnitude category",
            [c.value for c in Category],
            [counts.get(c, 0) for c in Category],
            [CATEGORY_COLORS[c] for c in Category],
            "Minor < 5.0 <= Moderate < 6.0 <= Strong < 7.0 <= Major.",
            "bar_categories.png",
        )

        # -----------------------------
        # 2) Build DOCX report
        # -----------------------------
        doc = Document()

        style = doc.styles["Normal"]
        style.font.name = "Calibri"
        style.font.size = Pt(11)

        def _center_title(text: str, size: int, bold: bool = False, italic: bool = False) -> None:
            p = doc.add_paragraph()
            r = p.add_run(text)
            r.bold = bold
            r.italic = italic
            r.font.size = Pt(size)
            p.alignment = WD_ALIGN_PARAGRAPH.CENTER

        def _kv(key: str, value: str) -> None:
            p = doc.add_paragraph()
            r = p.add_run(f"{key}: ")
            r.bold = True
            p.add_run(value)

        def _table(headers: List[str], rows: List[List[str]]) -> None:
            t = doc.add_table(rows=1, cols=len(headers))
            t.style = "Table Grid"
            for cell, text in zip(t.rows[0].cells, headers):
                cell.text = text
            for values in rows:
                cells = t.add_row().cells
                for cell, text in zip(cells, values):
                    cell.text = text

        _center_title(config.title, 22, bold=True)
        _center_title(config.subtitle, 12, italic=True)

        doc.add_paragraph("")
        _kv("Dataset", config.dataset_name)
        src = config.source
        if src.file_name:
            _kv("Data file", src.file_name)
        if src.file_note:
            _kv("Note", src.file_note)

        # Value boxes
        doc.add_heading("At a glance", level=1)
        _table(
            ["Total earthquakes", "Strongest magnitude", f"Magnitude {views.config.strong_threshold:g}+", "Average depth (km)"],
            [[
                format_count(summary.total_count),
                _fmt(summary.max_magnitude, 1),
                f"{summary.strong_count:,}",
                _fmt(summary.avg_depth, 1),
            ]],
        )

        # Charts
        doc.add_paragraph("")
        doc.add_heading("Maps and distributions", level=1)
        for title, path, caption in chart_paths:
            doc.add_paragraph(title)
            doc.add_picture(path, width=Inches(6.5))
            doc.add_paragraph(caption)
            doc.add_paragraph("")

        # Ranked table
        doc.add_heading(f"Strongest earthquakes (magnitude >= {views.config.top_floor:g})", level=1)
        if views.top_ranked:
            _table(
                ["#", "Latitude", "Longitude", "Magnitude", "Focal depth (km)"],
                [
                    [str(i), f"{q.latitude:.3f}", f"{q.longitude:.3f}", f"{q.magnitude:.1f}", _cell(q.focal_depth, 1)]
                    for i, q in enumerate(views.top_ranked, start=1)
                ],
            )
        else:
            doc.add_paragraph(NO_DATA)

        # Per-category table
        doc.add_paragraph("")
        doc.add_heading("Statistics by magnitude category", level=1)
        _table(
            ["Category", "Count", "Mean magnitude", "Max magnitude", "Mean depth (km)", "Max depth (km)"],
            [
                [
                    s.category.value,
                    f"{s.count:,}",
                    f"{s.mean_magnitude:.2f}",
                    f"{s.max_magnitude:.2f}",
                    _cell(s.mean_depth, 1),
                    _cell(s.max_depth, 1),
                ]
                for s in views.category_stats
            ],
        )

        # Preview of cleaned rows
        doc.add_paragraph("")
        doc.add_heading("Preview of first few records", level=1)
        _table(
            ["Row", "Latitude", "Longitude", "Magnitude", "Focal depth (km)", "Category"],
            [
                [str(q.row_id), f"{q.latitude:.3f}", f"{q.longitude:.3f}", f"{q.magnitude:.1f}",
                 _cell(q.focal_depth, 1), q.category.value]
                for q in quakes[:config.max_rows_preview]
            ],
        )

        # -----------------------------
        # Reproducibility footer
        # -----------------------------
        doc.add_paragraph("")
        doc.add_heading("Reproducibility footer", level=1)

        from . import __version__
        from datetime import datetime as _dt
        generated_at = _dt.now().isoformat(timespec="seconds")

        doc.add_paragraph(f"quakedash version: {__version__}")
        doc.add_paragraph(f"Report generated at: {generated_at}")
        doc.add_paragraph(f"Records after cleaning: {summary.total_count}")
        doc.add_paragraph(f"Map sample seed: {views.config.sample_seed}")
        if src.file_name:
            doc.add_paragraph(f"Dataset file: {src.file_name}")

        os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
        doc.save(out_path)
    return out_path
