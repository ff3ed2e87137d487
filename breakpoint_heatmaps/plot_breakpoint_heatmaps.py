# Script to render genome-wide breakpoint heatmaps from binned SV, CNV, and
# SV/CNV-intersection breakpoint counts, with samples grouped by histology.
# Run as `python -m breakpoint_heatmaps.plot_breakpoint_heatmaps` from the
# analysis directory. Requirements: pandas, matplotlib, seaborn, scipy; inputs in `data/`,
# `breakpoint-data/`, and `palettes/`.

from __future__ import annotations

from pathlib import Path
from typing import List

import pandas as pd

from .breakpoints import (
    load_binned_counts,
    load_metadata,
    order_samples_by_histology,
    summarise_breaks,
)
from .heatmaps import plot_breakpoint_heatmap
from .palettes import (
    chromosome_color_key,
    gradient_cmap,
    histology_color_key,
    load_palette,
)


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------
METADATA = Path("data") / "pbta-histologies.tsv"
BREAKPOINT_DIR = Path("breakpoint-data")
PALETTE_DIR = Path("palettes")
HISTOLOGY_PALETTE = PALETTE_DIR / "histology_color_palette.tsv"
BINARY_PALETTE = PALETTE_DIR / "binary_color_palette.tsv"
GRADIENT_PALETTE = PALETTE_DIR / "gradient_color_palette.tsv"
PLOTS_DIR = Path("plots")
RESULTS_DIR = Path("results")
SUMMARY_OUTPUT = RESULTS_DIR / "breaks_per_sample.tsv"

# dataset name -> heatmap title; counts are read from <name>_breaks_binned_counts.tsv
DATASETS = {
    "intersection": "Intersection of SV and CNV Breaks",
    "cnv": "CNV Breaks",
    "sv": "SV Breaks",
}
COLOR_SCALE_MAX = 10.0  # breaks per bin; higher counts saturate
FIGSIZE = (14.0, 8.0)


def counts_path(dataset: str) -> Path:
    return BREAKPOINT_DIR / f"{dataset}_breaks_binned_counts.tsv"


def main() -> None:
    PLOTS_DIR.mkdir(exist_ok=True)
    RESULTS_DIR.mkdir(exist_ok=True)

    metadata = load_metadata(METADATA)
    histology_palette = load_palette(HISTOLOGY_PALETTE)
    binary_palette = load_palette(BINARY_PALETTE)
    cmap = gradient_cmap(load_palette(GRADIENT_PALETTE))

    summaries: List[pd.DataFrame] = []
    for dataset, title in DATASETS.items():
        counts, chromosomes = load_binned_counts(counts_path(dataset))
        sample_histology = order_samples_by_histology(counts.columns, metadata)

        unplotted = metadata.index.difference(sample_histology.index)
        if len(unplotted):
            print(f"{len(unplotted)} metadata samples have no {dataset} counts.")

        plot_breakpoint_heatmap(
            counts,
            chromosomes,
            sample_histology,
            histology_color_key(sample_histology, histology_palette),
            chromosome_color_key(chromosomes, binary_palette),
            cmap,
            PLOTS_DIR / f"{dataset}_breaks_heatmap.pdf",
            title,
            vmax=COLOR_SCALE_MAX,
            figsize=FIGSIZE,
        )

        summary = summarise_breaks(counts, sample_histology)
        summary.insert(0, "dataset", dataset)
        summaries.append(summary)

    combined = pd.concat(summaries, ignore_index=True)
    combined.to_csv(SUMMARY_OUTPUT, sep="\t", index=False)
    print(f"Wrote per-sample break summary for {len(DATASETS)} datasets to {SUMMARY_OUTPUT}")


if __name__ == "__main__":
    main()
