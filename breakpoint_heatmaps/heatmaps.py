# Assemble binned breakpoint counts into a samples x bins matrix and render it
# as an annotated heatmap: histology colors down the rows, alternating
# chromosome colors across the columns, and a numeric gradient for the cells.

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Tuple

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns
from matplotlib.colors import Colormap
from matplotlib.patches import Patch

from .palettes import HISTOLOGY_NA


DEFAULT_FIGSIZE = (14.0, 8.0)
DEFAULT_VMAX = 10.0


def build_heatmap_matrix(
    counts: pd.DataFrame,
    chromosomes: pd.Series,
    sample_histology: pd.Series,
) -> Tuple[pd.DataFrame, pd.Series]:
    """Transpose bins x samples counts into samples x bins, rows in histology order.

    ``sample_histology`` is indexed by sample in the order rows should appear
    (see ``order_samples_by_histology``). The returned chromosome labels are
    indexed by the matrix columns.
    """
    if len(chromosomes) != len(counts):
        raise ValueError(f"Got {len(chromosomes)} chromosome labels for {len(counts)} bins.")

    matrix = counts.loc[:, list(sample_histology.index)].T
    matrix.index.name = "sample"
    col_chromosomes = pd.Series(chromosomes.to_numpy(), index=matrix.columns, name="chromosome")
    return matrix, col_chromosomes


def chromosome_blocks(col_chromosomes: pd.Series) -> List[Tuple[str, int, int]]:
    blocks: List[Tuple[str, int, int]] = []
    labels = col_chromosomes.to_numpy()
    start = 0
    for idx in range(1, len(labels) + 1):
        if idx == len(labels) or labels[idx] != labels[start]:
            blocks.append((str(labels[start]), start, idx))
            start = idx
    return blocks


def plot_breakpoint_heatmap(
    counts: pd.DataFrame,
    chromosomes: pd.Series,
    sample_histology: pd.Series,
    histology_colors: pd.Series,
    chromosome_colors: pd.Series,
    cmap: Colormap,
    output_path: Path,
    title: str,
    value_label: str = "Breaks",
    vmax: float = DEFAULT_VMAX,
    figsize: Tuple[float, float] = DEFAULT_FIGSIZE,
) -> Optional[sns.matrix.ClusterGrid]:
    matrix, col_chromosomes = build_heatmap_matrix(counts, chromosomes, sample_histology)
    if matrix.empty:
        print(f"Skipping {title.lower()}; no data to plot.")
        return None

    row_labels = sample_histology.fillna(HISTOLOGY_NA)
    row_colors = row_labels.map(histology_colors).rename("Histology")
    col_colors = col_chromosomes.map(chromosome_colors).rename("Chromosome")

    grid = sns.clustermap(
        matrix,
        row_cluster=False,
        col_cluster=False,
        row_colors=row_colors,
        col_colors=col_colors,
        cmap=cmap,
        vmin=0,
        vmax=vmax,
        xticklabels=False,
        yticklabels=False,
        figsize=figsize,
        dendrogram_ratio=(0.04, 0.06),
        colors_ratio=0.02,
        cbar_pos=(0.01, 0.75, 0.015, 0.15),
        cbar_kws={"label": value_label},
    )

    ax = grid.ax_heatmap
    blocks = chromosome_blocks(col_chromosomes)
    ax.set_xticks([(start + end) / 2 for _, start, end in blocks])
    ax.set_xticklabels([chrom for chrom, _, _ in blocks], rotation=90, ha="center", fontsize=7)
    ax.tick_params(axis="x", length=0)
    for _, start, _ in blocks[1:]:
        ax.axvline(start, color="lightgray", linestyle="--", linewidth=0.4)
    ax.set_xlabel("Genomic bin", fontweight="bold")
    ax.set_ylabel(f"Samples (n = {matrix.shape[0]})", fontweight="bold")

    present = list(dict.fromkeys(row_labels))
    legend_elements = [
        Patch(facecolor=histology_colors[label], edgecolor="black", label=label) for label in present
    ]
    ax.legend(
        handles=legend_elements,
        bbox_to_anchor=(1.01, 1),
        loc="upper left",
        title="Histology",
        fontsize=7,
        title_fontsize=8,
    )

    grid.figure.suptitle(title, fontsize=14, fontweight="bold")
    grid.savefig(output_path, bbox_inches="tight")
    plt.close(grid.figure)
    print(f"Wrote heatmap to {output_path}")
    return grid
