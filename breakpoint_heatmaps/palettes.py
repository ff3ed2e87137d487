# Palette helpers for the breakpoint heatmaps: read the two-column color
# palette tables and turn them into histology/chromosome color keys and the
# numeric gradient used for the heatmap cells.

from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, Iterable, List, Tuple

import pandas as pd
from matplotlib.colors import LinearSegmentedColormap


NAME_COLUMN = "color_names"
HEX_COLUMN = "hex_codes"
HISTOLOGY_NA = "na"
CHROM_COLOR_SLOTS = ("binary_1", "binary_2")
GRADIENT_RE = re.compile(r"^gradient_(\d+)$")


def load_palette(path: Path) -> Dict[str, str]:
    if not path.exists():
        raise FileNotFoundError(f"Required palette {path} not found.")

    df = pd.read_csv(path, sep="\t", dtype=str, keep_default_na=False)
    missing = [col for col in (NAME_COLUMN, HEX_COLUMN) if col not in df.columns]
    if missing:
        raise ValueError(f"Palette {path} is missing columns: {', '.join(missing)}")

    duplicated = df.loc[df[NAME_COLUMN].duplicated(), NAME_COLUMN].unique()
    if len(duplicated):
        raise ValueError(f"Palette {path} has duplicated labels: {', '.join(duplicated)}")

    palette = dict(zip(df[NAME_COLUMN], df[HEX_COLUMN]))
    print(f"Loaded {len(palette)} colors from {path}")
    return palette


def histology_color_key(histologies: Iterable[object], palette: Dict[str, str]) -> pd.Series:
    """Map each histology present to its palette color.

    Missing histologies are keyed as ``"na"``. The returned key is one-to-one:
    an unknown label or two labels sharing a color raise ``ValueError``.
    """
    labels = pd.Series(list(histologies), dtype=object).fillna(HISTOLOGY_NA)
    present = list(dict.fromkeys(labels))

    unknown = [label for label in present if label not in palette]
    if unknown:
        raise ValueError(f"Histologies without a palette color: {', '.join(map(str, unknown))}")

    key = pd.Series({label: palette[label] for label in present}, dtype=object, name="histology_color")
    shared = key[key.str.lower().duplicated(keep=False)]
    if not shared.empty:
        raise ValueError(f"Histologies share colors: {', '.join(f'{k}={v}' for k, v in shared.items())}")
    return key


def chromosome_color_key(chromosomes: Iterable[str], palette: Dict[str, str]) -> pd.Series:
    missing = [slot for slot in CHROM_COLOR_SLOTS if slot not in palette]
    if missing:
        raise ValueError(f"Binary palette is missing: {', '.join(missing)}")

    order = list(dict.fromkeys(chromosomes))
    colors = [palette[CHROM_COLOR_SLOTS[i % len(CHROM_COLOR_SLOTS)]] for i in range(len(order))]
    return pd.Series(colors, index=order, dtype=object, name="chromosome_color")


def gradient_cmap(palette: Dict[str, str], name: str = "breaks_gradient") -> LinearSegmentedColormap:
    steps: List[Tuple[int, str]] = []
    for label, color in palette.items():
        match = GRADIENT_RE.match(label)
        if match:
            steps.append((int(match.group(1)), color))
    steps.sort()
    if len(steps) < 2:
        raise ValueError("Gradient palette needs at least two gradient_<n> colors.")

    cmap = LinearSegmentedColormap.from_list(name, [color for _, color in steps])
    if "na_color" in palette:
        cmap = cmap.with_extremes(bad=palette["na_color"])
    return cmap
