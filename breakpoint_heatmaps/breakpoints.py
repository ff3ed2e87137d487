# Loaders for the histology metadata and the binned breakpoint count tables,
# plus the sample/histology join used to order heatmap rows.

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Tuple

import pandas as pd


ID_COLUMN = "Kids_First_Biospecimen_ID"
HISTOLOGY_COLUMN = "short_histology"
CHROM_COLUMN = "chrom"


def load_metadata(path: Path) -> pd.DataFrame:
    if not path.exists():
        raise FileNotFoundError(f"Required metadata table {path} not found.")

    df = pd.read_csv(path, sep="\t", dtype=str)
    missing = [col for col in (ID_COLUMN, HISTOLOGY_COLUMN) if col not in df.columns]
    if missing:
        raise ValueError(f"Metadata {path} is missing columns: {', '.join(missing)}")

    df = df[[ID_COLUMN, HISTOLOGY_COLUMN]]
    blank = df[ID_COLUMN].isna()
    if blank.any():
        rows = ", ".join(str(idx + 2) for idx in df.index[blank])
        raise ValueError(f"Metadata {path} has blank biospecimen IDs on lines: {rows}")

    duplicated = df.loc[df[ID_COLUMN].duplicated(), ID_COLUMN].unique()
    if len(duplicated):
        raise ValueError(f"Metadata {path} has duplicated biospecimen IDs: {', '.join(map(str, duplicated))}")

    print(f"Loaded metadata for {len(df)} biospecimens from {path}")
    return df.set_index(ID_COLUMN)


def load_binned_counts(path: Path) -> Tuple[pd.DataFrame, pd.Series]:
    """Read a binned breakpoint count table.

    Returns the counts (bins as rows, samples as columns, float with NaN for
    NA) and the chromosome label of every bin, both on a shared RangeIndex
    in file order.
    """
    if not path.exists():
        raise FileNotFoundError(f"Required binned count table {path} not found.")

    df = pd.read_csv(path, sep="\t")
    if CHROM_COLUMN not in df.columns:
        raise ValueError(f"Binned count table {path} has no '{CHROM_COLUMN}' column.")

    df = df.reset_index(drop=True)
    chromosomes = df[CHROM_COLUMN].astype(str).rename(CHROM_COLUMN)
    counts = df.drop(columns=CHROM_COLUMN).apply(pd.to_numeric, errors="raise").astype(float)
    counts.columns = counts.columns.astype(str)
    print(f"Loaded {counts.shape[0]} bins for {counts.shape[1]} samples from {path}")
    return counts, chromosomes


def order_samples_by_histology(samples: Iterable[str], metadata: pd.DataFrame) -> pd.Series:
    samples = list(samples)
    unknown = [sample for sample in samples if sample not in metadata.index]
    if unknown:
        raise ValueError(
            f"{len(unknown)} samples are missing from the metadata: {', '.join(sorted(unknown))}"
        )

    histology = metadata.loc[samples, HISTOLOGY_COLUMN]
    ordered = (
        histology.rename_axis("sample")
        .reset_index()
        .sort_values([HISTOLOGY_COLUMN, "sample"], na_position="last", kind="mergesort")
    )
    return pd.Series(
        ordered[HISTOLOGY_COLUMN].to_numpy(),
        index=pd.Index(ordered["sample"], name="sample"),
        name=HISTOLOGY_COLUMN,
        dtype=object,
    )


def summarise_breaks(counts: pd.DataFrame, sample_histology: pd.Series) -> pd.DataFrame:
    samples = list(sample_histology.index)
    ordered = counts[samples]
    summary = pd.DataFrame(
        {
            "histology": sample_histology.to_numpy(),
            "total_breaks": ordered.sum(axis=0, skipna=True).to_numpy(),
            "mean_breaks_per_bin": ordered.mean(axis=0, skipna=True).to_numpy(),
            "na_bins": ordered.isna().sum(axis=0).astype(int).to_numpy(),
        },
        index=pd.Index(samples, name="sample"),
    )

    all_na = summary.index[summary["na_bins"] == len(counts)]
    if len(all_na):
        print(f"Warning: samples with no counted bins: {', '.join(all_na)}")
    return summary.reset_index()
