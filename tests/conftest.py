from pathlib import Path

import pytest


METADATA_TSV = """Kids_First_Biospecimen_ID\tsample_id\tshort_histology
S1\tP-01\tHGAT
S2\tP-02\tMedulloblastoma
S3\tP-03\tHGAT
S4\tP-04\tNA
S5\tP-05\tEpendymoma
"""

COUNTS_TSV = """chrom\tS3\tS1\tS2\tS4
chr1\t1\t0\t2\tNA
chr1\t3\t1\t0\tNA
chr1\t0\t0\t5\tNA
chr2\t2\t4\tNA\tNA
chr2\t0\t1\t1\tNA
chr3\t7\t0\t0\tNA
"""

HISTOLOGY_PALETTE_TSV = """color_names\thex_codes
HGAT\t#ff0000
Medulloblastoma\t#00ff00
Ependymoma\t#0000ff
na\t#f1f1f1
"""

BINARY_PALETTE_TSV = """color_names\thex_codes
binary_1\t#313695
binary_2\t#c6dbef
na_color\t#f1f1f1
"""

GRADIENT_PALETTE_TSV = """color_names\thex_codes
gradient_0\t#ffffff
gradient_1\t#c6dbef
gradient_2\t#6baed6
gradient_3\t#08306b
na_color\t#f1f1f1
"""


@pytest.fixture
def analysis_dir(tmp_path: Path) -> Path:
    """
    A small analysis directory laid out the way `plot_breakpoint_heatmaps`
    expects: metadata, one count table per dataset, and the three palettes.
    S5 has metadata but no counts; S4 has counts that are all NA.
    """
    (tmp_path / "data").mkdir()
    (tmp_path / "data" / "pbta-histologies.tsv").write_text(METADATA_TSV)

    (tmp_path / "breakpoint-data").mkdir()
    for dataset in ("intersection", "cnv", "sv"):
        (tmp_path / "breakpoint-data" / f"{dataset}_breaks_binned_counts.tsv").write_text(COUNTS_TSV)

    (tmp_path / "palettes").mkdir()
    (tmp_path / "palettes" / "histology_color_palette.tsv").write_text(HISTOLOGY_PALETTE_TSV)
    (tmp_path / "palettes" / "binary_color_palette.tsv").write_text(BINARY_PALETTE_TSV)
    (tmp_path / "palettes" / "gradient_color_palette.tsv").write_text(GRADIENT_PALETTE_TSV)
    return tmp_path


@pytest.fixture
def metadata_path(analysis_dir: Path) -> Path:
    return analysis_dir / "data" / "pbta-histologies.tsv"


@pytest.fixture
def counts_file(analysis_dir: Path) -> Path:
    return analysis_dir / "breakpoint-data" / "cnv_breaks_binned_counts.tsv"


@pytest.fixture
def palette_dir(analysis_dir: Path) -> Path:
    return analysis_dir / "palettes"
