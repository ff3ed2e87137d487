"""Genome-wide breakpoint heatmaps from binned SV/CNV counts."""
