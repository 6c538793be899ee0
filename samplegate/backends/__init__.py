"""Bridges between samplegate and dataframe libraries."""
