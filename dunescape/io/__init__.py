"""Persistence contracts: Parquet schemas and output path conventions."""
