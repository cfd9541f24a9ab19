"""Tabular file input (pandas)."""
