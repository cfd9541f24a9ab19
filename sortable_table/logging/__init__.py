"""Logging setup for the sortable table tools."""
