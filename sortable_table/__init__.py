"""In-memory sort/filter/paint engine for sortable HTML tables."""

__version__ = "0.3.0"
