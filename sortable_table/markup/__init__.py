"""HTML presentation adapter for sortable tables (BeautifulSoup)."""
