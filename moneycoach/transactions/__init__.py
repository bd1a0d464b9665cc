"""Transaction data source (Bubble data API)."""
