"""site_harvest.crawler: frontier, transport, link extraction and data models."""
