"""JSON-LD structured data rendering."""
