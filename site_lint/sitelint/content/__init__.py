"""Content loading, canonical URLs and schema keys."""
