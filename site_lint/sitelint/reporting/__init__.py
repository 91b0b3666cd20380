"""Console and JSON reporters."""
