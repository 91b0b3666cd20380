"""Site content validation pipeline."""
