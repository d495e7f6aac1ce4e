"""Team-level outcome and trend metrics."""
