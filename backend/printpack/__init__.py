"""Batch-convert images into print-ratio formats packaged as one zip."""
