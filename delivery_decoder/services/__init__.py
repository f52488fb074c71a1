"""Batch decoding, export, progress and summary services."""
