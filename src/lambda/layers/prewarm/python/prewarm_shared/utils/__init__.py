"""Utility helpers exposed via the prewarm layer."""
