"""Stroke painting and the frame driver."""
