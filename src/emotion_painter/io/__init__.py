"""Camera and expression detector adapters."""
