"""NAS API endpoint functions."""
