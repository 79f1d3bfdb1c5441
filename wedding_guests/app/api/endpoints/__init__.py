"""Per-domain routers."""
