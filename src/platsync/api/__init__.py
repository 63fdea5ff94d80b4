"""HTTP clients for the management API and the per-project data-plane API."""
