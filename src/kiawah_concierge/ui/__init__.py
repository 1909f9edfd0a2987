"""Developer-facing terminal views."""
