"""HTTP API package — FastAPI routes over the digest pipeline."""
