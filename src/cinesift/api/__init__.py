"""HTTP API — FastAPI application exposing movie search."""
