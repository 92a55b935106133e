"""HTTP service exposing pool operations."""
