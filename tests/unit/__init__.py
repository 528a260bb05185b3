"""Unit tests: validator, strategies, orchestrator, and response shape."""
