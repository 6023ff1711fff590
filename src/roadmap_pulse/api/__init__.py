"""HTTP API for Roadmap Pulse."""
