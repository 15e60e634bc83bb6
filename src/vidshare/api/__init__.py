"""HTTP API for the video platform."""
