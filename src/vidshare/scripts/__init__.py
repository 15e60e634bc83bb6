"""Operational scripts for the video platform."""
