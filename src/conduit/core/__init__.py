"""Core library for Conduit: artifacts, install pipeline, config and utilities."""
