"""Shared utilities for Conduit (I/O, merging, paths, templates, CLI helpers)."""
