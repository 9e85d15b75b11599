"""IDE command-surface installation commands."""
