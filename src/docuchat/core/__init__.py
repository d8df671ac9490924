"""Core domain types shared across the pipeline."""
