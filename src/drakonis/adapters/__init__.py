"""Thin framework integrations. Each module imports its framework lazily."""
