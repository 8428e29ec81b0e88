"""Shared helpers: constants, coercion, JSON storage, logging, errors."""
