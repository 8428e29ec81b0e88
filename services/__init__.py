"""Business logic for build normalization, build requests, and favorites."""
