"""Controllers wiring services for the view layer."""
