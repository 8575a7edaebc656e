"""Statement record validation service: CSV/XML intake, normalization and error-only reporting."""
