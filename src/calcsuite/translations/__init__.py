"""JSON translation catalogues bundled with the package."""
