"""Flat-file persistence (`;` record files, CSV export)."""
