"""HTTP host for 28 tables."""
