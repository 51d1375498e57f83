"""HTTP surface for unitmath."""
