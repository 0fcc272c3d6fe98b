"""HTTP surface for the mind map view models."""
