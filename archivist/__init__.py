"""RPG Archivist mind map: relationship graph views for campaign data."""

__version__ = "1.0.0"
