"""Backend adapters (local JSON store, Home Assistant)."""
