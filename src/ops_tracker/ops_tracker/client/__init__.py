"""Client-side data cache for the record store HTTP API."""
