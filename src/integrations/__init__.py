"""Clients for the external providers: Pinterest (boards/pins) and OpenAI (embeddings)."""
