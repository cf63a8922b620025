"""HTTP API for Pwned Range Check."""
