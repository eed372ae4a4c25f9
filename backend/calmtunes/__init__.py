"""CalmTunes backend: schema scripts, seeding, migration runner and auth gate."""

__version__ = "0.1.0"
