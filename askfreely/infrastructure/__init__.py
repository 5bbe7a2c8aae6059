"""Infrastructure: Realtime Database, Redis counters, mail provider, template rendering."""
