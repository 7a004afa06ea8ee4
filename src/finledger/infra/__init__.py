"""Infrastructure: database engine and snapshot persistence."""
