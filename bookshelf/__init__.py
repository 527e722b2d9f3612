"""Personal library catalogue persisted to a flat file."""
