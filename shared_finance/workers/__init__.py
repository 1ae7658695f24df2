"""Workers package: background upload jobs."""
