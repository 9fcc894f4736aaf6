"""People collection: persistence for Person records."""
