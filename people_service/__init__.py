"""People service: a small CRUD API over a MongoDB collection."""
