"""In-memory document index and its JSON backing store."""
