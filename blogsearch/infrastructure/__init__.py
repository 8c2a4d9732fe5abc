"""Infrastructure adapters (Firestore)."""
