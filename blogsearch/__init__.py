"""Prefix search over blog posts and user profiles (FastAPI + Firestore)."""

__version__ = "1.0.0"
