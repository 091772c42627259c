"""Favorite listings bookmarked by users."""
