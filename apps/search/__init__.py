"""Listing search: attribute filters, date availability, ratings and ranking."""
