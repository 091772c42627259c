"""Listings app: bookable offerings published by hosts and host-blocked dates."""
