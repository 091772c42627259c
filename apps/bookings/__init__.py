"""Bookings app package.

This app holds the booking model, the availability engine that decides
date conflicts for listings, and the booking lifecycle (create, confirm,
cancel, delete, scheduled start and completion). Writers that affect a
listing's calendar serialise on a row lock of the listing.
"""
