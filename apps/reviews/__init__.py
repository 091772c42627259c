"""Reviews left by tutors and hosts on completed bookings."""
