"""TableBooking project package (settings, URL configuration, DB routing)."""
