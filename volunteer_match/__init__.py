"""Volunteer matching service: application lifecycle, capacity and notifications."""
