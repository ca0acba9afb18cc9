"""Delivery mechanisms exposing the matching engine."""
