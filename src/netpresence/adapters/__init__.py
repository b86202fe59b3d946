"""Backing-store adapters for the presence store port."""
