"""Listings app package.

Listings with their images and the per-category attribute schema, the
django-filter query layer behind ``GET /listings``, branch search, and the
pure filter-state composition shared by every search page.
"""
