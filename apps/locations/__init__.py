"""Locations app package.

City, district and neighborhood reference data stored as one MPTT tree,
plus the neighborhood distance table used to widen branch searches.
"""
