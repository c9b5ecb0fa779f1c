"""Branches app package.

Brokerage offices: each branch belongs to a city (optionally a district),
serves a set of neighborhoods and has its own public page and search.
"""
