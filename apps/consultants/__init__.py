"""Consultants app package.

A consultant is a back-office user attached to a branch; listings are
assigned to consultants and shown with their contact details.
"""
