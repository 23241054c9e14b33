"""Rooms app package.

Rooms of the house, their seasonal prices and the manual blocks
(maintenance, owner use) that take a room off sale for a period.
"""
