"""Surf camps app package.

Fixed-date surf weeks sold per participant, and the rooms each week may
use to house its participants.
"""
