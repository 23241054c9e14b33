"""
Shared Kernel

Value objects and infrastructure helpers used by every Heiwa House app.
"""
