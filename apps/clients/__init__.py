"""Clients app package.

Guest and surf camp participant profiles. Clients never log in; they are
created or updated from booking requests and managed by staff.
"""
