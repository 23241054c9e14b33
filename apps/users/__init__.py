"""Users app package.

Staff accounts for the admin dashboard. ``apps.users.models.CustomUser``
is the AUTH_USER_MODEL; guests and surf camp participants are stored as
``apps.clients.models.Client`` records and never log in.
"""
