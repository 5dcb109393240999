"""Users app package.

Defines the platform account used as ``AUTH_USER_MODEL``. Accounts log in
by phone number and act both as equipment owners and as borrowers.
"""
