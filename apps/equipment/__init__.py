"""Equipment app package.

This app encapsulates the equipment catalogue: listings owned by users,
their rate tables and locations, availability toggling, and the
geo-proximity search used to surface equipment to borrowers.
"""
