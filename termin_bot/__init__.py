"""
Termin Bot: watches appointment availability for a fixed set of stores and posts
a Discord message when free timeslots show up.
"""
__version__ = "0.1.0"
