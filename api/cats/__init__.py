"""
Cats and their owners.
"""
