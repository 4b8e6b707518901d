"""
Artroom beacon registration backend.
"""
