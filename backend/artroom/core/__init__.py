"""
Core utilities: exceptions and request signing.
"""
