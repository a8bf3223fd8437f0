"""
Site Lot application package.
"""
