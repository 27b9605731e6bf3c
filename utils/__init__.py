"""
Recipe Catalog Utilities
"""
