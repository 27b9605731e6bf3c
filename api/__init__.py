"""
Recipe Catalog API
HTTP routing and endpoint modules
"""
