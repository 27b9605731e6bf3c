"""
Recipe Catalog Schemas
Pydantic request and response models
"""
