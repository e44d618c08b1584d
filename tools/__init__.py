"""
Elasticsearch operations bound to an explicit session.
"""

from .client import ElasticClient

__all__ = ["ElasticClient"]
