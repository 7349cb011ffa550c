"""
Shared helpers: exceptions, attribute mapping, documents, regions, decorators.
"""
