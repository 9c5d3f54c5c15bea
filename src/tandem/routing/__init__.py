"""Routing: prefix splitting between website and API, and path matching.

``PrefixRouter`` decides website vs. API by a literal path prefix.
``Router`` maps method + path to endpoint handlers through an ``EndpointTable``.
"""
