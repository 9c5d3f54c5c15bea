"""Content types and header names shared by every handler.

Module-level constants only; nothing here is mutated at runtime.
"""

# Content types
HTML = "text/html; charset=utf-8"
PLAIN_TEXT = "text/plain; charset=utf-8"
JSON = "application/json"
XML = "application/xml; charset=utf-8"
OCTET_STREAM = "application/octet-stream"

# Header names (lowercase, as ASGI carries them)
CONTENT_TYPE = "content-type"
CONTENT_LENGTH = "content-length"
LAST_MODIFIED = "last-modified"
IF_MODIFIED_SINCE = "if-modified-since"
LOCATION = "location"
ALLOW = "allow"

# Body of the file server's own not-found response
NOT_FOUND_BODY = "404 page not found\n"

# Methods the static file server answers
READ_METHODS = frozenset({"GET", "HEAD"})
