"""HTTP primitives: request, response, headers, and shared constants."""
