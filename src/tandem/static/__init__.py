"""Static website serving: file server and fallback page handling."""
