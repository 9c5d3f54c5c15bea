"""Path parameter patterns for route segments like ``{id:int}``.

Captured values are handed to endpoints as strings; the converter only
decides which segments a parameter accepts.
"""

# Regex each converter's segment must match in full
CONVERTERS: dict[str, str] = {
    "str": r"[^/]+",
    "int": r"\d+",
    "float": r"\d+(?:\.\d+)?",
    "path": r".+",
}
