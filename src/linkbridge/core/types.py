"""Core type definitions."""

from typing import NewType

# Redirect file name (e.g., "1a2B3c.html")
# Distinct from plain str so generated names are not mixed up with targets
ShortName = NewType("ShortName", str)

SHORT_NAME_SUFFIX = ".html"
