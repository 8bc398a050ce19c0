"""Domain type definitions for goalsheet.

These NewTypes provide semantic clarity and help with type checking:
- DecimalText: Canonical decimal string as typed by the user (may be empty)
- SheetName: Name of a saved sheet (registry key)
"""

from typing import NewType

# Canonical decimal string: digits, at most one ".", at most 2 fractional digits
DecimalText = NewType("DecimalText", str)

# Sheet names are used verbatim as registry keys
SheetName = NewType("SheetName", str)
