"""Shared type definitions for type checking.

Uses NewType for IDs to provide compile-time type safety - prevents mixing
different ID types (e.g., passing UserID where EntityID expected).

Uses TypeAlias for simple structural types.
"""

from typing import NewType, TypeAlias

# ID types using NewType for type safety
EntityID = NewType("EntityID", int)
RevisionID = NewType("RevisionID", int)
UserID = NewType("UserID", int)
RecordID = NewType("RecordID", int)

# Structural aliases
Bundle: TypeAlias = str  # content type tag, e.g. "blog"
NotifierName: TypeAlias = str  # delivery channel, e.g. "email"
