"""Workspace managers.

Each module provides async operations that encapsulate state access and
business logic.  Managers raise domain exceptions (``LookupError``,
``ValueError``) and leave presentation to the caller.
"""
