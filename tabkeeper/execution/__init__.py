"""Tab extraction, ordering and the close-then-reopen executor."""

from tabkeeper.execution.extractor import extract_descriptors
from tabkeeper.execution.reopen import BatchCloseError, TabReopener
from tabkeeper.execution.sorting import TabSorter, sort_descriptors

__all__ = ["BatchCloseError", "TabReopener", "TabSorter", "extract_descriptors", "sort_descriptors"]
