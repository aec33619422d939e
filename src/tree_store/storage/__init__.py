"""File-system persistence for tree documents."""
