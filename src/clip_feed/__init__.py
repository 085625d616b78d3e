"""Clip Feed: ranked, cursor-paginated clip feed with weighted voting."""
