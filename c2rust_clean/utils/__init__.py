"""Utility modules for c2rust-clean."""

from c2rust_clean.utils.inline_map import parse_inline_map, split_top_level, strip_quotes

__all__ = ["parse_inline_map", "split_top_level", "strip_quotes"]
