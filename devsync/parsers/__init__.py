"""Source parsers."""

from devsync.parsers.java_parser import JavaParser, JavaSource, find_all, split_lines, walk

__all__ = ["JavaParser", "JavaSource", "find_all", "split_lines", "walk"]
