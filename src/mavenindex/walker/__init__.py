"""Directory walking and index generation."""

from mavenindex.walker.tree_walker import IndexWriteError, TreeWalker, classify, generate

__all__ = ["IndexWriteError", "TreeWalker", "classify", "generate"]
