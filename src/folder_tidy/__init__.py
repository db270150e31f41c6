"""
Folder Tidy - Sort a Directory's Files by Type

A small CLI tool that cleans up a single directory by moving each file
into a subfolder named after its category.

This package provides functionality to:
- Classify files by extension (Images, Documents, Videos, Code, ...)
- Scan the immediate entries of a target directory
- Move each file into <target>/<Category>/
- Handle naming collisions with " (1)", " (2)" suffixes
- Preview everything with a dry run
- Generate CSV reports of operations
"""

# Product identity constants
PRODUCT_NAME = "Folder Tidy"
PRODUCT_VERSION = "1.0.0"
PRODUCT_DESCRIPTION = "Sort a Directory's Files by Type"

__version__ = PRODUCT_VERSION
__author__ = "Folder Tidy Team"
