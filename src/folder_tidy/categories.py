"""
Extension-to-category classification.

This module is responsible for:
- Holding the fixed extension -> category table (built once, read-only)
- Extracting a normalized extension from a file name
- Classifying an extension, falling back to "Others"
"""

import os
from types import MappingProxyType
from typing import Dict, Mapping, Tuple

# Category assigned to unknown and empty extensions
DEFAULT_CATEGORY = "Others"

# Category -> extensions. Each extension appears under exactly one category.
CATEGORY_RULES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("Images", ("jpg", "jpeg", "png", "gif", "bmp", "svg", "webp", "ico",
                "tiff", "tif", "heic")),
    ("Documents", ("pdf", "doc", "docx", "txt", "rtf", "odt", "md")),
    ("Spreadsheets", ("xls", "xlsx", "csv", "ods")),
    ("Presentations", ("ppt", "pptx", "odp", "key")),
    ("Archives", ("zip", "rar", "tar", "gz", "bz2", "xz", "7z", "iso")),
    ("Audio", ("mp3", "wav", "flac", "aac", "ogg", "m4a")),
    ("Videos", ("mp4", "mkv", "avi", "mov", "wmv", "webm")),
    ("Code", ("rs", "py", "js", "ts", "java", "c", "cpp", "h", "go", "rb",
              "php", "html", "css", "json")),
    ("Apps", ("exe", "msi", "dmg", "app", "deb", "rpm", "apk", "appimage",
              "sh", "bat")),
)


def _build_extension_map() -> Mapping[str, str]:
    mapping: Dict[str, str] = {}
    for category, extensions in CATEGORY_RULES:
        for ext in extensions:
            if ext in mapping:
                raise ValueError(
                    f"Extension '{ext}' listed under both "
                    f"{mapping[ext]} and {category}"
                )
            mapping[ext] = category
    return MappingProxyType(mapping)


EXTENSION_MAP: Mapping[str, str] = _build_extension_map()

# All category folder names, including the fallback
CATEGORIES: Tuple[str, ...] = tuple(c for c, _ in CATEGORY_RULES) + (DEFAULT_CATEGORY,)


def extension_of(name: str) -> str:
    """
    Get the normalized extension of a file name.

    Only the final suffix counts ("backup.tar.gz" -> "gz"). Dotfiles with no
    further suffix (".bashrc") have no extension.

    Args:
        name: File basename

    Returns:
        Lowercase extension without the leading dot, or "" if there is none
    """
    _, ext = os.path.splitext(name)
    return ext[1:].lower()


def classify(extension: str) -> str:
    """
    Map an extension to its category.

    Args:
        extension: Extension with or without a leading dot, any case

    Returns:
        The category label; DEFAULT_CATEGORY for unknown or empty extensions
    """
    key = extension.lower()
    if key.startswith("."):
        key = key[1:]
    return EXTENSION_MAP.get(key, DEFAULT_CATEGORY)
