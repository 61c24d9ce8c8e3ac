"""Extension tables: media classification and Content-Type lookup."""

from __future__ import annotations

IMAGE = "image"
VIDEO = "video"
AUDIO = "audio"
ZIP = "zip"

# Category -> lowercase extensions (no dot). Sets must stay disjoint.
EXTENSION_CATEGORIES: dict[str, frozenset[str]] = {
    IMAGE: frozenset({"jpg", "jpeg", "png", "gif", "webp", "svg"}),
    VIDEO: frozenset({"mp4", "webm", "mov", "avi", "mkv"}),
    AUDIO: frozenset({"mp3", "wav", "ogg", "aac", "flac", "m4a"}),
    ZIP: frozenset({"zip"}),
}

CONTENT_TYPES: dict[str, str] = {
    # image
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
    "svg": "image/svg+xml",
    # video
    "mp4": "video/mp4",
    "webm": "video/webm",
    "mov": "video/quicktime",
    "avi": "video/x-msvideo",
    "mkv": "video/x-matroska",
    # audio
    "mp3": "audio/mpeg",
    "wav": "audio/wav",
    "ogg": "audio/ogg",
    "aac": "audio/aac",
    "flac": "audio/flac",
    "m4a": "audio/mp4",
    # downloads
    "txt": "text/plain",
    "pdf": "application/pdf",
    "doc": "application/msword",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "xls": "application/vnd.ms-excel",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "zip": "application/zip",
    "rar": "application/x-rar-compressed",
    "7z": "application/x-7z-compressed",
    "json": "application/json",
    "xml": "application/xml",
    "csv": "text/csv",
}

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def file_extension(name: str) -> str:
    """Lowercased text after the last dot, or "" when there is none.

    A single leading dot marks a hidden file, not an extension.
    """
    base = name[1:] if name.startswith(".") else name
    _, dot, ext = base.rpartition(".")
    return ext.lower() if dot else ""


def categories_of(name: str) -> set[str]:
    ext = file_extension(name)
    return {category for category, exts in EXTENSION_CATEGORIES.items() if ext in exts}


def is_category(name: str, category: str) -> bool:
    return file_extension(name) in EXTENSION_CATEGORIES[category]


def content_type_for(extension: str) -> str:
    return CONTENT_TYPES.get(extension.lower(), DEFAULT_CONTENT_TYPE)
