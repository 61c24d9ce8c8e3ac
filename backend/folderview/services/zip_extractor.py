"""In-place ZIP extraction next to the archive."""

from __future__ import annotations

import logging
import os
import zipfile

from folderview.exceptions import ExtractionFailed
from folderview.utils.paths import PathResolver

logger = logging.getLogger(__name__)


def extraction_dir_for(archive_path: str) -> str:
    """``/x/photos.zip`` extracts into ``/x/photos``.

    A bare ``.zip`` keeps its full name so the target never collapses onto
    the containing folder.
    """
    folder, name = os.path.split(archive_path)
    stem = name[: -len(".zip")] if name.lower().endswith(".zip") else os.path.splitext(name)[0]
    return os.path.join(folder, stem or name)


def extract_zip(archive_path: str) -> str:
    """Extract *archive_path* and return the absolute extraction directory.

    Every member is checked against the target directory before anything is
    written; a single escaping member aborts the whole extraction.
    """
    target = extraction_dir_for(archive_path)
    if os.path.normpath(target) == os.path.normpath(os.path.dirname(archive_path)):
        logger.error("Refusing to extract %s into its own folder", archive_path)
        raise ExtractionFailed()
    guard = PathResolver(target)

    try:
        with zipfile.ZipFile(archive_path) as zf:
            for member in zf.namelist():
                if not guard.contains(os.path.normpath(os.path.join(guard.root, member))):
                    logger.warning(
                        "Unsafe ZIP member %r in %s (target %s)", member, archive_path, target,
                    )
                    raise ExtractionFailed()
            os.makedirs(target, exist_ok=True)
            zf.extractall(target)
    except (zipfile.BadZipFile, zipfile.LargeZipFile, OSError, RuntimeError) as e:
        # RuntimeError: encrypted members without a password
        logger.error("ZIP extraction failed for %s: %s", archive_path, e)
        raise ExtractionFailed() from e

    logger.info("Extracted %s -> %s", archive_path, target)
    return target
