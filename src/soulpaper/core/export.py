"""Export generated wallpapers as downloadable files.

Downloads are short-lived: each selected image is written to its own
temporary directory, and the file is discarded when the viewer closes, when
another image is selected, or when the application shuts down. Nothing in
this module outlives the process.
"""

import logging
import tempfile
from pathlib import Path

from .models import GeneratedImage

logger = logging.getLogger(__name__)

EXPORT_DIR_PREFIX = "soulpaper-"

# Temporary exports that have not been discarded yet.
_live_exports: set[Path] = set()


def export_image(image: GeneratedImage, directory: Path) -> Path:
    """Write the image's decoded bytes to ``soulpaper-<id>.png``.

    The payload is written as-is; no re-encoding takes place. Writing the
    same image twice yields the same path.

    Args:
        image: Image to export
        directory: Target directory (created if missing)

    Returns:
        Path of the written file
    """
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)

    path = directory / image.download_filename
    path.write_bytes(image.payload.data)
    logger.info(f"Exported {image.id} to {path}")
    return path


def export_temporary(image: GeneratedImage, parent: Path | None = None) -> Path:
    """Export ``image`` into a fresh temporary directory.

    Args:
        image: Image to export
        parent: Directory to create the temporary directory in. Defaults to
            the system temp directory.

    Returns:
        Path of the written file; release it with :func:`discard_export`
    """
    if parent is not None:
        Path(parent).mkdir(parents=True, exist_ok=True)
    directory = Path(tempfile.mkdtemp(prefix=EXPORT_DIR_PREFIX, dir=parent))
    path = export_image(image, directory)
    _live_exports.add(path)
    return path


def discard_export(path: Path | str) -> None:
    """Delete a file written by :func:`export_temporary` and its directory."""
    path = Path(path)
    _live_exports.discard(path)
    try:
        path.unlink(missing_ok=True)
        path.parent.rmdir()
    except OSError as e:
        logger.warning(f"Could not remove export {path}: {e}")
        return
    logger.debug(f"Discarded export {path}")


def discard_all_exports() -> int:
    """Discard every temporary export still on disk.

    Returns:
        Number of exports discarded
    """
    paths = list(_live_exports)
    for path in paths:
        discard_export(path)
    if paths:
        logger.info(f"Discarded {len(paths)} leftover exports")
    return len(paths)
