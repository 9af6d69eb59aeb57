"""Image sidecar: app-owned copies of contact photos.

A photo reference handed in by a picker may stop being readable later
(revoked grant, removable media, temp file). resolve() copies it once to
<images_dir>/contact_<id><ext> and returns that path instead.
"""

import logging
import os
import shutil
import tempfile
import urllib.request
from collections.abc import Callable
from pathlib import Path, PurePosixPath
from typing import BinaryIO
from urllib.parse import urlparse
from urllib.request import url2pathname

logger = logging.getLogger(__name__)

IMAGE_SUFFIXES = frozenset({".jpg", ".jpeg", ".png", ".gif", ".webp", ".bmp", ".heic"})
DEFAULT_SUFFIX = ".jpg"

Opener = Callable[[str], BinaryIO]


def open_reference(reference: str) -> BinaryIO:
    """Open a plain path, a file:// URI or any URL urllib can fetch. Raises OSError."""
    parsed = urlparse(reference)
    # A one-letter scheme is a Windows drive, not a URL.
    if len(parsed.scheme) <= 1:
        return open(reference, "rb")
    if parsed.scheme == "file":
        return open(url2pathname(parsed.path), "rb")
    return urllib.request.urlopen(reference)


def _suffix(reference: str) -> str:
    suffix = PurePosixPath(urlparse(reference).path).suffix.lower()
    return suffix if suffix in IMAGE_SUFFIXES else DEFAULT_SUFFIX


class ImageSidecar:
    """Implements the ImageStore port on a local directory."""

    def __init__(self, images_dir: Path, *, opener: Opener | None = None) -> None:
        self.images_dir = Path(images_dir)
        self._open = opener or open_reference

    def path_for(self, contact_id: int, reference: str | None = None) -> Path:
        suffix = _suffix(reference) if reference else DEFAULT_SUFFIX
        return self.images_dir / f"contact_{contact_id}{suffix}"

    def is_owned(self, reference: str, contact_id: int | None = None) -> bool:
        """True if the reference is a sidecar file; with contact_id, that contact's own file."""
        try:
            path = Path(reference).resolve()
        except (OSError, ValueError):
            return False
        if path.parent != self.images_dir.resolve():
            return False
        return contact_id is None or path.name.startswith(f"contact_{contact_id}.")

    def _existing(self, contact_id: int) -> list[Path]:
        if not self.images_dir.is_dir():
            return []
        return list(self.images_dir.glob(f"contact_{contact_id}.*"))

    def resolve(self, reference: str | None, contact_id: int) -> str | None:
        if not reference:
            return reference
        if self.is_owned(reference, contact_id):
            return reference

        dest = self.path_for(contact_id, reference)
        tmp_path: Path | None = None
        try:
            self.images_dir.mkdir(parents=True, exist_ok=True)
            with self._open(reference) as src:
                fd, name = tempfile.mkstemp(prefix=f".{dest.name}.", dir=str(self.images_dir))
                tmp_path = Path(name)
                with os.fdopen(fd, "wb") as out:
                    shutil.copyfileobj(src, out)
            tmp_path.replace(dest)
        except (OSError, ValueError):
            logger.warning(
                "Copying image for contact %d failed; keeping %s", contact_id, reference, exc_info=True
            )
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            return reference

        for stale in self._existing(contact_id):
            if stale != dest:
                stale.unlink(missing_ok=True)
        logger.info("Image for contact %d copied to %s", contact_id, dest)
        return str(dest)

    def delete(self, contact_id: int) -> bool:
        ok = True
        for path in self._existing(contact_id):
            try:
                path.unlink(missing_ok=True)
            except OSError:
                logger.warning("Deleting image %s failed", path, exc_info=True)
                ok = False
        return ok
