"""Local blob storage

Uploaded files are written under ``base_dir`` and served by the web server
from ``base_url``. Names are prefixed with a uuid so uploads never collide.
"""

from __future__ import annotations

import logging
import uuid
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)


class LocalBlobStorage:
    def __init__(self, base_dir: Union[str, Path], base_url: str = "/uploads") -> None:
        self.base_dir = Path(base_dir)
        self.base_url = base_url.rstrip("/")

    @staticmethod
    def safe_name(original: str) -> str:
        """``"my photo.png"`` -> ``"<uuid>-my-photo.png"``."""
        name = Path(original or "file").name.replace(" ", "-")
        return f"{uuid.uuid4()}-{name}"

    def save(self, name: str, data: bytes) -> str:
        """Write ``data`` as ``name`` and return its public URL."""
        self.base_dir.mkdir(parents=True, exist_ok=True)
        target = self.base_dir / Path(name).name
        target.write_bytes(data)
        logger.debug("Stored %d bytes at %s", len(data), target)
        return f"{self.base_url}/{target.name}"

    def delete(self, url: str) -> bool:
        """Remove the file behind ``url``. Returns False when it is already gone."""
        target = self.base_dir / Path(url).name
        if not target.exists():
            return False
        target.unlink()
        logger.debug("Deleted %s", target)
        return True
