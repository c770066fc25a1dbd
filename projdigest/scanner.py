"""End-to-end digest pipeline: walk, select, render."""

from __future__ import annotations

import asyncio
import threading
from datetime import datetime
from pathlib import Path
from typing import Optional

from .config import ScanConfiguration, load_config
from .logging import get_logger
from .models import ScanResult
from .ranking import select
from .renderer import Renderer
from .walker import TreeWalker

logger = get_logger("scanner")


def resolve_root(root: str | Path) -> Path:
    """Return the absolute scan root, rejecting missing paths and plain files."""
    root_path = Path(root).expanduser().resolve()
    if not root_path.exists():
        raise FileNotFoundError(f"Project path not found: {root}")
    if not root_path.is_dir():
        raise NotADirectoryError(f"Project path is not a directory: {root}")
    return root_path


class ProjectScanner:
    """Produces bounded-size project digests."""

    def __init__(self, config: Optional[ScanConfiguration] = None) -> None:
        self._config = config

    def configuration_for(self, root: Path) -> ScanConfiguration:
        """Return the explicit configuration, or defaults merged with the project file."""
        if self._config is not None:
            return self._config
        return load_config(root)

    def scan(
        self,
        root: str | Path,
        *,
        cancel_event: Optional[threading.Event] = None,
        generated_at: Optional[datetime] = None,
    ) -> ScanResult:
        """Scan `root` and return the rendered digest with selection statistics."""
        root_path = resolve_root(root)
        config = self.configuration_for(root_path)
        generated_at = generated_at or datetime.now()

        logger.info("Scanning %s", root_path)
        walker = TreeWalker(config, cancel_event=cancel_event)
        candidates = list(walker.walk(root_path))
        selected = select(candidates, config)
        logger.debug(
            "Discovered %d files, selected %d", len(candidates), len(selected)
        )

        text = Renderer(config).render(
            root_path,
            selected,
            discovered=len(candidates),
            generated_at=generated_at,
        )
        logger.info("Digest ready: %d files, %d characters", len(selected), len(text))
        return ScanResult(
            text=text,
            discovered=len(candidates),
            selected=tuple(selected),
            generated_at=generated_at,
        )

    async def scan_async(
        self,
        root: str | Path,
        *,
        cancel_event: Optional[threading.Event] = None,
    ) -> ScanResult:
        """Run :meth:`scan` in the default executor so the caller's loop stays responsive."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None, lambda: self.scan(root, cancel_event=cancel_event)
        )


__all__ = ["ProjectScanner", "resolve_root"]
