# pyzke/resources.py
import logging
from pathlib import Path
from typing import Dict, Optional, Union

from .errors import ResourceNotFound

logger = logging.getLogger(__name__)


class StaticFileReader:
    """
    Reads the script and stylesheet files widget classes include.

    Relative paths are resolved against ``root`` (the current directory when
    no root is given). With ``cache=True`` each file is read from disk once
    and served from memory afterwards; the engine itself never decides that.
    """

    def __init__(self, root: Optional[Union[str, Path]] = None, cache: bool = False):
        self.root = Path(root) if root is not None else None
        self.cache = cache
        self._contents: Dict[Path, str] = {}

    def resolve(self, path: Union[str, Path]) -> Path:
        candidate = Path(path)
        if self.root is not None and not candidate.is_absolute():
            candidate = self.root / candidate
        return candidate

    def read(self, path: Union[str, Path]) -> str:
        full_path = self.resolve(path)
        if self.cache and full_path in self._contents:
            return self._contents[full_path]
        try:
            with full_path.open("r", encoding="utf-8") as f:
                content = f.read()
        except (FileNotFoundError, IsADirectoryError):
            raise ResourceNotFound(full_path) from None
        logger.debug("Read %d chars from %s", len(content), full_path)
        if self.cache:
            self._contents[full_path] = content
        return content

    def clear(self) -> None:
        self._contents.clear()
