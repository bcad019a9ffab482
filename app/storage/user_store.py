from contextlib import contextmanager
from pathlib import Path
import json
import logging
import threading
from typing import Any, Dict, Iterator, List, Optional

logger = logging.getLogger(__name__)


class UserStore:
    """The whole user collection as one JSON array on disk.

    Every read returns a fresh list and every write replaces the file, so the
    position of a record in the list is its only handle.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else None
        self._lock = threading.RLock()

    def init_app(self, app):
        self.path = Path(app.config["USERS_FILE"])
        app.extensions["user_store"] = self

    def _file(self) -> Path:
        if self.path is None:
            raise RuntimeError("UserStore has no path; call init_app() first")
        return self.path

    def _ensure_file(self, p: Path):
        if p.exists():
            return
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text("[]\n", encoding="utf-8")
        logger.info("Created empty users file at %s", p)

    def load(self) -> List[Dict[str, Any]]:
        p = self._file()
        with self._lock:
            self._ensure_file(p)
            raw = p.read_bytes()
        try:
            data = json.loads(raw.decode("utf-8"))
        except ValueError:
            # UnicodeDecodeError is a ValueError too
            logger.warning("Users file %s is not valid UTF-8 JSON; treating it as empty", p)
            return []
        if not isinstance(data, list):
            logger.warning("Users file %s does not hold a JSON array; treating it as empty", p)
            return []
        return data

    def replace_all(self, records: List[Dict[str, Any]]):
        """Overwrite the whole file with the given list of records."""
        if not isinstance(records, list):
            raise TypeError("records must be a list")
        p = self._file()
        body = json.dumps(records, indent=4, ensure_ascii=False) + "\n"
        with self._lock:
            p.parent.mkdir(parents=True, exist_ok=True)
            p.write_text(body, encoding="utf-8")

    @contextmanager
    def transaction(self) -> Iterator[List[Dict[str, Any]]]:
        """Hold the store lock across load + mutate + replace_all.

        Yields the loaded collection; callers persist explicitly with
        ``replace_all`` so a failed check leaves the file untouched.
        """
        with self._lock:
            yield self.load()
