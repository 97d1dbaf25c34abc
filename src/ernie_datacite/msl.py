"""
MSL (EPOS Multi-Scale Laboratories) controlled vocabulary lookups.

The laboratories list is fetched from ``settings.MSL_LABORATORIES_URL`` and
cached in-process for ``settings.MSL_CACHE_TTL`` seconds. Network or decoding
failures are logged and treated as an empty vocabulary; they are not cached,
so the next lookup retries.
"""

import threading
import time
from logging import Logger
from typing import Mapping

import requests

from .config import settings
from .errors import MslVocabularyError
from .logger import datacite_log


class MslLaboratoryService:
    def __init__(
        self,
        url: str | None = None,
        timeout: float | None = None,
        ttl: int | None = None,
        log: Logger = datacite_log,
    ) -> None:
        self.log = log
        self.url = url or settings.MSL_LABORATORIES_URL
        self.timeout = settings.MSL_REQUEST_TIMEOUT if timeout is None else timeout
        self.ttl = settings.MSL_CACHE_TTL if ttl is None else ttl

        self._lock = threading.Lock()
        self._cache: dict[str, dict] | None = None
        self._fetched_at = 0.0

    def _fetch(self) -> dict[str, dict]:
        r = requests.get(self.url, timeout=self.timeout)
        r.raise_for_status()
        try:
            data = r.json()
        except ValueError as exc:
            raise MslVocabularyError(f"Invalid JSON from {self.url}") from exc

        if not isinstance(data, list):
            raise MslVocabularyError(f"Expected a list of laboratories from {self.url}")

        labs = {}
        for entry in data:
            if not isinstance(entry, dict):
                continue
            identifier = str(entry.get("identifier") or "").strip()
            if identifier:
                labs[identifier] = entry
        return labs

    def laboratories(self) -> Mapping[str, dict]:
        """Laboratories indexed by identifier"""
        with self._lock:
            if (
                self._cache is not None
                and time.monotonic() - self._fetched_at < self.ttl
            ):
                return self._cache

            self.log.debug(f"Fetching MSL laboratories: {self.url}")
            try:
                labs = self._fetch()
            except (requests.RequestException, MslVocabularyError) as exc:
                self.log.warning(f"[bold red]MSL vocabulary unavailable: {exc}")
                return {}

            self.log.info(f"Loaded {len(labs)} MSL laboratories")
            self._cache = labs
            self._fetched_at = time.monotonic()
            return labs

    def clear_cache(self) -> None:
        with self._lock:
            self._cache = None
            self._fetched_at = 0.0

    def find_by_lab_id(self, lab_id: str | None) -> dict | None:
        if lab_id is None or not lab_id.strip():
            return None
        return self.laboratories().get(lab_id.strip())

    def is_valid_lab_id(self, lab_id: str | None) -> bool:
        return self.find_by_lab_id(lab_id) is not None

    def enrich_laboratory_data(
        self,
        lab_id: str,
        name: str = "",
        affiliation_name: str = "",
        affiliation_ror: str = "",
    ) -> dict:
        """
        Combine a laboratory read from XML with the vocabulary entry.
        Vocabulary values win; the XML values fill in what it lacks.
        """
        entry = self.find_by_lab_id(lab_id) or {}
        if not entry:
            self.log.debug(f"MSL laboratory {lab_id} not in vocabulary")

        def _pick(key: str, fallback: str) -> str:
            return str(entry.get(key) or "").strip() or (fallback or "")

        return {
            "identifier": lab_id,
            "name": _pick("name", name),
            "affiliation_name": _pick("affiliation_name", affiliation_name),
            "affiliation_ror": _pick("affiliation_ror", affiliation_ror),
        }
