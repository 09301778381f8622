"""
Inspection Data Loader

Reads the static inspection data file once and parses it into records.
The source is either an http(s) URL (fetched with httpx) or a local file path.
There is no retry: one attempt, and any failure raises DataUnavailableError.
"""
import httpx
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from pydantic import ValidationError

from inspection_finder.config import settings
from inspection_finder.models import ALL, CityOption, InspectionRecord
from inspection_finder.services.pipeline import name_sort_key

logger = logging.getLogger(__name__)

ALL_CITIES_LABEL = "All cities"


class DataUnavailableError(RuntimeError):
    """The inspection data could not be fetched or parsed."""


class InspectionDataLoader:
    """
    One-shot loader for the inspection data file.

    Features:
    - http(s) sources go through httpx.AsyncClient, other sources are read from disk
    - Network errors, non-2xx responses and malformed bodies all surface as DataUnavailableError
    - Optional httpx transport so callers can supply their own (mock transports in tests)
    """

    def __init__(
        self,
        source: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.source = source or settings.DATA_URL
        self.timeout = timeout if timeout is not None else settings.FETCH_TIMEOUT_SECONDS
        self.transport = transport

    @property
    def is_remote(self) -> bool:
        return self.source.startswith(("http://", "https://"))

    async def fetch_records(self) -> List[InspectionRecord]:
        """
        Fetch and parse the data file.

        Returns:
            Records in file order

        Raises:
            DataUnavailableError: On network error, bad status or malformed body
        """
        logger.info(f"Loading inspection data from: {self.source}")

        if self.is_remote:
            payload = await self._fetch_remote()
        else:
            payload = self._read_local()

        records = parse_records(payload)
        logger.info(f"Loaded inspection records: {len(records)}")
        return records

    async def _fetch_remote(self) -> Any:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.get(self.source)
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                logger.error(f"Failed to fetch JSON: {e.response.status_code} {e.response.reason_phrase}")
                raise DataUnavailableError(f"HTTP {e.response.status_code}") from e
            except httpx.RequestError as e:
                logger.error(f"Request error: {type(e).__name__}: {str(e)}")
                raise DataUnavailableError(str(e)) from e

        try:
            return response.json()
        except (ValueError, RecursionError) as e:
            logger.error(f"Malformed JSON from {self.source}: {type(e).__name__}: {e}")
            raise DataUnavailableError("Malformed JSON") from e

    def _read_local(self) -> Any:
        path = Path(self.source)
        try:
            raw = path.read_bytes()
        except OSError as e:
            logger.error(f"Could not read {path}: {e}")
            raise DataUnavailableError(str(e)) from e

        # UnicodeDecodeError is a ValueError; very deep nesting overflows the decoder
        try:
            return json.loads(raw.decode("utf-8"))
        except (ValueError, RecursionError) as e:
            logger.error(f"Malformed JSON in {path}: {type(e).__name__}: {e}")
            raise DataUnavailableError("Malformed JSON") from e


def parse_records(payload: Any) -> List[InspectionRecord]:
    """Turn a decoded JSON document into records. Only the overall shape is checked."""
    if not isinstance(payload, list):
        logger.error(f"Expected a JSON array, got {type(payload).__name__}")
        raise DataUnavailableError("Inspection data is not a list")

    records = []
    for index, item in enumerate(payload):
        if not isinstance(item, dict):
            logger.error(f"Record {index} is not an object: {item!r}")
            raise DataUnavailableError(f"Record {index} is not an object")
        try:
            records.append(InspectionRecord.model_validate(item))
        except (ValidationError, RecursionError) as e:
            # Field validators coerce everything, so this only fires on truly odd input
            logger.error(f"Record {index} could not be parsed: {e}")
            raise DataUnavailableError(f"Record {index} could not be parsed") from e
    return records


def derive_city_options(
    records: Iterable[InspectionRecord],
    case_sensitive: Optional[bool] = None,
) -> List[CityOption]:
    """
    Build the city dropdown: "All cities" followed by each distinct non-blank city.

    Args:
        records: Loaded records
        case_sensitive: Keep "X" and "x" as separate options. Defaults to
            settings.CITY_OPTIONS_CASE_SENSITIVE. When folding, the first
            spelling seen wins.

    Returns:
        Options sorted by name, with the synthetic "all" option first
    """
    if case_sensitive is None:
        case_sensitive = settings.CITY_OPTIONS_CASE_SENSITIVE

    seen: Dict[str, str] = {}
    for record in records:
        city = record.city.strip()
        if not city:
            continue
        key = city if case_sensitive else city.lower()
        seen.setdefault(key, city)

    cities = sorted(seen.values(), key=name_sort_key)

    options = [CityOption(value=ALL, label=ALL_CITIES_LABEL)]
    options.extend(CityOption(value=city, label=city) for city in cities)
    return options
