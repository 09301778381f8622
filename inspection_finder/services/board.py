import logging
from typing import List, Optional, Tuple

from inspection_finder.config import Settings, settings as default_settings
from inspection_finder.models import CityOption, FilterCriteria, InspectionRecord, RenderedView
from inspection_finder.services.data_loader import (
    DataUnavailableError,
    InspectionDataLoader,
    derive_city_options,
)
from inspection_finder.services.pipeline import apply_criteria
from inspection_finder.services.renderer import render_results

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = "Could not load inspection data file. Showing no results."


class InspectionBoard:
    """
    View model behind the inspection page.

    Owns the full dataset (written once by load, read-only afterwards), the
    derived city options, the currently displayed view and any load error.
    """

    def __init__(self, loader: Optional[InspectionDataLoader] = None, settings: Optional[Settings] = None):
        self.settings = settings or default_settings
        self.loader = loader or InspectionDataLoader(
            source=self.settings.DATA_URL,
            timeout=self.settings.FETCH_TIMEOUT_SECONDS,
        )
        self.records: Tuple[InspectionRecord, ...] = ()
        self.city_options: List[CityOption] = derive_city_options([], self.settings.CITY_OPTIONS_CASE_SENSITIVE)
        self.view: List[InspectionRecord] = []
        self.error_message: Optional[str] = None
        self.loaded = False

    @property
    def status_options(self) -> List[str]:
        return list(self.settings.STATUS_OPTIONS)

    @property
    def data_available(self) -> bool:
        return self.loaded and self.error_message is None

    async def load(self) -> None:
        """
        Load the dataset once. Failures become a user-facing message; nothing is raised.
        """
        if self.loaded:
            logger.debug("Inspection data already loaded, skipping")
            return
        self.loaded = True

        try:
            records = await self.loader.fetch_records()
        except DataUnavailableError as e:
            logger.error(f"Error loading inspection data: {e}")
            self.error_message = LOAD_ERROR_MESSAGE
            return

        self.records = tuple(records)
        self.city_options = derive_city_options(self.records, self.settings.CITY_OPTIONS_CASE_SENSITIVE)
        self.view = list(self.records)

    def apply(self, criteria: FilterCriteria) -> List[InspectionRecord]:
        """Recompute the displayed view from the full dataset."""
        self.view = apply_criteria(self.records, criteria, top_n=self.settings.TOP_N)
        return self.view

    def render(self, criteria: Optional[FilterCriteria] = None) -> RenderedView:
        if criteria is not None:
            self.apply(criteria)
        return render_results(self.view)

    def reset(self) -> None:
        """Drop the dataset and view (page teardown)."""
        self.records = ()
        self.city_options = derive_city_options([], self.settings.CITY_OPTIONS_CASE_SENSITIVE)
        self.view = []
        self.error_message = None
        self.loaded = False
