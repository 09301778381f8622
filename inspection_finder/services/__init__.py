from inspection_finder.services.data_loader import (
    DataUnavailableError,
    InspectionDataLoader,
    derive_city_options,
)
from inspection_finder.services.pipeline import apply_criteria
from inspection_finder.services.renderer import escape_html, render_results
from inspection_finder.services.board import InspectionBoard

__all__ = [
    "DataUnavailableError",
    "InspectionDataLoader",
    "derive_city_options",
    "apply_criteria",
    "escape_html",
    "render_results",
    "InspectionBoard",
]
