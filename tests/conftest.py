import json
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from inspection_finder.config import Settings
from inspection_finder.models import InspectionRecord


SAMPLE_RECORDS = [
    {"name": "Cafe Luna", "address": "12 Harbor St", "city": "Portland", "status": "Pass",
     "score": 97, "last_inspection_date": "2024-03-14", "violations": []},
    {"name": "Blue Door Diner", "address": "450 Main St", "city": "Portland", "status": "Conditional",
     "score": 84, "violations": ["Cold holding", "Hand sink blocked", "No thermometer", "Food on floor"]},
    {"name": "Golden Wok", "address": "88 Elm Ave", "city": "Westbrook", "status": "Fail",
     "score": 68, "violations": ["Rodents"]},
    {"name": "Harbor Fish Market", "address": "9 Custom House Wharf", "city": "portland", "status": "pass",
     "score": 92},
    {"name": "Taco Stop", "address": "17 Route 1", "city": "Scarborough", "status": "Unknown",
     "score": None},
]


@pytest.fixture
def raw_records():
    return [dict(r) for r in SAMPLE_RECORDS]


@pytest.fixture
def records(raw_records):
    return [InspectionRecord.model_validate(r) for r in raw_records]


@pytest.fixture
def data_file(tmp_path, raw_records):
    path = tmp_path / "inspection_data.json"
    path.write_text(json.dumps(raw_records), encoding="utf-8")
    return path


@pytest.fixture
def test_settings(data_file):
    return Settings(DATA_URL=str(data_file), _env_file=None)
