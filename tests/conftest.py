"""
Pytest fixtures and configuration for chemodose tests.
Provides sample drugs, an isolated data directory and cache resets.
"""

import pytest

from chemodose.config import reset_settings_cache
from chemodose.runtime.compiled import clear_parse_cache
from chemodose.schemas import Drug, DrugField, DrugFormula
from chemodose.startup import DATA_DIR_ENV, reset_state
from chemodose.storage import FileDrugStore

BSA = "((4*weight)+7)/(weight+90)"


@pytest.fixture(autouse=True)
def _isolate_state(monkeypatch):
    """Reset module-level caches so tests never share a data directory."""
    monkeypatch.delenv(DATA_DIR_ENV, raising=False)
    reset_state()
    reset_settings_cache()
    clear_parse_cache()
    yield
    reset_state()
    reset_settings_cache()


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """Empty data directory selected through the environment."""
    path = tmp_path / "data"
    path.mkdir()
    monkeypatch.setenv(DATA_DIR_ENV, str(path))
    return path


@pytest.fixture
def sample_drug():
    """Adriamycin-style drug: BSA, dose and dilution formulas."""
    return Drug(
        id="006",
        name="Adriamycin",
        category="Doxorubicin(50mg/25mL)",
        fields=[
            DrugField(id="weight", label="Weight", unit="kg", defaultValue=0),
            DrugField(id="dose_m2", label="Dose", unit="mg/m2", defaultValue=0),
            DrugField(id="dose_adj", label="Dose adjustment", unit="max. 1", defaultValue=1),
        ],
        formulas=[
            DrugFormula(label="BSA", formula=BSA, unit="m2"),
            DrugFormula(label="Dose in mgs", formula=f"({BSA}*dose_m2)", unit="mg"),
            DrugFormula(
                label="Maximum dilution",
                formula=f"ceil((({BSA})*dose_m2)/0.2)",
                unit="mL",
                description="Dilute to at most 0.2 mg/mL",
            ),
        ],
    )


@pytest.fixture
def broken_drug():
    """Drug with a mix of valid and failing formulas."""
    return Drug(
        id="broken",
        name="Broken",
        fields=[DrugField(id="weight", label="Weight", unit="kg")],
        formulas=[
            DrugFormula(label="Double", formula="weight*2", unit="mg"),
            DrugFormula(label="Typo", formula="weight*", unit="mL"),
            DrugFormula(label="Missing", formula="weight/missing_field", unit="mg"),
            DrugFormula(label="Half", formula="weight/2", unit="mg"),
        ],
    )


@pytest.fixture
def store(tmp_path):
    """Empty file store in a temporary directory."""
    return FileDrugStore(tmp_path)
