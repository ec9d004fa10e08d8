from percolation.cells import Coordinate
from percolation.config import SimulationConfig, SourceConfig


def test_default_source_is_row_zero_column_500() -> None:
    config = SimulationConfig()

    assert config.source.coordinate == Coordinate(0, 500)
    assert config.engine.order == "stack"


def test_config_to_dict_is_nested() -> None:
    payload = SimulationConfig(source=SourceConfig(column=42)).to_dict()

    assert payload["source"] == {"row": 0, "column": 42}
    assert payload["engine"] == {"order": "stack"}
    assert payload["render"]["margin"] == 1
    assert payload["render"]["palette"]["~"] == (30, 80, 200)
