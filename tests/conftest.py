import json

import pytest

from ComplexCalc import config_manager


@pytest.fixture
def settings_file(tmp_path, monkeypatch):
    """Point config_manager at a throwaway config.json holding the given settings."""
    def write(**settings):
        path = tmp_path / "config.json"
        path.write_text(json.dumps(settings), encoding="utf-8")
        monkeypatch.setattr(config_manager, "config_json", path)
        return path
    return write
