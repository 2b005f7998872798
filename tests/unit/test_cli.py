"""Tests for the index administration CLI."""

from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from fluentsearch import cli
from fluentsearch.adapters.base.registry import TransportRegistry
from fluentsearch.core.connection import ConnectionManager


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "fluentsearch.yaml"
    path.write_text(
        "connections:\n"
        "  default:\n"
        "    driver: fake\n"
        "    hosts: ['http://localhost:9200']\n"
        "indices:\n"
        "  articles: {}\n"
        "  authors: {}\n"
    )
    return path


@pytest.fixture
def fake(transport_class: Any) -> Any:
    """Route every ConnectionManager created by the CLI to one fake transport."""
    transport = transport_class()
    transport.indices = {"articles", "authors"}
    original_init = ConnectionManager.__init__

    def init(self: ConnectionManager, settings: Any, registry: TransportRegistry | None = None) -> None:
        original_init(self, settings, registry)
        self.registry.register("fake", lambda **kwargs: transport)

    with patch.object(ConnectionManager, "__init__", init):
        yield transport


class TestDropCommand:
    def test_drop_single_index_forced(self, config_file: Path, fake: Any) -> None:
        code = cli.main(["--config", str(config_file), "indices", "drop", "articles", "--force"])
        assert code == 0
        assert fake.deleted == ["articles"]

    def test_drop_all_configured_indices(self, config_file: Path, fake: Any) -> None:
        code = cli.main(["--config", str(config_file), "indices", "drop", "--force"])
        assert code == 0
        assert fake.deleted == ["articles", "authors"]

    def test_missing_index_is_skipped(self, config_file: Path, fake: Any, capsys: pytest.CaptureFixture[str]) -> None:
        code = cli.main(["--config", str(config_file), "indices", "drop", "ghost", "--force"])
        assert code == 0
        assert fake.deleted == []
        assert "Index 'ghost' does not exist." in capsys.readouterr().err

    def test_confirmation_declined(self, config_file: Path, fake: Any) -> None:
        with patch("builtins.input", return_value="no"):
            cli.main(["--config", str(config_file), "indices", "drop", "articles"])
        assert fake.deleted == []

    def test_confirmation_accepted(self, config_file: Path, fake: Any) -> None:
        with patch("builtins.input", return_value="yes"):
            cli.main(["--config", str(config_file), "indices", "drop", "articles"])
        assert fake.deleted == ["articles"]

    def test_unknown_connection(self, config_file: Path, fake: Any, capsys: pytest.CaptureFixture[str]) -> None:
        code = cli.main(["--config", str(config_file), "indices", "drop", "--connection", "replica", "--force"])
        assert code == 1
        assert "replica" in capsys.readouterr().err

    def test_missing_config_file(self, tmp_path: Path) -> None:
        assert cli.main(["--config", str(tmp_path / "nope.yaml"), "indices", "drop"]) == 1
