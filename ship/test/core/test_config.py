from __future__ import annotations

from pathlib import Path

from ship.core.config import (
    DEFAULT_PLATFORMS,
    PYPI,
    TEST_PYPI,
    ImageConfig,
    ShipConfig,
    load_config,
)
from ship.core.result import Err, Ok


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "pyproject.toml"
    path.write_text(content, encoding="utf-8")
    return path


def test_missing_file_yields_defaults(tmp_path: Path) -> None:
    result = load_config(tmp_path / "pyproject.toml")

    assert isinstance(result, Ok)
    assert result.value == ShipConfig()


def test_missing_table_yields_defaults(tmp_path: Path) -> None:
    path = _write(tmp_path, '[project]\nname = "echo"\nversion = "0.1.0"\n')

    result = load_config(path)

    assert isinstance(result, Ok)
    config = result.value
    assert config.remote == "origin"
    assert config.branch == "main"
    assert config.image == ImageConfig()
    assert config.image.platforms == DEFAULT_PLATFORMS


def test_reads_tool_ship_table(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        "\n".join(
            [
                "[project]",
                'name = "echo"',
                "",
                "[tool.ship]",
                'publish-name = "echo-ai"',
                'remote = "upstream"',
                'branch = "release"',
                "",
                "[tool.ship.image]",
                'repository = "ifelsedotone/echo"',
                'platforms = ["linux/amd64"]',
                'buildkit-image = "moby/buildkit:latest"',
                "",
            ]
        ),
    )

    result = load_config(path)

    assert isinstance(result, Ok)
    config = result.value
    assert config.publish_name == "echo-ai"
    assert config.remote == "upstream"
    assert config.branch == "release"
    assert config.image.repository == "ifelsedotone/echo"
    assert config.image.platforms == ("linux/amd64",)
    assert config.image.buildkit_image == "moby/buildkit:latest"
    assert config.image.dockerfile == "docker/Dockerfile"


def test_invalid_platforms_fall_back_to_default(tmp_path: Path) -> None:
    path = _write(tmp_path, "[tool.ship.image]\nplatforms = [1, 2]\n")

    result = load_config(path)

    assert isinstance(result, Ok)
    assert result.value.image.platforms == DEFAULT_PLATFORMS


def test_invalid_toml_is_error(tmp_path: Path) -> None:
    path = _write(tmp_path, "[tool.ship\n")

    result = load_config(path)

    assert isinstance(result, Err)
    assert "Invalid TOML" in result.error.message
    assert result.error.path == path


def test_non_table_tool_ship_is_error(tmp_path: Path) -> None:
    path = _write(tmp_path, '[tool]\nship = "yes"\n')

    result = load_config(path)

    assert isinstance(result, Err)
    assert "[tool.ship]" in result.error.message


def test_publish_name_defaults_to_app_suffix() -> None:
    assert ShipConfig().resolve_publish_name("echo") == "echo-app"
    assert ShipConfig(publish_name="other").resolve_publish_name("echo") == "other"


def test_registry_urls() -> None:
    assert PYPI.repository is None
    assert PYPI.url_for("echo-app") == "https://pypi.org/project/echo-app/"
    assert TEST_PYPI.repository == "testpypi"
    assert TEST_PYPI.url_for("echo-app") == "https://test.pypi.org/project/echo-app/"
