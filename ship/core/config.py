"""Typed configuration loaded from the `[tool.ship]` table of pyproject.toml.

Every key is optional; a project without a `[tool.ship]` table releases with
the defaults below.

    [tool.ship]
    publish-name = "echo-app"
    remote = "origin"
    branch = "main"

    [tool.ship.image]
    repository = "ifelsedotone/echo"
    platforms = ["linux/amd64", "linux/arm64"]
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, get_str, get_str_list, get_table, is_str_dict

__all__ = [
    "ConfigError",
    "ImageConfig",
    "Registry",
    "PYPI",
    "TEST_PYPI",
    "ShipConfig",
    "load_config",
    "DEFAULT_PUBLISH_SUFFIX",
]

DEFAULT_PUBLISH_SUFFIX = "-app"
DEFAULT_PLATFORMS = ("linux/amd64", "linux/arm64")


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when the `[tool.ship]` table cannot be loaded."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class Registry:
    """A package index that receives uploads.

    `repository` is the twine `--repository` name; None uploads to the default
    index configured for twine.
    """

    label: str
    repository: str | None
    project_url: str

    def url_for(self, name: str) -> str:
        return self.project_url.format(name=name)


PYPI = Registry(label="PyPI", repository=None, project_url="https://pypi.org/project/{name}/")
TEST_PYPI = Registry(
    label="TestPyPI",
    repository="testpypi",
    project_url="https://test.pypi.org/project/{name}/",
)


@dataclass(frozen=True, slots=True)
class ImageConfig:
    """Container image build settings for `ship image`."""

    repository: str | None = None
    dockerfile: str = "docker/Dockerfile"
    context: str = "."
    platforms: tuple[str, ...] = DEFAULT_PLATFORMS
    builder: str = "python3-builder"
    buildkit_image: str = "moby/buildkit:v0.10.6"


@dataclass(frozen=True, slots=True)
class ShipConfig:
    """Main configuration container."""

    # None means "<manifest name>-app", resolved once the name is known.
    publish_name: str | None = None
    remote: str = "origin"
    branch: str = "main"
    image: ImageConfig = field(default_factory=ImageConfig)

    def resolve_publish_name(self, name: str) -> str:
        return self.publish_name or f"{name}{DEFAULT_PUBLISH_SUFFIX}"

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> ShipConfig:
        """Create config from the `[tool.ship]` table."""
        image: StrDict = get_table(data, "image") or {}
        platforms = get_str_list(image, "platforms")

        return cls(
            publish_name=get_str(data, "publish-name"),
            remote=get_str(data, "remote") or "origin",
            branch=get_str(data, "branch") or "main",
            image=ImageConfig(
                repository=get_str(image, "repository"),
                dockerfile=get_str(image, "dockerfile") or "docker/Dockerfile",
                context=get_str(image, "context") or ".",
                platforms=tuple(platforms) if platforms else DEFAULT_PLATFORMS,
                builder=get_str(image, "builder") or "python3-builder",
                buildkit_image=get_str(image, "buildkit-image") or "moby/buildkit:v0.10.6",
            ),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    if not is_str_dict(data_obj):
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data_obj)


def load_config(path: Path) -> Result[ShipConfig, ConfigError]:
    """Load the `[tool.ship]` table from a pyproject.toml.

    A missing file or a missing table yields the default config; the manifest
    checks later in the run report a missing pyproject.toml.
    """
    if not path.exists():
        return Ok(ShipConfig())

    parsed = _parse_toml(path)
    if isinstance(parsed, Err):
        return parsed

    tool = get_table(parsed.value, "tool") or {}
    if "ship" in tool and get_table(tool, "ship") is None:
        return Err(ConfigError("[tool.ship] must be a table", path=path))
    return Ok(ShipConfig.from_dict(get_table(tool, "ship") or {}))
