"""Package release: manifest edits, version bumps, tagging and upload."""

from .coordinator import ReleaseCoordinator, ReleaseOptions, ReleaseOutcome, ReleaseStage
from .errors import ReleaseError
from .manifest import Manifest
from .semver import BumpKind, SemVer

__all__ = [
    "BumpKind",
    "Manifest",
    "ReleaseCoordinator",
    "ReleaseError",
    "ReleaseOptions",
    "ReleaseOutcome",
    "ReleaseStage",
    "SemVer",
]
