"""One release run: bump, tag, build, publish under the publish name, restore.

Every step returns a Result and the run stops at the first `Err`. The only
cleanup across failures is the project-name restore performed by
`with_temporary_name`; git commits and tags that were already pushed stay.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Protocol

from ship.core.config import PYPI, TEST_PYPI, Registry, ShipConfig
from ship.core.result import Err, Ok, Result
from ship.git.repository import GitError
from ship.output.console import ConsoleProtocol
from ship.services.release.errors import (
    InvalidBumpKind,
    NoVersionControlRoot,
    ReleaseError,
    SubprocessFailure,
    UserDeclined,
)
from ship.services.release.manifest import Manifest
from ship.services.release.name_swap import with_temporary_name
from ship.services.release.prompter import Prompter
from ship.services.release.semver import BumpKind, SemVer, next_version, parse_version, preview_bumps

_MENU_CHOICES = {
    "1": BumpKind.PATCH,
    "2": BumpKind.MINOR,
    "3": BumpKind.MAJOR,
    "4": BumpKind.NONE,
}


class VersionControl(Protocol):
    def is_work_tree(self) -> bool: ...

    def has_uncommitted_changes(self) -> Result[bool, GitError]: ...

    def add(self, paths: Sequence[Path | str]) -> Result[None, GitError]: ...

    def commit(self, message: str) -> Result[None, GitError]: ...

    def tag(self, name: str, message: str) -> Result[None, GitError]: ...

    def push(self, remote: str, branch: str, *, tags: bool = True) -> Result[None, GitError]: ...


class PackagePublisher(Protocol):
    def build_and_publish(self, registry: Registry) -> Result[list[Path], ReleaseError]: ...


class ReleaseStage(Enum):
    IDLE = auto()
    VERSION_DECIDED = auto()
    TREE_CHECKED = auto()
    VERSION_WRITTEN = auto()
    TAGGED = auto()
    NAME_SWAPPED = auto()
    PUBLISHED = auto()
    NAME_RESTORED = auto()
    DONE = auto()
    ABORTED = auto()


@dataclass(frozen=True, slots=True)
class ReleaseOptions:
    # None: ask which component to bump.
    bump: BumpKind | None = None
    create_tag: bool = True
    use_test_registry: bool = False

    @property
    def registry(self) -> Registry:
        return TEST_PYPI if self.use_test_registry else PYPI


@dataclass(frozen=True, slots=True)
class ReleaseOutcome:
    previous_version: str
    version: str
    registry: Registry
    tagged: bool
    artifacts: tuple[Path, ...] = field(default_factory=tuple)


def _git_failure(e: GitError) -> SubprocessFailure:
    return SubprocessFailure(
        tool="git",
        returncode=e.returncode,
        command=("git", *e.command.split()),
        detail=e.message,
    )


class ReleaseCoordinator:
    def __init__(
        self,
        *,
        manifest: Manifest,
        config: ShipConfig,
        console: ConsoleProtocol,
        prompter: Prompter,
        git: VersionControl,
        publisher: PackagePublisher,
    ) -> None:
        self._manifest = manifest
        self._config = config
        self._console = console
        self._prompter = prompter
        self._git = git
        self._publisher = publisher
        self.stage = ReleaseStage.IDLE

    def run(self, options: ReleaseOptions) -> Result[ReleaseOutcome, ReleaseError]:
        result = self._run(options)
        if isinstance(result, Err):
            self.stage = ReleaseStage.ABORTED
        return result

    def _run(self, options: ReleaseOptions) -> Result[ReleaseOutcome, ReleaseError]:
        self._console.info("Starting deployment process...")

        current = self._manifest.read_field("version")
        if isinstance(current, Err):
            return current

        kind = self._decide_bump(options, current.value)
        if isinstance(kind, Err):
            return kind
        self.stage = ReleaseStage.VERSION_DECIDED

        checked = self._check_tree()
        if isinstance(checked, Err):
            return checked
        self.stage = ReleaseStage.TREE_CHECKED

        version = current.value
        tagged = False
        if kind.value is BumpKind.NONE:
            self._console.info(f"Using current version: {version}")
        else:
            bumped = self._write_next_version(current.value, kind.value)
            if isinstance(bumped, Err):
                return bumped
            version = str(bumped.value)
            self.stage = ReleaseStage.VERSION_WRITTEN

            if options.create_tag:
                confirmed = self._prompter.confirm(
                    f"Create git tag {bumped.value.to_tag()}?", default=False
                )
                if not confirmed:
                    self._console.info("Skipping git tag creation.")
                pushed = self.tag_and_push(bumped.value, confirmed)
                if isinstance(pushed, Err):
                    return pushed
                tagged = pushed.value
                if tagged:
                    self.stage = ReleaseStage.TAGGED

        name = self._manifest.read_field("name")
        if isinstance(name, Err):
            return name
        publish_name = self._config.resolve_publish_name(name.value)
        registry = options.registry

        published = with_temporary_name(
            self._manifest,
            publish_name,
            lambda: self._publish(registry),
            console=self._console,
        )
        if isinstance(published, Err):
            return published
        self.stage = ReleaseStage.NAME_RESTORED

        self._console.success("Deployment completed successfully!")
        self._console.info(f"Version: {version}")
        self._console.info(f"Package: {name.value} ({registry.label})")
        self._console.info(f"{registry.label} URL: {registry.url_for(publish_name)}")
        self.stage = ReleaseStage.DONE

        return Ok(
            ReleaseOutcome(
                previous_version=current.value,
                version=version,
                registry=registry,
                tagged=tagged,
                artifacts=tuple(published.value),
            )
        )

    def tag_and_push(self, version: SemVer, confirmed: bool) -> Result[bool, ReleaseError]:
        """Commit the manifest, tag `v<version>` and push branch + tags.

        Does nothing unless `confirmed`. Returns whether a tag was pushed.
        """
        if not confirmed:
            return Ok(False)

        tag = version.to_tag()
        self._console.info(f"Creating git tag {tag}")
        steps = (
            lambda: self._git.add([self._manifest.path]),
            lambda: self._git.commit(f"Bump version to {version}"),
            lambda: self._git.tag(tag, f"Release version {version}"),
            lambda: self._git.push(self._config.remote, self._config.branch, tags=True),
        )
        for step in steps:
            result = step().map_err(_git_failure)
            if isinstance(result, Err):
                return result
        return Ok(True)

    def _decide_bump(self, options: ReleaseOptions, current: str) -> Result[BumpKind, ReleaseError]:
        if options.bump is not None:
            return Ok(options.bump)

        parsed = parse_version(current)
        if isinstance(parsed, Err):
            return parsed

        previews = preview_bumps(parsed.value)
        self._console.newline()
        self._console.print("Select version bump type:")
        for number, kind in _MENU_CHOICES.items():
            if kind is BumpKind.NONE:
                self._console.print(f"{number}) Skip version bump")
            else:
                self._console.print(f"{number}) {kind} ({current} -> {previews[kind]})")

        reply = self._prompter.ask("Enter choice (1-4)").strip()
        kind = _MENU_CHOICES.get(reply)
        if kind is None:
            return Err(InvalidBumpKind(value=reply))
        return Ok(kind)

    def _check_tree(self) -> Result[None, ReleaseError]:
        if not self._git.is_work_tree():
            return Err(NoVersionControlRoot(path=self._manifest.path.parent))

        dirty = self._git.has_uncommitted_changes().map_err(_git_failure)
        if isinstance(dirty, Err):
            return dirty
        if not dirty.value:
            return Ok(None)

        self._console.warning("There are uncommitted changes in the repository.")
        if not self._prompter.confirm("Do you want to continue?", default=False):
            return Err(UserDeclined())
        return Ok(None)

    def _write_next_version(self, current: str, kind: BumpKind) -> Result[SemVer, ReleaseError]:
        parsed = parse_version(current)
        if isinstance(parsed, Err):
            return parsed
        bumped = next_version(parsed.value, kind)
        if isinstance(bumped, Err):
            return bumped

        self._console.info(f"Bumping version from {current} to {bumped.value}")
        written = self._manifest.write_field("version", str(bumped.value))
        if isinstance(written, Err):
            return written
        return Ok(bumped.value)

    def _publish(self, registry: Registry) -> Result[list[Path], ReleaseError]:
        self.stage = ReleaseStage.NAME_SWAPPED
        self._console.info("Building package...")
        published = self._publisher.build_and_publish(registry)
        if isinstance(published, Ok):
            self.stage = ReleaseStage.PUBLISHED
        return published
