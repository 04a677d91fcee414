"""Git operations used by release runs."""

from .repository import GitError, Repository

__all__ = ["GitError", "Repository"]
