"""Artifact placement and platform packaging."""

from .driver import PackagingDriver
from .placement import ArtifactPlacer

__all__ = ["ArtifactPlacer", "PackagingDriver"]
