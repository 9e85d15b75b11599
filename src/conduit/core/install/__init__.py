"""Install pipeline for IDE command surfaces."""
from __future__ import annotations

from .index import IndexGenerator
from .launcher import LauncherResult, install_custom_launcher
from .layout import INDEX_FILE, LayoutMaterializer, LayoutPlan
from .orchestrator import InstallOptions, InstallOrchestrator, InstallResult
from .partition import Partition, partition

__all__ = [
    "IndexGenerator",
    "LauncherResult",
    "install_custom_launcher",
    "INDEX_FILE",
    "LayoutMaterializer",
    "LayoutPlan",
    "InstallOptions",
    "InstallOrchestrator",
    "InstallResult",
    "Partition",
    "partition",
]
