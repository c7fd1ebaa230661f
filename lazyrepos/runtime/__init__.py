"""Runtime package: terminal session, event loop and session orchestration."""

from .app import DashboardOptions, load_hierarchy, render_snapshot, run_dashboard, stdio_is_interactive
from .loop import resize_views, run_main_loop
from .terminal import TerminalController

__all__ = [
    "DashboardOptions",
    "load_hierarchy",
    "render_snapshot",
    "run_dashboard",
    "stdio_is_interactive",
    "resize_views",
    "run_main_loop",
    "TerminalController",
]
