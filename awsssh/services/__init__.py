"""External tool adapters (fzf, tmux)."""

from __future__ import annotations

from awsssh.services.fzf import FzfSelector
from awsssh.services.tmux import TmuxWorkspace, is_tmux_available

__all__ = ["FzfSelector", "TmuxWorkspace", "is_tmux_available"]
