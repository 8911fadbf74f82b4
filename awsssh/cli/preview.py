"""Preview pane renderer invoked by fzf for the highlighted row.

Runs once per cursor movement, so it imports only the table module.
"""

from __future__ import annotations

import sys

from awsssh.core.table import render_preview


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    print(render_preview(" ".join(args)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
