from __future__ import annotations

import sys
from pathlib import Path

# app.py -> streamlit -> ui -> daterange_picker -> src -> repo root
REPO_ROOT = Path(__file__).resolve().parents[4]
SRC_ROOT = REPO_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from daterange_picker.ui.streamlit.views.picker import render_page


def main() -> None:
    render_page()


if __name__ == "__main__":
    main()
