from __future__ import annotations

from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

APP_FILE = str(Path(__file__).resolve().parent.parent / "app.py")
LENS_ID = "sony-fe-24-70mm-f-28-gm-ii-full-frame"


@pytest.fixture
def app() -> AppTest:
    at = AppTest.from_file(APP_FILE, default_timeout=30)
    at.run()
    return at


def test_app_starts_with_empty_selection(app) -> None:
    assert not app.exception
    assert app.session_state["selected_lens_ids"] == frozenset()
    assert any("Select lenses" in info.value for info in app.info)


def test_ticking_a_lens_selects_it(app) -> None:
    app.checkbox(key=f"select_{LENS_ID}").check().run()

    assert not app.exception
    assert app.session_state["selected_lens_ids"] == {LENS_ID}
    assert app.checkbox(key=f"scene_{LENS_ID}").value


def test_search_narrows_the_lens_list(app) -> None:
    app.text_input(key="search_query").input("sony").run()

    keys = [box.key for box in app.sidebar.checkbox if box.key.startswith("select_")]
    assert keys
    assert all("sony" in key for key in keys)
