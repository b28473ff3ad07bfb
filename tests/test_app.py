import json

import pytest
from streamlit.testing.v1 import AppTest

from tracker.config import get_settings


@pytest.fixture
def app(monkeypatch, tmp_path):
    monkeypatch.setenv("TRACKER_DATA_DIR", str(tmp_path))
    get_settings.cache_clear()
    yield AppTest.from_file("../app/main.py", default_timeout=30)
    get_settings.cache_clear()


def write_transactions(directory, count):
    # stored newest first, like the tracker keeps them
    records = [
        {"id": f"t{i}", "amount": 1000 * i, "description": f"Purchase {i}", "category": "Food",
         "type": "expense", "date": f"2024-03-{i:02d}", "createdAt": ""}
        for i in range(count, 0, -1)
    ]
    (directory / "transactions.json").write_text(json.dumps(records), encoding="utf-8")


def test_add_form_lists_categories_of_selected_type(app):
    app.run()
    assert app.radio(key="tx_type").value == "expense"
    assert "Food" in app.selectbox(key="tx_category").options
    assert "Salary" not in app.selectbox(key="tx_category").options

    app.radio(key="tx_type").set_value("income").run()
    options = app.selectbox(key="tx_category").options
    assert "Salary" in options
    assert "Food" not in options


def test_overview_shows_five_newest_transactions(app, tmp_path):
    write_transactions(tmp_path, 6)
    app.run()

    overview = app.tabs[0]
    shown = " ".join(m.value for m in overview.markdown)
    for i in range(2, 7):
        assert f"Purchase {i}" in shown
    assert "Purchase 1" not in shown
