import importlib

from tracker import config


def test_format_currency():
    symbol = config.CURRENCY_SYMBOL
    assert config.format_currency(1234.5) == f"{symbol}1,234.50"
    assert config.format_currency(-20) == f"-{symbol}20.00"


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("TRACKER_DATA_DIR", str(tmp_path / "ledger"))
    monkeypatch.setenv("TRACKER_CURRENCY_SYMBOL", "$")
    monkeypatch.setenv("TRACKER_LOG_LEVEL", "debug")
    try:
        reloaded = importlib.reload(config)
        assert reloaded.DATA_DIR == (tmp_path / "ledger").resolve()
        assert reloaded.CURRENCY_SYMBOL == "$"
        assert reloaded.LOG_LEVEL == "DEBUG"

        reloaded.ensure_data_directories()
        assert (tmp_path / "ledger").is_dir()
    finally:
        monkeypatch.undo()
        importlib.reload(config)


def test_every_category_has_an_icon():
    from tracker.domain import CATEGORIES

    assert set(CATEGORIES) <= set(config.CATEGORY_ICONS)
