from src.config import DEFAULT_PORT, Settings


def test_port_defaults_when_not_numeric():
    assert Settings(_env_file=None, port="abc").port == DEFAULT_PORT
    assert Settings(_env_file=None, port="").port == DEFAULT_PORT
    assert Settings(_env_file=None, port="8080").port == 8080


def test_recipients_union_without_blanks_or_duplicates():
    settings = Settings(
        _env_file=None,
        your_whatsapp_number="whatsapp:+911",
        other_whatsapp_number_1="",
        whatsapp_recipients=" whatsapp:+912 , whatsapp:+911,,",
    )
    assert settings.recipients == ["whatsapp:+911", "whatsapp:+912"]


def test_watchlist_from_environment(monkeypatch):
    monkeypatch.setenv(
        "WATCHLIST", '[{"name": "Monster Trucks", "keywords": ["monster"]}]'
    )
    monkeypatch.setenv("ENFORCE_KEYWORD_FILTER", "true")

    settings = Settings(_env_file=None)

    assert [entry.name for entry in settings.watchlist] == ["Monster Trucks"]
    assert settings.watchlist[0].search_query == "Monster Trucks"
    assert settings.enforce_keyword_filter is True


def test_defaults():
    settings = Settings(_env_file=None, matching_strategy="fixed_list")
    assert settings.store_path == "products.json"
    assert settings.schedule_cron == "*/5 * * * *"
    assert settings.request_timeout == 10
    assert len(settings.monitored_products) == 1
