from incident_relay.config import Settings


def test_defaults(monkeypatch):
    for name in ("AUTH_TOKEN", "DESTINATION_WEBHOOK_URL", "DISCORD_WEBHOOK_URL", "DELIVERY_TIMEOUT_S"):
        monkeypatch.delenv(name, raising=False)
    s = Settings(_env_file=None)
    assert s.auth_token == ""
    assert s.destination_webhook_url == ""
    assert s.delivery_timeout_s == 10.0


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("AUTH_TOKEN", "tok")
    monkeypatch.setenv("DESTINATION_WEBHOOK_URL", "https://discord.example/api/webhooks/1/a")
    monkeypatch.setenv("DELIVERY_TIMEOUT_S", "2.5")
    s = Settings(_env_file=None)
    assert s.auth_token == "tok"
    assert s.destination_webhook_url == "https://discord.example/api/webhooks/1/a"
    assert s.delivery_timeout_s == 2.5


def test_discord_webhook_url_alias(monkeypatch):
    monkeypatch.delenv("DESTINATION_WEBHOOK_URL", raising=False)
    monkeypatch.setenv("DISCORD_WEBHOOK_URL", "https://discord.example/api/webhooks/2/b")
    assert Settings(_env_file=None).destination_webhook_url == "https://discord.example/api/webhooks/2/b"
