import logging

from rocketchat_hook.logging import redact_webhook_processor, setup_logging


class TestRedactWebhookProcessor:
    def test_redacts_token_in_url(self) -> None:
        event = {"event": "rocketchat.network_error", "url": "https://chat/hooks/abc123/SECRET"}
        result = redact_webhook_processor(None, "error", event)
        assert "SECRET" not in result["url"]
        assert result["url"] == "https://chat/hooks/[REDACTED]"

    def test_leaves_other_values(self) -> None:
        event = {"event": "hook.notify", "commits": 3, "ref": "refs/heads/main"}
        assert redact_webhook_processor(None, "info", dict(event)) == event


class TestSetupLogging:
    def test_setup_debug_mode(self) -> None:
        setup_logging(debug=True)
        assert logging.getLogger().level == logging.DEBUG

    def test_setup_default_mode(self) -> None:
        setup_logging(debug=False)
        assert logging.getLogger().level == logging.INFO
