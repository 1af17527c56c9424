import pytest

pytestmark = pytest.mark.unit


class TestSensitiveDataMasking:
    def test_access_token_in_text_masked(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "detail": "sent shpat_0123abcd to the API"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "shpat_0123abcd" not in result["detail"]
        assert "***MASKED***" in result["detail"]

    def test_access_token_key_masked(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "access_token": "anything-at-all"}
        result = mask_sensitive_data(None, None, event_dict)
        assert result["access_token"] == "***MASKED***"

    def test_password_masked(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "data": "password='s3cret123'"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "s3cret123" not in result["data"]
        assert "***MASKED***" in result["data"]

    def test_authorization_header_masked(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "header": "authorization: abc123xyz"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "abc123xyz" not in result["header"]

    def test_non_sensitive_data_unchanged(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "order_status.changed", "order_id": "ORD-1", "attempt": 2}
        result = mask_sensitive_data(None, None, event_dict)
        assert result["order_id"] == "ORD-1"
        assert result["event"] == "order_status.changed"
        assert result["attempt"] == 2
