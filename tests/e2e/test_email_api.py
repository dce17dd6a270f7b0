from quiet_hours.core.constants import EmailKind


class TestEmailAPI:
    def test_missing_email(self, client):
        resp = client.post("/api/v1/test-email", json={"type": "welcome"})
        assert resp.status_code == 400
        assert resp.json()["error"] == "Email is required"

    def test_invalid_type(self, client):
        resp = client.post("/api/v1/test-email", json={"email": "a@example.com", "type": "newsletter"})
        assert resp.status_code == 400
        assert resp.json()["error"] == "Invalid email type"

    def test_sends_reminder(self, client, email_sender):
        resp = client.post("/api/v1/test-email", json={"email": "a@example.com", "type": "reminder"})

        assert resp.status_code == 200, resp.text
        assert resp.json()["message"] == "Email sent successfully"
        assert resp.json()["data"]["to"] == ["a@example.com"]
        assert email_sender.sent[0]["kind"] == EmailKind.REMINDER

    def test_provider_failure(self, client, email_sender):
        email_sender.fail_with = "Invalid API key"

        resp = client.post("/api/v1/test-email", json={"email": "a@example.com", "type": "welcome"})

        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to send email", "details": "Invalid API key"}


class TestWebhookAPI:
    def test_profile_insert_sends_welcome(self, client, email_sender):
        payload = {
            "type": "INSERT",
            "table": "profiles",
            "schema": "public",
            "record": {"id": "u-1", "email": "new@example.com", "full_name": "New Student"},
            "old_record": None,
        }

        resp = client.post("/api/v1/webhooks/supabase", json=payload)

        assert resp.status_code == 200
        assert resp.json() == {"message": "Webhook processed"}
        assert email_sender.sent[0]["to"] == "new@example.com"
        assert email_sender.sent[0]["kind"] == EmailKind.WELCOME

    def test_failed_welcome_still_acknowledged(self, client, email_sender):
        email_sender.raise_for = {"new@example.com"}
        payload = {"type": "INSERT", "table": "profiles", "record": {"email": "new@example.com"}}

        resp = client.post("/api/v1/webhooks/supabase", json=payload)

        assert resp.status_code == 200

    def test_unrelated_event(self, client, email_sender):
        resp = client.post("/api/v1/webhooks/supabase", json={"type": "DELETE", "table": "profiles"})

        assert resp.status_code == 200
        assert email_sender.sent == []

    def test_malformed_body(self, client):
        resp = client.post(
            "/api/v1/webhooks/supabase",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )
        assert resp.status_code == 400


class TestProfileAPI:
    def test_me_creates_profile_on_first_call(self, client, auth_headers):
        resp = client.get("/api/v1/profiles/me", headers=auth_headers)

        assert resp.status_code == 200, resp.text
        data = resp.json()
        assert data["id"] == "user-1"
        assert data["email"] == "student@example.com"
        assert data["full_name"] == "Ada Student"

    def test_me_requires_token(self, client):
        assert client.get("/api/v1/profiles/me").status_code == 401


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"
