"""Unit tests for the Lambda plain-text and API Gateway handlers."""

import base64
import json

import pytest

from issue_relay import lambda_function
from issue_relay.handler import RelayHandler, RelayOutcome, RelayResult


@pytest.fixture
def stubbed_relay(monkeypatch, http_client):
    """Point the Lambda module at a handler using the stub Slack transport."""
    monkeypatch.setattr(
        lambda_function, "relay_handler", RelayHandler(http_client=http_client)
    )


def _gateway_event(body, is_base64_encoded=False) -> dict:
    return {
        "httpMethod": "POST",
        "path": "/webhooks/github",
        "headers": {"X-GitHub-Event": "issues"},
        "body": body,
        "isBase64Encoded": is_base64_encoded,
    }


class TestPlainTextHandler:
    def test_string_event(self, slack_env, stubbed_relay, slack_stub, sample_payload_json):
        result = lambda_function.plain_text_handler(sample_payload_json, None)

        assert result == "Slack notification sent for issue #42."
        assert "octo-org/octo-repo" in slack_stub.last_request_body

    def test_decoded_json_event(self, slack_env, stubbed_relay, slack_stub, sample_payload):
        result = lambda_function.plain_text_handler(sample_payload, None)

        assert result == "Slack notification sent for issue #42."
        assert slack_stub.call_count == 1

    def test_missing_configuration(
        self, clean_env, stubbed_relay, slack_stub, sample_payload_json
    ):
        result = lambda_function.plain_text_handler(sample_payload_json, None)

        assert result == "Missing SLACK_URL environment variable."
        assert slack_stub.call_count == 0

    @pytest.mark.parametrize("event", [None, "", "  "])
    def test_empty_event(self, slack_env, stubbed_relay, slack_stub, event):
        result = lambda_function.plain_text_handler(event, None)

        assert result == "No payload supplied."
        assert slack_stub.call_count == 0

    def test_invalid_payload(self, slack_env, stubbed_relay, slack_stub):
        result = lambda_function.plain_text_handler({"action": "opened"}, None)

        assert result == (
            "Invalid GitHub webhook payload: Payload missing issue object."
        )
        assert slack_stub.call_count == 0

    def test_dispatch_error(
        self, slack_env, monkeypatch, stub_slack_client, sample_payload_json
    ):
        stub, client = stub_slack_client(status_code=500, body="rollup_error")
        monkeypatch.setattr(
            lambda_function, "relay_handler", RelayHandler(http_client=client)
        )

        result = lambda_function.plain_text_handler(sample_payload_json, None)

        assert result == "Slack webhook returned 500: rollup_error"


class TestGatewayHandler:
    def test_success(self, slack_env, stubbed_relay, slack_stub, sample_payload_json):
        response = lambda_function.gateway_handler(
            _gateway_event(sample_payload_json), None
        )

        assert response["statusCode"] == 200
        assert response["headers"] == {"Content-Type": "application/json"}
        assert json.loads(response["body"]) == {
            "message": "Slack notification sent for issue #42."
        }
        assert slack_stub.call_count == 1

    def test_base64_body(self, slack_env, stubbed_relay, slack_stub, sample_payload_json):
        encoded = base64.b64encode(sample_payload_json.encode("utf-8")).decode("ascii")

        response = lambda_function.gateway_handler(
            _gateway_event(encoded, is_base64_encoded=True), None
        )

        assert response["statusCode"] == 200
        assert (
            "https://github.com/octo-org/octo-repo/issues/42"
            in slack_stub.last_request_body
        )

    def test_missing_configuration(
        self, clean_env, stubbed_relay, slack_stub, sample_payload_json
    ):
        response = lambda_function.gateway_handler(
            _gateway_event(sample_payload_json), None
        )

        assert response["statusCode"] == 500
        assert json.loads(response["body"]) == {
            "message": "Missing SLACK_URL environment variable."
        }
        assert slack_stub.call_count == 0

    @pytest.mark.parametrize("body", [None, "", "   "])
    def test_empty_body(self, slack_env, stubbed_relay, slack_stub, body):
        response = lambda_function.gateway_handler(_gateway_event(body), None)

        assert response["statusCode"] == 400
        assert json.loads(response["body"]) == {"message": "No payload supplied."}
        assert slack_stub.call_count == 0

    def test_decoded_json_body(self, slack_env, stubbed_relay, slack_stub, sample_payload):
        response = lambda_function.gateway_handler(_gateway_event(sample_payload), None)

        assert response["statusCode"] == 200
        assert slack_stub.call_count == 1
        assert "octo-org/octo-repo" in slack_stub.last_request_body

    def test_decoded_non_object_body(self, slack_env, stubbed_relay, slack_stub):
        response = lambda_function.gateway_handler(_gateway_event([1, 2]), None)

        assert response["statusCode"] == 400
        assert json.loads(response["body"]) == {
            "message": "Invalid GitHub webhook payload: Payload must be a JSON object."
        }
        assert slack_stub.call_count == 0

    def test_event_without_body(self, slack_env, stubbed_relay, slack_stub):
        response = lambda_function.gateway_handler({"httpMethod": "POST"}, None)

        assert response["statusCode"] == 400
        assert slack_stub.call_count == 0

    def test_invalid_payload(self, slack_env, stubbed_relay, slack_stub):
        response = lambda_function.gateway_handler(_gateway_event("{oops"), None)

        assert response["statusCode"] == 400
        message = json.loads(response["body"])["message"]
        assert message.startswith("Invalid GitHub webhook payload: ")
        assert slack_stub.call_count == 0

    def test_invalid_base64_body(self, slack_env, stubbed_relay, slack_stub):
        response = lambda_function.gateway_handler(
            _gateway_event("%%%", is_base64_encoded=True), None
        )

        assert response["statusCode"] == 400
        assert slack_stub.call_count == 0

    def test_dispatch_error(
        self, slack_env, monkeypatch, stub_slack_client, sample_payload_json
    ):
        stub, client = stub_slack_client(status_code=403, body="invalid_token")
        monkeypatch.setattr(
            lambda_function, "relay_handler", RelayHandler(http_client=client)
        )

        response = lambda_function.gateway_handler(
            _gateway_event(sample_payload_json), None
        )

        assert response["statusCode"] == 502
        assert json.loads(response["body"]) == {
            "message": "Slack webhook returned 403: invalid_token"
        }
        assert stub.call_count == 1


def test_to_gateway_response():
    response = lambda_function.to_gateway_response(
        RelayResult(RelayOutcome.PAYLOAD_ERROR, "Invalid GitHub webhook payload: x")
    )

    assert response == {
        "statusCode": 400,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps({"message": "Invalid GitHub webhook payload: x"}),
    }
