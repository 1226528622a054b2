"""Tests for the dashboard API client with a mocked HTTP session."""

import json
import logging
from unittest.mock import Mock, patch

import pytest
import requests

from lark_dashboard.builders import ChartBlockBuilder, TextBlockBuilder
from lark_dashboard.client import (
    REGION_URLS, APIError, ClientConfig, LarkDashboardClient, get_client,
)
from lark_dashboard.types import BlockType, ChartConfig, Dashboard, DashboardBlock
from lark_dashboard.validation import ValidationError

BASE = "https://open.larksuite.com/open-apis"


def _response(status=200, payload=None, text=None):
    """Stand-in for requests.Response with just what the client reads."""
    r = Mock()
    r.status_code = status
    r.ok = status < 400
    if payload is not None:
        r.text = json.dumps(payload)
        r.json.return_value = payload
    else:
        r.text = text or ""
        r.json.side_effect = ValueError("not json")
    r.content = r.text.encode()
    return r


def _ok(data=None):
    return _response(200, {"code": 0, "msg": "success", "data": data or {}})


@pytest.fixture
def session():
    s = requests.Session()
    s.request = Mock()
    return s


@pytest.fixture
def client(session):
    return LarkDashboardClient(ClientConfig(api_key="t-secret", max_retries=2, retry_delay=0.01),
                               session=session)


@pytest.fixture(autouse=True)
def no_sleep():
    with patch("lark_dashboard.client.time.sleep") as sleep:
        yield sleep


def _text_block(content="hello"):
    return TextBlockBuilder.paragraph(content).build()


class TestClientConfig:
    """Region URLs, overrides and environment loading."""

    @pytest.mark.parametrize("region,url", [
        ("sg", "https://open.larksuite.com/open-apis"),
        ("us", "https://open.larksuite.com/open-apis"),
        ("cn", "https://open.feishu.cn/open-apis"),
    ])
    def test_region_urls(self, region, url):
        assert ClientConfig(api_key="k", region=region).base_url == url
        assert REGION_URLS[region] == url

    def test_api_url_overrides_region(self):
        config = ClientConfig(api_key="k", region="cn", api_url="http://localhost:8080/api/")
        assert config.base_url == "http://localhost:8080/api"

    def test_from_env(self):
        config = ClientConfig.from_env({
            "LARK_API_KEY": "t-1",
            "LARK_REGION": "cn",
            "LARK_LOGGING": "true",
            "LARK_TIMEOUT": "5",
            "LARK_MAX_RETRIES": "0",
            "LARK_RETRY_DELAY": "0.5",
        })
        assert config == ClientConfig(api_key="t-1", region="cn", logging=True, timeout=5.0,
                                      max_retries=0, retry_delay=0.5)

    def test_from_env_token_fallback_and_defaults(self):
        config = ClientConfig.from_env({"LARK_TENANT_ACCESS_TOKEN": "t-2"})
        assert config.api_key == "t-2"
        assert (config.region, config.timeout, config.max_retries) == ("sg", 30.0, 3)

    def test_missing_key_rejected_by_client(self):
        with pytest.raises(ValidationError, match="API key is required"):
            LarkDashboardClient(ClientConfig(api_key=""))

    def test_unset_retry_settings_rejected_by_client(self, session):
        with pytest.raises(ValidationError, match="Max retries"):
            LarkDashboardClient(ClientConfig(api_key="k", max_retries=None), session=session)
        with pytest.raises(ValidationError, match="Retry delay"):
            LarkDashboardClient(ClientConfig(api_key="k", retry_delay=None), session=session)
        session.request.assert_not_called()

    def test_get_client_reads_environment(self):
        with patch.dict("os.environ", {"LARK_API_KEY": "t-env", "LARK_REGION": "cn"}, clear=True):
            client = get_client()
        assert client.base == "https://open.feishu.cn/open-apis"
        assert client.s.headers["Authorization"] == "Bearer t-env"


class TestTransport:
    """Envelope handling, retries and error mapping."""

    def test_headers(self, client):
        assert client.s.headers["Authorization"] == "Bearer t-secret"
        assert client.s.headers["Content-Type"] == "application/json"

    def test_get_returns_envelope(self, client, session):
        session.request.return_value = _ok({"items": []})
        assert client.get("/x", params={"page_size": 10})["data"] == {"items": []}
        session.request.assert_called_once_with(
            "GET", BASE + "/x", json=None, params={"page_size": 10}, timeout=30.0)

    def test_nonzero_code_on_http_200(self, client, session):
        session.request.return_value = _response(200, {"code": 1254043, "msg": "TableIdNotFound"})
        with pytest.raises(APIError) as exc:
            client.get("/x")
        assert exc.value.status == 200
        assert exc.value.code == 1254043
        assert "TableIdNotFound" in str(exc.value)

    def test_http_error_carries_envelope(self, client, session):
        session.request.return_value = _response(400, {"code": 99991663, "msg": "invalid token"})
        with pytest.raises(APIError, match="Lark API error 99991663: invalid token"):
            client.post("/x", {"a": 1})
        assert session.request.call_count == 1

    def test_non_json_body(self, client, session):
        session.request.return_value = _response(200, text="<html>")
        with pytest.raises(APIError, match="response is not JSON"):
            client.get("/x")

    @pytest.mark.parametrize("payload", [[1, 2], "ok", 0])
    def test_json_body_not_an_object(self, client, session, payload):
        session.request.return_value = _response(200, payload)
        with pytest.raises(APIError, match="response is not a JSON object"):
            client.get("/x")

    def test_429_retried_then_succeeds(self, client, session, no_sleep):
        session.request.side_effect = [_response(429, text="slow down"), _ok({"ok": 1})]
        assert client.get("/x")["data"] == {"ok": 1}
        assert session.request.call_count == 2
        assert no_sleep.call_count == 1

    def test_5xx_gives_up_after_max_retries(self, client, session, no_sleep):
        session.request.return_value = _response(503, text="unavailable")
        with pytest.raises(APIError) as exc:
            client.get("/x")
        assert exc.value.status == 503
        assert session.request.call_count == 3
        assert no_sleep.call_count == 2

    def test_backoff_grows(self, client, session, no_sleep):
        session.request.return_value = _response(500, text="boom")
        with patch("lark_dashboard.client.random.uniform", return_value=0):
            with pytest.raises(APIError):
                client.get("/x")
        assert [c.args[0] for c in no_sleep.call_args_list] == [0.01, 0.02]

    def test_network_error_becomes_api_error(self, client, session):
        session.request.side_effect = requests.ConnectionError("refused")
        with pytest.raises(APIError, match="Request failed") as exc:
            client.get("/x")
        assert exc.value.status is None
        assert isinstance(exc.value.__cause__, requests.ConnectionError)
        assert session.request.call_count == 3

    def test_timeout_retried(self, client, session):
        session.request.side_effect = [requests.Timeout("slow"), _ok()]
        assert client.get("/x")["code"] == 0

    def test_4xx_not_retried(self, client, session):
        session.request.return_value = _response(404, text="missing")
        with pytest.raises(APIError, match="HTTP 404"):
            client.delete("/x")
        assert session.request.call_count == 1

    def test_request_log_redacts_token(self, session, caplog):
        client = LarkDashboardClient(ClientConfig(api_key="t-secret", logging=True),
                                     session=session)
        session.request.return_value = _ok()
        with caplog.at_level(logging.INFO, logger="lark_dashboard.client"):
            client.get("/x")
        assert "[REDACTED]" in caplog.text
        assert "t-secret" not in caplog.text


class TestDashboardOperations:
    """Dashboard and block endpoints."""

    def test_add_block_posts_converted_payload(self, client, session):
        session.request.return_value = _ok({"block_id": "blk1"})
        assert client.add_block("app1", "dash1", _text_block("hi")) == "blk1"
        args, kwargs = session.request.call_args
        assert args == ("POST", BASE + "/bitable/v1/apps/app1/dashboards/dash1/blocks")
        assert kwargs["json"] == {"block_type": 5, "config": {"elements": [{"content": "hi"}]}}

    def test_add_block_validates_before_sending(self, client, session):
        with pytest.raises(ValidationError):
            client.add_block("app1", "dash1", DashboardBlock(BlockType.CHART, ChartConfig()))
        session.request.assert_not_called()

    def test_add_block_without_block_id(self, client, session):
        session.request.return_value = _ok({})
        with pytest.raises(APIError, match="Failed to add block: no block_id returned"):
            client.add_block("app1", "dash1", _text_block())

    def test_add_blocks_reports_each_result(self, client, session):
        session.request.side_effect = [_ok({"block_id": "blk1"}),
                                       _response(200, {"code": 1, "msg": "quota"})]
        blocks = [
            _text_block("a"),
            DashboardBlock(BlockType.CHART, ChartConfig()),
            _text_block("b"),
        ]
        results = client.add_blocks("app1", "dash1", blocks)
        assert [r.success for r in results] == [True, False, False]
        assert results[0].block_id == "blk1"
        assert "Invalid chart type" in results[1].error
        assert "quota" in results[2].error

    def test_create_dashboard_adds_blocks(self, client, session):
        session.request.side_effect = [
            _ok({"block_id": "dash1"}),
            _ok({"block_id": "blk1"}),
            _ok({"block_id": "blk2"}),
        ]
        chart = (ChartBlockBuilder.bar().data_source("app1", "tbl1")
                 .x_axis("Month").y_axis("Revenue").build())
        dashboard = Dashboard("Sales", "app1", blocks=(chart, _text_block()))

        assert client.create_dashboard(dashboard) == "dash1"
        first = session.request.call_args_list[0]
        assert first.args == ("POST", BASE + "/bitable/v1/apps/app1/dashboards")
        assert first.kwargs["json"] == {"name": "Sales"}
        assert session.request.call_count == 3

    def test_create_dashboard_survives_block_failure(self, client, session):
        session.request.side_effect = [
            _ok({"block_id": "dash1"}),
            _response(400, {"code": 1, "msg": "bad block"}),
        ]
        dashboard = Dashboard("Sales", "app1", blocks=(_text_block(),))
        assert client.create_dashboard(dashboard) == "dash1"

    def test_create_dashboard_validates(self, client, session):
        with pytest.raises(ValidationError, match="Dashboard name is required"):
            client.create_dashboard(Dashboard("", "app1"))
        session.request.assert_not_called()

    def test_update_block(self, client, session):
        session.request.return_value = _ok({"block_id": "blk1"})
        assert client.update_block("app1", "dash1", "blk1", _text_block()) == {"block_id": "blk1"}
        assert session.request.call_args.args == (
            "PATCH", BASE + "/bitable/v1/apps/app1/dashboards/dash1/blocks/blk1")

    def test_batch_delete_blocks(self, client, session):
        session.request.side_effect = [_ok(), _response(404, {"code": 2, "msg": "gone"})]
        results = client.batch_delete_blocks("app1", "dash1", ["blk1", "blk2"])
        assert [(r.success, r.block_id) for r in results] == [(True, "blk1"), (False, "blk2")]
        assert "gone" in results[1].error

    def test_list_dashboards(self, client, session):
        session.request.return_value = _ok({"items": [{"dashboard_id": "d1", "name": "A"}]})
        assert client.list_dashboards("app1") == [{"dashboard_id": "d1", "name": "A"}]

    def test_list_dashboards_empty(self, client, session):
        session.request.return_value = _response(200, {"code": 0, "data": None})
        assert client.list_dashboards("app1") == []

    def test_get_and_delete_dashboard(self, client, session):
        session.request.return_value = _ok({"name": "A"})
        assert client.get_dashboard("app1", "d1") == {"name": "A"}
        client.delete_dashboard("app1", "d1")
        assert session.request.call_args.args == (
            "DELETE", BASE + "/bitable/v1/apps/app1/dashboards/d1")
