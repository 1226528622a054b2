"""Lark dashboard API client: config, HTTP transport with retry, dashboard calls.

Every Bitable response is an envelope {code, msg, data}; code != 0 is an
application failure even on HTTP 200. Both kinds surface as APIError.

Environment variables (ClientConfig.from_env / get_client):
    LARK_API_KEY       Tenant access token (fallback: LARK_TENANT_ACCESS_TOKEN)
    LARK_API_URL       Explicit base URL, overrides the region
    LARK_REGION        sg | cn | us (default: sg)
    LARK_LOGGING       1/true/yes logs every request at INFO (default: DEBUG)
    LARK_TIMEOUT       Request timeout in seconds (default: 30)
    LARK_MAX_RETRIES   Retries on network errors, 429 and 5xx (default: 3)
    LARK_RETRY_DELAY   Base backoff delay in seconds (default: 1)
"""

import json
import logging
import os
import random
import time
from dataclasses import dataclass
from typing import List, Optional

import requests

from .converter import convert_block
from .types import BatchOperationResult, Dashboard, DashboardBlock
from .utils import env_flag, redact
from .validation import (
    ValidationError, validate_block, validate_client_config, validate_dashboard,
)

logger = logging.getLogger(__name__)

REGION_URLS = {
    "sg": "https://open.larksuite.com/open-apis",
    "cn": "https://open.feishu.cn/open-apis",
    "us": "https://open.larksuite.com/open-apis",
}

RETRY_STATUS = {429}


class APIError(Exception):
    """Raised on HTTP errors, network failures and non-zero envelope codes.

    status is None when the request never got a response.
    code/msg come from the {code, msg, data} envelope when one was returned.
    """

    def __init__(self, status: Optional[int], body: str, url: str,
                 code: Optional[int] = None, msg: Optional[str] = None):
        self.status = status
        self.body = body
        self.url = url
        self.code = code
        self.msg = msg
        if code is not None:
            text = f"Lark API error {code}: {msg} ({url})"
        elif msg:
            text = f"{msg} ({url})"
        elif status is None:
            text = f"Request failed: {url}\n{body[:500]}"
        else:
            text = f"HTTP {status}: {url}\n{body[:500]}"
        super().__init__(text)


# ── Configuration ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class ClientConfig:
    api_key: str
    api_url: Optional[str] = None
    region: str = "sg"
    logging: bool = False
    timeout: float = 30.0  # seconds
    max_retries: int = 3
    retry_delay: float = 1.0  # seconds

    @property
    def base_url(self) -> str:
        return (self.api_url or REGION_URLS.get(self.region, REGION_URLS["sg"])).rstrip("/")

    @classmethod
    def from_env(cls, environ=None) -> "ClientConfig":
        env = os.environ if environ is None else environ
        return cls(
            api_key=env.get("LARK_API_KEY") or env.get("LARK_TENANT_ACCESS_TOKEN", ""),
            api_url=env.get("LARK_API_URL") or None,
            region=env.get("LARK_REGION", "sg"),
            logging=env_flag(env.get("LARK_LOGGING")),
            timeout=float(env.get("LARK_TIMEOUT", "30")),
            max_retries=int(env.get("LARK_MAX_RETRIES", "3")),
            retry_delay=float(env.get("LARK_RETRY_DELAY", "1")),
        )


# ── Client ─────────────────────────────────────────────────────────────

class LarkDashboardClient:
    """requests-based client for the Bitable dashboard endpoints.

    One Session per client, bearer auth on every call. Network errors,
    HTTP 429 and 5xx are retried with exponential backoff plus jitter.
    """

    def __init__(self, config: ClientConfig, session: Optional[requests.Session] = None):
        validate_client_config(config)
        self.config = config
        self.base = config.base_url
        self.s = session or requests.Session()
        self.s.headers.update({
            "Authorization": f"Bearer {config.api_key}",
            "Content-Type": "application/json",
        })
        self._log_level = logging.INFO if config.logging else logging.DEBUG

    # ── Transport ──────────────────────────────────────────────

    def _backoff(self, attempt: int, method: str, url: str, reason):
        delay = self.config.retry_delay * (2 ** attempt) + random.uniform(0, self.config.retry_delay)
        logger.warning("%s %s failed (%s), retry %d/%d in %.2fs",
                       method, url, reason, attempt + 1, self.config.max_retries, delay)
        time.sleep(delay)

    def _request(self, method: str, path: str, body=None, params=None) -> dict:
        url = self.base + path
        headers = redact(dict(self.s.headers))
        for attempt in range(self.config.max_retries + 1):
            logger.log(self._log_level, "→ %s %s headers=%s body=%s",
                       method, url, headers, json.dumps(redact(body)) if body is not None else "-")
            try:
                r = self.s.request(method, url, json=body, params=params,
                                   timeout=self.config.timeout)
            except (requests.ConnectionError, requests.Timeout) as e:
                if attempt >= self.config.max_retries:
                    raise APIError(None, str(e), url) from e
                self._backoff(attempt, method, url, e.__class__.__name__)
                continue

            logger.log(self._log_level, "← %s %s %s", r.status_code, method, url)
            retryable = r.status_code in RETRY_STATUS or r.status_code >= 500
            if retryable and attempt < self.config.max_retries:
                self._backoff(attempt, method, url, f"HTTP {r.status_code}")
                continue
            return self._handle(r, url)

    @staticmethod
    def _handle(r: requests.Response, url: str) -> dict:
        try:
            payload = r.json() if r.content else {}
        except ValueError:
            payload = None
        if not r.ok:
            envelope = payload if isinstance(payload, dict) else {}
            raise APIError(r.status_code, r.text, url,
                           code=envelope.get("code"), msg=envelope.get("msg"))
        if payload is None:
            raise APIError(r.status_code, r.text, url, msg="response is not JSON")
        if not isinstance(payload, dict):
            raise APIError(r.status_code, r.text, url, msg="response is not a JSON object")
        if payload.get("code", 0) != 0:
            raise APIError(r.status_code, r.text, url,
                           code=payload["code"], msg=payload.get("msg"))
        return payload

    def get(self, path, params=None):
        return self._request("GET", path, params=params)

    def post(self, path, body=None):
        return self._request("POST", path, body)

    def put(self, path, body=None):
        return self._request("PUT", path, body)

    def patch(self, path, body=None):
        return self._request("PATCH", path, body)

    def delete(self, path):
        return self._request("DELETE", path)

    # ── Dashboards ─────────────────────────────────────────────

    @staticmethod
    def _dashboards_path(app_token: str, dashboard_id: Optional[str] = None) -> str:
        path = f"/bitable/v1/apps/{app_token}/dashboards"
        return f"{path}/{dashboard_id}" if dashboard_id else path

    def _block_id(self, resp: dict, path: str, what: str) -> str:
        block_id = (resp.get("data") or {}).get("block_id")
        if not block_id:
            raise APIError(200, json.dumps(resp), self.base + path,
                           msg=f"Failed to {what}: no block_id returned")
        return block_id

    def create_dashboard(self, dashboard: Dashboard) -> str:
        """Create the dashboard, then add its blocks. Returns the dashboard id.

        Block failures do not abort creation; they are logged.
        """
        validate_dashboard(dashboard)
        path = self._dashboards_path(dashboard.app_token)
        dashboard_id = self._block_id(self.post(path, {"name": dashboard.name}),
                                      path, "create dashboard")
        logger.info("Created dashboard %s (%s)", dashboard.name, dashboard_id)
        if dashboard.blocks:
            results = self.add_blocks(dashboard.app_token, dashboard_id, dashboard.blocks)
            failed = [r for r in results if not r.success]
            if failed:
                logger.warning("%d of %d blocks failed on dashboard %s",
                               len(failed), len(results), dashboard_id)
        return dashboard_id

    def add_block(self, app_token: str, dashboard_id: str, block: DashboardBlock) -> str:
        """Validate, convert and submit one block. Returns its remote block id."""
        validate_block(block)
        path = self._dashboards_path(app_token, dashboard_id) + "/blocks"
        return self._block_id(self.post(path, convert_block(block)), path, "add block")

    def add_blocks(self, app_token: str, dashboard_id: str, blocks) -> List[BatchOperationResult]:
        """Add blocks one by one; each failure becomes a result instead of aborting."""
        results = []
        for block in blocks:
            try:
                block_id = self.add_block(app_token, dashboard_id, block)
                results.append(BatchOperationResult(True, block_id=block_id))
            except (APIError, ValidationError) as e:
                logger.warning("Failed to add block: %s", e)
                results.append(BatchOperationResult(False, error=str(e)))
        return results

    def update_block(self, app_token: str, dashboard_id: str, block_id: str,
                     block: DashboardBlock):
        validate_block(block)
        path = self._dashboards_path(app_token, dashboard_id) + f"/blocks/{block_id}"
        return self.patch(path, convert_block(block)).get("data")

    def delete_block(self, app_token: str, dashboard_id: str, block_id: str):
        self.delete(self._dashboards_path(app_token, dashboard_id) + f"/blocks/{block_id}")

    def batch_delete_blocks(self, app_token: str, dashboard_id: str,
                            block_ids) -> List[BatchOperationResult]:
        results = []
        for block_id in block_ids:
            try:
                self.delete_block(app_token, dashboard_id, block_id)
                results.append(BatchOperationResult(True, block_id=block_id))
            except APIError as e:
                logger.warning("Failed to delete block %s: %s", block_id, e)
                results.append(BatchOperationResult(False, block_id=block_id, error=str(e)))
        return results

    def delete_dashboard(self, app_token: str, dashboard_id: str):
        self.delete(self._dashboards_path(app_token, dashboard_id))

    def get_dashboard(self, app_token: str, dashboard_id: str) -> dict:
        return self.get(self._dashboards_path(app_token, dashboard_id)).get("data")

    def list_dashboards(self, app_token: str) -> list:
        data = self.get(self._dashboards_path(app_token)).get("data") or {}
        return data.get("items") or []


def get_client() -> LarkDashboardClient:
    """Get a configured client from environment variables."""
    return LarkDashboardClient(ClientConfig.from_env())
