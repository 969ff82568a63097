"""App Insights REST client for running metric batches and free-text queries."""

import json
import os
import urllib.parse
import urllib.request
from typing import Any, Dict, List, Optional, Sequence

from dotenv import load_dotenv

from .schemas import QueryDescriptor

load_dotenv()

DEFAULT_BASE_URL = "https://api.applicationinsights.io/v1"


class AppInsightsClient:
    """Client for the App Insights query API."""

    def __init__(self, api_key: Optional[str] = None, base_url: str = DEFAULT_BASE_URL, timeout: int = 30):
        """
        Initialize App Insights client.

        Args:
            api_key: App Insights API key. If None, reads from APPINSIGHTS_API_KEY env var.
            base_url: API root, without trailing slash
            timeout: Request timeout in seconds
        """
        self.api_key = api_key or os.getenv("APPINSIGHTS_API_KEY")
        if not self.api_key:
            raise ValueError("APPINSIGHTS_API_KEY not found in environment variables")

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _request(self, endpoint: str, data: Optional[Any] = None) -> Any:
        """
        Call an API endpoint, POSTing `data` as JSON when given.

        Raises:
            urllib.error.HTTPError: If API request fails
            json.JSONDecodeError: If the response is not JSON
        """
        url = f"{self.base_url}{endpoint}"
        body = json.dumps(data).encode("utf-8") if data is not None else None
        req = urllib.request.Request(url, data=body, method="POST" if body is not None else "GET")
        req.add_header("x-api-key", self.api_key)
        if body is not None:
            req.add_header("Content-Type", "application/json")

        with urllib.request.urlopen(req, timeout=self.timeout) as response:
            return json.loads(response.read())

    def query(self, app_id: str, query: str) -> Dict[str, Any]:
        """
        Run a free-text (Kusto) query.

        Returns:
            Parsed JSON response with the `tables` list
        """
        params = urllib.parse.urlencode({"query": query})
        return self._request(f"/apps/{urllib.parse.quote(app_id)}/query?{params}")

    def metrics(self, app_id: str, descriptors: Sequence[QueryDescriptor]) -> List[Dict[str, Any]]:
        """
        Run a batch of metric queries.

        Returns:
            One entry per descriptor: {"id": key, "status": 200, "body": {"value": {...}}}.
            Entries are not guaranteed to come back in request order.
        """
        payload = [descriptor.to_wire() for descriptor in descriptors]
        return self._request(f"/apps/{urllib.parse.quote(app_id)}/metrics", payload)
