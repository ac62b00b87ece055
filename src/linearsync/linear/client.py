"""Async GraphQL client for the Linear API."""

from typing import Any

import httpx
import structlog

from linearsync.errors import APIError, ConfigurationError, TransientError

log = structlog.get_logger()

DEFAULT_API_URL = "https://api.linear.app/graphql"

# Linear reports throttling as a GraphQL error with this extension code
RATE_LIMITED_CODE = "RATELIMITED"


def _is_rate_limited(errors: list[dict[str, Any]]) -> bool:
    for error in errors:
        code = (error.get("extensions") or {}).get("code", "")
        if code == RATE_LIMITED_CODE or "rate limit" in error.get("message", "").lower():
            return True
    return False


def _parse_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def _graphql_errors(body: Any) -> list[dict[str, Any]]:
    if isinstance(body, dict):
        return body.get("errors") or []
    return []


class LinearClient:
    """GraphQL client for Linear API.

    Failures are raised as linearsync errors: transport problems as
    ``TransientError``, error responses as ``APIError`` carrying a status
    code (429 for rate limiting).
    """

    def __init__(
        self,
        api_key: str,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            api_key: Linear API key.
            api_url: GraphQL endpoint.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (used by tests).

        Raises:
            ConfigurationError: If no API key is given.
        """
        if not api_key:
            raise ConfigurationError("LINEAR_API_KEY is required")

        self.api_url = api_url
        self.timeout = timeout
        self._api_key = api_key
        self._transport = transport

    def _get_headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": self._api_key,
        }

    async def request(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """Run a GraphQL query or mutation.

        Args:
            query: GraphQL document.
            variables: Query variables.

        Returns:
            The ``data`` member of the response.

        Raises:
            TransientError: On timeouts and connection failures.
            APIError: On HTTP error status, GraphQL errors, or a response body
                that is not a JSON object.
        """
        payload: dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    self.api_url,
                    json=payload,
                    headers=self._get_headers(),
                )
        except (httpx.TimeoutException, httpx.NetworkError, httpx.RemoteProtocolError) as e:
            log.warning("linear_request_failed", error=str(e), error_type=type(e).__name__)
            raise TransientError(f"Linear request failed: {e}") from e

        body = _parse_body(response)
        errors = _graphql_errors(body)

        if response.status_code >= 400:
            status = 429 if _is_rate_limited(errors) else response.status_code
            message = errors[0].get("message", response.text) if errors else response.text
            log.error("linear_http_error", status=response.status_code, error=message)
            raise APIError(f"Linear API error ({response.status_code}): {message}", status)

        if errors:
            log.error("linear_graphql_errors", errors=errors)
            status = 429 if _is_rate_limited(errors) else 400
            raise APIError(f"GraphQL error: {errors[0].get('message', str(errors))}", status)

        if not isinstance(body, dict):
            log.error("linear_invalid_response", status=response.status_code)
            raise APIError(
                f"Linear API returned an invalid response body: {response.text[:200]}",
                response.status_code,
            )

        return body.get("data") or {}
