"""
Synchronous REST API client base.

Provides the shared HTTP concerns for provider adapters:
- error classification by status code
- scrubbed request/response logging
- timeout control

No retries are performed here; callers that want retries must re-derive
their own idempotency identifiers first.
"""
import json
from typing import Dict, Any, Optional, Union
from dataclasses import dataclass
from datetime import datetime
import httpx

from core.config import settings
from core.logging_config import get_logger
from infrastructure.external.payments.scrubbing import scrub

logger = get_logger(__name__)


@dataclass
class APIResponse:
    """Raw HTTP response wrapper"""
    status_code: int
    headers: Dict[str, str]
    raw_content: bytes
    elapsed_ms: float
    request_id: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def is_error(self) -> bool:
        return self.status_code >= 400

    def json(self) -> Any:
        return json.loads(self.raw_content)

    def text(self) -> str:
        return self.raw_content.decode('utf-8')


class APIError(Exception):
    """Base class for transport and protocol failures"""
    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response: Optional[APIResponse] = None,
        request_id: Optional[str] = None
    ):
        self.message = message
        self.status_code = status_code
        self.response = response
        self.request_id = request_id
        super().__init__(self.message)

    def __str__(self):
        parts = [self.message]
        if self.status_code:
            parts.append(f"Status: {self.status_code}")
        if self.request_id:
            parts.append(f"Request ID: {self.request_id}")
        return " | ".join(parts)


class RateLimitError(APIError):
    pass


class AuthenticationError(APIError):
    pass


class ServerError(APIError):
    pass


class TransportError(APIError):
    """Timeout or lower-level network failure"""
    pass


class MalformedResponseError(APIError):
    """Response body could not be decoded into the expected shape"""
    pass


# Provider bodies for these statuses carry a business outcome, not a fault.
TOLERATED_STATUS_CODES = {400, 404}

SENSITIVE_HEADERS = {"authorization", "x-api-key"}


class BaseAPIClient:
    """
    Blocking HTTP client used as the transport for provider adapters.

    ``post`` returns the raw body for 2xx and tolerated statuses and raises
    an ``APIError`` subclass for everything else.
    """

    def __init__(
        self,
        timeout: Union[float, httpx.Timeout] = 30.0,
        headers: Optional[Dict[str, str]] = None,
        verify_ssl: bool = True,
        debug: Optional[bool] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Args:
            timeout: request timeout in seconds or an ``httpx.Timeout``
            headers: default headers sent with every request
            verify_ssl: verify TLS certificates
            debug: log scrubbed request/response bodies (defaults to settings)
            transport: custom httpx transport, mainly for tests
        """
        self.timeout = timeout if isinstance(timeout, httpx.Timeout) else httpx.Timeout(timeout)
        self.verify_ssl = verify_ssl
        self.debug = settings.LOG_PROVIDER_TRAFFIC if debug is None else debug
        self.default_headers = {
            "Accept": "application/json",
            "User-Agent": f"{settings.PROJECT_NAME.replace(' ', '-')}/{settings.VERSION}",
        }
        if headers:
            self.default_headers.update(headers)
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(
                timeout=self.timeout,
                verify=self.verify_ssl,
                transport=self._transport,
            )
        return self._client

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    @staticmethod
    def _truncate(body: Optional[str]) -> Optional[str]:
        if body is None:
            return None
        limit = settings.LOG_PROVIDER_BODY_MAX_BYTES
        return body if len(body) <= limit else body[:limit] + "..."

    def _log_request(self, method: str, url: str, body: Optional[str], headers: Dict[str, str]):
        if self.debug:
            logger.debug(
                "api_request",
                method=method,
                url=url,
                body=self._truncate(scrub(body)) if body else None,
                headers={k: v for k, v in headers.items() if k.lower() not in SENSITIVE_HEADERS},
            )

    def _log_response(self, url: str, response: APIResponse):
        if self.debug:
            logger.debug(
                "api_response",
                url=url,
                status_code=response.status_code,
                elapsed_ms=round(response.elapsed_ms, 2),
                request_id=response.request_id,
                body=self._truncate(scrub(response.raw_content.decode("utf-8", errors="replace"))),
            )

    def _handle_error_response(self, response: APIResponse):
        error_map = {
            401: AuthenticationError,
            403: AuthenticationError,
            429: RateLimitError,
            500: ServerError,
            502: ServerError,
            503: ServerError,
            504: ServerError,
        }
        error_class = error_map.get(response.status_code, APIError)

        error_message = f"API request failed with status {response.status_code}"
        try:
            data = response.json()
            if isinstance(data, dict):
                error_message = data.get("message") or data.get("error") or error_message
        except ValueError:
            pass

        raise error_class(
            message=error_message,
            status_code=response.status_code,
            response=response,
            request_id=response.request_id,
        )

    def _request(
        self,
        method: str,
        url: str,
        content: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> APIResponse:
        request_headers = {**self.default_headers}
        if headers:
            request_headers.update(headers)

        self._log_request(method, url, content, request_headers)

        start_time = datetime.now()
        try:
            response = self.client.request(
                method=method,
                url=url,
                content=content.encode("utf-8") if content is not None else None,
                headers=request_headers,
            )
        except httpx.TimeoutException as exc:
            raise TransportError(f"Request timeout after {self.timeout.read}s") from exc
        except httpx.TransportError as exc:
            raise TransportError(f"Network error: {exc}") from exc
        elapsed = (datetime.now() - start_time).total_seconds() * 1000

        api_response = APIResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            raw_content=response.content,
            elapsed_ms=elapsed,
            request_id=response.headers.get("x-request-id"),
        )
        self._log_response(url, api_response)

        if api_response.is_error and api_response.status_code not in TOLERATED_STATUS_CODES:
            self._handle_error_response(api_response)
        if not api_response.is_success and not api_response.is_error:
            # 3xx: redirects are not followed
            self._handle_error_response(api_response)
        return api_response

    def post(self, url: str, body: Optional[str] = None, headers: Optional[Dict[str, str]] = None) -> str:
        """POST ``body`` to ``url`` and return the raw response body."""
        response = self._request("POST", url, content=body, headers=headers)
        try:
            return response.text()
        except UnicodeDecodeError as exc:
            raise MalformedResponseError(
                "Response body is not valid UTF-8",
                status_code=response.status_code,
                response=response,
                request_id=response.request_id,
            ) from exc
