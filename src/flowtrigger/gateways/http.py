"""HTTP execution gateway that submits executable flows to an executor server.

Sends ``POST {base_url}/executions`` with a JSON body::

    {"submitUser": "...", "executableFlow": {...}}

A 2xx answer may carry ``{"execid": <int>}``, which is copied onto the
executable flow.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx
import tenacity

from flowtrigger.exceptions import ConfigurationError, ExecutorApiError

if TYPE_CHECKING:
    from flowtrigger.config import FlowTriggerConfig
    from flowtrigger.models.project import ExecutableFlow

logger = logging.getLogger(__name__)


def _is_retryable(exc: BaseException) -> bool:
    """Only failures to establish a connection are retried.

    Once a request has reached the executor it may have been accepted, so
    timeouts while reading and HTTP error statuses are never retried.
    """
    return isinstance(exc, (httpx.ConnectError, httpx.ConnectTimeout))


class HttpExecutionGateway:
    """ExecutionGateway over the executor's JSON API.

    Usage::

        with HttpExecutionGateway("http://executor:12321") as gateway:
            gateway.submit(exflow, "alice")
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        connect_retries: int = 3,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the gateway.

        Args:
            base_url: Executor server base URL.
            timeout: Request timeout in seconds.
            connect_retries: Attempts made when the connection itself fails.
            transport: Optional httpx transport (used by tests).
        """
        self._base_url = base_url.rstrip("/")
        self._connect_retries = connect_retries
        self._client = httpx.Client(
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    @classmethod
    def from_config(
        cls, config: FlowTriggerConfig, *, transport: httpx.BaseTransport | None = None
    ) -> HttpExecutionGateway:
        """Build a gateway from a FlowTriggerConfig.

        Raises:
            ConfigurationError: If no executor URL is configured.
        """
        if not config.executor_url:
            raise ConfigurationError(["executor_url"])
        return cls(
            config.executor_url,
            timeout=config.executor_timeout,
            connect_retries=config.connect_retries,
            transport=transport,
        )

    def submit(self, executable_flow: ExecutableFlow, submit_user: str) -> None:
        """Submit an executable flow.

        Raises:
            ExecutorApiError: On a non-2xx answer or an unreadable body.
            httpx.HTTPError: On transport failures that outlast the retries.
        """
        retryer = tenacity.Retrying(
            retry=tenacity.retry_if_exception(_is_retryable),
            wait=tenacity.wait_exponential(multiplier=0.5, min=0.5, max=5),
            stop=tenacity.stop_after_attempt(self._connect_retries),
            before_sleep=tenacity.before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        data = retryer(self._do_submit, executable_flow, submit_user)
        exec_id = data.get("execid")
        if exec_id is not None:
            executable_flow.execution_id = exec_id
        logger.debug(
            "Executor accepted %s.%s as execution %s",
            executable_flow.project_name,
            executable_flow.flow_id,
            executable_flow.execution_id,
        )

    def _do_submit(self, executable_flow: ExecutableFlow, submit_user: str) -> dict[str, Any]:
        """Execute a single submit request (no retry)."""
        response = self._client.post(
            f"{self._base_url}/executions",
            json={
                "submitUser": submit_user,
                "executableFlow": executable_flow.to_object(),
            },
        )
        if response.is_error:
            raise ExecutorApiError(
                f"Executor rejected submission: {response.text}",
                status_code=response.status_code,
            )
        if not response.content:
            return {}
        try:
            data = response.json()
        except ValueError as e:
            raise ExecutorApiError(
                f"Executor returned invalid JSON: {response.text[:200]}",
                status_code=response.status_code,
            ) from e
        if not isinstance(data, dict):
            raise ExecutorApiError(
                "Executor returned a non-object response",
                status_code=response.status_code,
            )
        if "error" in data:
            raise ExecutorApiError(
                f"Executor reported an error: {data['error']}",
                status_code=response.status_code,
            )
        exec_id = data.get("execid")
        if exec_id is not None and (isinstance(exec_id, bool) or not isinstance(exec_id, int)):
            raise ExecutorApiError(
                f"Executor returned a non-integer execid: {exec_id!r}",
                status_code=response.status_code,
            )
        return data

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> HttpExecutionGateway:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
