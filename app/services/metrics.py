"""
In-process request metrics with Prometheus text export.

Requests are keyed by method and matched route template
(``/api/assets/{asset_id}``), so the key set is bounded by the routing
table. Requests that match no route share a single key.
"""

import time
from collections import defaultdict
from dataclasses import dataclass
from typing import Any

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

UNMATCHED_ROUTE = "<unmatched>"


def route_template(request: Request) -> str:
    """Path template of the route that handled the request."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or UNMATCHED_ROUTE


@dataclass
class RouteStats:
    requests: int = 0
    errors: int = 0
    seconds: float = 0.0

    @property
    def avg_seconds(self) -> float:
        return self.seconds / self.requests if self.requests else 0.0


class MetricsCollector:
    """Counts requests, errors and latency per (method, route)."""

    def __init__(self) -> None:
        self._routes: dict[tuple[str, str], RouteStats] = defaultdict(RouteStats)
        self._status_counts: dict[int, int] = defaultdict(int)
        self._start_time: float = time.time()

    def record_request(
        self,
        method: str,
        route: str,
        status_code: int,
        duration: float,
    ) -> None:
        """Record a completed request."""
        stats = self._routes[(method, route)]
        stats.requests += 1
        stats.seconds += duration
        if status_code >= 400:
            stats.errors += 1
        self._status_counts[status_code] += 1

    def get_metrics(self) -> dict[str, Any]:
        """Get metrics as a structured dictionary."""
        total_requests = sum(s.requests for s in self._routes.values())
        total_errors = sum(s.errors for s in self._routes.values())
        labelled = {f"{method} {route}": s for (method, route), s in self._routes.items()}

        return {
            "uptime_seconds": round(time.time() - self._start_time, 2),
            "total_requests": total_requests,
            "total_errors": total_errors,
            "error_rate": round(total_errors / total_requests, 4) if total_requests else 0,
            "requests_by_endpoint": {k: s.requests for k, s in labelled.items()},
            "errors_by_endpoint": {k: s.errors for k, s in labelled.items() if s.errors},
            "status_code_counts": {str(k): v for k, v in sorted(self._status_counts.items())},
            "avg_response_time_ms": {k: round(s.avg_seconds * 1000, 2) for k, s in labelled.items()},
        }

    def to_prometheus(self, catalog: dict[str, int] | None = None) -> str:
        """
        Export metrics in Prometheus text exposition format.
        See: https://prometheus.io/docs/instrumenting/exposition_formats/
        """
        routes = sorted(self._routes.items())

        def family(name: str, kind: str, help_text: str, samples: list[str]) -> list[str]:
            return [f"# HELP {name} {help_text}", f"# TYPE {name} {kind}", *samples, ""]

        def labels(method: str, route: str) -> str:
            return f'{{method="{method}",path="{route}"}}'

        lines = family(
            "warehouse_uptime_seconds", "gauge", "Time since service start in seconds",
            [f"warehouse_uptime_seconds {time.time() - self._start_time:.2f}"],
        )
        lines += family(
            "warehouse_http_requests_total", "counter", "Total HTTP requests",
            [f"warehouse_http_requests_total{labels(*key)} {s.requests}" for key, s in routes],
        )
        lines += family(
            "warehouse_http_errors_total", "counter", "Total HTTP errors (4xx/5xx)",
            [f"warehouse_http_errors_total{labels(*key)} {s.errors}" for key, s in routes if s.errors],
        )
        lines += family(
            "warehouse_http_status_total", "counter", "HTTP responses by status code",
            [f'warehouse_http_status_total{{code="{code}"}} {count}'
             for code, count in sorted(self._status_counts.items())],
        )
        lines += family(
            "warehouse_http_response_time_seconds", "gauge", "Average response time in seconds",
            [f"warehouse_http_response_time_seconds{labels(*key)} {s.avg_seconds:.6f}" for key, s in routes],
        )

        for name, value in sorted((catalog or {}).items()):
            lines.append(f"# TYPE warehouse_{name} gauge")
            lines.append(f"warehouse_{name} {value}")

        return "\n".join(lines) + "\n"


_metrics_collector: MetricsCollector | None = None


def get_metrics_collector() -> MetricsCollector:
    """Get or create the process-wide collector."""
    global _metrics_collector
    if _metrics_collector is None:
        _metrics_collector = MetricsCollector()
    return _metrics_collector


class MetricsMiddleware(BaseHTTPMiddleware):
    """
    Records every request except the metrics endpoints themselves.

    The route is read from the scope after the router has run, which is
    when FastAPI stores the matched route there.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path.startswith("/metrics"):
            return await call_next(request)

        start = time.perf_counter()
        response = await call_next(request)

        get_metrics_collector().record_request(
            method=request.method,
            route=route_template(request),
            status_code=response.status_code,
            duration=time.perf_counter() - start,
        )

        return response
