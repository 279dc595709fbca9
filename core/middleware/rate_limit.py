"""
Rate limiting middleware.

The MT5 endpoints are unauthenticated, so they are limited per client IP
with a fixed one-minute window kept in the cache.
"""

import time
from typing import Callable, Tuple

from django.core.cache import cache
from django.http import HttpRequest, HttpResponse, JsonResponse

from core.conf import licensing_setting
from core.metrics import errors_total

RATE_LIMITED_PREFIXES = ("/api/v1/mt5/",)


class RateLimitMiddleware:
    """
    Rate limiting middleware per client IP.

    The limit is LICENSING["MT5_RATE_LIMIT_PER_MINUTE"].
    """

    RATE_LIMIT_WINDOW = 60  # seconds

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response

    def _client_ip(self, request: HttpRequest) -> str:
        """
        Client address.

        X-Forwarded-For is only read behind LICENSING["TRUSTED_PROXY_COUNT"]
        proxies, taking the hop the outermost trusted proxy appended. Hops to
        the left of it are client supplied.

        Args:
            request: HTTP request

        Returns:
            IP address string
        """
        remote_addr = request.META.get("REMOTE_ADDR", "unknown")
        proxies = licensing_setting("TRUSTED_PROXY_COUNT")
        if not proxies:
            return remote_addr
        hops = [
            hop.strip()
            for hop in request.META.get("HTTP_X_FORWARDED_FOR", "").split(",")
            if hop.strip()
        ]
        if len(hops) < proxies:
            return remote_addr
        return hops[-proxies]

    def _check_rate_limit(self, client_ip: str, limit: int) -> Tuple[bool, int, int]:
        """
        Check if request is within rate limit.

        Args:
            client_ip: Client address
            limit: Requests allowed per window

        Returns:
            Tuple of (is_allowed, remaining, reset_time)
        """
        window_start = int(time.time() / self.RATE_LIMIT_WINDOW)
        reset_time = (window_start + 1) * self.RATE_LIMIT_WINDOW
        full_key = f"rate_limit:mt5:{client_ip}:{window_start}"

        current_count = cache.get(full_key, 0)
        if current_count >= limit:
            return False, 0, reset_time

        try:
            new_count = cache.incr(full_key, 1)
        except ValueError:
            cache.set(full_key, 1, timeout=self.RATE_LIMIT_WINDOW)
            new_count = 1

        return True, max(0, limit - new_count), reset_time

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """
        Process request with rate limiting.

        Args:
            request: HTTP request

        Returns:
            HTTP response with rate limit headers
        """
        if not request.path.startswith(RATE_LIMITED_PREFIXES):
            return self.get_response(request)

        limit = licensing_setting("MT5_RATE_LIMIT_PER_MINUTE")
        is_allowed, remaining, reset_time = self._check_rate_limit(self._client_ip(request), limit)

        if not is_allowed:
            errors_total.labels(error_type="rate_limit_exceeded", endpoint=request.path).inc()
            response = JsonResponse(
                {
                    "success": False,
                    "error": {
                        "code": "RATE_LIMIT_EXCEEDED",
                        "message": "Rate limit exceeded. Please try again later.",
                    },
                },
                status=429,
            )
        else:
            response = self.get_response(request)

        # Rate limit headers (RFC 6585)
        response["X-RateLimit-Limit"] = str(limit)
        response["X-RateLimit-Remaining"] = str(remaining)
        response["X-RateLimit-Reset"] = str(reset_time)
        if not is_allowed:
            response["Retry-After"] = str(max(0, reset_time - int(time.time())))
        return response
