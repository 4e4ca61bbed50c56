import logging
import threading
import time
from functools import wraps
from flask import current_app, request

from heartlink.errors import RateLimited

logger = logging.getLogger(__name__)


class RateLimiter:
    """Sliding-window request counter keyed by client address."""

    def __init__(self, window, max_requests, clock=time.monotonic):
        self.window = window
        self.max_requests = max_requests
        self._clock = clock
        self._hits = {}
        self._last_sweep = clock()
        self._lock = threading.Lock()

    def check(self, key):
        now = self._clock()
        with self._lock:
            self._sweep(now)
            hits = [t for t in self._hits.get(key, ()) if now - t < self.window]
            if len(hits) >= self.max_requests:
                self._hits[key] = hits
                return False
            hits.append(now)
            self._hits[key] = hits
            return True

    def _sweep(self, now):
        """Forget clients whose most recent hit is outside the window."""
        if now - self._last_sweep < self.window:
            return
        self._last_sweep = now
        for key in [k for k, hits in self._hits.items() if not hits or now - hits[-1] >= self.window]:
            del self._hits[key]

    def __len__(self):
        with self._lock:
            return len(self._hits)


def init_rate_limiter(app):
    app.extensions["heartlink.rate_limiter"] = RateLimiter(
        app.config["RATE_LIMIT_WINDOW"], app.config["RATE_LIMIT_MAX"]
    )


def rate_limited(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        ip = request.remote_addr or "unknown"
        if not current_app.extensions["heartlink.rate_limiter"].check(ip):
            logger.warning("Rate limit hit ip=%s path=%s", ip, request.path)
            raise RateLimited()
        return f(*args, **kwargs)
    return decorated_function
