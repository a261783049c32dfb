"""Listener ownership, signal handling and graceful drain for the HTTP server."""
from __future__ import annotations

import enum
import logging
import signal
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Iterable, Optional

from .config import ServerConfig
from .router import Request, Router

__all__ = ["DrainingHTTPServer", "LifecycleState", "RequestHandler", "ServerLifecycle"]

LOGGER = logging.getLogger(__name__)

SHUTDOWN_SIGNALS = (signal.SIGTERM, signal.SIGINT)


class LifecycleState(enum.Enum):
    STARTING = "starting"
    LISTENING = "listening"
    DRAINING = "draining"
    STOPPED = "stopped"


class DrainingHTTPServer(ThreadingHTTPServer):
    """Threaded HTTP server that counts requests still being served."""

    daemon_threads = True
    block_on_close = False
    allow_reuse_port = False

    def __init__(self, server_address, handler_class, router: Router) -> None:
        self.router = router
        self._in_flight = 0
        self._idle = threading.Condition()
        super().__init__(server_address, handler_class)

    @property
    def in_flight(self) -> int:
        with self._idle:
            return self._in_flight

    def process_request(self, request, client_address) -> None:
        # Counted on the accept thread so drain never misses a connection
        # whose worker has not started yet.
        with self._idle:
            self._in_flight += 1
        try:
            super().process_request(request, client_address)
        except BaseException:
            self._release()
            raise

    def process_request_thread(self, request, client_address) -> None:
        try:
            super().process_request_thread(request, client_address)
        finally:
            self._release()

    def _release(self) -> None:
        with self._idle:
            self._in_flight -= 1
            if self._in_flight == 0:
                self._idle.notify_all()

    def wait_idle(self, timeout: Optional[float] = None) -> bool:
        """Block until no request is in flight; ``False`` if ``timeout`` expired."""
        with self._idle:
            return self._idle.wait_for(lambda: self._in_flight == 0, timeout)

    def handle_error(self, request, client_address) -> None:
        LOGGER.exception("Error while handling request from %s", client_address[0])


class RequestHandler(BaseHTTPRequestHandler):
    server_version = "CICDDemo/1.0"

    def _serve(self) -> None:
        request = Request(self.command, self.path, self.client_address[0])
        response = self.server.router.dispatch(request)
        body = response.encode()
        self.send_response(response.status)
        self.send_header("Content-Type", response.header_value)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        if self.command != "HEAD":
            self.wfile.write(body)

    def __getattr__(self, name: str):
        # http.server looks up do_<METHOD>; every method routes the same way.
        if name.startswith("do_"):
            return self._serve
        raise AttributeError(name)

    def log_message(self, format: str, *args) -> None:  # noqa: A002 - http.server signature
        LOGGER.debug("%s - %s", self.address_string(), format % args)


class ServerLifecycle:
    """Owns the listening socket and walks STARTING → LISTENING → DRAINING → STOPPED.

    Shutdown is requested through a :class:`threading.Event`, which signal
    handlers set. :meth:`drain` then stops accepting, closes the socket and
    waits for the in-flight counter to reach zero before marking the
    lifecycle stopped.
    """

    def __init__(self, config: ServerConfig, router: Optional[Router] = None) -> None:
        self._config = config
        self._router = router or Router(config)
        self._state = LifecycleState.STARTING
        self._state_lock = threading.Lock()
        self._shutdown_requested = threading.Event()
        self._server: Optional[DrainingHTTPServer] = None
        self._thread: Optional[threading.Thread] = None
        self._accepting = False

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def accepting(self) -> bool:
        return self._accepting

    @property
    def port(self) -> int:
        if self._server is None:
            return self._config.port
        return self._server.server_address[1]

    @property
    def in_flight(self) -> int:
        return self._server.in_flight if self._server is not None else 0

    @property
    def shutdown_requested(self) -> bool:
        return self._shutdown_requested.is_set()

    def start(self) -> None:
        """Bind the listener and start accepting; raises ``OSError`` on bind failure."""
        with self._state_lock:
            if self._state is not LifecycleState.STARTING:
                raise RuntimeError(f"Cannot start server in state {self._state.name}")
            self._server = DrainingHTTPServer(
                (self._config.host, self._config.port), RequestHandler, self._router
            )
            self._thread = threading.Thread(
                target=self._server.serve_forever,
                kwargs={"poll_interval": 0.1},
                name="http-server",
                daemon=True,
            )
            self._thread.start()
            self._accepting = True
            self._state = LifecycleState.LISTENING
        self._log_banner()

    def _log_banner(self) -> None:
        base_url = f"http://localhost:{self.port}"
        LOGGER.info(
            "\n".join(
                (
                    "=================================================",
                    f"  {self._config.app_name} Application Started",
                    "  CSC11004 Project",
                    "-------------------------------------------------",
                    f"  Server running at {base_url}",
                    f"  Health check: {base_url}/health",
                    f"  API Info: {base_url}/api/info",
                    "=================================================",
                )
            )
        )

    def request_shutdown(self, reason: Optional[str] = None) -> None:
        """Ask the main thread to drain; safe to call from signal handlers."""
        if reason and not self._shutdown_requested.is_set():
            LOGGER.info("%s, shutting down gracefully...", reason)
        self._shutdown_requested.set()

    def _handle_signal(self, signum, frame) -> None:
        self.request_shutdown(f"{signal.Signals(signum).name} received")

    def install_signal_handlers(self, signals: Iterable[int] = SHUTDOWN_SIGNALS) -> None:
        for signum in signals:
            signal.signal(signum, self._handle_signal)

    def wait_for_shutdown(self, poll_interval: float = 0.5) -> None:
        # Short waits keep the main thread responsive to signal delivery.
        while not self._shutdown_requested.wait(poll_interval):
            pass

    def drain(self) -> bool:
        """Stop accepting, wait for in-flight requests and mark the lifecycle stopped.

        Returns ``False`` when ``drain_timeout`` expired with requests still
        running.
        """
        with self._state_lock:
            if self._state is LifecycleState.STOPPED:
                return True
            if self._server is None:
                self._state = LifecycleState.STOPPED
                return True

            self._state = LifecycleState.DRAINING
            self._server.shutdown()
            self._server.server_close()
            self._accepting = False
            if self._thread is not None:
                self._thread.join()

            drained = self._server.wait_idle(self._config.drain_timeout)
            if not drained:
                LOGGER.warning(
                    "Drain timed out after %ss with %s request(s) in flight",
                    self._config.drain_timeout,
                    self._server.in_flight,
                )
            LOGGER.info("Server closed")
            self._state = LifecycleState.STOPPED
            return drained

    def run(self) -> int:
        self.start()
        self.wait_for_shutdown()
        self.drain()
        return 0
