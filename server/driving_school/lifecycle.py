"""
Process lifecycle: serving, signal-driven shutdown and last-resort error logging.

A SIGTERM or SIGINT lets uvicorn drain in-flight requests. If draining takes
longer than ``shutdown_timeout`` seconds the process is killed with exit
code 1; a clean drain exits with 0.
"""
import os
import signal
import sys
import threading
from types import FrameType, TracebackType
from typing import Any, Dict, Optional, Type

import uvicorn

from driving_school.config import Settings
from driving_school.logger import get_logger

logger = get_logger(__name__)


def log_uncaught_exception(
    exc_type: Type[BaseException],
    exc: BaseException,
    tb: Optional[TracebackType],
) -> None:
    """sys.excepthook: log faults outside any request; the interpreter then exits with 1."""
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc, tb)
        return
    logger.critical("Uncaught exception", exc_info=(exc_type, exc, tb))


def log_thread_exception(args: threading.ExceptHookArgs) -> None:
    """threading.excepthook: log faults raised in worker threads."""
    if issubclass(args.exc_type, SystemExit):
        return
    logger.critical(
        "Uncaught exception in thread",
        exc_info=(args.exc_type, args.exc_value, args.exc_traceback),
        extra={"thread_name": args.thread.name if args.thread is not None else None},
    )


def loop_exception_handler(loop, context: Dict[str, Any]) -> None:
    """asyncio handler for failures no request is waiting on. Logged, never fatal."""
    exc = context.get("exception")
    logger.error(
        "Unhandled rejection",
        exc_info=exc,
        extra={"detail": context.get("message", "")},
    )


def install_exception_hooks() -> None:
    sys.excepthook = log_uncaught_exception
    threading.excepthook = log_thread_exception


def _force_exit() -> None:
    logger.error("Forced shutdown after timeout")
    os._exit(1)


class GracefulServer(uvicorn.Server):
    """uvicorn server that gives up on draining after a fixed grace period."""

    def __init__(self, config: uvicorn.Config, shutdown_timeout: float = 30.0):
        super().__init__(config)
        self.shutdown_timeout = shutdown_timeout
        self.force_exit_timer: Optional[threading.Timer] = None

    async def startup(self, sockets=None) -> None:
        await super().startup(sockets=sockets)
        # uvicorn leaves started False when the bind fails
        if self.started:
            logger.info(
                "Server started successfully",
                extra={
                    "host": self.config.host,
                    "port": self.config.port,
                    "dataStore": "in-memory",
                },
            )

    def handle_exit(self, sig: int, frame: Optional[FrameType]) -> None:
        if self.force_exit_timer is None:
            try:
                name = signal.Signals(sig).name
            except ValueError:
                name = str(sig)
            logger.info(f"{name} received, shutting down gracefully...")
            self.force_exit_timer = threading.Timer(self.shutdown_timeout, _force_exit)
            self.force_exit_timer.daemon = True
            self.force_exit_timer.start()
        super().handle_exit(sig, frame)

    def cancel_force_exit(self) -> None:
        if self.force_exit_timer is not None:
            self.force_exit_timer.cancel()


def serve(settings: Settings) -> int:
    """Run the API until a shutdown signal arrives. Returns the process exit code."""
    from driving_school.main import create_app

    install_exception_hooks()
    server: Optional[GracefulServer] = None
    try:
        app = create_app(settings)
        config = uvicorn.Config(
            app,
            host=settings.host,
            port=settings.port,
            log_config=None,
            access_log=False,
            timeout_graceful_shutdown=int(settings.shutdown_timeout),
        )
        server = GracefulServer(config, shutdown_timeout=settings.shutdown_timeout)
        server.run()
    except SystemExit as exc:
        # uvicorn exits on its own when it cannot bind the socket
        logger.error("Failed to start server", extra={"port": settings.port, "exit_code": exc.code})
        return 1
    except Exception:
        logger.exception("Failed to start server")
        return 1
    finally:
        if server is not None:
            server.cancel_force_exit()

    if not server.started:
        logger.error("Failed to start server", extra={"port": settings.port})
        return 1
    logger.info("HTTP server closed")
    return 0
