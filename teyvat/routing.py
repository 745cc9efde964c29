"""Requests, routers and the dispatcher that runs them on a worker pool."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Optional

from teyvat.message import Message

logger = logging.getLogger(__name__)

Hook = Callable[["Request"], Any]


class Request:
    """A message received on a connection."""

    def __init__(self, conn: Any, msg: Message) -> None:
        self._conn = conn
        self._msg = msg

    @property
    def connection(self) -> Any:
        return self._conn

    @property
    def data(self) -> bytes:
        return self._msg.data

    @property
    def msg_id(self) -> int:
        return self._msg.msg_id


class BaseRouter:
    """A router built from optional callables; subclasses may override the hooks.

    Each hook runs the callable given for it, if any, so a router can be made
    either by subclassing or by passing plain functions.
    """

    _before: Optional[Hook] = None
    _handler: Optional[Hook] = None
    _after: Optional[Hook] = None

    def __init__(
        self,
        handler: Optional[Hook] = None,
        *,
        before: Optional[Hook] = None,
        after: Optional[Hook] = None,
    ) -> None:
        self._handler = handler
        self._before = before
        self._after = after

    def pre_handle(self, request: Request) -> None:
        """Run before the main handler."""
        if self._before is not None:
            self._before(request)

    def handle(self, request: Request) -> None:
        """Handle the request."""
        if self._handler is not None:
            self._handler(request)

    def post_handle(self, request: Request) -> None:
        """Run after the main handler."""
        if self._after is not None:
            self._after(request)


class DuplicateRouterError(ValueError):
    """A router is already registered for the message id."""


class MsgHandler:
    """Maps message ids to routers and runs them on a pool of worker threads."""

    def __init__(self, worker_pool_size: int = 10) -> None:
        if worker_pool_size <= 0:
            raise ValueError(f"invalid pool size: {worker_pool_size}")
        self.apis: dict[int, BaseRouter] = {}
        self._pool = ThreadPoolExecutor(max_workers=worker_pool_size)

    def add_router(self, msg_id: int, router: BaseRouter) -> None:
        """Register the router for a message id."""
        if msg_id in self.apis:
            raise DuplicateRouterError(f"repeat api, msgID={msg_id}")
        self.apis[msg_id] = router
        logger.info("Add api MsgID = %d succ!", msg_id)

    def do_msg_handler(self, request: Request) -> None:
        """Run the router registered for the request's message id."""
        try:
            router = self.apis[request.msg_id]
        except KeyError:
            raise KeyError(f"API msgID = {request.msg_id} is not found, need register") from None
        router.pre_handle(request)
        router.handle(request)
        router.post_handle(request)

    def send_msg_to_task_queue(self, request: Request) -> Future | None:
        """Hand the request to the worker pool; None once the pool is shut down."""

        def task() -> None:
            self.do_msg_handler(request)
            logger.debug(
                "Add ConnID= %s request MsgID = %d",
                getattr(request.connection, "conn_id", None),
                request.msg_id,
            )

        try:
            return self._pool.submit(task)
        except RuntimeError:
            return None

    def shutdown(self) -> None:
        """Stop accepting requests and wait for running ones to finish."""
        self._pool.shutdown(wait=True)