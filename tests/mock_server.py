"""In-process HTTP endpoint used by the load tests."""

import asyncio
from typing import List

from aiohttp import web
from multidict import CIMultiDict


class MockEndpoint:
    """Answers every request with a fixed status after a fixed delay."""

    def __init__(self, delay: float = 0.0, status: int = 200):
        self.delay = delay
        self.status = status
        self.hits = 0
        self.completed = 0
        self.in_flight = 0
        self.max_in_flight = 0
        self.arrivals: List[float] = []
        self.methods: List[str] = []
        self.bodies: List[bytes] = []
        self.headers: List[CIMultiDict] = []

    async def handle(self, request: web.Request) -> web.Response:
        self.hits += 1
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        self.arrivals.append(asyncio.get_running_loop().time())
        try:
            self.methods.append(request.method)
            self.headers.append(request.headers.copy())
            self.bodies.append(await request.read())
            if self.delay:
                await asyncio.sleep(self.delay)
            return web.Response(status=self.status, text="ok")
        finally:
            self.in_flight -= 1
            self.completed += 1

    def app(self) -> web.Application:
        app = web.Application()
        app.router.add_route("*", "/{tail:.*}", self.handle)
        return app
