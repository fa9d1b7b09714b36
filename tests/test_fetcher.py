# File: tests/test_fetcher.py
# Async tests for RobotsFetcher against a local aiohttp server
from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from aiohttp import web

from robots_scout.config import RobotsConfig
from robots_scout.fetcher import ContentTooLargeError, RobotsFetcher, robots_url_for

ROBOTS = "User-agent: *\nUser-agent: TestBot\nDisallow: /private\nAllow: /public\nCrawl-delay: 2\n"
TRUNCATED = "User-agent: *\nDisallow: /a\nAllow: /b"
PAGE = '<html><head><meta name="robots" content="noindex, nofollow"></head><body></body></html>'


async def _serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}"
    finally:
        await runner.cleanup()


@pytest.fixture()
def seen_agents() -> list[str]:
    return []


@pytest_asyncio.fixture
async def robots_server(unused_tcp_port: int, seen_agents: list[str]) -> AsyncIterator[str]:
    app = web.Application()

    async def handle_robots(request):
        seen_agents.append(request.headers.get("User-Agent", ""))
        return web.Response(text=ROBOTS, content_type="text/plain")

    async def handle_page(request):
        seen_agents.append(request.headers.get("User-Agent", ""))
        return web.Response(
            text=PAGE,
            content_type="text/html",
            headers={"X-Robots-Tag": "noarchive, googlebot: nosnippet"},
        )

    app.router.add_get("/robots.txt", handle_robots)
    app.router.add_get("/page", handle_page)

    async for url in _serve_app(app, unused_tcp_port):
        yield url


@pytest_asyncio.fixture
async def missing_server(unused_tcp_port: int) -> AsyncIterator[str]:
    app = web.Application()

    async def handle_robots(_):
        return web.Response(status=404, text="not found")

    app.router.add_get("/robots.txt", handle_robots)

    async for url in _serve_app(app, unused_tcp_port):
        yield url


@pytest_asyncio.fixture
async def redirect_server(unused_tcp_port: int) -> AsyncIterator[str]:
    app = web.Application()

    async def handle_loop(_):
        raise web.HTTPFound("/loop")

    app.router.add_get("/robots.txt", handle_loop)
    app.router.add_get("/loop", handle_loop)

    async for url in _serve_app(app, unused_tcp_port):
        yield url


@pytest_asyncio.fixture
async def truncated_server(unused_tcp_port: int) -> AsyncIterator[str]:
    app = web.Application()

    async def handle_robots(request):
        resp = web.StreamResponse(headers={"Content-Type": "text/plain"})
        resp.content_length = 100_000
        resp.force_close()
        await resp.prepare(request)
        await resp.write(TRUNCATED.encode("utf-8"))
        await asyncio.sleep(0.2)
        return resp

    app.router.add_get("/robots.txt", handle_robots)

    async for url in _serve_app(app, unused_tcp_port):
        yield url


def test_robots_url_for():
    assert robots_url_for("https://example.com/a/b?c=1") == "https://example.com/robots.txt"
    assert robots_url_for("http://localhost:8080/") == "http://localhost:8080/robots.txt"


@pytest.mark.asyncio
async def test_parse_robots_url(robots_server, seen_agents):
    cfg = RobotsConfig(bot_name="TestBot", bot_version="2.0", bot_url="https://example.com/bot")
    async with RobotsFetcher(cfg) as fetcher:
        response = await fetcher.parse_url(f"{robots_server}/robots.txt")

    records = response.records
    assert response.size == len(ROBOTS.encode("utf-8"))
    assert records.disallowed("TestBot") == [{"line": 3, "directive": "disallow", "path": "/private"}]
    assert records.crawl_delay("*") == [{"line": 5, "directive": "crawl-delay", "delay": 2}]
    assert records.headers_directives() == []
    assert seen_agents == ["Mozilla/5.0 (compatible; TestBot/2.0; https://example.com/bot)"]


@pytest.mark.asyncio
async def test_parse_page_url_collects_headers_and_meta(robots_server, seen_agents):
    async with RobotsFetcher(RobotsConfig()) as fetcher:
        response = await fetcher.parse_url(f"{robots_server}/page")

    records = response.records
    assert records.headers_directives() == [
        {"X-Robots-Tag": {0: "noarchive", "googlebot": "nosnippet"}}
    ]
    assert records.meta_tags_directives() == [["noindex", "nofollow"]]
    assert len(records.allowed("*")) == 1
    assert response.size == len(PAGE.encode("utf-8")) + len(ROBOTS.encode("utf-8"))
    assert len(seen_agents) == 2


@pytest.mark.asyncio
async def test_missing_robots_returns_empty(missing_server):
    async with RobotsFetcher() as fetcher:
        response = await fetcher.parse_url(f"{missing_server}/robots.txt")
    assert len(response.records) == 0
    assert response.size == 0


@pytest.mark.asyncio
async def test_size_limit_raises(robots_server):
    async with RobotsFetcher(RobotsConfig(max_file_size=10, chunk_size=4)) as fetcher:
        with pytest.raises(ContentTooLargeError):
            await fetcher.parse_url(f"{robots_server}/robots.txt")


@pytest.mark.asyncio
async def test_redirect_limit_is_syntax_error(redirect_server):
    async with RobotsFetcher(RobotsConfig(max_redirects=2)) as fetcher:
        response = await fetcher.parse_url(f"{redirect_server}/robots.txt")
    assert response.records.syntax_errors() == [
        {"line": 0, "message": "Redirect chain exceeds 2 redirects limit"}
    ]


@pytest.mark.asyncio
async def test_unreachable_host_returns_empty(unused_tcp_port):
    async with RobotsFetcher() as fetcher:
        response = await fetcher.parse_url(f"http://localhost:{unused_tcp_port}/robots.txt")
    assert len(response.records) == 0


@pytest.mark.asyncio
async def test_empty_signature_is_rejected():
    with pytest.raises(ValueError):
        async with RobotsFetcher(RobotsConfig(bot_name="")):
            pass


@pytest.mark.asyncio
async def test_truncated_body_keeps_received_lines(truncated_server):
    async with RobotsFetcher(RobotsConfig(robots_timeout=5)) as fetcher:
        response = await fetcher.parse_url(f"{truncated_server}/robots.txt")

    records = response.records
    assert records.disallowed("*") == [{"line": 2, "directive": "disallow", "path": "/a"}]
    assert records.allowed("*") == [{"line": 3, "directive": "allow", "path": "/b"}]
    assert response.size == len(TRUNCATED.encode("utf-8"))


@pytest.mark.asyncio
async def test_requests_need_an_open_session():
    fetcher = RobotsFetcher()
    with pytest.raises(RuntimeError):
        await fetcher.parse_url("http://localhost/robots.txt")
    with pytest.raises(RuntimeError):
        await fetcher._collect_page("http://localhost/page", {}, [])
