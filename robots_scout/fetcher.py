# robots_scout/fetcher.py
"""
Fetcher module: downloads robots.txt, X-Robots-Tag headers and robots meta tags.
"""
from __future__ import annotations

import asyncio
import codecs
from typing import List, Optional
from urllib.parse import urlparse, urlunparse

from aiohttp import ClientError, ClientResponse, ClientSession, ClientTimeout, TooManyRedirects

from robots_scout.collection import RobotsRecords
from robots_scout.config import RobotsConfig
from robots_scout.logger import logger
from robots_scout.parser.header_parser import X_ROBOTS_TAG, parse_x_robots_tag
from robots_scout.parser.html_parser import parse_meta_directives
from robots_scout.parser.robots_parser import LineParser, format_size
from robots_scout.records import HeaderDirective, MetaDirective, Record, SyntaxErrorRecord
from robots_scout.response import ParseResponse

__all__ = ("ContentTooLargeError", "RobotsFetcher", "robots_url_for")


class ContentTooLargeError(RuntimeError):
    """robots.txt body exceeded the configured size limit."""


def _charset(resp: ClientResponse) -> str:
    charset = resp.charset or "utf-8"
    try:
        codecs.lookup(charset)
    except LookupError:
        return "utf-8"
    return charset


def robots_url_for(url: str) -> str:
    """``https://host:port/any/page`` -> ``https://host:port/robots.txt``."""
    parsed = urlparse(url)
    return urlunparse((parsed.scheme, parsed.netloc, "/robots.txt", "", "", ""))


class RobotsFetcher:
    """Загрузка robots.txt и сопутствующих директив по URL."""

    def __init__(self, config: Optional[RobotsConfig] = None, session: Optional[ClientSession] = None) -> None:
        self.config = config or RobotsConfig()
        self.session = session
        self._owns_session = session is None

    async def __aenter__(self) -> RobotsFetcher:
        if self.session is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                headers={"User-Agent": self._signature()},
                raise_for_status=False,
            )
            self._owns_session = True
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    def _signature(self) -> str:
        signature = self.config.signature
        if not signature:
            raise ValueError("Bot signature undefined: set bot_name/bot_version or user_agent")
        return signature

    async def parse_url(self, url: str) -> ParseResponse:
        """
        Fetch *url* (for headers and meta tags) and its robots.txt, and parse them.

        Network failures are logged; whatever was collected so far is returned.
        Raises ContentTooLargeError when robots.txt exceeds ``max_file_size``.
        """
        if self.session is None:
            raise RuntimeError("Session not initialized")
        signature = self._signature()
        headers = {"User-Agent": signature}
        leading: List[Record] = []
        size = 0

        if not urlparse(url).path.endswith("robots.txt"):
            size += await self._collect_page(url, headers, leading)

        robots_url = robots_url_for(url)
        try:
            async with self.session.get(
                robots_url,
                headers=headers,
                allow_redirects=True,
                max_redirects=self.config.max_redirects,
                timeout=ClientTimeout(total=self.config.robots_timeout),
            ) as resp:
                self._collect_headers(resp, leading)
                if resp.status != 200:
                    logger.info("robots.txt %s -> HTTP %s", robots_url, resp.status)
                    return ParseResponse(RobotsRecords(leading), size)
                parser = LineParser(leading)
                body_size = await self._stream_body(resp, parser)
        except TooManyRedirects:
            logger.warning("Too many redirects for %s", robots_url)
            leading.append(
                SyntaxErrorRecord(0, f"Redirect chain exceeds {self.config.max_redirects} redirects limit")
            )
            return ParseResponse(RobotsRecords(leading), size)
        except (ClientError, asyncio.TimeoutError) as exc:
            logger.warning("Error loading robots.txt %s: %s", robots_url, exc)
            return ParseResponse(RobotsRecords(leading), size)

        records = parser.records()
        logger.info("Parsed %s: %d records, %d bytes", robots_url, len(records), body_size)
        return ParseResponse(records, size + body_size)

    async def _collect_page(self, url: str, headers: dict, leading: List[Record]) -> int:
        """Headers and meta tags of the page itself; returns the number of HTML bytes read."""
        if self.session is None:
            raise RuntimeError("Session not initialized")
        try:
            async with self.session.get(
                url,
                headers=headers,
                timeout=ClientTimeout(total=self.config.page_timeout),
            ) as resp:
                self._collect_headers(resp, leading)
                if resp.status != 200:
                    logger.debug("Page %s -> HTTP %s", url, resp.status)
                    return 0
                chunks: List[bytes] = []
                read = 0
                async for chunk in resp.content.iter_chunked(self.config.chunk_size):
                    chunks.append(chunk)
                    read += len(chunk)
                    if read >= self.config.max_html_size:
                        break
                html = b"".join(chunks).decode(_charset(resp), errors="replace")
        except (ClientError, asyncio.TimeoutError) as exc:
            logger.warning("Failed %s: %s", url, exc)
            return 0

        tokens = parse_meta_directives(html)
        if tokens:
            leading.append(MetaDirective(tokens))
        return read

    @staticmethod
    def _collect_headers(resp: ClientResponse, leading: List[Record]) -> None:
        values = resp.headers.getall(X_ROBOTS_TAG, [])
        if not values:
            return
        directives = parse_x_robots_tag(values)
        if directives:
            leading.append(HeaderDirective(directives))

    async def _stream_body(self, resp: ClientResponse, parser: LineParser) -> int:
        """Feed the body to *parser* line by line, enforcing the size limit.

        A transfer broken midway keeps the lines already fed; returns the
        number of bytes received.
        """
        decoder = codecs.getincrementaldecoder(_charset(resp))(errors="replace")
        buffer = ""
        size = 0
        try:
            async for chunk in resp.content.iter_chunked(self.config.chunk_size):
                size += len(chunk)
                if size > self.config.max_file_size:
                    raise ContentTooLargeError(
                        f"Robots.txt file size exceeds {format_size(self.config.max_file_size)} limit"
                    )
                buffer += decoder.decode(chunk)
                *complete, buffer = buffer.split("\n")
                for line in complete:
                    parser.feed(line.rstrip("\r"))
        except (ClientError, asyncio.TimeoutError) as exc:
            logger.warning("robots.txt %s interrupted after %d bytes: %s", resp.url, size, exc)
        buffer += decoder.decode(b"", final=True)
        if buffer:
            parser.feed(buffer.rstrip("\r"))
        return size
