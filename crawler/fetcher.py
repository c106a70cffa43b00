"""
Low-level HTTP fetcher. Retrieves a single page with manual redirect
resolution, a hard size cap and one overall deadline.

Network failures are normalised into a FailureReason; errors that cannot be
classified propagate to the caller.
"""
from __future__ import annotations

import ipaddress
import logging
import socket
import time
from typing import Optional, Union
from urllib.parse import urljoin, urlparse

import requests
from urllib3.exceptions import (
    LocationParseError,
    NameResolutionError,
    ProtocolError,
    ReadTimeoutError,
)

from config import (
    DEFAULT_USER_AGENT,
    MAX_BODY_BYTES,
    MAX_REDIRECTS,
    PAGE_NOT_FOUND_MESSAGE,
    READ_CHUNK_BYTES,
    REQUEST_HEADERS,
    REQUEST_TIMEOUT_SECONDS,
    RESTRICTED_HOST_MARKERS,
)
from models import FailureReason, FetchResult

logger = logging.getLogger(__name__)


class _BodyTooLarge(Exception):
    pass


class _DeadlineExceeded(Exception):
    pass


def fetch(
    url: str,
    session: Optional[requests.Session] = None,
    timeout: float = REQUEST_TIMEOUT_SECONDS,
    max_bytes: int = MAX_BODY_BYTES,
    max_redirects: int = MAX_REDIRECTS,
    user_agent: str = DEFAULT_USER_AGENT,
) -> FetchResult:
    """
    GET `url` and return a FetchResult.

    Redirects are followed by hand, at most `max_redirects` hops. The hop
    counter, deadline and size cap are locals of this call, so concurrent
    fetches never share limits.
    """
    try:
        parsed = urlparse(url)
        valid = parsed.scheme in ("http", "https") and bool(parsed.hostname)
    except ValueError:
        valid = False
    if not valid:
        return FetchResult.failure(url, FailureReason.INVALID_URL)

    own_session = session is None
    if own_session:
        session = requests.Session()

    t0 = time.monotonic()
    deadline = t0 + timeout
    headers = {"User-Agent": user_agent, **REQUEST_HEADERS}
    chain: list[str] = []
    current_url = url
    hops = 0

    try:
        while True:
            outcome = _fetch_once(current_url, session, headers, deadline, max_bytes, t0, tuple(chain))
            if isinstance(outcome, FetchResult):
                return outcome

            if hops == max_redirects:
                logger.warning(f"Redirect limit ({max_redirects}) exceeded for {url}")
                return FetchResult.failure(
                    url,
                    FailureReason.REDIRECT_LOOP,
                    elapsed_ms=_elapsed_ms(t0),
                    redirect_chain=tuple(chain + [current_url]),
                )

            hop_chain = tuple(chain + [current_url])
            try:
                next_url = urljoin(current_url, outcome)
                next_host = urlparse(next_url).hostname or ""
            except ValueError:
                return _failed(outcome, FailureReason.INVALID_URL, t0, hop_chain)
            if is_restricted_host(next_host):
                return _failed(next_url, FailureReason.RESTRICTED_REDIRECT, t0, hop_chain)
            hops += 1
            logger.debug(f"Redirect {hops}: {current_url} -> {next_url}")
            chain.append(current_url)
            current_url = next_url
    finally:
        if own_session:
            session.close()


def _fetch_once(
    url: str,
    session: requests.Session,
    headers: dict[str, str],
    deadline: float,
    max_bytes: int,
    t0: float,
    chain: tuple[str, ...],
) -> Union[FetchResult, str]:
    """
    One GET. Returns a FetchResult for a terminal outcome, or the raw
    Location header when the response is a redirect to follow.
    """
    remaining = deadline - time.monotonic()
    if remaining <= 0:
        return _failed(url, FailureReason.TIMED_OUT, t0, chain)

    try:
        resp = session.get(
            url,
            headers=headers,
            timeout=remaining,
            allow_redirects=False,
            stream=True,
        )
    except requests.exceptions.Timeout:
        return _failed(url, FailureReason.TIMED_OUT, t0, chain)
    except (
        requests.exceptions.InvalidURL,
        requests.exceptions.MissingSchema,
        requests.exceptions.InvalidSchema,
        LocationParseError,
    ):
        return _failed(url, FailureReason.INVALID_URL, t0, chain)
    except requests.exceptions.ConnectionError as exc:
        return _failed(url, classify_connection_error(exc), t0, chain)

    try:
        status = resp.status_code
        location = resp.headers.get("location", "")

        if 300 <= status < 400 and location:
            return location
        if status == 403:
            return _failed(url, FailureReason.BLOCKED, t0, chain, status)
        if status == 404:
            return _failed(url, FailureReason.NOT_FOUND, t0, chain, status, PAGE_NOT_FOUND_MESSAGE)
        if status >= 500:
            return _failed(url, FailureReason.SERVER_ERROR, t0, chain, status)
        if status < 200 or status >= 400:
            return _failed(url, FailureReason.UNEXPECTED_STATUS, t0, chain, status)

        try:
            raw = _read_capped(resp, max_bytes, deadline)
        except _BodyTooLarge:
            logger.warning(f"Body of {url} exceeded {max_bytes} bytes; connection dropped")
            return _failed(url, FailureReason.TOO_LARGE, t0, chain, status)
        except (_DeadlineExceeded, ReadTimeoutError, socket.timeout):
            return _failed(url, FailureReason.TIMED_OUT, t0, chain, status)
        except (ProtocolError, ConnectionResetError):
            return _failed(url, FailureReason.BLOCKED_OR_RESET, t0, chain, status)

        return FetchResult(
            url=chain[0] if chain else url,
            final_url=url,
            status_code=status,
            body=raw.decode(_encoding_of(resp), errors="replace"),
            headers={k.lower(): v for k, v in resp.headers.items()},
            elapsed_ms=_elapsed_ms(t0),
            size_bytes=len(raw),
            redirect_chain=chain,
        )
    finally:
        resp.close()


def _read_capped(resp: requests.Response, max_bytes: int, deadline: float) -> bytes:
    """
    Read the undecoded body. `read1` returns after a single socket read, and
    the socket timeout is re-armed to the time left before every read, so a
    server trickling bytes cannot hold the fetch past `deadline`.

    Raises _BodyTooLarge as soon as the running total passes `max_bytes`.
    On any early exit the socket is closed.
    """
    raw = resp.raw
    buf = bytearray()
    try:
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise _DeadlineExceeded()
            _arm_read_timeout(raw, remaining)
            chunk = raw.read1(READ_CHUNK_BYTES, decode_content=False)
            if not chunk:
                return bytes(buf)
            buf.extend(chunk)
            if len(buf) > max_bytes:
                raise _BodyTooLarge()
    except Exception:
        # Drop the socket rather than return it to the pool half-read
        raw.close()
        raise


def _arm_read_timeout(raw, seconds: float) -> None:
    """Bound the next blocking recv on the response's socket to `seconds`."""
    sock = getattr(getattr(raw, "connection", None), "sock", None)
    if sock is not None:
        sock.settimeout(seconds)


def is_restricted_host(host: str) -> bool:
    """Denylisted names, or a literal IP that is not publicly routable."""
    host = host.lower().strip("[]")
    if any(marker in host for marker in RESTRICTED_HOST_MARKERS):
        return True
    try:
        ip = ipaddress.ip_address(host)
    except ValueError:
        return False
    return (
        ip.is_private or ip.is_loopback or ip.is_reserved
        or ip.is_link_local or ip.is_multicast or ip.is_unspecified
    )


def classify_connection_error(exc: BaseException) -> FailureReason:
    """
    Walk the exception chain (urllib3 `reason`, cause, context, args) and
    classify the root transport error. Unrecognised roots count as DOWN.
    """
    seen: set[int] = set()
    stack: list[BaseException] = [exc]
    while stack:
        err = stack.pop()
        if id(err) in seen:
            continue
        seen.add(id(err))

        if isinstance(err, (socket.gaierror, NameResolutionError)):
            return FailureReason.NOT_FOUND
        if isinstance(err, ConnectionRefusedError):
            return FailureReason.DOWN
        if isinstance(err, ConnectionResetError):
            return FailureReason.BLOCKED_OR_RESET
        if isinstance(err, (socket.timeout, TimeoutError)):
            return FailureReason.TIMED_OUT

        nested = [getattr(err, "reason", None), err.__cause__, err.__context__]
        nested.extend(a for a in err.args if isinstance(a, BaseException))
        stack.extend(n for n in nested if isinstance(n, BaseException))

    return FailureReason.DOWN


# ── Helpers ───────────────────────────────────────────────────────────────────

def _failed(
    url: str,
    reason: FailureReason,
    t0: float,
    chain: tuple[str, ...],
    status: int = 0,
    message: str = "",
) -> FetchResult:
    logger.warning(f"Fetch of {url} failed: {reason.value} (HTTP {status or '-'})")
    return FetchResult.failure(
        chain[0] if chain else url,
        reason,
        status_code=status,
        elapsed_ms=_elapsed_ms(t0),
        redirect_chain=chain,
        message=message,
    )


def _encoding_of(resp: requests.Response) -> str:
    """Declared charset if it names a known codec, else UTF-8."""
    content_type = resp.headers.get("content-type", "").lower()
    if "charset=" in content_type and resp.encoding:
        try:
            "".encode(resp.encoding)
            return resp.encoding
        except LookupError:
            pass
    return "utf-8"


def _elapsed_ms(t0: float) -> int:
    return int((time.monotonic() - t0) * 1000)
