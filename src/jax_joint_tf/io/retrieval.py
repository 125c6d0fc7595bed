"""Fetch robot description text from a URL.

The blocking read runs in a worker thread so callers can await it from an
event loop. Any scheme ``urllib`` has a handler for works, including
``file://``.
"""

import asyncio
import logging
from urllib import error, request

from jax_joint_tf.errors import RetrievalFailed, RetrievalUnavailable

logger = logging.getLogger(__name__)


async def fetch_text(url: str) -> str:
    """Read the resource at *url* and decode it as text.

    Raises:
        RetrievalUnavailable: No handler exists for the URL's scheme.
        RetrievalFailed: The read failed or returned a non-success status.
    """
    logger.info(f"Fetching robot description from {url}")
    return await asyncio.to_thread(_read_text, url)


def _read_text(url: str) -> str:
    try:
        with request.urlopen(url) as response:
            status = getattr(response, "status", None)
            if status is not None and not 200 <= status < 300:
                raise RetrievalFailed(url, status, getattr(response, "reason", "") or "")
            charset = response.headers.get_content_charset() or "utf-8"
            body = response.read()
    except error.HTTPError as e:
        raise RetrievalFailed(url, e.code, str(e.reason)) from e
    except error.URLError as e:
        if str(e.reason).startswith("unknown url type"):
            raise RetrievalUnavailable(
                f"Cannot retrieve {url} in this environment; provide the description text directly",
                url,
            ) from e
        raise RetrievalFailed(url, None, str(e.reason)) from e
    except ValueError as e:
        raise RetrievalUnavailable(
            f"Cannot retrieve {url} in this environment; provide the description text directly",
            url,
        ) from e
    except OSError as e:
        raise RetrievalFailed(url, None, str(e)) from e

    return body.decode(charset, errors="replace")
