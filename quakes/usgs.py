# quakes/usgs.py
from __future__ import annotations
import logging
from typing import Optional
import httpx

DEFAULT_TIMEOUT = 30.0

log = logging.getLogger(__name__)


def fetch_text(url: str,
               timeout: float = DEFAULT_TIMEOUT,
               client: Optional[httpx.Client] = None) -> str:
    """
    GET the whole body at url as text.

    Non-2xx responses raise httpx.HTTPStatusError. A client passed in
    by the caller is left open.
    """
    close_client = False
    if client is None:
        client = httpx.Client(timeout=timeout)
        close_client = True

    try:
        log.debug("GET %s", url)
        resp = client.get(url)
        resp.raise_for_status()
        return resp.text
    finally:
        if close_client:
            client.close()
