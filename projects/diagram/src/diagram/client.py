"""Client for a remote diagram rendering endpoint."""

from logging import getLogger

from requests import post

logger = getLogger(__name__)

DEFAULT_TIMEOUT = 30


def fetch_svg(dbml: str, url: str, timeout: float = DEFAULT_TIMEOUT) -> str:
    """Post DBML to a rendering endpoint and return the SVG it answers with.

    HTTP errors are raised as ``requests.HTTPError``.
    """
    logger.debug("Requesting diagram from %s", url)
    response = post(url, json={"dbml": dbml}, timeout=timeout)
    response.raise_for_status()
    return response.text
