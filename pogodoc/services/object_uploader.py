"""
Object Uploader Service

PUTs buffered payloads to pre-signed object-store URLs.
"""

import logging
from urllib.parse import urlparse

import httpx

from ..exceptions import InvalidArgumentError, UploadError
from ..models import FilePayload

logger = logging.getLogger(__name__)

ZIP_CONTENT_TYPE = "application/zip"
JSON_CONTENT_TYPE = "application/json"
HTML_CONTENT_TYPE = "text/html"


def _host_of(url: str) -> str:
    # Pre-signed query strings carry credentials
    return urlparse(url).netloc or "<unknown host>"


class ObjectUploader:
    """
    Uploads payloads to pre-signed URLs with a single buffered PUT.

    The http client must not carry the Pogodoc bearer token; pre-signed
    URLs authorize the request on their own. Redirects are not followed
    and there are no retries.
    """

    def __init__(self, http_client: httpx.AsyncClient):
        self._http_client = http_client

    async def upload(self, url: str, payload: FilePayload, content_type: str) -> None:
        """
        Upload payload to url.

        Args:
            url: Pre-signed object-store URL
            payload: Bytes to upload
            content_type: Value of the Content-Type header

        Raises:
            InvalidArgumentError: If content_type is empty or payload has no bytes
            UploadError: If the store does not answer 200 or the transport fails
        """
        if not content_type:
            raise InvalidArgumentError("Content-Type is empty")
        if payload.length <= 0:
            raise InvalidArgumentError("Content-Length is empty: payload has no bytes")

        headers = {
            "Content-Type": content_type,
            "Content-Length": str(payload.length),
        }
        host = _host_of(url)

        try:
            response = await self._http_client.put(
                url,
                content=payload.data,
                headers=headers,
                follow_redirects=False,
            )
        except httpx.HTTPError as e:
            logger.error(f"Upload to {host} failed: {e}")
            raise UploadError(f"uploading file: {e}") from e

        if response.status_code != 200:
            logger.error(
                f"Upload to {host} rejected with {response.status_code} "
                f"{response.reason_phrase}"
            )
            raise UploadError(
                f"uploading file: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )

        logger.debug(f"Uploaded {payload.length} bytes ({content_type}) to {host}")
