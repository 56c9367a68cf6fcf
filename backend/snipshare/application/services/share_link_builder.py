"""Builds the public share URL and QR-code image URL for a snippet."""

from urllib.parse import urlencode

from snipshare.application.schemas import ShareLinks


class ShareLinkBuilder:
    """Composes links only; the QR image itself is rendered by an external service."""

    def __init__(self, share_base_url: str, qr_code_service_url: str, qr_code_size: int = 150):
        self._share_base_url = share_base_url.rstrip("/")
        self._qr_code_service_url = qr_code_service_url
        self._qr_code_size = qr_code_size

    def share_url(self, snippet_id: str) -> str:
        return f"{self._share_base_url}/view?{urlencode({'id': snippet_id})}"

    def qr_code_url(self, snippet_id: str) -> str:
        size = f"{self._qr_code_size}x{self._qr_code_size}"
        query = urlencode({"size": size, "data": self.share_url(snippet_id)})
        return f"{self._qr_code_service_url}?{query}"

    def build(self, snippet_id: str) -> ShareLinks:
        return ShareLinks(url=self.share_url(snippet_id), qr_code_url=self.qr_code_url(snippet_id))
