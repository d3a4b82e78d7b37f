import re

from asset_filters.filters.base import Transformer

URL_REFERENCE = re.compile(r"url\(\s*(['\"]?)([^'\")]+)\1\s*\)")
ABSOLUTE_URL = re.compile(r"^(?:[a-z][a-z0-9+.-]*:|/|#)", re.IGNORECASE)


class UriRewrite(Transformer):
    """
    Rewrites relative ``url(...)`` references in stylesheets.

    Stylesheets served from a different location than their source need their
    relative references prefixed with the source's public base URL. Absolute
    URLs, root-relative paths, data URIs and fragments are left alone.
    """

    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip("/")

    def filter(self, content: str) -> str:
        return URL_REFERENCE.sub(self._rewrite, content)

    def _rewrite(self, match: "re.Match[str]") -> str:
        quote, url = match.group(1), match.group(2).strip()
        if ABSOLUTE_URL.match(url):
            return match.group(0)
        if url.startswith("./"):
            url = url[2:]
        return f"url({quote}{self.base_url}/{url}{quote})"


class Replace(Transformer):
    """
    Replacement limited to the first count occurrences.

    Shares its short name with the core Replace and is therefore only reached
    when addressed through the local registry directly.
    """

    def __init__(self, search: str, replacement: str, count: int = 1):
        self.search = search
        self.replacement = replacement
        self.count = count

    def filter(self, content: str) -> str:
        return content.replace(self.search, self.replacement, self.count)
