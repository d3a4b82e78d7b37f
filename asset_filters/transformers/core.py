import re

from asset_filters.filters.base import Transformer
from asset_filters.utils.exceptions import TransformerError

# Block comments, except "/*!" ones which conventionally carry licenses.
BLOCK_COMMENT = re.compile(r"/\*(?!!).*?\*/", re.DOTALL)
LINE_COMMENT = re.compile(r"^\s*//.*$", re.MULTILINE)
CSS_WHITESPACE = re.compile(r"\s+")
CSS_PUNCTUATION_SPACE = re.compile(r"\s*([{};:,>])\s*")


class CssMin(Transformer):
    """Strips comments and redundant whitespace from stylesheets."""

    def filter(self, content: str) -> str:
        content = BLOCK_COMMENT.sub("", content)
        content = CSS_WHITESPACE.sub(" ", content)
        content = CSS_PUNCTUATION_SPACE.sub(r"\1", content)
        content = content.replace(";}", "}")
        return content.strip()


class JsMin(Transformer):
    """
    Conservative script minifier.

    Removes block comments, whole-line ``//`` comments, trailing whitespace and
    blank lines. Code on the remaining lines is left untouched.
    """

    def filter(self, content: str) -> str:
        content = BLOCK_COMMENT.sub("", content)
        content = LINE_COMMENT.sub("", content)
        lines = (line.rstrip() for line in content.splitlines())
        return "\n".join(line for line in lines if line)


class Banner(Transformer):
    """Prepends a comment banner to the content."""

    def __init__(self, text: str):
        if "*/" in text:
            raise TransformerError("Banner text must not contain '*/'")
        self.text = text

    def filter(self, content: str) -> str:
        return f"/*! {self.text} */\n{content}"


class Replace(Transformer):
    """Replaces every literal occurrence of search with replacement."""

    def __init__(self, search: str, replacement: str):
        self.search = search
        self.replacement = replacement

    def filter(self, content: str) -> str:
        if not self.search:
            return content
        return content.replace(self.search, self.replacement)
