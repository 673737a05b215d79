# primerpedia/config.py
from __future__ import annotations

# Wikipedia project configuration
DEFAULT_LANG = "en"
DEFAULT_API_URL = "https://{lang}.wikipedia.org/w/api.php"
DEFAULT_ARTICLE_URL = "https://{lang}.wikipedia.org/wiki/"
DEFAULT_EDIT_SUFFIX = "?action=edit&section=0"
DEFAULT_UA = "primerpedia/0.1 (intro-extract client; python-requests)"

# Request configuration
DEFAULT_TIMEOUT_S = 3.0
DEFAULT_MAX_SUGGESTION_HOPS = 1

# View configuration
DEFAULT_LOADING_TEXT = "Loading..."
DEFAULT_NOT_FOUND_TEXT = "The search term wasn't found."
DEFAULT_LICENSE_TEXT = (
    "Text is available under the Creative Commons Attribution-ShareAlike License."
)
DEFAULT_INFO_TEXT = "Extract provided by Wikipedia (Extension:TextExtracts)."


def api_url(lang: str = DEFAULT_LANG) -> str:
    return DEFAULT_API_URL.format(lang=lang)


def article_url(lang: str = DEFAULT_LANG) -> str:
    return DEFAULT_ARTICLE_URL.format(lang=lang)
