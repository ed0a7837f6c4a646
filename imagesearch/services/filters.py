"""Google Images search filters and query URL builder.

Each filter is an opaque ``key:value`` token for Google's ``tbs`` parameter.
Tokens are appended after the ``ic:specific`` flag, joined by an encoded comma.
"""

from urllib.parse import quote_plus

from imagesearch.config import settings

_TBS_FLAG = "ic:specific"
_TBS_SEPARATOR = "%2C"  # url-encoded ","

# Dominant colour
COLOUR = {
    "red": "isc:red",
    "orange": "isc:orange",
    "yellow": "isc:yellow",
    "green": "isc:green",
    "teal": "isc:teal",
    "blue": "isc:blue",
    "purple": "isc:purple",
    "pink": "isc:pink",
    "white": "isc:white",
    "gray": "isc:gray",
    "black": "isc:black",
    "brown": "isc:brown",
}

COLOUR_TYPE = {
    "color": "ic:full",
    "grayscale": "ic:gray",
    "transparent": "ic:trans",
}

# Usage rights
LICENCE = {
    "creative_commons": "il:cl",
    "other": "il:ol",
}

TYPE = {
    "face": "itp:face",
    "photo": "itp:photo",
    "clipart": "itp:clipart",
    "lineart": "itp:lineart",
    "animated": "itp:animated",
}

TIME = {
    "past_day": "qdr:d",
    "past_week": "qdr:w",
    "past_month": "qdr:m",
    "past_year": "qdr:y",
}

ASPECT_RATIO = {
    "tall": "iar:t",
    "square": "iar:s",
    "wide": "iar:w",
    "panoramic": "iar:xw",
}

FORMAT = {
    "jpg": "ift:jpg",
    "gif": "ift:gif",
    "png": "ift:png",
    "bmp": "ift:bmp",
    "svg": "ift:svg",
    "webp": "ift:webp",
    "ico": "ift:ico",
    "raw": "ift:craw",
}

# Option name -> table, in the order tokens are emitted
FILTERS: dict[str, dict[str, str]] = {
    "colour": COLOUR,
    "colour_type": COLOUR_TYPE,
    "licence": LICENCE,
    "type": TYPE,
    "time_range": TIME,
    "aspect_ratio": ASPECT_RATIO,
    "format": FORMAT,
}


def resolve_filters(**options: str | None) -> list[str]:
    """Translate named filter options into tbs tokens.

    ``resolve_filters(colour="red", licence="creative_commons")`` returns
    ``["isc:red", "il:cl"]``. Options set to None are ignored.
    """
    unknown = set(options) - set(FILTERS)
    if unknown:
        raise ValueError(f"Unknown filter option(s): {', '.join(sorted(unknown))}")

    tokens: list[str] = []
    for name, table in FILTERS.items():
        value = options.get(name)
        if value is None:
            continue
        if value not in table:
            raise ValueError(
                f"Invalid {name} filter {value!r}; expected one of: {', '.join(table)}"
            )
        tokens.append(table[value])
    return tokens


def build_query_url(query: str, filter_tokens: list[str] | tuple[str, ...] = ()) -> str:
    """Build the Google Images search URL for a query and filter tokens."""
    url = f"{settings.SEARCH_URL}?tbm=isch&q={quote_plus(query)}"
    if filter_tokens:
        url += "&tbs=" + _TBS_FLAG
        for token in filter_tokens:
            url += _TBS_SEPARATOR + token
    return url
