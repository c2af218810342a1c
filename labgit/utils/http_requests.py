"""Shared HTTP client, with optional printing of requests and responses."""

from __future__ import annotations

import datetime
import json
import os
from time import time
from typing import Any

import httpx
from httpx import Request, Response
from rich.console import Console
from rich.text import Text

from labgit.settings import http_timeout

console = Console(stderr=True)

STYLE_LABEL = "bold slate_blue3"
STYLE_METHOD = "bold cyan"
STYLE_URL = "bold bright_cyan"
STYLE_STATUS_SUCCESS = "bold green"
STYLE_STATUS_ERROR = "bold bright_red"
STYLE_STATUS_OTHER = "bold cyan"
STYLE_METADATA = "white"
STYLE_HEADER_KEY = "bright_yellow"
STYLE_HEADER_VALUE = "yellow"
STYLE_BODY = "dark_magenta"
STYLE_NONE = "dark_magenta italic"
STYLE_ERROR = "red"
STYLE_DIVIDER_REQUEST = "white"
STYLE_DIVIDER_RESPONSE = "bright_black"


def decode_str(string: str | bytes) -> str:
    """Decode a bytes object to a string."""
    return string if isinstance(string, str) else string.decode("utf-8")


def pprint_header(header: tuple[bytes | str, bytes | str]) -> None:
    """Pretty print a header, redacting Authorization headers."""
    key, value = header
    key = decode_str(key)
    value = decode_str(value)
    if key.lower() == "authorization":
        value = "<Redacted>"
    console.print(f"  {key}: ", end="", style=STYLE_HEADER_KEY)
    console.print(Text(value, style=STYLE_HEADER_VALUE))


def pprint_json(text: str) -> None:
    """Pretty print JSON."""
    try:
        json_body = json.loads(text)
    except json.JSONDecodeError:
        console.print(Text("  Invalid JSON", style=STYLE_ERROR))
        console.print(Text(text, style=STYLE_ERROR))
        return
    for i, line in enumerate(json.dumps(json_body, indent=4).splitlines(), 1):
        console.print(Text(f"{i:>3} ", style="dim"), line, sep="")


def pprint_request(request: Request) -> None:
    time_text = Text(
        datetime.datetime.now().strftime("%H:%M:%S.%f"), style=STYLE_METADATA
    )
    console.print(Text("Time: ", style=STYLE_LABEL), time_text, sep="")
    console.print(
        Text("Method: ", style=STYLE_LABEL),
        Text(request.method, style=STYLE_METHOD),
        sep="",
    )
    console.print(
        Text("URL: ", style=STYLE_LABEL), Text(str(request.url), style=STYLE_URL), sep=""
    )
    console.print(Text("Headers:", style=STYLE_LABEL))
    for header in request.headers.raw:
        pprint_header(header)


def pprint_response(response: Response) -> None:
    status_style = STYLE_STATUS_OTHER
    if 200 <= response.status_code < 300:
        status_style = STYLE_STATUS_SUCCESS
    elif response.status_code >= 400:
        status_style = STYLE_STATUS_ERROR
    console.print(
        Text("Status Code: ", style=STYLE_LABEL),
        Text(f"{response.status_code}", style=status_style),
        sep="",
    )
    console.print(Text("Body:", style=STYLE_LABEL))
    if response.headers.get("Content-Type", "").startswith("application/json"):
        pprint_json(response.text)
    elif response.text:
        console.print(Text(response.text, style=STYLE_BODY))
    else:
        console.print("  None", style=STYLE_NONE)


class LoggingHTTPTransport(httpx.HTTPTransport):
    def handle_request(
        self,
        request: httpx.Request,
    ) -> httpx.Response:
        if os.environ.get("LABGIT_DEBUG_HTTP") != "1":
            return super().handle_request(request)

        console.print(Text("-" * 21, style=STYLE_DIVIDER_REQUEST))
        pprint_request(request)
        start_time = time()
        response = super().handle_request(request)
        response.read()
        elapsed_time = time() - start_time
        console.print(Text("----- Response below -----", style=STYLE_DIVIDER_RESPONSE))
        console.print(
            Text("Elapsed Time: ", style=STYLE_LABEL),
            Text(f"{elapsed_time:.2f} seconds", style=STYLE_METADATA),
            sep="",
        )
        pprint_response(response)
        return response


client = httpx.Client(transport=LoggingHTTPTransport())


def get(
    url: str,
    params: dict[str, str] | None = None,
    **kwargs: Any,
) -> Response:
    """Send a GET request with optional logging."""
    kwargs.setdefault("timeout", http_timeout())
    return client.get(url, params=params, **kwargs)
