"""Banner injection middleware.

Wraps aiohttp handlers and inserts the Newshound banner right after the
opening <body> tag of successful HTML responses, for authorized users only.
The middleware never breaks a response: whenever a precondition is not met
or the banner cannot be built, the original response is returned as is.
"""

import logging
import re
from collections.abc import Awaitable, Callable

from aiohttp import web

from newshound.config import Settings
from newshound.core.authorization import Authorization
from newshound.core.banner import BannerBuilder

logger = logging.getLogger(__name__)

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]

_BODY_TAG = re.compile(r"<body[^>]*>", re.IGNORECASE)


def inject_banner(html: str, fragment: str) -> str | None:
    """Insert fragment after the first opening body tag.

    Returns:
        The new document, or None if the document has no body tag.
    """
    match = _BODY_TAG.search(html)
    if match is None:
        return None
    return html[: match.end()] + fragment + html[match.end():]


def _is_injectable(response: web.StreamResponse) -> bool:
    return (
        isinstance(response, web.Response)
        and response.status == 200
        and response.content_type == "text/html"
        and response.body is not None
    )


def banner_middleware(
    settings: Settings,
    banner_builder: BannerBuilder,
    authorization: Authorization | None = None,
) -> Callable[[web.Request, Handler], Awaitable[web.StreamResponse]]:
    """Build the aiohttp middleware.

    Args:
        settings: Application settings.
        banner_builder: Builds the banner fragment for one response.
        authorization: Authorization policy (defaults to role-based
            authorization from settings).

    Returns:
        A middleware suitable for web.Application(middlewares=[...]).
    """
    authorization = authorization or Authorization(settings)

    @web.middleware
    async def newshound_banner(
        request: web.Request, handler: Handler
    ) -> web.StreamResponse:
        response = await handler(request)

        if not settings.enabled or not _is_injectable(response):
            return response
        if not authorization.is_authorized(request):
            return response

        try:
            fragment = await banner_builder.render()
            html = response.text
            injected = inject_banner(html, fragment) if html is not None else None
            if injected is None:
                return response

            charset = response.charset or "utf-8"
            response.body = injected.encode(charset)
            if "Content-Length" in response.headers:
                response.headers["Content-Length"] = str(len(response.body))
        except Exception as e:
            logger.error(
                f"Failed to inject Newshound banner: {e}",
                extra={"path": request.path},
                exc_info=True,
            )
        return response

    return newshound_banner
