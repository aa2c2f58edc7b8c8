"""Tests for the aiohttp banner injection middleware."""

from types import SimpleNamespace

import pytest
from aiohttp import web
from aiohttp.test_utils import make_mocked_request

from newshound.adapters.web import banner_middleware, inject_banner
from newshound.config import Settings
from newshound.core.banner import BannerBuilder
from newshound.core.exception_reporter import ExceptionReporter
from newshound.core.job_reporter import JobReporter
from newshound.core.warning_reporter import WarningReporter
from newshound.tests.fakes import FakeExceptionSource, FakeRecord

PAGE = "<html><head><title>App</title></head><body class=\"app\"><h1>Hi</h1></body></html>"


class StubBuilder:
    """Banner builder returning a fixed fragment and counting renders."""

    def __init__(self, fragment: str = "<div id=\"newshound-banner\"></div>", error: Exception | None = None):
        self.fragment = fragment
        self.error = error
        self.renders = 0

    async def render(self) -> str:
        self.renders += 1
        if self.error is not None:
            raise self.error
        return self.fragment


def html_handler(body: str = PAGE, status: int = 200, content_length: bool = False):
    async def handler(request: web.Request) -> web.Response:
        response = web.Response(text=body, status=status, content_type="text/html")
        if content_length:
            response.headers["Content-Length"] = str(len(body.encode("utf-8")))
        return response

    return handler


def developer_request(path: str = "/") -> web.Request:
    request = make_mocked_request("GET", path)
    request["current_user"] = SimpleNamespace(role="developer")
    return request


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


class TestInjectBanner:
    def test_inserted_after_body_tag(self) -> None:
        result = inject_banner(PAGE, "<div>banner</div>")
        assert '<body class="app"><div>banner</div><h1>Hi</h1>' in result

    def test_body_tag_match_is_case_insensitive(self) -> None:
        assert inject_banner("<BODY><p>x</p></BODY>", "B") == "<BODY>B<p>x</p></BODY>"

    def test_only_first_body_tag(self) -> None:
        assert inject_banner("<body></body><body>", "B") == "<body>B</body><body>"

    def test_no_body_tag(self) -> None:
        assert inject_banner("<p>fragment</p>", "B") is None


class TestBannerMiddleware:
    @pytest.mark.asyncio
    async def test_injects_for_authorized_user(self, settings) -> None:
        builder = StubBuilder()
        middleware = banner_middleware(settings, builder)

        response = await middleware(developer_request(), html_handler())

        assert '<body class="app"><div id="newshound-banner"></div><h1>Hi</h1>' in response.text
        assert builder.renders == 1

    @pytest.mark.asyncio
    async def test_content_length_updated(self, settings) -> None:
        middleware = banner_middleware(settings, StubBuilder("<div>é</div>"))

        response = await middleware(developer_request(), html_handler(content_length=True))

        assert response.headers["Content-Length"] == str(len(response.body))
        assert int(response.headers["Content-Length"]) > len(PAGE)

    @pytest.mark.asyncio
    async def test_unauthorized_user_skips_data_fetch(self, settings) -> None:
        builder = StubBuilder()
        middleware = banner_middleware(settings, builder)
        request = make_mocked_request("GET", "/")
        request["current_user"] = SimpleNamespace(role="customer")

        response = await middleware(request, html_handler())

        assert response.text == PAGE
        assert builder.renders == 0

    @pytest.mark.asyncio
    async def test_anonymous_request(self, settings) -> None:
        builder = StubBuilder()
        response = await banner_middleware(settings, builder)(
            make_mocked_request("GET", "/"), html_handler()
        )

        assert response.text == PAGE
        assert builder.renders == 0

    @pytest.mark.asyncio
    async def test_non_success_status_untouched(self, settings) -> None:
        builder = StubBuilder()
        response = await banner_middleware(settings, builder)(
            developer_request(), html_handler(status=404)
        )

        assert response.text == PAGE
        assert builder.renders == 0

    @pytest.mark.asyncio
    async def test_non_html_untouched(self, settings) -> None:
        async def json_handler(request: web.Request) -> web.Response:
            return web.json_response({"body": "<body>"})

        builder = StubBuilder()
        response = await banner_middleware(settings, builder)(developer_request(), json_handler)

        assert response.content_type == "application/json"
        assert builder.renders == 0

    @pytest.mark.asyncio
    async def test_disabled(self) -> None:
        settings = Settings(_env_file=None, enabled=False)
        builder = StubBuilder()

        response = await banner_middleware(settings, builder)(developer_request(), html_handler())

        assert response.text == PAGE
        assert builder.renders == 0

    @pytest.mark.asyncio
    async def test_builder_failure_fails_open(self, settings, caplog) -> None:
        builder = StubBuilder(error=RuntimeError("database is locked"))

        response = await banner_middleware(settings, builder)(developer_request(), html_handler())

        assert response.status == 200
        assert response.text == PAGE
        assert "database is locked" in caplog.text

    @pytest.mark.asyncio
    async def test_page_without_body_tag(self, settings) -> None:
        response = await banner_middleware(settings, StubBuilder())(
            developer_request(), html_handler(body="<p>partial</p>")
        )

        assert response.text == "<p>partial</p>"

    @pytest.mark.asyncio
    async def test_custom_authorization(self) -> None:
        settings = Settings(
            _env_file=None, custom_authorization=lambda request: request.path.startswith("/admin")
        )
        builder = StubBuilder()
        middleware = banner_middleware(settings, builder)

        admin = await middleware(make_mocked_request("GET", "/admin/jobs"), html_handler())
        public = await middleware(make_mocked_request("GET", "/"), html_handler())

        assert "newshound-banner" in admin.text
        assert public.text == PAGE

    @pytest.mark.asyncio
    async def test_real_banner_escapes_exception_titles(self, settings) -> None:
        source = FakeExceptionSource([FakeRecord("<script>alert('x')</script>")])

        def reporters():
            return (
                ExceptionReporter(source, settings),
                WarningReporter(None, settings),
                JobReporter(None, settings),
            )

        middleware = banner_middleware(settings, BannerBuilder(settings, reporters))
        response = await middleware(developer_request(), html_handler())

        assert "&lt;script&gt;alert(&#x27;x&#x27;)&lt;/script&gt;" in response.text
        assert "<script>alert('x')</script>" not in response.text
