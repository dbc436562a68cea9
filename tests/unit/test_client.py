"""End-to-end tests for NfieldClient and ConnectedSession over httpx.MockTransport."""

import asyncio
import json

import httpx
import pytest

from nfield_client import (
    AuthenticationFailedError,
    ClientClosedError,
    ClientConfig,
    ConfigurationError,
    HttpxTransport,
    MissingParameterError,
    NfieldClient,
)
from nfield_client.client import coerce_credentials, format_interview_id
from nfield_client.types import Credentials, Response

CREDENTIALS = {"Domain": "acme", "Username": "jo", "Password": "s3cret"}


class FakeNfield:
    """Records requests and answers like the Nfield API."""

    def __init__(self, sign_in_status=200, responses=None):
        self.sign_in_status = sign_in_status
        self.responses = responses or {}
        self.requests: list[httpx.Request] = []
        self.issued = 0

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/v1/SignIn":
            if self.sign_in_status != 200:
                return httpx.Response(self.sign_in_status, json={"Message": "bad credentials"})
            self.issued += 1
            return httpx.Response(200, json={"AuthenticationToken": f"tok-{self.issued}"})
        status, body = self.responses.get(
            (request.method, request.url.path), (200, {"ok": True})
        )
        return httpx.Response(status, json=body)

    @property
    def payload_requests(self):
        return [r for r in self.requests if r.url.path != "/v1/SignIn"]


def make_client(fake, **config):
    return NfieldClient(
        ClientConfig(**config),
        transport_factory=lambda cfg: HttpxTransport(cfg, transport=httpx.MockTransport(fake)),
    )


class TestCoerceCredentials:
    def test_mapping(self):
        assert coerce_credentials(CREDENTIALS) == Credentials("acme", "jo", "s3cret")

    def test_credentials_instance(self):
        creds = Credentials("acme", "jo", "s3cret")
        assert coerce_credentials(creds) == creds

    @pytest.mark.parametrize("value", [None, lambda: CREDENTIALS, 42])
    def test_unusable(self, value):
        with pytest.raises(MissingParameterError) as exc_info:
            coerce_credentials(value)
        assert exc_info.value.field == "credentials"

    def test_incomplete(self):
        with pytest.raises(MissingParameterError) as exc_info:
            coerce_credentials({"Domain": "acme", "Username": "jo"})
        assert exc_info.value.field == "Password"


class TestFormatInterviewId:
    @pytest.mark.parametrize(
        "value, expected",
        [(42, "00000042"), ("7", "00000007"), ("12345678", "12345678"), ("abc", "abc")],
    )
    def test_padding(self, value, expected):
        assert format_interview_id(value) == expected


class TestDefaults:
    def test_returns_new_client(self):
        client = NfieldClient()
        custom = client.defaults({"base_url": "https://eu.nfieldmr.com/"})

        assert custom is not client
        assert custom.config.base_url == "https://eu.nfieldmr.com/"
        assert client.config.base_url == "https://api.nfieldmr.com/"

    def test_deep_merges_headers(self):
        client = NfieldClient().defaults(headers={"X-Trace": "1"})

        assert client.config.headers == {
            "Content-Type": "application/json",
            "X-Trace": "1",
        }

    def test_rejects_non_mapping(self):
        with pytest.raises(ConfigurationError):
            NfieldClient().defaults(["base_url"])

    def test_rejects_unknown_option(self):
        with pytest.raises(ConfigurationError, match="Unknown config options"):
            NfieldClient().defaults(retries=3)


class TestConnect:
    @pytest.mark.asyncio
    async def test_signs_in_once(self):
        fake = FakeNfield()
        session = await make_client(fake).connect(CREDENTIALS)

        assert len(fake.requests) == 1
        sign_in = fake.requests[0]
        assert sign_in.method == "POST"
        assert json.loads(sign_in.content) == CREDENTIALS
        assert session.token.bearer_value == "tok-1"
        await session.close()

    @pytest.mark.asyncio
    async def test_missing_credentials_sends_nothing(self):
        fake = FakeNfield()
        with pytest.raises(MissingParameterError):
            await make_client(fake).connect(None)
        assert fake.requests == []

    @pytest.mark.asyncio
    async def test_rejected_sign_in(self):
        fake = FakeNfield(sign_in_status=401)
        with pytest.raises(AuthenticationFailedError) as exc_info:
            await make_client(fake).connect(CREDENTIALS)

        assert str(exc_info.value) == "401: bad credentials"
        assert len(fake.requests) == 1


class TestSession:
    @pytest.mark.asyncio
    async def test_stop_fieldwork_by_bare_id(self):
        fake = FakeNfield()
        async with await make_client(fake).connect(CREDENTIALS) as session:
            response = await session.survey_fieldwork.stop("12345")

        assert response.status_code == 200
        request = fake.payload_requests[0]
        assert request.method == "PUT"
        assert request.url.path == "/v1/Surveys/12345/Fieldwork/Stop"
        assert request.headers["Authorization"] == "Basic tok-1"
        assert json.loads(request.content)["SurveyId"] == "12345"

    @pytest.mark.asyncio
    async def test_business_error_is_data(self):
        fake = FakeNfield(
            responses={
                ("GET", "/v1/Surveys/nope/Fieldwork/Status"): (
                    404,
                    {"Message": "Survey not found"},
                )
            }
        )
        async with await make_client(fake).connect(CREDENTIALS) as session:
            response = await session.survey_fieldwork.status("nope")

        assert response.status_code == 404
        assert response.body == {"Message": "Survey not found"}

    @pytest.mark.asyncio
    async def test_missing_parameter_sends_nothing(self):
        fake = FakeNfield()
        async with await make_client(fake).connect(CREDENTIALS) as session:
            with pytest.raises(MissingParameterError) as exc_info:
                await session.survey_languages.add({"SurveyId": "s-1"})

        assert exc_info.value.field == "Name"
        assert fake.payload_requests == []

    @pytest.mark.asyncio
    async def test_stale_token_refreshes_first(self):
        fake = FakeNfield()
        async with await make_client(fake, refresh_window=60.0).connect(
            CREDENTIALS
        ) as session:
            session.token.acquired_at -= 61.0
            await session.surveys.get()

        paths = [r.url.path for r in fake.requests]
        assert paths == ["/v1/SignIn", "/v1/SignIn", "/v1/Surveys/"]
        assert fake.requests[-1].headers["Authorization"] == "Basic tok-2"

    @pytest.mark.asyncio
    async def test_concurrent_calls_share_refresh(self):
        fake = FakeNfield()
        async with await make_client(fake).connect(CREDENTIALS) as session:
            session.token.acquired_at -= 10_000.0
            await asyncio.gather(
                session.surveys.get("1"),
                session.surveys.get("2"),
                session.background_tasks.get(),
            )

        sign_ins = [r for r in fake.requests if r.url.path == "/v1/SignIn"]
        assert len(sign_ins) == 2
        assert len(fake.payload_requests) == 3

    @pytest.mark.asyncio
    async def test_interview_id_is_padded(self):
        fake = FakeNfield()
        async with await make_client(fake).connect(CREDENTIALS) as session:
            await session.interview_quality.get({"SurveyId": "s", "InterviewId": 17})

        assert fake.payload_requests[0].url.path == "/v1/Surveys/s/InterviewQuality/00000017"

    @pytest.mark.asyncio
    async def test_request_by_operation_name(self):
        fake = FakeNfield()
        async with await make_client(fake).connect(CREDENTIALS) as session:
            await session.request(
                "survey_settings.update",
                {"SurveyId": "s", "Name": "AutoClose", "Value": "true"},
            )

        request = fake.payload_requests[0]
        assert request.method == "POST"
        assert json.loads(request.content) == {
            "SurveyId": "s",
            "Name": "AutoClose",
            "Value": "true",
        }

    @pytest.mark.asyncio
    async def test_closed_session_rejects_calls(self):
        fake = FakeNfield()
        session = await make_client(fake).connect(CREDENTIALS)
        await session.close()
        await session.close()

        assert session.is_closed
        with pytest.raises(ClientClosedError):
            await session.surveys.get()
        with pytest.raises(ClientClosedError):
            session.start_refresher()

    @pytest.mark.asyncio
    async def test_refresher_stopped_on_close(self):
        fake = FakeNfield()
        session = await make_client(fake).connect(CREDENTIALS)
        session.start_refresher(interval=0.01)
        await asyncio.sleep(0.035)
        await session.close()

        assert not session.refresher.is_running()
        assert fake.issued >= 2

    @pytest.mark.asyncio
    async def test_metrics_counted(self):
        fake = FakeNfield(
            responses={("DELETE", "/v1/Surveys/9"): (404, {"Message": "gone"})}
        )
        async with await make_client(fake).connect(CREDENTIALS) as session:
            await session.surveys.remove("9")
            stats = session.metrics.stats.get_stats()

        assert stats["sign_ins"] == 1
        assert stats["requests_sent"] == 1
        assert stats["status_codes"] == {"404": 1}
