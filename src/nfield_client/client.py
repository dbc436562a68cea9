# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
User-facing client for the Nfield API.

``NfieldClient`` holds configuration and creates connected sessions;
``ConnectedSession`` owns one token, one transport and the request pipeline
built on them, and exposes the API operations grouped by resource.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from typing_extensions import Self

from .auth import Authenticator, ErrorHandler, PersistentRefresher, TokenManager
from .config import ClientConfig
from .dispatcher import RequestDispatcher
from .endpoints import get_endpoint
from .exceptions import ClientClosedError, ConfigurationError, MissingParameterError
from .observability import MetricsRecorder, get_prometheus_client_metrics
from .params import definitions, is_usable, normalize
from .protocols.transport import TransportProtocol
from .transport import HttpxTransport
from .types.credentials import Credentials
from .types.request import Response
from .types.token import Token

logger = logging.getLogger(__name__)

TransportFactory = Callable[[ClientConfig], TransportProtocol]

INTERVIEW_ID_WIDTH = 8


def coerce_credentials(credentials: Any) -> Credentials:
    """
    Validate caller-supplied credentials.

    Accepts a ``Credentials`` instance or a ``{Domain, Username, Password}``
    mapping.

    Raises:
        MissingParameterError: If credentials are absent or incomplete.
    """
    if credentials is None or callable(credentials):
        raise MissingParameterError(
            "not all required parameters provided: no `credentials`",
            "credentials",
            credentials,
        )
    if isinstance(credentials, Credentials):
        wire = credentials.to_wire()
    elif isinstance(credentials, Mapping):
        wire = dict(credentials)
    else:
        raise MissingParameterError(
            "`credentials` must be a mapping with Domain, Username and Password",
            "credentials",
            credentials,
        )
    return Credentials.from_mapping(normalize(definitions.SIGN_IN, wire))


def format_interview_id(value: Any) -> Any:
    """Zero-pad a numeric interview number to the 8 characters Nfield expects."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return f"{value:0{INTERVIEW_ID_WIDTH}d}"
    if isinstance(value, str) and value.isdigit():
        return value.zfill(INTERVIEW_ID_WIDTH)
    return value


class _Operations:
    """Base for a group of related operations on a session."""

    def __init__(self, session: ConnectedSession) -> None:
        self._session = session

    async def _call(self, operation: str, params: Any) -> Response:
        return await self._session.request(operation, params)


class SurveyFieldwork(_Operations):
    async def status(self, survey_id: str) -> Response:
        return await self._call("survey_fieldwork.status", {"SurveyId": survey_id})

    async def start(self, survey_id: str) -> Response:
        return await self._call("survey_fieldwork.start", {"SurveyId": survey_id})

    async def stop(self, params: definitions.StopSurveyFieldworkParams | str) -> Response:
        """Stop fieldwork. Accepts a bare survey id."""
        return await self._call("survey_fieldwork.stop", params)


class DefaultTexts(_Operations):
    async def get(self, translation_key: str | None = None) -> Response:
        """All default texts, or one when ``translation_key`` is given."""
        return await self._call("default_texts.get", {"TranslationKey": translation_key})


class SurveyTranslations(_Operations):
    async def get(self, params: definitions.SurveyTranslationKeyParams) -> Response:
        return await self._call("survey_translations.get", params)

    async def add(self, params: definitions.SurveyTranslationParams) -> Response:
        return await self._call("survey_translations.add", params)

    async def update(self, params: definitions.SurveyTranslationParams) -> Response:
        return await self._call("survey_translations.update", params)

    async def remove(self, params: definitions.SurveyTranslationKeyParams) -> Response:
        return await self._call("survey_translations.remove", params)


class SurveyLanguages(_Operations):
    async def get(self, params: definitions.SurveyLanguageKeyParams | str) -> Response:
        """All languages of a survey (bare survey id), or one by LanguageId."""
        return await self._call("survey_languages.get", params)

    async def add(self, params: definitions.AddSurveyLanguageParams) -> Response:
        return await self._call("survey_languages.add", params)

    async def update(self, params: definitions.UpdateSurveyLanguageParams) -> Response:
        return await self._call("survey_languages.update", params)

    async def remove(self, params: definitions.SurveyLanguageKeyParams) -> Response:
        return await self._call("survey_languages.remove", params)


class SurveySettings(_Operations):
    async def get(self, survey_id: str) -> Response:
        return await self._call("survey_settings.get", {"SurveyId": survey_id})

    async def update(self, params: definitions.UpdateSurveySettingsParams) -> Response:
        return await self._call("survey_settings.update", params)


class SurveyScript(_Operations):
    async def get(self, survey_id: str) -> Response:
        return await self._call("survey_script.get", {"SurveyId": survey_id})

    async def update(self, params: definitions.UpdateSurveyScriptParams) -> Response:
        return await self._call("survey_script.update", params)


class SurveyData(_Operations):
    async def request(self, params: definitions.RequestSurveyDataParams | str) -> Response:
        """Ask Nfield to prepare a data download; returns a background task."""
        return await self._call("survey_data.request", params)


class Surveys(_Operations):
    async def get(self, survey_id: str | None = None) -> Response:
        """All surveys of the domain, or one when ``survey_id`` is given."""
        return await self._call("surveys.get", {"SurveyId": survey_id})

    async def add(self, params: definitions.AddSurveyParams | str) -> Response:
        return await self._call("surveys.add", params)

    async def update(self, params: definitions.UpdateSurveyParams) -> Response:
        """
        Patch a survey; only the fields supplied are sent.

        Absent optional fields are left out of the PATCH body rather than
        sent as empty strings, so they never overwrite stored values.
        """
        return await self._call("surveys.update", params)

    async def remove(self, survey_id: str) -> Response:
        return await self._call("surveys.remove", {"SurveyId": survey_id})


class SurveyPublish(_Operations):
    async def get(self, survey_id: str) -> Response:
        return await self._call("survey_publish.get", {"SurveyId": survey_id})

    async def update(self, params: definitions.UpdateSurveyPublishParams) -> Response:
        return await self._call("survey_publish.update", params)


class BackgroundTasks(_Operations):
    async def get(self, task_id: str | None = None) -> Response:
        """All background tasks of the domain, or one when ``task_id`` is given."""
        return await self._call("background_tasks.get", {"TaskId": task_id})


class InterviewQuality(_Operations):
    """Interview ids may be given as numbers; they are zero-padded to 8 digits."""

    async def get(self, params: definitions.InterviewQualityKeyParams | str) -> Response:
        return await self._call("interview_quality.get", self._pad(params))

    async def update(self, params: definitions.UpdateInterviewQualityParams) -> Response:
        return await self._call("interview_quality.update", self._pad(params))

    @staticmethod
    def _pad(params: Any) -> Any:
        if isinstance(params, Mapping) and is_usable(params.get("InterviewId")):
            return {**params, "InterviewId": format_interview_id(params["InterviewId"])}
        return params


class ConnectedSession:
    """
    A signed-in connection to the Nfield API.

    Created by :meth:`NfieldClient.connect`. The session owns its token,
    transport and optional background refresher; close it (or use it as
    an async context manager) to release them.

    Example:
        async with await client.connect(credentials) as session:
            response = await session.survey_fieldwork.stop("12345")
            if response.status_code == 404:
                ...
    """

    def __init__(
        self,
        config: ClientConfig,
        credentials: Credentials,
        transport: TransportProtocol,
        token: Token | None = None,
        metrics: MetricsRecorder | None = None,
    ) -> None:
        self.config = config
        self.metrics = metrics or MetricsRecorder()
        self._transport = transport

        self.token_manager = TokenManager(
            Authenticator(transport, self.metrics),
            credentials,
            token=token,
            refresh_window=config.refresh_window,
            metrics=self.metrics,
        )
        self.dispatcher = RequestDispatcher(transport, self.token_manager, self.metrics)
        self.refresher = PersistentRefresher(
            self.token_manager, interval=config.refresh_interval
        )
        self._closed = False

        self.survey_fieldwork = SurveyFieldwork(self)
        self.default_texts = DefaultTexts(self)
        self.survey_translations = SurveyTranslations(self)
        self.survey_languages = SurveyLanguages(self)
        self.survey_settings = SurveySettings(self)
        self.survey_script = SurveyScript(self)
        self.survey_data = SurveyData(self)
        self.surveys = Surveys(self)
        self.survey_publish = SurveyPublish(self)
        self.background_tasks = BackgroundTasks(self)
        self.interview_quality = InterviewQuality(self)

    @property
    def token(self) -> Token:
        return self.token_manager.token

    @property
    def is_closed(self) -> bool:
        return self._closed

    async def request(self, operation: str, params: Any = None) -> Response:
        """
        Run any operation from the endpoint table by name.

        Args:
            operation: Dotted operation name, e.g. ``survey_languages.add``
            params: Mapping, dataclass or scalar shorthand (``None`` means
                no parameters)

        Raises:
            ClientClosedError: If the session has been closed.
            ConfigurationError: If the operation is unknown.
            MissingParameterError: If a required parameter is missing; no
                request is sent.
            AuthenticationFailedError: If a needed token refresh was rejected.
            TransportError: If the network call fails.
        """
        if self._closed:
            raise ClientClosedError("Session is closed")

        endpoint = get_endpoint(operation)
        descriptor = endpoint.prepare({} if params is None else params)
        return await self.dispatcher.dispatch(descriptor)

    def start_refresher(
        self,
        interval: float | None = None,
        on_error: ErrorHandler | None = None,
    ) -> None:
        """Start proactive background token refresh."""
        if self._closed:
            raise ClientClosedError("Session is closed")
        self.refresher.start(interval=interval, on_error=on_error)

    async def stop_refresher(self) -> None:
        await self.refresher.stop()

    async def close(self) -> None:
        """Stop the refresher and close the transport. Idempotent."""
        if self._closed:
            return
        self._closed = True

        await self.refresher.stop()
        await self.token_manager.aclose()
        await self._transport.aclose()
        logger.info("Nfield session closed")

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        await self.close()


class NfieldClient:
    """
    Entry point of the library.

    Example:
        >>> client = NfieldClient().defaults(base_url="https://api.nfieldmr.com/")
        >>> session = await client.connect(
        ...     {"Domain": "acme", "Username": "jo", "Password": "..."}
        ... )
        >>> response = await session.surveys.get()
        >>> await session.close()
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        transport_factory: TransportFactory | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            config: Client configuration (defaults to ``ClientConfig()``)
            transport_factory: Builds the transport for each session from the
                config (defaults to ``HttpxTransport``)
        """
        self.config = config or ClientConfig()
        self._transport_factory: TransportFactory = transport_factory or HttpxTransport

    def defaults(
        self, options: Mapping[str, Any] | None = None, **kwargs: Any
    ) -> NfieldClient:
        """
        Return a new client with ``options`` deep-merged over this client's
        configuration. The current client is left unchanged.

        Raises:
            ConfigurationError: If ``options`` is not a mapping or names an
                unknown configuration field.
        """
        if options is not None and not isinstance(options, Mapping):
            raise ConfigurationError("`options` must be a mapping of client options")
        merged = {**(options or {}), **kwargs}
        return NfieldClient(
            self.config.merged(merged), transport_factory=self._transport_factory
        )

    async def connect(self, credentials: Credentials | Mapping[str, Any]) -> ConnectedSession:
        """
        Sign in and return a connected session.

        Raises:
            MissingParameterError: If credentials are absent or incomplete;
                nothing is sent.
            AuthenticationFailedError: If the service rejects the sign-in.
            TransportError: If the sign-in could not be sent.
        """
        creds = coerce_credentials(credentials)

        prometheus = get_prometheus_client_metrics() if self.config.metrics_enabled else None
        session = ConnectedSession(
            self.config,
            creds,
            self._transport_factory(self.config),
            metrics=MetricsRecorder(prometheus),
        )
        try:
            await session.token_manager.refresh()
        except BaseException:
            await session.close()
            raise

        logger.info(f"Connected to Nfield at {self.config.base_url}")
        return session


__all__ = [
    "BackgroundTasks",
    "ConnectedSession",
    "DefaultTexts",
    "InterviewQuality",
    "NfieldClient",
    "SurveyData",
    "SurveyFieldwork",
    "SurveyLanguages",
    "SurveyPublish",
    "SurveyScript",
    "SurveySettings",
    "SurveyTranslations",
    "Surveys",
    "TransportFactory",
    "coerce_credentials",
    "format_interview_id",
]
