# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Nfield API endpoint table.

Every operation is described by its HTTP method, a path template and the
name of the parameter schema its input is normalized against. Path
placeholders use the schema's field names, e.g. ``{SurveyId}``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

from .exceptions import ConfigurationError
from .params import SchemaRegistry, normalize
from .types.request import RequestDescriptor


@dataclass(frozen=True)
class Endpoint:
    """
    One Nfield API operation.

    Attributes:
        name: Dotted operation name, e.g. ``survey_fieldwork.stop``
        method: HTTP method
        path: Path template relative to the base URL
        schema: Name of the registered parameter schema
        body: Send the normalized parameters as the JSON body
        exclude_from_body: Fields used only in the path
        omit_empty: Leave ``""`` (absent optional) fields out of the body
    """

    name: str
    method: str
    path: str
    schema: str
    body: bool = False
    exclude_from_body: tuple[str, ...] = ()
    omit_empty: bool = False

    def build(self, params: Mapping[str, Any]) -> RequestDescriptor:
        """Turn normalized parameters into a request descriptor."""
        segments = {key: quote(str(value), safe="") for key, value in params.items()}
        try:
            path = self.path.format_map(segments)
        except KeyError as e:
            raise ConfigurationError(
                f"Endpoint '{self.name}' path uses {e} which schema "
                f"'{self.schema}' does not define"
            ) from None

        json = None
        if self.body:
            json = {
                key: value
                for key, value in params.items()
                if key not in self.exclude_from_body
                and not (self.omit_empty and value == "")
            }
        return RequestDescriptor(method=self.method, path=path, json=json)

    def prepare(
        self, raw_input: Any, registry: SchemaRegistry | None = None
    ) -> RequestDescriptor:
        """Normalize ``raw_input`` and build the request descriptor."""
        return self.build(normalize(self.schema, raw_input, registry))


_SURVEY = "v1/Surveys/{SurveyId}"
_TRANSLATIONS = _SURVEY + "/Languages/{LanguageId}/Translations"

ENDPOINTS: dict[str, Endpoint] = {
    e.name: e
    for e in (
        # Fieldwork
        Endpoint("survey_fieldwork.status", "GET", _SURVEY + "/Fieldwork/Status", "SurveyId"),
        Endpoint("survey_fieldwork.start", "PUT", _SURVEY + "/Fieldwork/Start", "SurveyId"),
        Endpoint(
            "survey_fieldwork.stop",
            "PUT",
            _SURVEY + "/Fieldwork/Stop",
            "StopSurveyFieldwork",
            body=True,
        ),
        # Default texts
        Endpoint("default_texts.get", "GET", "v1/DefaultTexts/{TranslationKey}", "DefaultTexts"),
        # Translations
        Endpoint(
            "survey_translations.get",
            "GET",
            _TRANSLATIONS + "/{TranslationKey}",
            "GetSurveyTranslations",
        ),
        Endpoint(
            "survey_translations.add", "POST", _TRANSLATIONS, "AddSurveyTranslations", body=True
        ),
        Endpoint(
            "survey_translations.update",
            "PUT",
            _TRANSLATIONS,
            "UpdateSurveyTranslations",
            body=True,
        ),
        Endpoint(
            "survey_translations.remove",
            "DELETE",
            _TRANSLATIONS + "/{TranslationKey}",
            "RemoveSurveyTranslations",
        ),
        # Languages
        Endpoint(
            "survey_languages.get", "GET", _SURVEY + "/Languages/{LanguageId}", "GetSurveyLanguages"
        ),
        Endpoint(
            "survey_languages.add", "POST", _SURVEY + "/Languages", "AddSurveyLanguages", body=True
        ),
        Endpoint(
            "survey_languages.update",
            "PUT",
            _SURVEY + "/Languages",
            "UpdateSurveyLanguages",
            body=True,
        ),
        Endpoint(
            "survey_languages.remove",
            "DELETE",
            _SURVEY + "/Languages/{LanguageId}",
            "RemoveSurveyLanguages",
        ),
        # Settings
        Endpoint("survey_settings.get", "GET", _SURVEY + "/Settings", "SurveyId"),
        Endpoint(
            "survey_settings.update",
            "POST",
            _SURVEY + "/Settings",
            "UpdateSurveySettings",
            body=True,
        ),
        # Script
        Endpoint("survey_script.get", "GET", _SURVEY + "/Script", "SurveyId"),
        Endpoint(
            "survey_script.update", "POST", _SURVEY + "/Script", "UpdateSurveyScript", body=True
        ),
        # Data export
        Endpoint("survey_data.request", "POST", _SURVEY + "/Data", "RequestSurveyData", body=True),
        # Surveys
        Endpoint("surveys.get", "GET", _SURVEY, "OptionalSurveyId"),
        Endpoint("surveys.add", "POST", "v1/Surveys", "AddSurveys", body=True),
        Endpoint(
            "surveys.update",
            "PATCH",
            _SURVEY,
            "UpdateSurveys",
            body=True,
            exclude_from_body=("SurveyId",),
            omit_empty=True,
        ),
        Endpoint("surveys.remove", "DELETE", _SURVEY, "SurveyId"),
        # Publishing
        Endpoint("survey_publish.get", "GET", _SURVEY + "/Publish", "SurveyId"),
        Endpoint(
            "survey_publish.update", "PUT", _SURVEY + "/Publish", "UpdateSurveyPublish", body=True
        ),
        # Background tasks
        Endpoint("background_tasks.get", "GET", "v1/BackgroundTasks/{TaskId}", "OptionalTaskId"),
        # Interview quality
        Endpoint(
            "interview_quality.get",
            "GET",
            _SURVEY + "/InterviewQuality/{InterviewId}",
            "GetInterviewQuality",
        ),
        Endpoint(
            "interview_quality.update",
            "PUT",
            _SURVEY + "/InterviewQuality",
            "UpdateInterviewQuality",
            body=True,
        ),
    )
}


def get_endpoint(name: str) -> Endpoint:
    """
    Return the endpoint registered as ``name``.

    Raises:
        ConfigurationError: If no such operation exists.
    """
    try:
        return ENDPOINTS[name]
    except KeyError:
        raise ConfigurationError(f"Unknown Nfield operation: '{name}'") from None


__all__ = ["ENDPOINTS", "Endpoint", "get_endpoint"]
