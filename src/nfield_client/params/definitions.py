# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Built-in parameter schemas for the Nfield API operations.

Each schema is paired with a TypedDict describing the same fields for type
checkers. Validation itself is always done by the schema-driven
:func:`~nfield_client.params.normalizer.normalize`.

``TerminateRunningInterviews`` and ``ForceUpgrade`` are not documented by
Nfield. They are passed through as given, with no behaviour attached.
"""

from typing import Any, TypedDict

from .schema import OPTIONAL, REQUIRED, default_registry


class SignInParams(TypedDict, total=False):
    Domain: str
    Username: str
    Password: str


class SurveyIdParams(TypedDict, total=False):
    SurveyId: str


class TaskIdParams(TypedDict, total=False):
    TaskId: str


class DefaultTextsParams(TypedDict, total=False):
    TranslationKey: str


class StopSurveyFieldworkParams(TypedDict, total=False):
    SurveyId: str
    TerminateRunningInterviews: Any


class SurveyTranslationKeyParams(TypedDict, total=False):
    SurveyId: str
    LanguageId: str | int
    TranslationKey: str


class SurveyTranslationParams(TypedDict, total=False):
    SurveyId: str
    LanguageId: str | int
    Name: str
    Text: str


class SurveyLanguageKeyParams(TypedDict, total=False):
    SurveyId: str
    LanguageId: str | int


class AddSurveyLanguageParams(TypedDict, total=False):
    SurveyId: str
    Name: str


class UpdateSurveyLanguageParams(TypedDict, total=False):
    SurveyId: str
    Id: str | int
    Name: str


class UpdateSurveySettingsParams(TypedDict, total=False):
    SurveyId: str
    Name: str
    Value: str


class UpdateSurveyScriptParams(TypedDict, total=False):
    SurveyId: str
    FileName: str
    Script: str


class RequestSurveyDataParams(TypedDict, total=False):
    SurveyId: str
    FileName: str
    StartDate: str
    EndDate: str
    IncludeSuccessful: bool
    IncludeScreenedOut: bool
    IncludeDroppedOut: bool
    IncludeRejected: bool
    IncludeTestData: bool
    IncludeClosedAnswers: bool
    IncludeOpenAnswers: bool
    IncludeParaData: bool
    IncludeVarFile: bool
    IncludeCapturedMedia: bool
    IncludeQuestionnaireScript: bool


class AddSurveyParams(TypedDict, total=False):
    SurveyName: str
    ClientName: str
    Description: str
    SurveyType: str


class UpdateSurveyParams(TypedDict, total=False):
    SurveyId: str
    SurveyName: str
    ClientName: str
    Description: str


class UpdateSurveyPublishParams(TypedDict, total=False):
    SurveyId: str
    PackageType: str
    ForceUpgrade: Any


class InterviewQualityKeyParams(TypedDict, total=False):
    SurveyId: str
    InterviewId: str


class UpdateInterviewQualityParams(TypedDict, total=False):
    SurveyId: str
    InterviewId: str
    NewInterviewStatus: str


SIGN_IN = default_registry.define(
    "SignIn",
    {"Domain": REQUIRED, "Username": REQUIRED, "Password": REQUIRED},
)

SURVEY_ID = default_registry.define("SurveyId", {"SurveyId": REQUIRED})
OPTIONAL_SURVEY_ID = default_registry.define("OptionalSurveyId", {"SurveyId": OPTIONAL})
OPTIONAL_TASK_ID = default_registry.define("OptionalTaskId", {"TaskId": OPTIONAL})
DEFAULT_TEXTS = default_registry.define("DefaultTexts", {"TranslationKey": OPTIONAL})

STOP_SURVEY_FIELDWORK = default_registry.define(
    "StopSurveyFieldwork",
    {"SurveyId": REQUIRED, "TerminateRunningInterviews": OPTIONAL},
)

GET_SURVEY_TRANSLATIONS = default_registry.define(
    "GetSurveyTranslations",
    {"SurveyId": REQUIRED, "LanguageId": REQUIRED, "TranslationKey": OPTIONAL},
)
ADD_SURVEY_TRANSLATIONS = default_registry.define(
    "AddSurveyTranslations",
    {"SurveyId": REQUIRED, "LanguageId": REQUIRED, "Name": REQUIRED, "Text": REQUIRED},
)
UPDATE_SURVEY_TRANSLATIONS = default_registry.define(
    "UpdateSurveyTranslations",
    {"SurveyId": REQUIRED, "LanguageId": REQUIRED, "Name": REQUIRED, "Text": REQUIRED},
)
REMOVE_SURVEY_TRANSLATIONS = default_registry.define(
    "RemoveSurveyTranslations",
    {"SurveyId": REQUIRED, "LanguageId": REQUIRED, "TranslationKey": REQUIRED},
)

GET_SURVEY_LANGUAGES = default_registry.define(
    "GetSurveyLanguages",
    {"SurveyId": REQUIRED, "LanguageId": OPTIONAL},
)
ADD_SURVEY_LANGUAGES = default_registry.define(
    "AddSurveyLanguages",
    {"SurveyId": REQUIRED, "Name": REQUIRED},
)
UPDATE_SURVEY_LANGUAGES = default_registry.define(
    "UpdateSurveyLanguages",
    {"SurveyId": REQUIRED, "Id": REQUIRED, "Name": REQUIRED},
)
REMOVE_SURVEY_LANGUAGES = default_registry.define(
    "RemoveSurveyLanguages",
    {"SurveyId": REQUIRED, "LanguageId": REQUIRED},
)

UPDATE_SURVEY_SETTINGS = default_registry.define(
    "UpdateSurveySettings",
    {"SurveyId": REQUIRED, "Name": REQUIRED, "Value": REQUIRED},
)
UPDATE_SURVEY_SCRIPT = default_registry.define(
    "UpdateSurveyScript",
    {"SurveyId": REQUIRED, "FileName": REQUIRED, "Script": REQUIRED},
)

REQUEST_SURVEY_DATA = default_registry.define(
    "RequestSurveyData",
    {
        "SurveyId": REQUIRED,
        "FileName": OPTIONAL,
        "StartDate": OPTIONAL,
        "EndDate": OPTIONAL,
        "IncludeSuccessful": True,
        "IncludeScreenedOut": False,
        "IncludeDroppedOut": False,
        "IncludeRejected": False,
        "IncludeTestData": False,
        "IncludeClosedAnswers": True,
        "IncludeOpenAnswers": True,
        "IncludeParaData": False,
        "IncludeVarFile": False,
        "IncludeCapturedMedia": False,
        "IncludeQuestionnaireScript": False,
    },
)

ADD_SURVEYS = default_registry.define(
    "AddSurveys",
    {
        "SurveyName": REQUIRED,
        "ClientName": OPTIONAL,
        "Description": OPTIONAL,
        "SurveyType": "Basic",
    },
)
UPDATE_SURVEYS = default_registry.define(
    "UpdateSurveys",
    {
        "SurveyId": REQUIRED,
        "SurveyName": OPTIONAL,
        "ClientName": OPTIONAL,
        "Description": OPTIONAL,
    },
)

# Nfield's own manager always sends ForceUpgrade=0
UPDATE_SURVEY_PUBLISH = default_registry.define(
    "UpdateSurveyPublish",
    {"SurveyId": REQUIRED, "PackageType": REQUIRED, "ForceUpgrade": 0},
)

GET_INTERVIEW_QUALITY = default_registry.define(
    "GetInterviewQuality",
    {"SurveyId": REQUIRED, "InterviewId": OPTIONAL},
)
UPDATE_INTERVIEW_QUALITY = default_registry.define(
    "UpdateInterviewQuality",
    {"SurveyId": REQUIRED, "InterviewId": REQUIRED, "NewInterviewStatus": REQUIRED},
)


__all__ = [
    "ADD_SURVEYS",
    "ADD_SURVEY_LANGUAGES",
    "ADD_SURVEY_TRANSLATIONS",
    "DEFAULT_TEXTS",
    "GET_INTERVIEW_QUALITY",
    "GET_SURVEY_LANGUAGES",
    "GET_SURVEY_TRANSLATIONS",
    "OPTIONAL_SURVEY_ID",
    "OPTIONAL_TASK_ID",
    "REMOVE_SURVEY_LANGUAGES",
    "REMOVE_SURVEY_TRANSLATIONS",
    "REQUEST_SURVEY_DATA",
    "SIGN_IN",
    "STOP_SURVEY_FIELDWORK",
    "SURVEY_ID",
    "UPDATE_INTERVIEW_QUALITY",
    "UPDATE_SURVEYS",
    "UPDATE_SURVEY_LANGUAGES",
    "UPDATE_SURVEY_PUBLISH",
    "UPDATE_SURVEY_SCRIPT",
    "UPDATE_SURVEY_SETTINGS",
    "UPDATE_SURVEY_TRANSLATIONS",
    "AddSurveyLanguageParams",
    "AddSurveyParams",
    "DefaultTextsParams",
    "InterviewQualityKeyParams",
    "RequestSurveyDataParams",
    "SignInParams",
    "StopSurveyFieldworkParams",
    "SurveyIdParams",
    "SurveyLanguageKeyParams",
    "SurveyTranslationKeyParams",
    "SurveyTranslationParams",
    "TaskIdParams",
    "UpdateInterviewQualityParams",
    "UpdateSurveyLanguageParams",
    "UpdateSurveyParams",
    "UpdateSurveyPublishParams",
    "UpdateSurveyScriptParams",
    "UpdateSurveySettingsParams",
]
