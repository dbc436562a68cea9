"""Checks on the built-in Nfield operation schemas."""

import pytest

from nfield_client.params import definitions, normalize
from nfield_client.params.schema import OPTIONAL, REQUIRED, default_registry

EXPECTED_SCHEMAS = {
    "AddSurveyLanguages",
    "AddSurveyTranslations",
    "AddSurveys",
    "DefaultTexts",
    "GetInterviewQuality",
    "GetSurveyLanguages",
    "GetSurveyTranslations",
    "OptionalSurveyId",
    "OptionalTaskId",
    "RemoveSurveyLanguages",
    "RemoveSurveyTranslations",
    "RequestSurveyData",
    "SignIn",
    "StopSurveyFieldwork",
    "SurveyId",
    "UpdateInterviewQuality",
    "UpdateSurveyLanguages",
    "UpdateSurveyPublish",
    "UpdateSurveyScript",
    "UpdateSurveySettings",
    "UpdateSurveyTranslations",
    "UpdateSurveys",
}


def test_all_schemas_registered():
    assert EXPECTED_SCHEMAS <= set(default_registry.names())


@pytest.mark.parametrize(
    ("name", "shorthand"),
    [
        ("StopSurveyFieldwork", "SurveyId"),
        ("GetSurveyLanguages", "SurveyId"),
        ("RequestSurveyData", "SurveyId"),
        ("AddSurveys", "SurveyName"),
        ("UpdateSurveys", "SurveyId"),
        ("SurveyId", "SurveyId"),
        ("SignIn", None),
        ("AddSurveyTranslations", None),
        ("UpdateSurveyPublish", None),
        ("OptionalSurveyId", None),
    ],
)
def test_shorthand_fields(name, shorthand):
    assert default_registry.get(name).shorthand_field == shorthand


def test_sign_in_requires_all_credentials():
    schema = definitions.SIGN_IN
    assert all(default is REQUIRED for default in schema.fields.values())
    assert set(schema.fields) == {"Domain", "Username", "Password"}


def test_undocumented_fields_pass_through():
    """TerminateRunningInterviews and ForceUpgrade are forwarded as given."""
    stop = normalize(
        definitions.STOP_SURVEY_FIELDWORK,
        {"SurveyId": "s", "TerminateRunningInterviews": "true"},
    )
    assert stop["TerminateRunningInterviews"] == "true"

    publish = normalize(
        definitions.UPDATE_SURVEY_PUBLISH, {"SurveyId": "s", "PackageType": "Live"}
    )
    assert publish["ForceUpgrade"] == 0

    forced = normalize(
        definitions.UPDATE_SURVEY_PUBLISH,
        {"SurveyId": "s", "PackageType": "Live", "ForceUpgrade": 1},
    )
    assert forced["ForceUpgrade"] == 1


def test_terminate_running_interviews_is_optional():
    assert definitions.STOP_SURVEY_FIELDWORK.fields["TerminateRunningInterviews"] is OPTIONAL
