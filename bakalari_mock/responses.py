"""Response helpers and fixed payload shapes.

The real API answers with bare JSON documents (no envelope) and clients check
the exact ``content-type`` value, so every JSON body goes through
``json_response``.
"""

from __future__ import annotations

import json
from typing import Any

from fastapi.responses import Response


JSON_MEDIA_TYPE = "application/json; charset=utf-8"

JsonObject = dict[str, Any]

TOKEN_TYPE = "Bearer"
TOKEN_EXPIRES_IN = 3599
TOKEN_SCOPE = "openid profile offline_access bakalari_api"
API_BASE_URL = "api/3"


def json_response(content: Any, status_code: int = 200) -> Response:
    """Serialize ``content`` fully before building the response.

    A serialization error propagates to the exception guard, which answers
    with an empty 500 instead of a partial body.
    """

    body = json.dumps(content, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
    return Response(content=body, status_code=status_code, media_type=JSON_MEDIA_TYPE)


def empty_response(status_code: int) -> Response:
    return Response(status_code=status_code)


def info_payload(api_version: str, app_version: str) -> JsonObject:
    return {
        "ApiVersion": api_version,
        "ApplicationVersion": app_version,
        "BaseUrl": API_BASE_URL,
    }


def login_payload(
    *,
    api_version: str,
    app_version: str,
    refresh_token: str,
    access_token: str,
) -> JsonObject:
    return {
        "bak:ApiVersion": api_version,
        "bak:AppVersion": app_version,
        "token_type": TOKEN_TYPE,
        "expires_in": TOKEN_EXPIRES_IN,
        "scope": TOKEN_SCOPE,
        "bak:UserId": "1",
        "refresh_token": refresh_token,
        "access_token": access_token,
    }


def enabled_modules() -> list[JsonObject]:
    """Modules the mock user may open. Campaign (ads) is left out."""

    return [
        {
            "Module": "Komens",
            "Rights": [
                "ShowReceivedMessages",
                "ShowSentMessages",
                "ShowNoticeBoardMessages",
                "SendMessages",
                "ShowRatingDetails",
                "SendAttachments",
            ],
        },
        {"Module": "Absence", "Rights": ["ShowAbsence", "ShowAbsencePercentage"]},
        {"Module": "Events", "Rights": ["ShowEvents"]},
        {"Module": "Marks", "Rights": ["ShowMarks", "ShowFinalMarks", "PredictMarks"]},
        {"Module": "Timetable", "Rights": ["ShowTimetable"]},
        {"Module": "Substitutions", "Rights": ["ShowSubstitutions"]},
        {"Module": "Subjects", "Rights": ["ShowSubjects", "ShowSubjectThemes"]},
        {"Module": "Homeworks", "Rights": ["ShowHomeworks"]},
        {"Module": "Gdpr", "Rights": ["ShowOwnConsents", "ShowChildConsents", "ShowCommissioners"]},
    ]


def user_payload(*, name: str, class_name: str, campaign_category_code: str) -> JsonObject:
    return {
        "UserUID": "1234/the_id",
        "CampaignCategoryCode": campaign_category_code,
        "Class": {
            "Id": "XL",
            "Abbrev": class_name,
            "Name": class_name,
        },
        "FullName": f"{name}, {class_name}",
        "SchoolOrganizationName": "škola",
        "SchoolType": None,
        "UserType": "student",
        "UserTypeText": "student",
        "StudyYear": 1,
        "EnabledModules": enabled_modules(),
        "SettingModules": {
            "Common": {
                "$type": "CommonModuleSettings",
                # Clients do not validate the semester range.
                "ActualSemester": {
                    "SemesterId": "1",
                    "From": "2020-09-04T00:00:00+01:00",
                    "To": "2021-02-14T23:59:59+02:00",
                },
            },
        },
    }


def webmodule_payload() -> JsonObject:
    return {
        "WebModules": [
            {
                "IconId": "dokumenty",
                "SubMenu": None,
                "Url": "",
                "Name": "Dokumenty",
            },
        ],
        "Dashboard": {
            "IconId": None,
            "SubMenu": None,
            "Url": "",
            "Name": None,
        },
    }
