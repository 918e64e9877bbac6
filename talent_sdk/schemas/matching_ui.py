# -------------------------------------------------------------------
# talent_sdk/schemas/matching_ui.py
#
# Models for generating a hosted matching-UI session.
#
# A UI request wraps the regular API request ("SaasRequest") together
# with the session options ("UIOptions"). The UI endpoints do NOT use
# the standard {Info, Value} envelope; they answer with the session URL.
# -------------------------------------------------------------------

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import AliasChoices, Field

from talent_sdk.schemas.base import ApiModel


class JsAction(ApiModel):
    function_name: str


class UrlAction(ApiModel):
    url: str
    target: Optional[str] = None


class ClientSideHook(ApiModel):
    link_text: str
    is_bulk: bool = False
    js_action: Optional[JsAction] = None
    url_action: Optional[UrlAction] = None


class ServerSideHook(ApiModel):
    link_text: str
    is_bulk: bool = False
    url: str
    custom_info: Optional[Any] = None


class UserActionHookCollection(ApiModel):
    client_side: Optional[List[ClientSideHook]] = None
    server_side: Optional[List[ServerSideHook]] = None


class UserDefinedTagOption(ApiModel):
    value: str
    text: str


class UserDefinedTagsPicklist(ApiModel):
    label: str
    options: List[UserDefinedTagOption]


class UIOptions(ApiModel):
    username: Optional[str] = None
    show_filter_criteria: bool = True
    execute_immediately: bool = False
    show_banner: bool = True
    show_weights: bool = True
    show_details_button: bool = True
    show_find_similar: bool = True
    show_web_sourcing: bool = False
    show_job_boards: bool = True
    show_saved_searches: bool = False
    hooks: Optional[UserActionHookCollection] = None
    user_defined_tags_picklists: Optional[List[UserDefinedTagsPicklist]] = None
    skills_auto_complete_custom_skills_list: Optional[List[str]] = None


class UIRequest(ApiModel):
    saas_request: Any
    ui_options: Optional[UIOptions] = Field(None, alias="UIOptions")


class GenerateUIResponse(ApiModel):
    url: Optional[str] = Field(None, validation_alias=AliasChoices("url", "Url"))
