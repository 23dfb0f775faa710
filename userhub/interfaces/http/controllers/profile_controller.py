# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, render_template, request
from pydantic import ValidationError

from userhub.application.use_cases.profile.change_avatar import ChangeAvatarUseCase
from userhub.application.use_cases.profile.change_status import ChangeStatusUseCase
from userhub.application.use_cases.users.authorize_request import AuthorizeRequestUseCase
from userhub.domain.sessions.entities import RequestContext
from userhub.infrastructure.audit import AuditAction, audit_log
from userhub.interfaces.http.dto.auth import AuthSuccessDTO
from userhub.interfaces.http.dto.profile import ProfileDTO, StatusChangedDTO, StatusFormDTO
from userhub.interfaces.http.guards import require_session
from userhub.shared.errors import raise_validation_error


class ProfileController:
    def __init__(
        self,
        *,
        gate: AuthorizeRequestUseCase,
        change_status_use_case: ChangeStatusUseCase,
        change_avatar_use_case: ChangeAvatarUseCase,
        default_avatar_url: str,
        status_max_length: int,
        avatar_max_length: int,
    ) -> None:
        self._gate = gate
        self._change_status_use_case = change_status_use_case
        self._change_avatar_use_case = change_avatar_use_case
        self._default_avatar_url = default_avatar_url
        self._status_max_length = status_max_length
        self._avatar_max_length = avatar_max_length

    def profile(self, context: RequestContext):
        dto = ProfileDTO.from_user(context.user, default_avatar_url=self._default_avatar_url)
        return render_template(
            "profile.html",
            profile=dto,
            status_max_length=self._status_max_length,
            avatar_max_length=self._avatar_max_length,
        )

    def change_status(self, context: RequestContext) -> tuple[Response, int]:
        try:
            dto = StatusFormDTO.model_validate(request.form.to_dict())
        except ValidationError as exc:
            raise_validation_error(exc, "New status is missing")

        new_status = self._change_status_use_case.execute(context, dto.status)

        audit_log(AuditAction.STATUS_CHANGED, username=context.username, success=True)
        payload = StatusChangedDTO(new_status=new_status).model_dump(by_alias=True)
        return jsonify(payload), 200

    def change_avatar(self, context: RequestContext) -> tuple[Response, int]:
        image_data = request.get_data(as_text=True)

        self._change_avatar_use_case.execute(context, image_data)

        audit_log(
            AuditAction.AVATAR_CHANGED,
            username=context.username,
            details={"size": len(image_data)},
            success=True,
        )
        return jsonify(AuthSuccessDTO().model_dump()), 200

    def as_blueprint(self) -> Blueprint:
        page = require_session(self._gate, api=False)
        api = require_session(self._gate, api=True)
        profile_view = page(self.profile)
        status_view = api(self.change_status)
        avatar_view = api(self.change_avatar)

        bp = Blueprint("profile", __name__)
        bp.add_url_rule("/profile", endpoint="profile", view_func=profile_view, methods=["GET"])
        for rule in ("/profile/status", "/profile/changeStatus"):
            bp.add_url_rule(rule, endpoint="change_status", view_func=status_view, methods=["POST"])
        for rule in ("/profile/avatar", "/profile/changeProfilePic"):
            bp.add_url_rule(rule, endpoint="change_avatar", view_func=avatar_view, methods=["POST"])
        return bp
