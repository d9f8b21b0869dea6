# facultyeval/core/security.py
from fastapi import Depends, Request
from fastapi.security.utils import get_authorization_scheme_param
from sqlmodel import Session

from facultyeval.core.db import get_session
from facultyeval.core.errors import PermissionDenied, Unauthenticated
from facultyeval.core.tokens import parse_token
from facultyeval.models import Profile


def get_current_profile(request: Request, session: Session = Depends(get_session)) -> Profile:
    """
    Resolves the caller from the ``Authorization: Bearer <token>`` header.
    """
    scheme, token = get_authorization_scheme_param(request.headers.get("Authorization"))
    if scheme.lower() != "bearer" or not token:
        raise Unauthenticated()

    user_id = parse_token(token)
    if user_id is None:
        raise Unauthenticated("Invalid sign-in token")

    profile = session.get(Profile, str(user_id))
    if profile is None:
        raise Unauthenticated("Unknown user")
    return profile


def require_admin(profile: Profile = Depends(get_current_profile)) -> Profile:
    if profile.role != "admin":
        raise PermissionDenied("Administrator access required")
    return profile
