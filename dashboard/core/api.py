# dashboard/core/api.py
import logging
from typing import Dict, List, Optional

import requests

from .config import settings

logger = logging.getLogger(__name__)

UNAUTHORIZED_MESSAGE = "غير مخول للوصول - يرجى تسجيل الدخول مرة أخرى"


class ApiError(Exception):
    """
    Raised for any failed call to the backend (HTTP error or transport).
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def create_api_url(endpoint: str) -> str:
    """
    Builds the full URL for an API endpoint ("/api/x" or "api/x").
    """
    clean_endpoint = endpoint if endpoint.startswith("/") else f"/{endpoint}"
    return f"{settings.API_BASE_URL.rstrip('/')}{clean_endpoint}"


def get_auth_headers(token: Optional[str] = None) -> Dict[str, str]:
    headers = {"Content-Type": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def _json_body(resp: requests.Response):
    content_type = resp.headers.get("content-type", "")
    if "application/json" not in content_type:
        return None
    try:
        return resp.json()
    except ValueError:
        return None


def _request(method: str, endpoint: str, token: Optional[str] = None, payload: Optional[dict] = None):
    url = create_api_url(endpoint)
    logger.debug("%s %s", method, url)
    try:
        resp = requests.request(
            method,
            url,
            json=payload,
            headers=get_auth_headers(token),
            timeout=settings.REQUEST_TIMEOUT,
        )
    except requests.RequestException as exc:
        logger.warning("%s %s failed: %s", method, url, exc)
        raise ApiError(f"تعذر الاتصال بالخادم: {exc}") from exc

    if resp.status_code == 401:
        raise ApiError(UNAUTHORIZED_MESSAGE, resp.status_code)
    if not resp.ok:
        body = _json_body(resp)
        message = body.get("message") if isinstance(body, dict) else None
        raise ApiError(message or f"خطأ في الخادم: {resp.status_code}", resp.status_code)
    return resp


def api_sign_in(user_name: str, password: str) -> dict:
    """
    Faz login no backend e devolve o corpo JSON ({"accessToken", "role", "message"}).
    """
    url = create_api_url(settings.SIGNIN_PATH)
    try:
        resp = requests.post(
            url,
            json={"userName": user_name, "password": password},
            headers=get_auth_headers(),
            timeout=settings.REQUEST_TIMEOUT,
        )
    except requests.RequestException as exc:
        raise ApiError(f"تعذر الاتصال بالخادم: {exc}") from exc

    data = _json_body(resp)
    if not isinstance(data, dict):
        raise ApiError("الخادم لا يستجيب بصيغة JSON صحيحة - تأكد من تشغيل الخادم", resp.status_code)

    if not resp.ok:
        if resp.status_code == 401:
            raise ApiError(data.get("message") or "اسم المستخدم أو كلمة المرور غير صحيحة", 401)
        if resp.status_code == 404:
            raise ApiError("الخدمة غير متوفرة - تأكد من صحة الرابط", 404)
        raise ApiError(data.get("message") or f"خطأ في الخادم: {resp.status_code}", resp.status_code)

    return data


def api_list_records(token: str, endpoint: str) -> List[dict]:
    resp = _request("GET", endpoint, token)
    data = _json_body(resp)
    return data if isinstance(data, list) else []


def api_create_record(token: str, endpoint: str, record: dict) -> Optional[dict]:
    resp = _request("POST", endpoint, token, record)
    return _json_body(resp)


def api_update_record(token: str, endpoint: str, record_id: str, fields: dict) -> Optional[dict]:
    resp = _request("PUT", f"{endpoint}/{record_id}", token, fields)
    return _json_body(resp)


def api_delete_record(token: str, endpoint: str, record_id: str) -> bool:
    _request("DELETE", f"{endpoint}/{record_id}", token)
    return True
