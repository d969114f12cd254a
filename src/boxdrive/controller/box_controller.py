"""Box REST API controller (internal use only)."""

from __future__ import annotations

import logging
import os
import time
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, TypeVar

import requests

from boxdrive.auth import AuthInfo
from boxdrive.errors import (
    BoxError,
    HttpStatusError,
    InvalidArgumentError,
    InvalidStateError,
    MalformedResponseError,
    NetworkError,
    UnknownResponseError,
    map_status_error,
)

from .fields import (
    DEFAULT_BASE_URL,
    DEFAULT_UPLOAD_URL,
    STATUS_ACCOUNT_INFO_OK,
    STATUS_COPY,
    STATUS_CREATE_OK,
    STATUS_DELETE,
    STATUS_FILE_INFO,
    STATUS_GET_COLLABORATIONS,
    STATUS_INVITE_COLLABORATORS,
    STATUS_LISTING_OK,
    STATUS_LOGOUT_OK,
    STATUS_MOVE,
    STATUS_RENAME,
    STATUS_SET_DESCRIPTION,
    STATUS_UPLOAD_OK,
    TREE_NOZIP,
    TREE_ONELEVEL,
    TREE_SIMPLE,
)

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _RetryPolicy:
    max_retries: int = 3
    initial_delay_sec: float = 1.0


class BoxController:
    """
    Box API controller (internal only).

    Notes:
        - Every call returns parsed response data or raises a typed error.
        - Failing statuses are mapped through boxdrive.errors.classify.
    """

    def __init__(
        self,
        auth_info: AuthInfo,
        *,
        base_url: str = DEFAULT_BASE_URL,
        upload_url: str = DEFAULT_UPLOAD_URL,
        timeout: float = 30.0,
        max_retries: int = 3,
    ) -> None:
        self._configure(
            requests.Session(),
            auth_info,
            base_url=base_url,
            upload_url=upload_url,
            timeout=timeout,
            max_retries=max_retries,
        )

    @classmethod
    def from_session(
        cls,
        session: Any,
        auth_info: AuthInfo,
        *,
        base_url: str = DEFAULT_BASE_URL,
        upload_url: str = DEFAULT_UPLOAD_URL,
        timeout: float = 30.0,
        max_retries: int = 3,
    ) -> "BoxController":
        """Create controller from a pre-built HTTP session (useful for tests)."""
        obj = cls.__new__(cls)
        obj._configure(
            session,
            auth_info,
            base_url=base_url,
            upload_url=upload_url,
            timeout=timeout,
            max_retries=max_retries,
        )
        return obj

    def _configure(
        self,
        session: Any,
        auth_info: AuthInfo,
        *,
        base_url: str,
        upload_url: str,
        timeout: float,
        max_retries: int,
    ) -> None:
        if max_retries < 0:
            raise InvalidArgumentError("max_retries must be >= 0")
        self._session = session
        self._auth_info = auth_info
        self._base_url = base_url.rstrip("/")
        self._upload_url = upload_url.rstrip("/")
        self._timeout = timeout
        self._retry_policy = _RetryPolicy(max_retries=max_retries)

    @property
    def auth_info(self) -> AuthInfo:
        return self._auth_info

    @property
    def base_url(self) -> str:
        return self._base_url

    def set_auth_token(self, auth_token: Optional[str]) -> None:
        self._auth_info = self._auth_info.with_token(auth_token)

    # ----------------------------
    # Folder tree
    # ----------------------------
    def get_account_tree(self, folder_id: str, *params: str) -> dict[str, Any]:
        return self.query_rest(
            STATUS_LISTING_OK,
            "get_account_tree",
            folder_id=folder_id,
            params=[TREE_NOZIP, *params],
        )

    def fetch_one_level(self, folder_id: str) -> dict[str, Any]:
        """Folder attributes plus its direct `folders` and `files`."""
        data = self.get_account_tree(folder_id, TREE_ONELEVEL)
        return _normalize_folder(_tree_root(data))

    def fetch_whole_tree(self, folder_id: str) -> dict[str, Any]:
        """Folder attributes plus every descendant, nested under `folders`/`files`."""
        data = self.get_account_tree(folder_id, TREE_SIMPLE)
        return _normalize_folder(_tree_root(data))

    # ----------------------------
    # Items
    # ----------------------------
    def create_folder(self, parent_id: str, name: str, shared: bool = False) -> dict[str, Any]:
        if not name:
            raise InvalidArgumentError("name must be a non-empty string")

        data = self.query_rest(
            STATUS_CREATE_OK,
            "create_folder",
            parent_id=parent_id,
            name=name,
            share=shared,
        )
        folder = data.get("folder")
        if not isinstance(folder, dict) or "folder_id" not in folder:
            raise MalformedResponseError(
                "create_folder response has no folder",
                details={"parent_id": parent_id, "name": name},
            )

        info = dict(folder)
        info["id"] = info.pop("folder_id")
        if "folder_name" in info:
            info["name"] = info.pop("folder_name")
        return info

    def upload_file(self, local_path: str, folder_id: str) -> dict[str, Any]:
        if not local_path or not isinstance(local_path, str):
            raise InvalidArgumentError("local_path must be a non-empty string")
        if not os.path.isfile(local_path):
            raise InvalidArgumentError(
                "local_path does not exist",
                details={"local_path": local_path},
            )

        token = self._require_token()
        url = f"{self._upload_url}/{token}/{folder_id}"
        filename = os.path.basename(local_path)

        def post() -> requests.Response:
            with open(local_path, "rb") as f:
                return self._request("POST", url, files={"new_file0": (filename, f)})

        logger.debug("Uploading %s to folder %s", local_path, folder_id)
        response = self._execute(post)
        data = _parse_response(response)
        self._check_status(data, STATUS_UPLOAD_OK, "upload")

        files = data.get("files")
        entries = _as_list(files.get("file")) if isinstance(files, dict) else []
        if not entries or not isinstance(entries[0], dict):
            raise MalformedResponseError(
                "upload response has no file",
                details={"local_path": local_path, "folder_id": folder_id},
            )
        return entries[0]

    def get_file_info(self, file_id: str) -> dict[str, Any]:
        data = self.query_rest(STATUS_FILE_INFO, "get_file_info", file_id=file_id)
        info = data.get("info")
        if not isinstance(info, dict):
            raise MalformedResponseError("get_file_info response has no info")
        return info

    def rename_item(self, target: str, target_id: str, new_name: str) -> None:
        self.query_rest(
            STATUS_RENAME,
            "rename",
            target=target,
            target_id=target_id,
            new_name=new_name,
        )

    def move_item(self, target: str, target_id: str, destination_id: str) -> None:
        self.query_rest(
            STATUS_MOVE,
            "move",
            target=target,
            target_id=target_id,
            destination_id=destination_id,
        )

    def copy_item(self, target: str, target_id: str, destination_id: str) -> dict[str, Any]:
        return self.query_rest(
            STATUS_COPY,
            "copy",
            target=target,
            target_id=target_id,
            destination_id=destination_id,
        )

    def delete_item(self, target: str, target_id: str) -> None:
        self.query_rest(STATUS_DELETE, "delete", target=target, target_id=target_id)

    def set_description(self, target: str, target_id: str, description: str) -> None:
        self.query_rest(
            STATUS_SET_DESCRIPTION,
            "set_description",
            target=target,
            target_id=target_id,
            description=description,
        )

    # ----------------------------
    # Collaborations
    # ----------------------------
    def get_collaborations(self, target_id: str, *, target: str = "folder") -> list[dict[str, Any]]:
        data = self.query_rest(
            STATUS_GET_COLLABORATIONS,
            "get_collaborations",
            target=target,
            target_id=target_id,
        )
        collaborations = data.get("collaborations")
        if not isinstance(collaborations, dict):
            return []
        return [c for c in _as_list(collaborations.get("collaboration")) if isinstance(c, dict)]

    def invite_collaborators(
        self,
        target_id: str,
        role: str,
        *,
        user_ids: Sequence[str] = (),
        emails: Sequence[str] = (),
        resend_invite: bool = False,
        no_email: bool = False,
        target: str = "folder",
    ) -> dict[str, Any]:
        if not user_ids and not emails:
            raise InvalidArgumentError("user_ids or emails must be given")

        return self.query_rest(
            STATUS_INVITE_COLLABORATORS,
            "invite_collaborators",
            target=target,
            target_id=target_id,
            user_ids=list(user_ids),
            emails=list(emails),
            item_role_name=role,
            resend_invite=resend_invite,
            no_email=no_email,
        )

    # ----------------------------
    # Account
    # ----------------------------
    def get_account_info(self) -> dict[str, Any]:
        data = self.query_rest(STATUS_ACCOUNT_INFO_OK, "get_account_info")
        user = data.get("user")
        if not isinstance(user, dict):
            raise MalformedResponseError("get_account_info response has no user")
        return user

    def logout(self) -> None:
        self.query_rest(STATUS_LOGOUT_OK, "logout")

    # ----------------------------
    # Transport
    # ----------------------------
    def query_rest(
        self,
        expected_status: str,
        action: str,
        *,
        params: Sequence[str] = (),
        **kwargs: Any,
    ) -> dict[str, Any]:
        """
        Issue one REST action and return the parsed `<response>` element.

        Raises:
            BoxStatusError subclass: if the status differs from expected_status.
            UnknownResponseError: if the body has no status.
            HttpStatusError / NetworkError: on transport failures.
        """
        query: dict[str, Any] = {
            "action": action,
            "api_key": self._auth_info.api_key,
        }
        if self._auth_info.auth_token is not None:
            query["auth_token"] = self._auth_info.auth_token
        if params:
            query["params[]"] = list(params)
        for key, value in kwargs.items():
            if value is None:
                continue
            if isinstance(value, (list, tuple)):
                if value:
                    query[f"{key}[]"] = list(value)
            elif isinstance(value, bool):
                query[key] = int(value)
            else:
                query[key] = value

        logger.debug("Box action %s (expect %s)", action, expected_status)
        url = f"{self._base_url}/rest"
        response = self._execute(lambda: self._request("GET", url, params=query))
        data = _parse_response(response)
        self._check_status(data, expected_status, action)
        return data

    def _check_status(self, data: dict[str, Any], expected_status: str, action: str) -> None:
        status = data.get("status")
        if not isinstance(status, str) or not status:
            raise UnknownResponseError(
                "Response has no status",
                details={"action": action},
            )
        if status != expected_status:
            logger.debug("Box action %s failed with status %s", action, status)
            raise map_status_error(status, details={"action": action})

    def _require_token(self) -> str:
        token = self._auth_info.auth_token
        if token is None:
            raise InvalidStateError("An auth token is required for this call")
        return token

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        response = self._session.request(method, url, timeout=self._timeout, **kwargs)
        if not 200 <= response.status_code < 300:
            raise HttpStatusError(
                f"HTTP error {response.status_code}",
                details={"status_code": response.status_code, "url": url},
            )
        return response

    def _execute(self, func: Callable[[], T]) -> T:
        delay = self._retry_policy.initial_delay_sec
        for attempt in range(self._retry_policy.max_retries + 1):
            try:
                return func()
            except Exception as exc:
                mapped = self._map_exception(exc)
                if self._should_retry(mapped) and attempt < self._retry_policy.max_retries:
                    logger.warning(
                        "Retrying Box request after %s (attempt %d/%d)",
                        type(mapped).__name__,
                        attempt + 1,
                        self._retry_policy.max_retries,
                    )
                    time.sleep(delay)
                    delay *= 2
                    continue
                if mapped is exc:
                    raise
                raise mapped from exc

        raise BoxError("Unexpected retry loop termination")

    def _should_retry(self, exc: Exception) -> bool:
        if isinstance(exc, NetworkError):
            return True
        if isinstance(exc, HttpStatusError):
            status_code = exc.details.get("status_code")
            return isinstance(status_code, int) and 500 <= status_code <= 599
        return False

    def _map_exception(self, exc: Exception) -> Exception:
        if isinstance(exc, BoxError):
            return exc
        if isinstance(exc, (requests.ConnectionError, requests.Timeout)):
            return NetworkError("Network error", cause=exc)
        if isinstance(exc, requests.RequestException):
            return NetworkError("HTTP request failed", cause=exc)
        if isinstance(exc, OSError):
            return InvalidArgumentError("Local I/O failed", cause=exc)
        return exc


def _parse_response(response: Any) -> dict[str, Any]:
    try:
        root = ET.fromstring(response.content)
    except ET.ParseError as exc:
        raise UnknownResponseError("Response is not valid XML", cause=exc) from exc

    data = _element_to_value(root)
    if not isinstance(data, dict):
        raise UnknownResponseError("Response has no status")
    return data


def _element_to_value(elem: ET.Element) -> Any:
    """
    Convert an XML element into plain data.

    Attributes and child elements become dict keys; repeated child tags become
    lists; a text-only element becomes its stripped text (None when empty).
    """
    children = list(elem)
    if not children and not elem.attrib:
        text = (elem.text or "").strip()
        return text or None

    result: dict[str, Any] = dict(elem.attrib)
    repeated: set[str] = set()
    for child in children:
        value = _element_to_value(child)
        if child.tag in repeated:
            result[child.tag].append(value)
        elif child.tag in result and child.tag not in elem.attrib:
            result[child.tag] = [result[child.tag], value]
            repeated.add(child.tag)
        else:
            result[child.tag] = value
    return result


def _as_list(value: Any) -> list[Any]:
    # lone entries come back as a single dict
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _tree_root(data: dict[str, Any]) -> dict[str, Any]:
    tree = data.get("tree")
    folder = tree.get("folder") if isinstance(tree, dict) else None
    if not isinstance(folder, dict):
        raise MalformedResponseError("get_account_tree response has no folder")
    return folder


def _normalize_folder(node: dict[str, Any]) -> dict[str, Any]:
    """Turn `<folders><folder/>...</folders>` wrappers into plain lists."""
    info = {k: v for k, v in node.items() if k not in ("folders", "files")}

    if "folders" in node:
        wrapper = node["folders"]
        entries = _as_list(wrapper.get("folder")) if isinstance(wrapper, dict) else []
        info["folders"] = [_normalize_folder(f) for f in entries if isinstance(f, dict)]

    if "files" in node:
        wrapper = node["files"]
        entries = _as_list(wrapper.get("file")) if isinstance(wrapper, dict) else []
        info["files"] = [dict(f) for f in entries if isinstance(f, dict)]

    return info
