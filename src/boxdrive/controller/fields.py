"""Endpoints, actions and expected statuses for the Box REST API (v1.0)."""

from __future__ import annotations

DEFAULT_BASE_URL: str = "https://www.box.net/api/1.0"
DEFAULT_UPLOAD_URL: str = "https://upload.box.net/api/1.0/upload"

# Status returned by each action on success. Any other status is an error.
STATUS_LISTING_OK: str = "listing_ok"
STATUS_CREATE_OK: str = "create_ok"
STATUS_UPLOAD_OK: str = "upload_ok"
STATUS_ACCOUNT_INFO_OK: str = "get_account_info_ok"
STATUS_LOGOUT_OK: str = "logout_ok"
STATUS_FILE_INFO: str = "s_get_file_info"
STATUS_RENAME: str = "s_rename_node"
STATUS_MOVE: str = "s_move_node"
STATUS_COPY: str = "s_copy_node"
STATUS_DELETE: str = "s_delete_node"
STATUS_SET_DESCRIPTION: str = "s_set_description"
STATUS_GET_COLLABORATIONS: str = "s_get_collaborations"
STATUS_INVITE_COLLABORATORS: str = "s_invite_collaborators"

# get_account_tree params
TREE_ONELEVEL: str = "onelevel"
TREE_SIMPLE: str = "simple"
TREE_NOZIP: str = "nozip"
