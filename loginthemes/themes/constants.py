"""Theme storage constants."""

from __future__ import annotations

DEFAULT_THEME_ID = "default"

THEME_EXTENSION = ".css"
SIDECAR_EXTENSION = ".json"
RESERVED_PREFIX = "_"
BACKUP_FILENAME = f"{RESERVED_PREFIX}original_backup{THEME_EXTENSION}"

MAX_THEME_ID_LEN = 50

DEFAULT_AUTHOR = "Unknown"
DEFAULT_DESCRIPTION = ""
DEFAULT_IMPORT_VERSION = "1.0.0"

BUILTIN_NAME = "Default (原版)"
BUILTIN_AUTHOR = "SillyTavern"
BUILTIN_DESCRIPTION = "SillyTavern 原始登录主题"

# Served when no backup of the original login stylesheet was ever captured.
FALLBACK_STYLESHEET = """/* SillyTavern Default Login Theme */
body.login #shadow_popup {
    opacity: 1;
    display: flex;
}

body.login .logo {
    max-width: 30px;
}

body.login #logoBlock {
    align-items: center;
    margin: 0 auto;
    gap: 10px;
}

body.login .userSelect {
    display: flex;
    flex-direction: column;
    color: var(--SmartThemeBodyColor);
    border: 1px solid var(--SmartThemeBorderColor);
    border-radius: 5px;
    padding: 3px 5px;
    width: 30%;
    cursor: pointer;
    margin: 5px 0;
    transition: background-color var(--animation-duration) ease-in-out;
    align-items: center;
    justify-content: center;
    text-align: center;
    overflow: hidden;
}

body.login .userSelect .userName,
body.login .userSelect .userHandle {
    width: 100%;
    overflow: hidden;
    text-overflow: ellipsis;
    white-space: nowrap;
}

body.login .userSelect:hover {
    background-color: var(--black30a);
}

body.login #handleEntryBlock,
body.login #passwordEntryBlock,
body.login #passwordRecoveryBlock {
    margin: 2px;
}"""
