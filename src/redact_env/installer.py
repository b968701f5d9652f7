# Copyright 2025 Lars Marowsky-Brée <lars@marowsky-bree.eu>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Register and remove the hook in Claude Code settings.json."""

import json
import sys
from pathlib import Path
from typing import Any

CLAUDE_DIR = Path.home() / ".claude"
SETTINGS_PATH = CLAUDE_DIR / "settings.json"

HOOK_COMMAND = "redact-env hook"
HOOK_MARKER = "redact-env"
HOOK_MATCHERS = ("Read", "Bash")


def _is_our_entry(entry: Any) -> bool:
    if not isinstance(entry, dict):
        return False
    return any(
        isinstance(h, dict) and HOOK_MARKER in str(h.get("command", ""))
        for h in entry.get("hooks") or []
    )


def _load_settings(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open() as f:
            settings = json.load(f)
    except (OSError, json.JSONDecodeError):
        print(f"Could not parse {path}, creating new one", file=sys.stderr)
        return {}
    return settings if isinstance(settings, dict) else {}


def _save_settings(path: Path, settings: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w") as f:
        json.dump(settings, f, indent=2)
        f.write("\n")


def is_installed(settings: dict[str, Any]) -> bool:
    """Check whether settings already contain a redact-env hook."""
    pre_tool_use = (settings.get("hooks") or {}).get("PreToolUse") or []
    return any(_is_our_entry(entry) for entry in pre_tool_use)


def install(settings_path: Path | None = None, command: str = HOOK_COMMAND) -> bool:
    """Add Read and Bash PreToolUse entries. Returns False if already present."""
    path = settings_path or SETTINGS_PATH
    settings = _load_settings(path)

    if is_installed(settings):
        print("Hook already configured", file=sys.stderr)
        return False

    hooks = settings.setdefault("hooks", {})
    pre_tool_use = hooks.setdefault("PreToolUse", [])
    for matcher in HOOK_MATCHERS:
        pre_tool_use.append({"matcher": matcher, "hooks": [{"type": "command", "command": command}]})

    _save_settings(path, settings)
    print(f"Updated {path}", file=sys.stderr)
    return True


def uninstall(settings_path: Path | None = None) -> bool:
    """Remove our PreToolUse entries. Returns False if nothing was removed."""
    path = settings_path or SETTINGS_PATH
    if not path.exists():
        return False

    settings = _load_settings(path)
    if not is_installed(settings):
        return False

    hooks = settings["hooks"]
    hooks["PreToolUse"] = [e for e in hooks["PreToolUse"] if not _is_our_entry(e)]
    if not hooks["PreToolUse"]:
        del hooks["PreToolUse"]
    if not hooks:
        del settings["hooks"]

    _save_settings(path, settings)
    print(f"Removed from {path}", file=sys.stderr)
    return True
