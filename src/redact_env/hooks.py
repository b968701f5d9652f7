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

"""Claude Code PreToolUse hook: redirect sensitive reads to redacted copies."""

import json
import sys
from pathlib import Path
from typing import Any

from .cache import materialize
from .config import load_catalog
from .models import Catalog, HookInvocation, RewriteInstruction
from .path_matcher import find_sensitive_path, is_file_read_command, is_sensitive_path


def _reason(file_path: str) -> str:
    return f"Redirecting to redacted version of {file_path}"


def handle_read(tool_input: dict[str, Any], catalog: Catalog) -> RewriteInstruction | None:
    """Point a Read at the redacted copy of a sensitive file."""
    file_path = tool_input.get("file_path")
    if not isinstance(file_path, str) or not file_path:
        return None
    if not is_sensitive_path(file_path, catalog):
        return None

    redacted_path = materialize(file_path, catalog)
    if not redacted_path:
        return None

    return RewriteInstruction(reason=_reason(file_path), updated_input={"file_path": redacted_path})


def handle_bash(tool_input: dict[str, Any], catalog: Catalog) -> RewriteInstruction | None:
    """Rewrite a file-reading shell command to read the redacted copy."""
    command = tool_input.get("command")
    if not isinstance(command, str) or not command:
        return None
    if not is_file_read_command(command, catalog):
        return None

    match = find_sensitive_path(command, catalog)
    if match is None:
        return None
    file_path = match.group()

    redacted_path = materialize(str(Path(file_path).expanduser()), catalog)
    if not redacted_path:
        return None

    # Only the chosen token is rewritten, at its own position
    new_command = command[: match.start()] + redacted_path + command[match.end() :]
    return RewriteInstruction(reason=_reason(file_path), updated_input={"command": new_command})


def handle_pre_tool_use(
    invocation: HookInvocation, catalog: Catalog
) -> RewriteInstruction | None:
    """Dispatch a PreToolUse invocation by tool name."""
    if invocation.tool_name == "Read":
        return handle_read(invocation.tool_input, catalog)
    if invocation.tool_name == "Bash":
        return handle_bash(invocation.tool_input, catalog)
    return None


def run_hook(project_dir: Path | None = None) -> int:
    """Main hook entry point. Reads JSON from stdin, writes a rewrite if any.

    Always returns 0. Failures are reported on stderr and the tool call goes
    ahead with its original input, so redaction is best-effort.
    """
    try:
        data = json.load(sys.stdin)
        invocation = HookInvocation.from_dict(data)
        instruction = handle_pre_tool_use(invocation, load_catalog(project_dir))
        if instruction is not None:
            json.dump(instruction.to_hook_output(), sys.stdout)
            sys.stdout.write("\n")
    except Exception as e:
        sys.stderr.write(f"[redact-env] Error: {e}\n")
    return 0
