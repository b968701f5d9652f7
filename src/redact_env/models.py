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

"""Data models for secret rules, redaction results and hook I/O."""

from dataclasses import dataclass, field
from typing import Any

from .matcher import RegexMatcher

PREVIEW_LENGTH = 20


@dataclass(frozen=True)
class SecretRule:
    """A content rule: matched spans are replaced with a marker."""

    id: str
    matcher: RegexMatcher
    replacement: str
    # Only applied when the file path contains one of these
    file_types: tuple[str, ...] = ()
    description: str = ""

    def applies_to(self, file_path: str | None) -> bool:
        """Check whether the rule's file type scope admits this path."""
        if not self.file_types or file_path is None:
            return True
        return any(ft in file_path for ft in self.file_types)


@dataclass(frozen=True)
class Catalog:
    """Immutable rule tables, built once per process."""

    path_rules: tuple[RegexMatcher, ...]
    secret_rules: tuple[SecretRule, ...]
    read_commands: tuple[str, ...]


@dataclass
class RedactionResult:
    """Redacted text plus truncated previews of every replaced span."""

    redacted_text: str
    findings: list[str] = field(default_factory=list)


def preview(text: str) -> str:
    """Truncate matched text for diagnostics."""
    if len(text) > PREVIEW_LENGTH:
        return text[:PREVIEW_LENGTH] + "..."
    return text


@dataclass
class HookInvocation:
    """A single PreToolUse payload from Claude Code."""

    tool_name: str
    tool_input: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> "HookInvocation":
        if not isinstance(data, dict):
            return cls(tool_name="")
        tool_input = data.get("tool_input")
        return cls(
            tool_name=str(data.get("tool_name") or ""),
            tool_input=tool_input if isinstance(tool_input, dict) else {},
        )


@dataclass
class RewriteInstruction:
    """Instruction to let the tool run against rewritten input."""

    reason: str
    updated_input: dict[str, str]

    def to_hook_output(self) -> dict[str, Any]:
        """Build the PreToolUse hook response."""
        return {
            "hookSpecificOutput": {
                "hookEventName": "PreToolUse",
                "permissionDecision": "allow",
                "permissionDecisionReason": self.reason,
                "updatedInput": dict(self.updated_input),
            }
        }
