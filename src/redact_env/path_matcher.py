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

"""Sensitive path classification and path extraction from shell commands."""

import re
from functools import lru_cache
from pathlib import Path

from .models import Catalog
from .patterns import default_catalog

# Runs of filename-safe characters; quotes, whitespace and shell operators split them
_PATH_TOKEN_RE = re.compile(r"[\w./~+@%-]+")


def is_sensitive_path(path: str, catalog: Catalog | None = None) -> bool:
    """Check if a path matches any sensitive file pattern (case-insensitive)."""
    if catalog is None:
        catalog = default_catalog()
    normalized = path.lower()
    return any(rule.test(normalized) for rule in catalog.path_rules)


@lru_cache(maxsize=8)
def _read_command_regex(commands: tuple[str, ...]) -> re.Pattern[str]:
    names = "|".join(re.escape(c) for c in commands)
    # At the start of a line or right after |, ; or &&
    return re.compile(rf"(?:^|\||;|&&)\s*(?:{names})\s", re.MULTILINE)


def is_file_read_command(command: str, catalog: Catalog | None = None) -> bool:
    """Check if a command starts a known file-reading utility."""
    if catalog is None:
        catalog = default_catalog()
    return _read_command_regex(catalog.read_commands).search(command) is not None


def _exists(candidate: str) -> bool:
    try:
        return Path(candidate).expanduser().exists()
    except (OSError, RuntimeError):
        return False


def find_sensitive_path(command: str, catalog: Catalog | None = None) -> re.Match[str] | None:
    """Locate the sensitive file token a shell command refers to.

    Candidates are path-like tokens that classify as sensitive, in textual
    order. The first one that exists on disk wins; otherwise the first
    candidate. Quoting, globs and variable expansion are not interpreted.
    """
    candidates = [
        m for m in _PATH_TOKEN_RE.finditer(command) if is_sensitive_path(m.group(), catalog)
    ]
    if not candidates:
        return None
    for candidate in candidates:
        if _exists(candidate.group()):
            return candidate
    return candidates[0]


def extract_sensitive_path(command: str, catalog: Catalog | None = None) -> str | None:
    """Return the sensitive file path a shell command refers to, if any."""
    match = find_sensitive_path(command, catalog)
    return match.group() if match else None
