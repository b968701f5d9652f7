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

"""Redacted copies of sensitive files in the temp directory."""

import hashlib
import sys
import tempfile
from pathlib import Path

from .models import Catalog
from .redactor import redact

HASH_LENGTH = 12


def _hash_path(path: str) -> str:
    """Short, stable hash of the original path string."""
    return hashlib.md5(path.encode()).hexdigest()[:HASH_LENGTH]


def redacted_path_for(original_path: str) -> Path:
    """Temp location for a redacted copy; depends only on the path."""
    name = Path(original_path).name
    return Path(tempfile.gettempdir()) / f"redacted-{_hash_path(original_path)}-{name}"


def materialize(original_path: str, catalog: Catalog | None = None) -> str | None:
    """Write a redacted copy of a file and return its path.

    Returns None if the file does not exist, cannot be read or written, or
    contains nothing to redact. The original file is never touched.
    """
    path = Path(original_path)
    try:
        if not path.is_file():
            return None

        # newline="" keeps line endings as they are in the original
        with path.open(encoding="utf-8", newline="") as f:
            content = f.read()
        result = redact(content, original_path, catalog)
        if not result.findings:
            return None

        temp_path = redacted_path_for(original_path)
        with temp_path.open("w", encoding="utf-8", newline="") as f:
            f.write(result.redacted_text)
        return str(temp_path)
    except (OSError, UnicodeDecodeError) as e:
        sys.stderr.write(f"[redact-env] Error processing {original_path}: {e}\n")
        return None
