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

"""Text matching engine used by path and secret rules."""

import re
from collections.abc import Callable


class RegexMatcher:
    """Regex-backed matcher.

    Path rules only need ``test``; secret rules use ``sub``.
    """

    def __init__(self, pattern: str, ignore_case: bool = False, multiline: bool = False) -> None:
        flags = 0
        if ignore_case:
            flags |= re.IGNORECASE
        if multiline:
            flags |= re.MULTILINE
        self.pattern = pattern
        self._regex = re.compile(pattern, flags)

    def test(self, text: str) -> bool:
        """Return True if the pattern matches anywhere in text."""
        return self._regex.search(text) is not None

    def sub(self, replacement: str | Callable[[re.Match[str]], str], text: str) -> str:
        """Replace all matches; string templates may use group references."""
        return self._regex.sub(replacement, text)

    def __repr__(self) -> str:
        return f"RegexMatcher({self.pattern!r})"
