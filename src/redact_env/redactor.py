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

"""Apply secret rules to text."""

import re

from .models import Catalog, RedactionResult, preview
from .patterns import default_catalog


def redact(text: str, file_path: str | None = None, catalog: Catalog | None = None) -> RedactionResult:
    """Redact secrets from text.

    Rules run in catalog order, each on the output of the previous ones, so a
    vendor marker written early is never re-matched by the generic rules.
    ``file_path`` only scopes rules with ``file_types``.

    Returns RedactionResult with:
    - redacted_text: text with every replacement applied
    - findings: truncated previews of each replaced span, in order
    """
    if catalog is None:
        catalog = default_catalog()

    redacted = text
    findings: list[str] = []

    for rule in catalog.secret_rules:
        if not rule.applies_to(file_path):
            continue

        def replace(match: re.Match[str], template: str = rule.replacement) -> str:
            findings.append(preview(match.group()))
            return match.expand(template)

        redacted = rule.matcher.sub(replace, redacted)

    return RedactionResult(redacted_text=redacted, findings=findings)
